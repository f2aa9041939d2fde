"""PDF objects and data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set

from ...exceptions import SerializationError
from .utils import escape_pdf_string, format_pdf_number, format_pdf_value

THICK_LINE_WIDTH = 1.5
THIN_LINE_WIDTH = 0.5


@dataclass(frozen=True, slots=True)
class PdfRef:
    """Indirect reference to another object (``N 0 R``)."""
    obj_num: int
    generation: int = 0

    def __str__(self) -> str:
        return f"{self.obj_num} {self.generation} R"


@dataclass
class PdfStream:
    """Represents a PDF content stream (instructions for drawing)."""

    commands: List[str] = field(default_factory=list)

    def write(self, command: str) -> None:
        """Append a raw PDF command to the stream."""
        if command is None:
            return
        self.commands.append(str(command))

    def add_text(self, font_alias: str, font_size: float, x: float, y: float, text: str) -> None:
        """Add text drawing command.

        Args:
            font_alias: Font alias (e.g., "/F1")
            font_size: Font size in points
            x: X position
            y: Y position (baseline)
            text: Text content, escaped here
        """
        self.commands.append("BT")
        self.commands.append(f"{font_alias} {format_pdf_number(font_size)} Tf")
        self.commands.append(f"{format_pdf_number(x)} {format_pdf_number(y)} Td")
        self.commands.append(f"({escape_pdf_string(text)}) Tj")
        self.commands.append("ET")

    def add_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """Add line drawing command."""
        self.commands.append(f"{format_pdf_number(x1)} {format_pdf_number(y1)} m")
        self.commands.append(f"{format_pdf_number(x2)} {format_pdf_number(y2)} l")
        self.commands.append("S")

    def add_rect(self, x: float, y: float, width: float, height: float, line_width: float = THIN_LINE_WIDTH) -> None:
        """Add stroked rectangle; line width is scoped to the rectangle."""
        self.commands.append("q")
        self.commands.append(f"{format_pdf_number(line_width)} w")
        self.commands.append(
            f"{format_pdf_number(x)} {format_pdf_number(y)} "
            f"{format_pdf_number(width)} {format_pdf_number(height)} re"
        )
        self.commands.append("S")
        self.commands.append("Q")

    def get_content(self) -> str:
        """Get stream content as string, one operator per line."""
        return "".join(f"{command}\n" for command in self.commands)

    def get_bytes(self) -> bytes:
        return self.get_content().encode("ascii")


def _format_value(value: Any) -> str:
    if isinstance(value, PdfRef):
        return str(value)
    if isinstance(value, dict):
        return dict_to_pdf(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_value(item) for item in value) + "]"
    if isinstance(value, str):
        if value.startswith("/"):
            return value
        return f"({escape_pdf_string(value)})"
    return format_pdf_value(value)


def dict_to_pdf(d: Dict[str, Any]) -> str:
    """Convert dictionary to PDF format.

    Strings starting with "/" are names, other strings are literal strings,
    ``PdfRef`` values become indirect references.
    """
    parts = ["<<"]
    for key, value in d.items():
        parts.append(f"/{key.lstrip('/')} {_format_value(value)}")
    parts.append(">>")
    return " ".join(parts)


def iter_references(value: Any) -> Iterator[PdfRef]:
    if isinstance(value, PdfRef):
        yield value
    elif isinstance(value, dict):
        for item in value.values():
            yield from iter_references(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from iter_references(item)


@dataclass
class PdfObject:
    """A numbered object: a dictionary, optionally followed by stream data."""

    obj_num: int
    value: Dict[str, Any]
    stream_data: Optional[bytes] = None

    @property
    def references(self) -> Set[int]:
        return {ref.obj_num for ref in iter_references(self.value)}

    def get_payload(self) -> bytes:
        """Bytes between ``N 0 obj`` and ``endobj``."""
        head = dict_to_pdf(self.value).encode("ascii")
        if self.stream_data is None:
            return head + b"\n"
        return head + b"\nstream\n" + self.stream_data + b"\nendstream\n"


class ObjectGraph:
    """Objects keyed by 1-based, contiguous ids assigned in declaration order."""

    def __init__(self):
        self._objects: Dict[int, Optional[PdfObject]] = {}
        self._next_obj_num = 1
        self.root_obj_num: Optional[int] = None

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, obj_num: int) -> bool:
        return self._objects.get(obj_num) is not None

    def reserve(self) -> int:
        """Assign the next object id without filling it yet."""
        obj_num = self._next_obj_num
        self._next_obj_num += 1
        self._objects[obj_num] = None
        return obj_num

    def set(self, obj_num: int, value: Dict[str, Any], stream_data: Optional[bytes] = None) -> PdfObject:
        if obj_num not in self._objects:
            raise SerializationError("Object id was never reserved", str(obj_num))
        if self._objects[obj_num] is not None:
            raise SerializationError("Object id assigned twice", str(obj_num))
        obj = PdfObject(obj_num=obj_num, value=value, stream_data=stream_data)
        self._objects[obj_num] = obj
        return obj

    def add(self, value: Dict[str, Any], stream_data: Optional[bytes] = None) -> int:
        obj_num = self.reserve()
        self.set(obj_num, value, stream_data)
        return obj_num

    def get(self, obj_num: int) -> PdfObject:
        obj = self._objects.get(obj_num)
        if obj is None:
            raise SerializationError("Object id has no content", str(obj_num))
        return obj

    def payload(self, obj_num: int) -> bytes:
        return self.get(obj_num).get_payload()

    def object_numbers(self) -> List[int]:
        return sorted(self._objects)

    def validate(self) -> None:
        """Check ids are contiguous from 1, all filled, and all references resolve.

        Raises:
            SerializationError: On the first inconsistency found
        """
        numbers = self.object_numbers()
        if numbers != list(range(1, len(numbers) + 1)):
            raise SerializationError("Object ids are not contiguous", str(numbers))
        if self.root_obj_num is None or self.root_obj_num not in self:
            raise SerializationError("Missing document catalog", str(self.root_obj_num))
        for obj_num in numbers:
            obj = self.get(obj_num)
            for target in sorted(obj.references):
                if target not in self:
                    raise SerializationError(
                        "Dangling object reference",
                        f"object {obj_num} references {target}",
                    )
