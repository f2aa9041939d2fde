"""PDF file writer - generates header, objects, xref, trailer."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, List, Tuple

from ...exceptions import SerializationError
from .objects import ObjectGraph, PdfRef, dict_to_pdf

logger = logging.getLogger(__name__)

PDF_HEADER = b"%PDF-1.4\n"
# Comment line with bytes >= 128 so transfer tools treat the file as binary.
BINARY_MARKER = b"%\xe2\xe3\xcf\xd3\n"
FREE_ENTRY = b"0000000000 65535 f \n"


@dataclass
class XrefTable:
    """Byte offsets of objects 1..N; entry 0 is the free-list head."""
    entries: List[Tuple[int, int]] = field(default_factory=list)  # (offset, generation)

    @property
    def size(self) -> int:
        return len(self.entries) + 1

    def add(self, offset: int, generation: int = 0) -> None:
        self.entries.append((offset, generation))

    def offset_of(self, obj_num: int) -> int:
        return self.entries[obj_num - 1][0]

    def to_bytes(self) -> bytes:
        lines = [b"xref\n", f"0 {self.size}\n".encode("ascii"), FREE_ENTRY]
        for offset, generation in self.entries:
            lines.append(f"{offset:010d} {generation:05d} n \n".encode("ascii"))
        return b"".join(lines)


class PdfWriter:
    """Serializes an ObjectGraph to PDF bytes."""

    def __init__(self):
        self.xref = XrefTable()
        self.xref_offset = 0

    def serialize(self, graph: ObjectGraph) -> bytes:
        """Serialize ``graph``: header, objects in ascending id order, xref, trailer.

        Args:
            graph: Fully built object graph

        Returns:
            Complete PDF file contents

        Raises:
            SerializationError: If the graph is inconsistent
        """
        if graph is None:
            raise ValueError("graph cannot be None")
        graph.validate()

        self.xref = XrefTable()
        f = io.BytesIO()
        f.write(PDF_HEADER)
        f.write(BINARY_MARKER)

        for obj_num in graph.object_numbers():
            self._write_object(f, obj_num, graph.payload(obj_num))

        self.xref_offset = f.tell()
        f.write(self.xref.to_bytes())
        self._write_trailer(f, self.xref_offset, graph.root_obj_num)

        data = f.getvalue()
        logger.debug("Serialized %d objects, %d bytes", len(graph), len(data))
        return data

    def write(self, graph: ObjectGraph, output_path: str | Path) -> Path:
        """Serialize ``graph`` and write it to ``output_path``.

        Raises:
            SerializationError: If the graph is inconsistent
            OSError: If the file cannot be written
        """
        output_path = Path(output_path)
        data = self.serialize(graph)
        try:
            output_path.write_bytes(data)
        except OSError as e:
            logger.error(f"IO error while writing PDF file: {e}")
            raise
        logger.info("Wrote %s (%d bytes)", output_path, len(data))
        return output_path

    def _write_object(self, f: BinaryIO, obj_num: int, payload: bytes) -> None:
        offset = f.tell()
        if obj_num != self.xref.size:
            raise SerializationError("Objects must be written in id order", f"expected {self.xref.size}, got {obj_num}")
        self.xref.add(offset, 0)

        f.write(f"{obj_num} 0 obj\n".encode("ascii"))
        f.write(payload)
        f.write(b"endobj\n")

    def _write_trailer(self, f: BinaryIO, xref_offset: int, root_obj_num: int) -> None:
        f.write(b"trailer\n")
        trailer_dict = {
            "Size": self.xref.size,
            "Root": PdfRef(root_obj_num),
        }
        f.write(dict_to_pdf(trailer_dict).encode("ascii"))
        f.write(b"\nstartxref\n")
        f.write(f"{xref_offset}\n".encode("ascii"))
        f.write(b"%%EOF\n")
