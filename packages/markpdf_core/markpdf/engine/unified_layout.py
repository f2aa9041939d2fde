"""

Unified layout model - positioned drawing operations grouped into pages.

Coordinates are page space: origin bottom-left, y grows upward.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

from .geometry import Size


@dataclass(frozen=True, slots=True)
class ShowText:
    x: float
    y: float
    font_id: str
    size: float
    text: str


@dataclass(frozen=True, slots=True)
class StrokeLine:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True, slots=True)
class StrokeRect:
    x: float
    y: float
    width: float
    height: float
    thick: bool = False


DrawOp = Union[ShowText, StrokeLine, StrokeRect]


@dataclass(slots=True)
class LayoutPage:
    """Page with the drawing operations placed on it, in emission order."""
    number: int
    size: Size
    ops: List[DrawOp] = field(default_factory=list)

    @property
    def width(self) -> float:
        return self.size.width

    @property
    def height(self) -> float:
        return self.size.height

    def add_op(self, op: DrawOp) -> None:
        self.ops.append(op)


@dataclass(slots=True)
class Cursor:
    """Vertical write position on the active page."""
    y: float
    page_index: int = -1
