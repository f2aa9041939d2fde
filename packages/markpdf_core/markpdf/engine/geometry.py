"""Geometry primitives and page configuration for layout calculations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from ..exceptions import LayoutError


A4_WIDTH = 595.28
A4_HEIGHT = 841.89
DEFAULT_MARGIN = 50.0

# Baseline must stay this far above the bottom margin before a line is written.
LINE_RESERVE = 20.0

DEFAULT_FONT_SIZES: Dict[str, float] = {
    "h1": 24.0,
    "h2": 20.0,
    "h3": 16.0,
    "h4": 14.0,
    "h5": 12.0,
    "h6": 11.0,
    "normal": 10.0,
    "code": 9.0,
}

METRICS_MODES = ("average", "glyph")


@dataclass(slots=True)
class Size:
    width: float
    height: float


@dataclass
class LayoutOptions:
    """Page geometry and typographic constants for one layout pass."""

    page_size: Size = field(default_factory=lambda: Size(A4_WIDTH, A4_HEIGHT))
    margin: float = DEFAULT_MARGIN
    font_sizes: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_FONT_SIZES))
    line_spacing: float = 1.5
    line_reserve: float = LINE_RESERVE
    cell_padding: float = 5.0
    metrics: str = "average"

    @property
    def content_width(self) -> float:
        return self.page_size.width - 2 * self.margin

    @property
    def content_top(self) -> float:
        """Cursor position of the first line on a fresh page."""
        return self.page_size.height - self.margin

    def font_size(self, key: str) -> float:
        return self.font_sizes.get(key, self.font_sizes.get("normal", DEFAULT_FONT_SIZES["normal"]))

    def heading_size(self, level: int) -> float:
        return self.font_size(f"h{level}")

    def validate(self) -> None:
        """Raise LayoutError if the geometry cannot hold a single line."""
        width = self.page_size.width
        height = self.page_size.height
        if width <= 0 or height <= 0:
            raise LayoutError("Page size must be positive", f"{width}x{height}")
        if self.margin < 0:
            raise LayoutError("Margin must not be negative", str(self.margin))
        if self.content_width <= 0:
            raise LayoutError(
                "Margins leave no content width",
                f"width={width}, margin={self.margin}",
            )
        if self.content_top < self.margin + self.line_reserve:
            raise LayoutError(
                "Page too short for a single line",
                f"height={height}, margin={self.margin}, reserve={self.line_reserve}",
            )
        if self.line_spacing <= 0:
            raise LayoutError("Line spacing must be positive", str(self.line_spacing))
        if self.cell_padding < 0:
            raise LayoutError("Cell padding must not be negative", str(self.cell_padding))
        for key, size in self.font_sizes.items():
            if size <= 0:
                raise LayoutError("Font sizes must be positive", f"{key}={size}")
        if self.metrics not in METRICS_MODES:
            raise LayoutError("Unknown metrics mode", self.metrics)
