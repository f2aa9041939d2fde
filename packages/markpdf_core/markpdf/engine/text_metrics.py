"""

TextMetricsEngine - text width estimation for the flow layout.

Two modes:
- "average": every character is ``font_size * 0.5`` wide, whatever the
  font. This is the reference heuristic; layouts built with it are stable
  down to the byte.
- "glyph": widths come from ReportLab's AFM metrics for the standard-14
  base font behind each font resource.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from reportlab.pdfbase import pdfmetrics  # type: ignore

from ..exceptions import LayoutError
from .geometry import METRICS_MODES
from .pdfcompiler.resources import PdfFontRegistry

logger = logging.getLogger(__name__)

AVERAGE_CHAR_RATIO = 0.5


@dataclass(slots=True)
class TextLayout:
    """Measured text fragment."""
    text: str
    width: float
    font_size: float


class TextMetricsEngine:
    """Engine for calculating text widths."""

    def __init__(self, mode: str = "average", font_registry: Optional[PdfFontRegistry] = None):
        if mode not in METRICS_MODES:
            raise LayoutError("Unknown metrics mode", mode)
        self.mode = mode
        self.font_registry = font_registry or PdfFontRegistry()

    def char_width(self, font_size: float) -> float:
        """Average character width used by the heuristic mode."""
        return font_size * AVERAGE_CHAR_RATIO

    def measure(self, text: str, font_id: str, font_size: float) -> float:
        """Width of ``text`` set in ``font_id`` at ``font_size``."""
        if not text:
            return 0.0
        if self.mode == "glyph":
            base_font = self.font_registry.base_font_name(font_id)
            return pdfmetrics.stringWidth(text, base_font, font_size)
        return len(text) * self.char_width(font_size)

    def layout_text(self, text: str, font_id: str, font_size: float) -> TextLayout:
        return TextLayout(text=text, width=self.measure(text, font_id, font_size), font_size=font_size)

    def fit(self, text: str, font_id: str, font_size: float, max_width: float) -> int:
        """Number of leading characters of ``text`` that fit in ``max_width``."""
        if max_width <= 0:
            return 0
        if self.mode == "average":
            return min(len(text), int(max_width / self.char_width(font_size)))
        count = 0
        for index in range(1, len(text) + 1):
            if self.measure(text[:index], font_id, font_size) > max_width:
                break
            count = index
        return count
