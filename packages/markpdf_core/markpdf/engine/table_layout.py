"""Column geometry for bordered tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from .text_metrics import TextMetricsEngine

logger = logging.getLogger(__name__)

ELLIPSIS = "..."


@dataclass(slots=True)
class TableGeometry:
    """Final column widths of a table.

    ``content_widths[i] + 2 * padding == widths[i]`` for every column.
    """
    widths: List[float] = field(default_factory=list)
    content_widths: List[float] = field(default_factory=list)
    padding: float = 0.0
    scaled: bool = False

    @property
    def total_width(self) -> float:
        return sum(self.widths)


class TableLayoutEngine:
    """Computes column widths and fits cell text into them."""

    def __init__(self, metrics_engine: TextMetricsEngine, padding: float = 5.0):
        self.metrics_engine = metrics_engine
        self.padding = padding

    def compute_columns(
        self,
        rows: Sequence[Sequence[str]],
        available_width: float,
        font_size: float,
        font_id: str,
        header_font_id: str = "",
    ) -> TableGeometry:
        """Compute per-column widths for ``rows`` within ``available_width``.

        Raw width of a column is its widest cell. Padding is added on both
        sides; if the padded total overflows, only the content part is
        scaled down by a single factor so padding stays constant.
        """
        column_count = max((len(row) for row in rows), default=0)
        raw: List[float] = [0.0] * column_count
        for row_index, row in enumerate(rows):
            row_font = header_font_id if row_index == 0 and header_font_id else font_id
            for column, cell in enumerate(row):
                raw[column] = max(raw[column], self.metrics_engine.measure(cell, row_font, font_size))

        padding_total = 2 * self.padding * column_count
        nominal_total = sum(raw) + padding_total
        geometry = TableGeometry(padding=self.padding)

        if nominal_total > available_width and sum(raw) > 0:
            available_content = max(available_width - padding_total, 0.0)
            factor = available_content / sum(raw)
            geometry.content_widths = [width * factor for width in raw]
            geometry.scaled = True
            if available_content == 0.0:
                logger.warning(
                    "Table with %d columns does not fit: padding alone needs %.2f of %.2f",
                    column_count, padding_total, available_width,
                )
        else:
            geometry.content_widths = list(raw)

        geometry.widths = [width + 2 * self.padding for width in geometry.content_widths]
        return geometry

    def fit_text(self, text: str, column_width: float, font_size: float, font_id: str) -> str:
        """Truncate ``text`` with an ellipsis if it does not fit the column."""
        content_width = column_width - 2 * self.padding
        if self.metrics_engine.measure(text, font_id, font_size) <= content_width + 1e-9:
            return text
        max_chars = self.metrics_engine.fit(text, font_id, font_size, content_width)
        return text[: max(max_chars - len(ELLIPSIS), 0)] + ELLIPSIS

