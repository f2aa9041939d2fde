"""

FlowLayoutEngine - paginates styled content blocks into pages of
positioned drawing operations.

The engine keeps one vertical cursor per pass. Every text line and stroke
first checks the cursor against the bottom margin and opens a new page if
needed, so any block may continue across a page break.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from ..models import (
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    InlineRun,
    ListBlock,
    ListItem,
    Paragraph,
    Rule,
    Table,
    TableAlignment,
)
from .geometry import A4_HEIGHT, A4_WIDTH, DEFAULT_MARGIN, LayoutOptions, Size
from .line_breaker import LineBreaker, LineBreakResult
from .pdfcompiler.resources import PdfFontRegistry
from .table_layout import TableLayoutEngine
from .text_metrics import TextMetricsEngine
from .unified_layout import Cursor, LayoutPage, ShowText, StrokeLine, StrokeRect

logger = logging.getLogger(__name__)

QUOTE_PREFIX = "  | "
BULLET_PREFIX = "  - "
TASK_DONE_PREFIX = "  [x] "
TASK_OPEN_PREFIX = "  [ ] "

PARAGRAPH_SPACE_AFTER = 8.0
BLOCK_SPACE = 5.0
LIST_SPACE_BEFORE = 3.0
RULE_ADVANCE = 10.0
STRIKE_RISE = 0.3
TABLE_ROW_FACTOR = 2.0


@dataclass
class LayoutContext:
    """Mutable state owned by a single layout pass."""
    options: LayoutOptions
    pages: List[LayoutPage] = field(default_factory=list)
    cursor: Cursor = field(init=False)

    def __post_init__(self):
        self.cursor = Cursor(y=self.options.content_top)

    @property
    def current_page(self) -> Optional[LayoutPage]:
        return self.pages[-1] if self.pages else None

    def new_page(self) -> LayoutPage:
        page = LayoutPage(number=len(self.pages) + 1, size=Size(self.options.page_size.width, self.options.page_size.height))
        # Spacing before the first op stays; later pages start fresh.
        if self.pages:
            self.cursor.y = self.options.content_top
        self.pages.append(page)
        self.cursor.page_index = len(self.pages) - 1
        logger.debug("Opened page %d", page.number)
        return page

    def ensure_room(self, height: float = 0.0) -> LayoutPage:
        """Return the page the next operation goes on, breaking if needed."""
        page = self.current_page
        limit = self.options.margin + self.options.line_reserve
        if page is None or (self.cursor.y - height < limit and page.ops):
            page = self.new_page()
        return page

    def space(self, points: float) -> None:
        self.cursor.y -= points


class FlowLayoutEngine:
    """Converts blocks into pages of ShowText / StrokeLine / StrokeRect ops."""

    def __init__(self, options: Optional[LayoutOptions] = None, font_registry: Optional[PdfFontRegistry] = None):
        self.options = options or LayoutOptions()
        self.options.validate()
        self.font_registry = font_registry or PdfFontRegistry()
        self.metrics_engine = TextMetricsEngine(self.options.metrics, self.font_registry)
        self.line_breaker = LineBreaker(self.metrics_engine, self.font_registry)
        self.table_engine = TableLayoutEngine(self.metrics_engine, self.options.cell_padding)

    def layout(self, blocks: Iterable[Block]) -> List[LayoutPage]:
        """Lay out ``blocks`` in order; always returns at least one page."""
        context = LayoutContext(self.options)
        for index, block in enumerate(blocks):
            self._layout_block(context, block, index)
        if not context.pages:
            context.new_page()
        logger.debug("Layout produced %d page(s)", len(context.pages))
        return context.pages

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------
    def _layout_block(self, context: LayoutContext, block: Block, index: int) -> None:
        if isinstance(block, Heading):
            self._layout_heading(context, block)
        elif isinstance(block, Paragraph):
            self._layout_paragraph(context, block)
        elif isinstance(block, CodeBlock):
            self._layout_code(context, block)
        elif isinstance(block, ListBlock):
            self._layout_list(context, block)
        elif isinstance(block, Blockquote):
            self._layout_blockquote(context, block)
        elif isinstance(block, Table):
            self._layout_table(context, block, index)
        elif isinstance(block, Rule):
            self._layout_rule(context)
        else:
            logger.warning("Skipping block %d of unsupported type %s", index, type(block).__name__)

    def _layout_heading(self, context: LayoutContext, block: Heading) -> None:
        level = block.level
        if not 1 <= level <= 6:
            logger.warning("Heading level %s out of range, clamping", level)
            level = min(max(level, 1), 6)
        size = self.options.heading_size(level)
        weight = 7 - level
        context.space(weight * 2.0)
        self._write_runs(context, block.runs, size, self.font_registry.bold.font_id)
        context.space(float(weight))

    def _layout_paragraph(self, context: LayoutContext, block: Paragraph) -> None:
        if self._write_runs(context, block.runs, self.options.font_size("normal"), self.font_registry.regular.font_id):
            context.space(PARAGRAPH_SPACE_AFTER)

    def _layout_blockquote(self, context: LayoutContext, block: Blockquote) -> None:
        context.space(BLOCK_SPACE)
        self._write_runs(
            context, block.runs, self.options.font_size("normal"), self.font_registry.regular.font_id, QUOTE_PREFIX
        )
        context.space(BLOCK_SPACE)

    def _layout_list(self, context: LayoutContext, block: ListBlock) -> None:
        if not block.items:
            logger.warning("Skipping list without items")
            return
        size = self.options.font_size("normal")
        context.space(LIST_SPACE_BEFORE)
        for number, item in enumerate(block.items, start=1):
            prefix = self._list_prefix(item, block.ordered, number)
            self._write_runs(context, item.runs, size, self.font_registry.regular.font_id, prefix)
        context.space(BLOCK_SPACE)

    @staticmethod
    def _list_prefix(item: ListItem, ordered: bool, number: int) -> str:
        if item.checked is not None:
            return TASK_DONE_PREFIX if item.checked else TASK_OPEN_PREFIX
        if ordered:
            return f"  {number}. "
        return BULLET_PREFIX

    def _layout_code(self, context: LayoutContext, block: CodeBlock) -> None:
        if not block.lines:
            return
        size = self.options.font_size("code")
        font_id = self.font_registry.monospace.font_id
        context.space(BLOCK_SPACE)
        for line in block.lines:
            # No wrapping: long lines run past the right margin.
            page = context.ensure_room()
            page.add_op(ShowText(self.options.margin, context.cursor.y, font_id, size, line))
            context.cursor.y -= size * self.options.line_spacing
        context.space(BLOCK_SPACE)

    def _layout_rule(self, context: LayoutContext) -> None:
        margin = self.options.margin
        context.space(BLOCK_SPACE)
        page = context.ensure_room()
        y = context.cursor.y
        page.add_op(StrokeLine(margin, y, margin + self.options.content_width, y))
        context.cursor.y -= RULE_ADVANCE
        context.space(BLOCK_SPACE)

    def _layout_table(self, context: LayoutContext, block: Table, index: int) -> None:
        column_count = block.column_count
        if not block.rows or column_count == 0:
            logger.warning("Skipping table %d without rows or columns", index)
            return

        rows = [tuple(row) + ("",) * (column_count - len(row)) for row in block.rows]
        size = self.options.font_size("normal")
        regular = self.font_registry.regular.font_id
        bold = self.font_registry.bold.font_id
        geometry = self.table_engine.compute_columns(rows, self.options.content_width, size, regular, bold)
        row_height = size * TABLE_ROW_FACTOR

        context.space(BLOCK_SPACE)
        for row_index, row in enumerate(rows):
            header = row_index == 0
            font_id = bold if header else regular
            page = context.ensure_room(row_height)
            bottom = context.cursor.y - row_height
            baseline = bottom + (row_height - size) / 2 + size * 0.1
            x = self.options.margin
            for column, cell in enumerate(row):
                width = geometry.widths[column]
                page.add_op(StrokeRect(x, bottom, width, row_height, thick=header))
                text = self.table_engine.fit_text(cell, width, size, font_id)
                if text:
                    text_x = self._align(x, width, text, font_id, size, block.alignment(column), geometry.padding)
                    page.add_op(ShowText(text_x, baseline, font_id, size, text))
                x += width
            context.cursor.y = bottom
        context.space(BLOCK_SPACE)

    def _align(
        self, x: float, width: float, text: str, font_id: str, size: float, alignment: TableAlignment, padding: float
    ) -> float:
        if alignment is TableAlignment.LEFT:
            return x + padding
        text_width = self.metrics_engine.measure(text, font_id, size)
        if alignment is TableAlignment.RIGHT:
            return x + width - padding - text_width
        return x + (width - text_width) / 2

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------
    def _write_runs(
        self,
        context: LayoutContext,
        runs: Sequence[InlineRun],
        size: float,
        base_font_id: str,
        prefix: str = "",
    ) -> int:
        lines = self.line_breaker.break_runs(runs, self.options.content_width, size, base_font_id, prefix)
        for line in lines:
            self._write_line(context, line, size)
        return len(lines)

    def _write_line(self, context: LayoutContext, line: LineBreakResult, size: float) -> None:
        page = context.ensure_room()
        y = context.cursor.y
        x = self.options.margin
        for fragment in line.fragments:
            page.add_op(ShowText(x, y, fragment.font_id, size, fragment.text))
            if fragment.strike:
                rise = y + size * STRIKE_RISE
                page.add_op(StrokeLine(x, rise, x + fragment.width, rise))
            x += fragment.width
        context.cursor.y -= size * self.options.line_spacing


def layout(
    blocks: Iterable[Block],
    page_width: float = A4_WIDTH,
    page_height: float = A4_HEIGHT,
    margin: float = DEFAULT_MARGIN,
    options: Optional[LayoutOptions] = None,
) -> List[LayoutPage]:
    """Paginate ``blocks`` with the given page geometry.

    Raises:
        LayoutError: If the geometry is invalid
    """
    if options is None:
        options = LayoutOptions(page_size=Size(page_width, page_height), margin=margin)
    return FlowLayoutEngine(options).layout(blocks)
