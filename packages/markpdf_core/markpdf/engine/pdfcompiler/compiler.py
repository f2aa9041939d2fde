"""Document object builder - converts laid-out pages to a PDF object graph."""

from __future__ import annotations

import logging
import zlib
from typing import Dict, Optional, Sequence

from ..unified_layout import LayoutPage, ShowText, StrokeLine, StrokeRect
from .objects import THICK_LINE_WIDTH, THIN_LINE_WIDTH, ObjectGraph, PdfRef, PdfStream
from .resources import PdfFontRegistry


logger = logging.getLogger(__name__)


class PDFCompiler:
    """Builds the object graph for a sequence of layout pages.

    Declaration order, with ids assigned contiguously from 1:
    catalog, page tree, the four fonts, one page dictionary per page,
    one content stream per page.
    """

    def __init__(self, font_registry: Optional[PdfFontRegistry] = None):
        self.font_registry = font_registry or PdfFontRegistry()

    def build(self, layout_pages: Sequence[LayoutPage]) -> ObjectGraph:
        """Build the object graph for ``layout_pages``.

        Args:
            layout_pages: Pages produced by the layout engine

        Returns:
            ObjectGraph ready for serialization
        """
        graph = ObjectGraph()

        catalog_num = graph.reserve()
        pages_num = graph.reserve()
        font_nums: Dict[str, int] = {font.font_id: graph.reserve() for font in self.font_registry}
        page_nums = [graph.reserve() for _ in layout_pages]
        content_nums = [graph.reserve() for _ in layout_pages]

        graph.set(catalog_num, {"Type": "/Catalog", "Pages": PdfRef(pages_num)})
        graph.root_obj_num = catalog_num
        graph.set(
            pages_num,
            {
                "Type": "/Pages",
                "Kids": [PdfRef(num) for num in page_nums],
                "Count": len(page_nums),
            },
        )
        for font in self.font_registry:
            graph.set(font_nums[font.font_id], font.get_font_dict())

        font_resources = {font_id: PdfRef(num) for font_id, num in font_nums.items()}
        for layout_page, page_num, content_num in zip(layout_pages, page_nums, content_nums):
            graph.set(
                page_num,
                {
                    "Type": "/Page",
                    "Parent": PdfRef(pages_num),
                    "MediaBox": [0, 0, layout_page.width, layout_page.height],
                    "Contents": PdfRef(content_num),
                    # Every page lists all fonts, used or not.
                    "Resources": {"Font": dict(font_resources)},
                },
            )

        for layout_page, content_num in zip(layout_pages, content_nums):
            content = self.render_page(layout_page).get_bytes()
            compressed = zlib.compress(content)
            graph.set(
                content_num,
                {"Length": len(compressed), "Filter": "/FlateDecode"},
                stream_data=compressed,
            )
            logger.debug(
                "Page %d: %d ops, %d bytes content, %d compressed",
                layout_page.number, len(layout_page.ops), len(content), len(compressed),
            )

        return graph

    def render_page(self, layout_page: LayoutPage) -> PdfStream:
        """Render the page's drawing operations as content stream operators."""
        stream = PdfStream()
        for op in layout_page.ops:
            if isinstance(op, ShowText):
                font = self.font_registry.get_font(op.font_id)
                stream.add_text(font.alias, op.size, op.x, op.y, op.text)
            elif isinstance(op, StrokeLine):
                stream.add_line(op.x1, op.y1, op.x2, op.y2)
            elif isinstance(op, StrokeRect):
                stream.add_rect(op.x, op.y, op.width, op.height, THICK_LINE_WIDTH if op.thick else THIN_LINE_WIDTH)
            else:
                raise TypeError(f"Unsupported drawing operation: {type(op).__name__}")
        return stream

