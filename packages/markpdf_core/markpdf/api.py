"""

Simple high-level API for markpdf.

Usage example:
>>> from markpdf import Document
>>>
>>> doc = Document.from_markdown("# Title\\n\\nHello **world**")
>>> pages = doc.layout()
>>> doc.to_pdf("output.pdf")
>>>
>>> # Or in one call
>>> from markpdf import convert_file
>>> convert_file("notes.md", "notes.pdf")

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .engine.geometry import LayoutOptions
from .engine.layout_engine import FlowLayoutEngine
from .engine.pdfcompiler import ObjectGraph, PDFCompiler, PdfFontRegistry, PdfWriter
from .engine.unified_layout import LayoutPage
from .models import Block
from .parser import parse_markdown

logger = logging.getLogger(__name__)

__all__ = [
    "Document",
    "convert_blocks",
    "convert_file",
    "convert_string",
    "render_to_pdf",
]


class Document:
    """

    A sequence of content blocks plus the options used to lay them out.

    Layout, object building and serialization are pure functions of the
    blocks and options: the same document always yields the same bytes.

    """

    def __init__(self, blocks: Iterable[Block] = (), options: Optional[LayoutOptions] = None):
        self.blocks: List[Block] = list(blocks)
        self.options = options or LayoutOptions()
        self.font_registry = PdfFontRegistry()

    @classmethod
    def from_markdown(cls, text: str, options: Optional[LayoutOptions] = None) -> "Document":
        """Parse Markdown ``text`` into a document."""
        return cls(parse_markdown(text), options)

    @classmethod
    def open(cls, file_path: Union[str, Path], options: Optional[LayoutOptions] = None) -> "Document":
        """Read a UTF-8 Markdown file.

        Raises:
            OSError: If the file cannot be read
        """
        text = Path(file_path).read_text(encoding="utf-8")
        return cls.from_markdown(text, options)

    def layout(self) -> List[LayoutPage]:
        """Paginate the blocks.

        Raises:
            LayoutError: If the page geometry is invalid
        """
        engine = FlowLayoutEngine(self.options, self.font_registry)
        return engine.layout(self.blocks)

    def build(self) -> ObjectGraph:
        """Lay out the blocks and build the PDF object graph."""
        return PDFCompiler(self.font_registry).build(self.layout())

    def to_bytes(self) -> bytes:
        """Lay out, build and serialize the document."""
        return PdfWriter().serialize(self.build())

    def to_pdf(self, output_path: Union[str, Path]) -> Path:
        """Write the PDF to ``output_path`` in a single write.

        Raises:
            OSError: If the file cannot be written
        """
        return PdfWriter().write(self.build(), output_path)


def convert_blocks(blocks: Iterable[Block], options: Optional[LayoutOptions] = None) -> bytes:
    """Convert content blocks to PDF bytes (convenience function)."""
    return Document(blocks, options).to_bytes()


def convert_string(markdown: str, options: Optional[LayoutOptions] = None) -> bytes:
    """Convert Markdown text to PDF bytes (convenience function)."""
    return Document.from_markdown(markdown, options).to_bytes()


def convert_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    options: Optional[LayoutOptions] = None,
) -> Path:
    """Convert a Markdown file to a PDF file (convenience function)."""
    return Document.open(input_path, options).to_pdf(output_path)


def render_to_pdf(
    blocks: Iterable[Block],
    output_path: Union[str, Path],
    options: Optional[LayoutOptions] = None,
) -> Path:
    """Render content blocks to a PDF file (convenience function)."""
    return Document(blocks, options).to_pdf(output_path)
