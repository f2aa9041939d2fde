"""
markpdf - Markdown to PDF conversion.

Parses Markdown into a styled content model, paginates it with a flow
layout engine and writes a PDF 1.4 file using the standard Type 1 fonts,
with no external renderer involved.

Quick Start:
    from markpdf import convert_file

    convert_file("notes.md", "notes.pdf")

    # Or step by step
    from markpdf import Document

    doc = Document.from_markdown("# Title\\n\\nSome *text*.")
    pages = doc.layout()
    data = doc.to_bytes()
"""

from .version import __version__, __version_info__

from .exceptions import LayoutError, MarkPdfError, SerializationError
from .models import (
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    InlineRun,
    InlineStyle,
    ListBlock,
    ListItem,
    Paragraph,
    Rule,
    Table,
    TableAlignment,
)
from .engine import FlowLayoutEngine, LayoutOptions, LayoutPage, Size, layout
from .engine.pdfcompiler import PDFCompiler, PdfWriter
from .parser import MarkdownParser, parse_markdown
from .api import Document, convert_blocks, convert_file, convert_string, render_to_pdf

__all__ = [
    "__version__",
    "__version_info__",
    # Exceptions
    "MarkPdfError",
    "LayoutError",
    "SerializationError",
    # Content model
    "Block",
    "Blockquote",
    "CodeBlock",
    "Heading",
    "InlineRun",
    "InlineStyle",
    "ListBlock",
    "ListItem",
    "Paragraph",
    "Rule",
    "Table",
    "TableAlignment",
    # Pipeline
    "FlowLayoutEngine",
    "LayoutOptions",
    "LayoutPage",
    "Size",
    "layout",
    "PDFCompiler",
    "PdfWriter",
    "MarkdownParser",
    "parse_markdown",
    # API
    "Document",
    "convert_blocks",
    "convert_file",
    "convert_string",
    "render_to_pdf",
]
