"""PDF Compiler - builds the object graph for laid-out pages and serializes it."""

from .compiler import PDFCompiler
from .objects import ObjectGraph, PdfObject, PdfRef, PdfStream
from .resources import FontRole, PdfFont, PdfFontRegistry
from .writer import PdfWriter, XrefTable

__all__ = [
    "FontRole",
    "ObjectGraph",
    "PDFCompiler",
    "PdfFont",
    "PdfFontRegistry",
    "PdfObject",
    "PdfRef",
    "PdfStream",
    "PdfWriter",
    "XrefTable",
]
