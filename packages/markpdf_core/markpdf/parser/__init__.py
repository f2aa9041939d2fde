"""
Parser module for Markdown input.

Turns Markdown text into the block/inline content model consumed by the
layout engine.
"""

from .inline_parser import InlineParser, parse_inline
from .markdown_parser import MarkdownParser, parse_markdown

__all__ = [
    "InlineParser",
    "MarkdownParser",
    "parse_inline",
    "parse_markdown",
]
