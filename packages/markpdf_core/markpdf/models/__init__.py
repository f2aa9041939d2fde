"""Styled content model."""

from .content import (
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

__all__ = [
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
]
