"""
Markdown parser producing the styled content model.

Line-oriented: each block starts on a non-blank line and the first
construct that matches decides its type. Anything unrecognised becomes
part of a paragraph, so parsing never fails.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from ..models import (
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    ListBlock,
    ListItem,
    Paragraph,
    Rule,
    Table,
    TableAlignment,
)
from .inline_parser import parse_inline

logger = logging.getLogger(__name__)

_ATX_HEADING = re.compile(r"^(#{1,6})(?:\s+(.*?))?\s*$")
_TASK_ITEM = re.compile(r"^[-*+]\s+\[([ xX])\]\s+(.+)$")
_UNORDERED_ITEM = re.compile(r"^[-*+][ \t]")
_ORDERED_ITEM = re.compile(r"^(\d+)\.[ \t]+(.*)$")
_FENCES = ("```", "~~~")


def is_horizontal_rule(line: str) -> bool:
    cleaned = line.strip().replace(" ", "")
    return len(cleaned) >= 3 and cleaned[0] in "-*_" and cleaned == cleaned[0] * len(cleaned)


def is_setext_underline(line: str) -> bool:
    line = line.strip()
    return bool(line) and (set(line) == {"="} or set(line) == {"-"})


def is_task_item(line: str) -> bool:
    return _TASK_ITEM.match(line.strip()) is not None


def is_unordered_item(line: str) -> bool:
    return _UNORDERED_ITEM.match(line.strip()) is not None


def is_ordered_item(line: str) -> bool:
    return _ORDERED_ITEM.match(line.strip()) is not None


def is_table_separator(line: str) -> bool:
    cleaned = line.strip().replace(" ", "")
    return "|" in cleaned and "-" in cleaned and set(cleaned) <= {"|", "-", ":"}


def split_table_row(line: str) -> List[str]:
    return [cell.strip() for cell in line.strip().strip("|").split("|")]


def parse_alignment(cell: str) -> TableAlignment:
    if cell.startswith(":") and cell.endswith(":") and len(cell) > 1:
        return TableAlignment.CENTER
    if cell.endswith(":"):
        return TableAlignment.RIGHT
    return TableAlignment.LEFT


class MarkdownParser:
    """
    Parser for Markdown documents.

    Usage:
        blocks = MarkdownParser(text).parse()
    """

    def __init__(self, text: str):
        """
        Initialize parser.

        Args:
            text: Markdown source; CRLF and CR line endings are accepted
        """
        self.lines = (text or "").replace("\r\n", "\n").replace("\r", "\n").split("\n")

    def parse(self) -> List[Block]:
        """
        Parse the whole document.

        Returns:
            Blocks in document order
        """
        blocks: List[Block] = []
        i = 0
        while i < len(self.lines):
            if not self.lines[i].strip():
                i += 1
                continue
            block, consumed = self._parse_block(i)
            blocks.append(block)
            i += consumed
        logger.debug("Parsed %d blocks from %d lines", len(blocks), len(self.lines))
        return blocks

    def _next_line(self, index: int) -> Optional[str]:
        if index + 1 < len(self.lines):
            return self.lines[index + 1]
        return None

    def _parse_block(self, index: int) -> Tuple[Block, int]:
        line = self.lines[index]
        stripped = line.strip()
        following = self._next_line(index)

        if stripped.startswith("#"):
            heading = self._parse_atx_heading(stripped)
            if heading is not None:
                return heading, 1

        if following is not None and is_setext_underline(following) and not self._starts_construct(stripped):
            level = 1 if following.strip().startswith("=") else 2
            return Heading(level, parse_inline(stripped)), 2

        if is_horizontal_rule(stripped):
            return Rule(), 1

        if stripped.startswith(_FENCES):
            return self._parse_fenced_code(index)

        if line.startswith(("    ", "\t")):
            return self._parse_indented_code(index)

        if stripped.startswith(">"):
            return self._parse_blockquote(index)

        if following is not None and is_table_separator(following):
            return self._parse_table(index)

        if is_task_item(stripped) or is_unordered_item(stripped):
            return self._parse_list(index, ordered=False)

        if is_ordered_item(stripped):
            return self._parse_list(index, ordered=True)

        return self._parse_paragraph(index)

    @staticmethod
    def _starts_construct(stripped: str) -> bool:
        return (
            stripped.startswith(("#", ">") + _FENCES)
            or is_horizontal_rule(stripped)
            or is_task_item(stripped)
            or is_unordered_item(stripped)
            or is_ordered_item(stripped)
        )

    @staticmethod
    def _parse_atx_heading(stripped: str) -> Optional[Heading]:
        match = _ATX_HEADING.match(stripped)
        if match is None:
            return None
        content = (match.group(2) or "").rstrip("#").strip()
        return Heading(len(match.group(1)), parse_inline(content))

    def _parse_fenced_code(self, index: int) -> Tuple[CodeBlock, int]:
        opening = self.lines[index].strip()
        fence = opening[:3]
        language = opening[3:].strip()
        code_lines = []
        i = index + 1
        while i < len(self.lines):
            if self.lines[i].strip().startswith(fence):
                i += 1
                break
            code_lines.append(self.lines[i])
            i += 1
        else:
            logger.debug("Unterminated code fence at line %d runs to end of input", index + 1)
        return CodeBlock(language, code_lines), i - index

    def _parse_indented_code(self, index: int) -> Tuple[CodeBlock, int]:
        code_lines = []
        i = index
        while i < len(self.lines):
            line = self.lines[i]
            if not line.strip():
                code_lines.append("")
            elif line.startswith("    "):
                code_lines.append(line[4:])
            elif line.startswith("\t"):
                code_lines.append(line[1:])
            else:
                break
            i += 1
        while code_lines and not code_lines[-1]:
            code_lines.pop()
        return CodeBlock("", code_lines), i - index

    def _parse_blockquote(self, index: int) -> Tuple[Blockquote, int]:
        parts = []
        i = index
        while i < len(self.lines):
            stripped = self.lines[i].strip()
            if not stripped.startswith(">"):
                break
            content = stripped[1:].strip()
            if content:
                parts.append(content)
            i += 1
        return Blockquote(parse_inline(" ".join(parts))), i - index

    def _parse_table(self, index: int) -> Tuple[Table, int]:
        rows = [split_table_row(self.lines[index])]
        alignments = [parse_alignment(cell) for cell in split_table_row(self.lines[index + 1])]
        i = index + 2
        while i < len(self.lines):
            stripped = self.lines[i].strip()
            if not stripped or "|" not in stripped:
                break
            rows.append(split_table_row(stripped))
            i += 1

        column_count = max(len(row) for row in rows)
        rows = [row + [""] * (column_count - len(row)) for row in rows]
        alignments = alignments[:column_count]
        alignments += [TableAlignment.LEFT] * (column_count - len(alignments))
        return Table(rows, alignments), i - index

    def _parse_list(self, index: int, ordered: bool) -> Tuple[ListBlock, int]:
        items: List[ListItem] = []
        i = index
        while i < len(self.lines):
            stripped = self.lines[i].strip()
            if not stripped:
                # A blank line continues the list only if another item follows.
                following = self._next_line(i)
                if following is not None and self._is_item(following, ordered):
                    i += 1
                    continue
                break
            if not self._is_item(stripped, ordered):
                break
            items.append(self._parse_item(stripped, ordered))
            i += 1
        return ListBlock(ordered, items), i - index

    @staticmethod
    def _is_item(line: str, ordered: bool) -> bool:
        if ordered:
            return is_ordered_item(line)
        return is_task_item(line) or is_unordered_item(line)

    @staticmethod
    def _parse_item(stripped: str, ordered: bool) -> ListItem:
        if ordered:
            return ListItem(parse_inline(_ORDERED_ITEM.match(stripped).group(2).strip()))
        task = _TASK_ITEM.match(stripped)
        if task is not None:
            return ListItem(parse_inline(task.group(2).strip()), checked=task.group(1).lower() == "x")
        return ListItem(parse_inline(stripped[1:].strip()))

    def _parse_paragraph(self, index: int) -> Tuple[Paragraph, int]:
        parts = [self.lines[index].strip()]
        i = index + 1
        while i < len(self.lines):
            stripped = self.lines[i].strip()
            if not stripped or self._starts_construct(stripped):
                break
            parts.append(stripped)
            i += 1
        return Paragraph(parse_inline(" ".join(parts))), i - index


def parse_markdown(text: str) -> List[Block]:
    """Parse Markdown ``text`` into content blocks."""
    return MarkdownParser(text).parse()
