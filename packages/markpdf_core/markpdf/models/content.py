"""
Styled content model consumed by the flow layout engine.

A document is an ordered sequence of blocks. Text-bearing blocks carry
inline runs; tables carry plain cell text. All nodes are immutable once
produced by the parser (or by any other producer).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple, Union


class InlineStyle(str, Enum):
    """Styles an inline run can carry."""

    PLAIN = "plain"
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"
    STRIKETHROUGH = "strikethrough"
    LINK = "link"
    IMAGE = "image"


class TableAlignment(str, Enum):
    """Horizontal alignment of a table column."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class InlineRun:
    """A styled span of text inside a block."""

    style: InlineStyle
    text: str = ""
    target: Optional[str] = None
    alt_text: Optional[str] = None

    @classmethod
    def plain(cls, text: str) -> "InlineRun":
        return cls(InlineStyle.PLAIN, text)

    @property
    def display_text(self) -> str:
        """Text actually drawn for this run."""
        if self.style is InlineStyle.IMAGE:
            label = self.alt_text or self.target or ""
            return f"[image: {label}]"
        if self.style is InlineStyle.LINK and not self.text:
            return self.target or ""
        return self.text


def _runs(runs: Sequence[InlineRun]) -> Tuple[InlineRun, ...]:
    return tuple(runs)


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    runs: Tuple[InlineRun, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "runs", _runs(self.runs))


@dataclass(frozen=True, slots=True)
class Paragraph:
    runs: Tuple[InlineRun, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "runs", _runs(self.runs))


@dataclass(frozen=True, slots=True)
class CodeBlock:
    language: str = ""
    lines: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "lines", tuple(self.lines))


@dataclass(frozen=True, slots=True)
class ListItem:
    runs: Tuple[InlineRun, ...] = ()
    checked: Optional[bool] = None  # None for plain items, bool for task items

    def __post_init__(self):
        object.__setattr__(self, "runs", _runs(self.runs))


@dataclass(frozen=True, slots=True)
class ListBlock:
    ordered: bool = False
    items: Tuple[ListItem, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True, slots=True)
class Blockquote:
    runs: Tuple[InlineRun, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "runs", _runs(self.runs))


@dataclass(frozen=True, slots=True)
class Table:
    """Grid of cell text; row 0 is the header row."""

    rows: Tuple[Tuple[str, ...], ...] = ()
    alignments: Tuple[TableAlignment, ...] = field(default=())

    def __post_init__(self):
        object.__setattr__(self, "rows", tuple(tuple(row) for row in self.rows))
        object.__setattr__(self, "alignments", tuple(self.alignments))

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def alignment(self, column: int) -> TableAlignment:
        if column < len(self.alignments):
            return self.alignments[column]
        return TableAlignment.LEFT


@dataclass(frozen=True, slots=True)
class Rule:
    pass


Block = Union[Heading, Paragraph, CodeBlock, ListBlock, Blockquote, Table, Rule]
