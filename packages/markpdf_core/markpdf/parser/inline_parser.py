"""
Inline parser for Markdown text.

Splits one line (or several joined lines) of text into styled inline runs:
bold, italic, strikethrough, code spans, links and images. Delimiters
without a matching closer are kept as literal text.
"""

from typing import List, Optional, Tuple

from ..models import InlineRun, InlineStyle

_PAIRED = (
    ("**", InlineStyle.BOLD),
    ("__", InlineStyle.BOLD),
    ("~~", InlineStyle.STRIKETHROUGH),
)


class InlineParser:
    """Converts inline Markdown markup into a list of ``InlineRun``."""

    def __init__(self, text: str):
        self.text = text or ""
        self.runs: List[InlineRun] = []
        self._buffer: List[str] = []

    def parse(self) -> List[InlineRun]:
        text = self.text
        i = 0
        while i < len(text):
            consumed = (
                self._match_paired(i)
                or self._match_code(i)
                or self._match_emphasis(i)
                or self._match_link(i)
            )
            if consumed:
                i += consumed
                continue
            self._buffer.append(text[i])
            i += 1
        self._flush()
        return self.runs

    def _flush(self) -> None:
        if self._buffer:
            self.runs.append(InlineRun(InlineStyle.PLAIN, "".join(self._buffer)))
            self._buffer = []

    def _emit(self, run: InlineRun) -> None:
        self._flush()
        self.runs.append(run)

    def _match_paired(self, i: int) -> int:
        for delimiter, style in _PAIRED:
            if not self.text.startswith(delimiter, i):
                continue
            start = i + len(delimiter)
            end = self.text.find(delimiter, start)
            if end > start:
                self._emit(InlineRun(style, self.text[start:end]))
                return end + len(delimiter) - i
        return 0

    def _match_code(self, i: int) -> int:
        if self.text[i] != "`":
            return 0
        end = self.text.find("`", i + 1)
        if end == -1:
            return 0
        self._emit(InlineRun(InlineStyle.CODE, self.text[i + 1:end]))
        return end + 1 - i

    def _match_emphasis(self, i: int) -> int:
        text = self.text
        marker = text[i]
        if marker not in "*_":
            return 0
        # Doubled markers belong to bold.
        if i > 0 and text[i - 1] == marker:
            return 0
        # snake_case words are not emphasis.
        if marker == "_" and i > 0 and text[i - 1].isalnum():
            return 0
        end = text.find(marker, i + 1)
        if end <= i + 1:
            return 0
        if end + 1 < len(text) and text[end + 1] == marker:
            return 0
        self._emit(InlineRun(InlineStyle.ITALIC, text[i + 1:end]))
        return end + 1 - i

    def _match_link(self, i: int) -> int:
        is_image = self.text.startswith("![", i)
        if not is_image and self.text[i] != "[":
            return 0
        start = i + 1 if is_image else i
        parsed = self._bracket_target(start)
        if parsed is None:
            return 0
        label, target, end = parsed
        if is_image:
            self._emit(InlineRun(InlineStyle.IMAGE, "", target=target, alt_text=label))
        else:
            self._emit(InlineRun(InlineStyle.LINK, label, target=target))
        return end - i

    def _bracket_target(self, start: int) -> Optional[Tuple[str, str, int]]:
        """Parse ``[label](target)`` at ``start``; returns label, target, end index."""
        close = self.text.find("](", start)
        if close == -1:
            return None
        paren = self.text.find(")", close + 2)
        if paren == -1:
            return None
        return self.text[start + 1:close], self.text[close + 2:paren], paren + 1


def parse_inline(text: str) -> List[InlineRun]:
    """Parse inline markup in ``text``."""
    return InlineParser(text).parse()
