"""Greedy multi-style line breaking for inline runs."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..models import InlineRun, InlineStyle
from .pdfcompiler.resources import PdfFontRegistry
from .text_metrics import TextMetricsEngine

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\S+|\s+")


@dataclass(frozen=True, slots=True)
class LineFragment:
    """Contiguous text drawn with a single font."""
    text: str
    font_id: str
    width: float
    strike: bool = False


@dataclass(slots=True)
class LineBreakResult:
    fragments: List[LineFragment] = field(default_factory=list)
    width: float = 0.0

    @property
    def text(self) -> str:
        return "".join(fragment.text for fragment in self.fragments)


# (text, font_id, strike)
_Segment = Tuple[str, str, bool]


class LineBreaker:
    """Walks words across run boundaries and packs them into lines."""

    def __init__(self, metrics_engine: TextMetricsEngine, font_registry: Optional[PdfFontRegistry] = None):
        self.metrics_engine = metrics_engine
        self.font_registry = font_registry or metrics_engine.font_registry

    def font_for(self, style: InlineStyle, base_font_id: str) -> str:
        """Font resource used for a run style inside a block set in ``base_font_id``."""
        if style is InlineStyle.BOLD:
            return self.font_registry.bold.font_id
        if style in (InlineStyle.ITALIC, InlineStyle.IMAGE):
            return self.font_registry.italic.font_id
        if style is InlineStyle.CODE:
            return self.font_registry.monospace.font_id
        return base_font_id

    def break_runs(
        self,
        runs: Sequence[InlineRun],
        max_width: float,
        font_size: float,
        base_font_id: str,
        prefix: str = "",
    ) -> List[LineBreakResult]:
        """Wrap ``runs`` into lines no wider than ``max_width`` where possible.

        A word wider than ``max_width`` is placed alone on its own line and
        overflows. ``prefix`` is drawn verbatim in the base font at the start
        of the first line.
        """
        words = self._split_words(runs, base_font_id)
        measure = self.metrics_engine.measure

        lines: List[LineBreakResult] = []
        current: List[_Segment] = []
        current_width = 0.0
        has_words = False

        if prefix:
            current.append((prefix, base_font_id, False))
            current_width = measure(prefix, base_font_id, font_size)

        for word in words:
            word_width = sum(measure(text, font_id, font_size) for text, font_id, _ in word)
            if has_words:
                _, last_font, last_strike = current[-1]
                space_width = measure(" ", last_font, font_size)
                if current_width + space_width + word_width <= max_width:
                    current.append((" ", last_font, last_strike))
                    current.extend(word)
                    current_width += space_width + word_width
                    continue
            elif not current or current_width + word_width <= max_width:
                current.extend(word)
                current_width += word_width
                has_words = True
                continue

            lines.append(self._flush(current, font_size))
            current = list(word)
            current_width = word_width
            has_words = True

        if current:
            lines.append(self._flush(current, font_size))
        return lines

    def _split_words(self, runs: Sequence[InlineRun], base_font_id: str) -> List[List[_Segment]]:
        # Pieces not separated by whitespace stay one word even across runs.
        words: List[List[_Segment]] = []
        word: List[_Segment] = []
        for run in runs:
            font_id = self.font_for(run.style, base_font_id)
            strike = run.style is InlineStyle.STRIKETHROUGH
            for match in _TOKEN_RE.finditer(run.display_text):
                token = match.group(0)
                if token.isspace():
                    if word:
                        words.append(word)
                        word = []
                    continue
                word.append((token, font_id, strike))
        if word:
            words.append(word)
        return words

    def _flush(self, segments: List[_Segment], font_size: float) -> LineBreakResult:
        merged: List[List] = []
        for text, font_id, strike in segments:
            if merged and merged[-1][1] == font_id and merged[-1][2] == strike:
                merged[-1][0] += text
            else:
                merged.append([text, font_id, strike])

        result = LineBreakResult()
        for text, font_id, strike in merged:
            width = self.metrics_engine.measure(text, font_id, font_size)
            result.fragments.append(LineFragment(text=text, font_id=font_id, width=width, strike=strike))
            result.width += width
        return result
