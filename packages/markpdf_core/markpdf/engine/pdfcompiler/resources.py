"""Font resources shared by every page of the document."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class FontRole(str, Enum):
    """Typographic role a font resource plays in the layout."""

    REGULAR = "regular"
    BOLD = "bold"
    ITALIC = "italic"
    MONOSPACE = "monospace"


@dataclass(frozen=True, slots=True)
class PdfFont:
    """Represents a PDF font resource."""

    font_id: str  # Resource name used by Tf (e.g., "F1")
    base_font: str  # Standard-14 base font name (e.g., "Helvetica")
    role: FontRole

    @property
    def alias(self) -> str:
        """Name operand as written in content streams."""
        return f"/{self.font_id}"

    def get_font_dict(self) -> Dict[str, str]:
        return {
            "Type": "/Font",
            "Subtype": "/Type1",
            "BaseFont": f"/{self.base_font}",
        }


_STANDARD_FONTS: Tuple[PdfFont, ...] = (
    PdfFont("F1", "Helvetica", FontRole.REGULAR),
    PdfFont("F2", "Helvetica-Bold", FontRole.BOLD),
    PdfFont("F3", "Helvetica-Oblique", FontRole.ITALIC),
    PdfFont("F4", "Courier", FontRole.MONOSPACE),
)


class PdfFontRegistry:
    """Fixed registry of the four font resources used by the document.

    The table is built once and never mutated; iteration order is the
    declaration order of the font objects in the output file.
    """

    def __init__(self):
        self._fonts: Dict[str, PdfFont] = {font.font_id: font for font in _STANDARD_FONTS}
        self._by_role: Dict[FontRole, PdfFont] = {font.role: font for font in _STANDARD_FONTS}

    def __len__(self) -> int:
        return len(self._fonts)

    def __iter__(self):
        return iter(self._fonts.values())

    def get_font(self, font_id: str) -> PdfFont:
        """Get font resource by id.

        Raises:
            KeyError: If font_id is not one of the registered ids
        """
        return self._fonts[font_id]

    @property
    def regular(self) -> PdfFont:
        return self._by_role[FontRole.REGULAR]

    @property
    def bold(self) -> PdfFont:
        return self._by_role[FontRole.BOLD]

    @property
    def italic(self) -> PdfFont:
        return self._by_role[FontRole.ITALIC]

    @property
    def monospace(self) -> PdfFont:
        return self._by_role[FontRole.MONOSPACE]

    def base_font_name(self, font_id: str) -> str:
        return self._fonts[font_id].base_font
