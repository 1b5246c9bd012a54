from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from docx.shared import Pt, RGBColor

from .model import FontHandle, StyledRun, TextStyle

FONT_NAME = "Calibri"
SYSTEM_FONT_NAME = "Segoe UI"

TEXT_STYLE_SIZES_PT = {
    TextStyle.TITLE1: 26.0,
    TextStyle.TITLE2: 20.0,
    TextStyle.TITLE3: 16.0,
    TextStyle.HEADLINE: 14.0,
    TextStyle.SUBHEADLINE: 12.0,
    TextStyle.FOOTNOTE: 10.0,
    TextStyle.BODY: 11.0,
}

# CSS-style weight scale; semibold and heavier render as Word bold
BOLD_WEIGHT_THRESHOLD = 600


class DocxStyleProvider:
    """Style provider for Word documents.

    Word accepts any family name, so ``font`` only refuses names when an
    ``available_fonts`` allow-list is given.
    """

    def __init__(
        self,
        font_name: str = FONT_NAME,
        sizes: dict[TextStyle, float] | None = None,
        available_fonts: Iterable[str] | None = None,
        system_font_name: str = SYSTEM_FONT_NAME,
    ) -> None:
        self.font_name = font_name
        self.sizes = {**TEXT_STYLE_SIZES_PT, **(sizes or {})}
        self.available_fonts = None if available_fonts is None else frozenset(available_fonts)
        self.system_font_name = system_font_name

    def default_size(self, text_style: TextStyle) -> float:
        return self.sizes[text_style]

    def font(self, name: str, size: float) -> FontHandle | None:
        if self.available_fonts is not None and name not in self.available_fonts:
            return None
        return FontHandle(name=name, size=size)

    def preferred_font(self, text_style: TextStyle, size: float) -> FontHandle:
        return FontHandle(name=self.font_name, size=size)

    def italic_variant(self, font: FontHandle) -> FontHandle | None:
        return replace(font, italic=True)

    def bold_variant(self, font: FontHandle) -> FontHandle | None:
        return replace(font, bold=True)

    def system_font(self, size: float, weight: float) -> FontHandle:
        return FontHandle(name=self.system_font_name, size=size, bold=weight >= BOLD_WEIGHT_THRESHOLD, weight=weight)


def set_run_font(run, styled: StyledRun) -> None:
    """Apply a resolved style to a python-docx run."""
    font = styled.font
    run.font.name = font.name
    run.font.size = Pt(font.size)
    run.bold = font.bold
    run.italic = font.italic
    run.font.color.rgb = RGBColor.from_string(styled.color.lstrip("#"))
