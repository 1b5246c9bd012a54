from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class BlockType(Enum):
    H1 = 1
    H2 = 2
    H3 = 3
    H4 = 4
    H5 = 5
    H6 = 6
    BODY = 7


class InlineStyle(Enum):
    NONE = "none"
    ITALIC = "italic"
    BOLD = "bold"
    CODE = "code"
    LINK = "link"


class TextStyle(Enum):
    """Named size hint handed to the style provider."""

    TITLE1 = "title1"
    TITLE2 = "title2"
    TITLE3 = "title3"
    HEADLINE = "headline"
    SUBHEADLINE = "subheadline"
    FOOTNOTE = "footnote"
    BODY = "body"


TEXT_STYLE_FOR_BLOCK = {
    BlockType.H1: TextStyle.TITLE1,
    BlockType.H2: TextStyle.TITLE2,
    BlockType.H3: TextStyle.TITLE3,
    BlockType.H4: TextStyle.HEADLINE,
    BlockType.H5: TextStyle.SUBHEADLINE,
    BlockType.H6: TextStyle.FOOTNOTE,
    BlockType.BODY: TextStyle.BODY,
}


@dataclass
class StyleAttributes:
    """Font and color settings for one block type or inline style.

    Unset ``font_name`` and ``font_size`` fall back to the body style; ``color``
    has no fallback and is always present.
    """

    font_name: str | None = None
    font_size: float | None = None
    font_weight: float | None = None
    color: str = "#000000"


@dataclass(frozen=True)
class TextRun:
    text: str
    block_type: BlockType = BlockType.BODY
    inline_style: InlineStyle = InlineStyle.NONE
    link_url: str | None = None


@dataclass
class Line:
    block_type: BlockType
    runs: List[TextRun] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass
class Document:
    lines: List[Line] = field(default_factory=list)

    @property
    def runs(self) -> list[TextRun]:
        return [run for line in self.lines for run in line.runs]

    @property
    def text(self) -> str:
        return "".join(f"{line.text}\n" for line in self.lines)


@dataclass(frozen=True)
class FontHandle:
    """Opaque font value produced by a style provider."""

    name: str
    size: float
    bold: bool = False
    italic: bool = False
    weight: float | None = None


@dataclass(frozen=True)
class StyledRun:
    run: TextRun
    font: FontHandle
    color: str

    @property
    def text(self) -> str:
        return self.run.text

    @property
    def font_name(self) -> str:
        return self.font.name

    @property
    def font_size(self) -> float:
        return self.font.size

    @property
    def font_weight(self) -> float | None:
        return self.font.weight


@dataclass
class StyledLine:
    block_type: BlockType
    runs: List[StyledRun] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass
class StyledDocument:
    lines: List[StyledLine] = field(default_factory=list)

    @property
    def runs(self) -> list[StyledRun]:
        return [run for line in self.lines for run in line.runs]

    @property
    def text(self) -> str:
        return "".join(f"{line.text}\n" for line in self.lines)
