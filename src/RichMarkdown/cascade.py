from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .config import StyleConfig
from .model import (
    TEXT_STYLE_FOR_BLOCK,
    BlockType,
    Document,
    FontHandle,
    InlineStyle,
    StyledDocument,
    StyledLine,
    StyledRun,
    TextStyle,
)

_OVERRIDING_STYLES = (InlineStyle.CODE, InlineStyle.LINK)


class StyleProvider(Protocol):
    """Turns a resolved font description into a renderable font."""

    def default_size(self, text_style: TextStyle) -> float:  # pragma: no cover - structural protocol
        ...

    def font(self, name: str, size: float) -> FontHandle | None:  # pragma: no cover - structural protocol
        ...

    def preferred_font(self, text_style: TextStyle, size: float) -> FontHandle:  # pragma: no cover
        ...

    def italic_variant(self, font: FontHandle) -> FontHandle | None:  # pragma: no cover
        ...

    def bold_variant(self, font: FontHandle) -> FontHandle | None:  # pragma: no cover
        ...

    def system_font(self, size: float, weight: float) -> FontHandle:  # pragma: no cover
        ...


@dataclass(frozen=True)
class ResolvedStyle:
    font: FontHandle
    color: str
    text_style: TextStyle


def _first_set(*values):
    for value in values:
        if value is not None:
            return value
    return None


class StyleCascade:
    """Resolve (block type, inline style) pairs against a StyleConfig."""

    def __init__(self, config: StyleConfig, provider: StyleProvider) -> None:
        self.config = config
        self.provider = provider

    def resolve(self, block_type: BlockType, inline_style: InlineStyle = InlineStyle.NONE) -> ResolvedStyle:
        block = self.config.for_block(block_type)
        body = self.config.body
        text_style = TEXT_STYLE_FOR_BLOCK[block_type]

        inline = self.config.for_inline(inline_style) if inline_style in _OVERRIDING_STYLES else None
        color = inline.color if inline is not None else block.color
        layers = [attrs for attrs in (inline, block, body) if attrs is not None]
        font_name = _first_set(*(attrs.font_name for attrs in layers))
        font_size = _first_set(*(attrs.font_size for attrs in layers))
        if font_size is None:
            font_size = self.provider.default_size(text_style)

        font = self.provider.font(font_name, font_size) if font_name else None
        if font is None:
            font = self.provider.preferred_font(text_style, font_size)

        if inline_style is InlineStyle.ITALIC:
            font = self.provider.italic_variant(font) or font
        elif inline_style is InlineStyle.BOLD:
            if self.config.bold.font_weight is not None:
                font = self.provider.system_font(font_size, self.config.bold.font_weight)
            else:
                font = self.provider.bold_variant(font) or font
        return ResolvedStyle(font=font, color=color, text_style=text_style)

    def style_document(self, document: Document) -> StyledDocument:
        cache: dict[tuple[BlockType, InlineStyle], ResolvedStyle] = {}
        styled = StyledDocument()
        for line in document.lines:
            styled_line = StyledLine(block_type=line.block_type)
            for run in line.runs:
                key = (run.block_type, run.inline_style)
                if key not in cache:
                    cache[key] = self.resolve(*key)
                resolved = cache[key]
                styled_line.runs.append(StyledRun(run=run, font=resolved.font, color=resolved.color))
            styled.lines.append(styled_line)
        return styled
