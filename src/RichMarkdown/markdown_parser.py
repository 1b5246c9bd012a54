from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Sequence

from .cascade import StyleCascade, StyleProvider
from .config import StyleConfig
from .fonts import DocxStyleProvider
from .model import BlockType, Document, InlineStyle, Line, StyledDocument, TextRun
from .scanner import TRIGGER_CHARACTERS, DelimiterRun, scan_delimiters, scan_until, starts_word, to_chars
from .utils import load_text

logger = logging.getLogger(__name__)

# Prefix-based heading detection ("# " -> H1 ...). Kept empty: only the
# underline form is recognised unless a caller supplies a table.
HEADING_PREFIXES: dict[str, BlockType] = {}

ATX_HEADING_PREFIXES: dict[str, BlockType] = {
    "###### ": BlockType.H6,
    "##### ": BlockType.H5,
    "#### ": BlockType.H4,
    "### ": BlockType.H3,
    "## ": BlockType.H2,
    "# ": BlockType.H1,
}

H1_UNDERLINE = "="
H2_UNDERLINE = "-"

_LINE_BREAK_RE = re.compile(r"\r\n|[\n\r\x0b\x0c\x85\u2028\u2029]")

_DELIMITER_STYLES = {
    "**": InlineStyle.BOLD,
    "__": InlineStyle.BOLD,
    "*": InlineStyle.ITALIC,
    "_": InlineStyle.ITALIC,
    "[": InlineStyle.LINK,
}


@dataclass(frozen=True)
class _Piece:
    text: str
    style: InlineStyle = InlineStyle.NONE
    link_url: str | None = None


def parse_markdown(text: str, heading_prefixes: Mapping[str, BlockType] | None = None) -> Document:
    prefixes = HEADING_PREFIXES if heading_prefixes is None else heading_prefixes
    lines = split_lines(text)
    document = Document()
    skip_next = False
    for index in range(len(lines)):
        if skip_next:
            skip_next = False
            continue
        block_type, skip_next, line_text = classify_line(lines, index, prefixes)
        document.lines.append(Line(block_type=block_type, runs=parse_line(line_text, block_type)))
    logger.debug("Parsed %d source lines into %d output lines", len(lines), len(document.lines))
    return document


def split_lines(text: str) -> list[str]:
    return _LINE_BREAK_RE.split(text)


def classify_line(
    lines: Sequence[str],
    index: int,
    heading_prefixes: Mapping[str, BlockType] = HEADING_PREFIXES,
) -> tuple[BlockType, bool, str]:
    """Return the block type of ``lines[index]``, whether the next line is consumed, and the text to scan."""
    line = lines[index] or " "
    block_type = BlockType.BODY
    for prefix, prefix_type in heading_prefixes.items():
        if line.startswith(prefix):
            block_type = prefix_type
            line = _strip_heading_markers(line[len(prefix) :], prefix.strip())
            break

    # underline form overrides any prefix match
    skip_next = False
    if index + 1 < len(lines):
        next_line = lines[index + 1]
        if next_line.startswith(H1_UNDERLINE):
            block_type, skip_next = BlockType.H1, True
        elif next_line.startswith(H2_UNDERLINE):
            block_type, skip_next = BlockType.H2, True
    return block_type, skip_next, line


def _strip_heading_markers(text: str, marker: str) -> str:
    text = text.strip()
    while marker and text.endswith(marker):
        text = text[: -len(marker)].rstrip()
    return text


def parse_line(line: str, block_type: BlockType = BlockType.BODY) -> list[TextRun]:
    runs: list[TextRun] = []
    for piece in scan_inline(to_chars(line)):
        if not piece.text:
            continue
        if runs and runs[-1].inline_style is piece.style and runs[-1].link_url == piece.link_url:
            runs[-1] = TextRun(runs[-1].text + piece.text, block_type, piece.style, piece.link_url)
        else:
            runs.append(TextRun(piece.text, block_type, piece.style, piece.link_url))
    return runs


def scan_inline(chars: Sequence[str]) -> List[_Piece]:
    pieces: List[_Piece] = []
    pos = 0
    while pos < len(chars):
        pos, text = scan_until(chars, pos, TRIGGER_CHARACTERS)
        if text:
            pieces.append(_Piece(text))
        if pos < len(chars):
            pos, span = build_span(chars, pos)
            pieces.extend(span)
    return pieces


def style_for_delimiter(raw: str) -> InlineStyle:
    return _DELIMITER_STYLES.get(raw, InlineStyle.NONE)


def build_span(chars: Sequence[str], pos: int) -> tuple[int, list[_Piece]]:
    """Turn the delimiter run at ``pos`` into styled pieces or literal text.

    A run glued to the following word opens a span, styled by the delimiter
    (unknown delimiters give an unstyled span and are dropped). The span covers
    the text up to the next trigger run, which closes it regardless of which
    delimiter it is. ``[`` always attempts a link.
    """
    after, opening = scan_delimiters(chars, pos)
    style = style_for_delimiter(opening.raw)
    if style is InlineStyle.LINK:
        return _build_link(chars, after, opening)
    if not opening.raw or not starts_word(chars, after):
        return after, [_Piece(opening.literal)]

    end, content = scan_until(chars, after, TRIGGER_CHARACTERS)
    end, closing = scan_delimiters(chars, end)
    return end, [
        _Piece(opening.escaped, style),
        _Piece(content, style),
        _Piece(closing.escaped, style),
    ]


def _build_link(chars: Sequence[str], pos: int, opening: DelimiterRun) -> tuple[int, list[_Piece]]:
    pieces = [_Piece(opening.escaped)]
    pos, link_text = scan_until(chars, pos, {"]"})
    brackets_end = pos
    while brackets_end < len(chars) and chars[brackets_end] == "]":
        brackets_end += 1
    closing_brackets = "".join(chars[pos:brackets_end])
    pos = brackets_end

    style, link_url = InlineStyle.NONE, None
    if closing_brackets and pos < len(chars) and chars[pos] == "(":
        url_end, url = scan_until(chars, pos + 1, {")"})
        if url_end < len(chars):
            url_end += 1
        url = url.strip()
        if link_text.strip() and url:
            style, link_url = InlineStyle.LINK, url
            pieces.append(_Piece(link_text, style, link_url))
            pos = url_end
    if style is InlineStyle.NONE:
        # no usable target: show what was typed and re-read anything after "]"
        pieces.append(_Piece("[" + link_text + closing_brackets))

    # a trigger run right after the link closes it like any other span
    pos, closing = scan_delimiters(chars, pos)
    pieces.append(_Piece(closing.escaped, style, link_url))
    return pos, pieces


class _StyleField:
    def __set_name__(self, owner, name: str) -> None:
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return getattr(instance.config, self.name)

    def __set__(self, instance, value) -> None:
        setattr(instance.config, self.name, value)


class MarkdownParser:
    """Parse a Markdown string into runs and resolve their styles."""

    h1 = _StyleField()
    h2 = _StyleField()
    h3 = _StyleField()
    h4 = _StyleField()
    h5 = _StyleField()
    h6 = _StyleField()
    body = _StyleField()
    bold = _StyleField()
    italic = _StyleField()
    link = _StyleField()
    code = _StyleField()

    def __init__(
        self,
        text: str,
        config: StyleConfig | None = None,
        heading_prefixes: Mapping[str, BlockType] | None = None,
    ) -> None:
        self.text = text
        self.config = config or StyleConfig()
        self.heading_prefixes = dict(HEADING_PREFIXES if heading_prefixes is None else heading_prefixes)

    @classmethod
    def from_location(
        cls,
        location: str | Path,
        config: StyleConfig | None = None,
        heading_prefixes: Mapping[str, BlockType] | None = None,
    ) -> MarkdownParser | None:
        """Read ``location`` as UTF-8, or return None if it cannot be read."""
        text = load_text(location)
        if text is None:
            return None
        return cls(text, config=config, heading_prefixes=heading_prefixes)

    def parse(self) -> Document:
        return parse_markdown(self.text, self.heading_prefixes)

    def styled(self, provider: StyleProvider | None = None) -> StyledDocument:
        cascade = StyleCascade(self.config, provider or DocxStyleProvider())
        return cascade.style_document(self.parse())
