"""Cursor-based scanning over a line's code points.

Every function takes an immutable character sequence and a cursor and returns
the new cursor together with what it read, so callers can rewind simply by
reusing an earlier position.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Sequence

from markdown_it.common.utils import isWhiteSpace

ESCAPE = "\\"
TRIGGER_CHARACTERS = frozenset({ESCAPE, "*", "_", "["})


@dataclass(frozen=True)
class DelimiterRun:
    raw: str = ""
    escaped: str = ""
    literal: str = ""


def to_chars(line: str) -> tuple[str, ...]:
    return tuple(line)


def scan_until(chars: Sequence[str], pos: int, stop: frozenset[str] | set[str]) -> tuple[int, str]:
    """Read characters up to (not including) the first one in ``stop``."""
    start = pos
    while pos < len(chars) and chars[pos] not in stop:
        pos += 1
    return pos, "".join(chars[start:pos])


def scan_delimiters(chars: Sequence[str], pos: int) -> tuple[int, DelimiterRun]:
    """Consume the maximal run of trigger characters starting at ``pos``."""
    raw: list[str] = []
    escaped: list[str] = []
    literal: list[str] = []
    while pos < len(chars) and chars[pos] in TRIGGER_CHARACTERS:
        char = chars[pos]
        if char == ESCAPE and pos + 1 < len(chars) and chars[pos + 1] in TRIGGER_CHARACTERS:
            escaped.append(chars[pos + 1])
            literal.append(chars[pos + 1])
            pos += 2
            continue
        raw.append(char)
        if char == ESCAPE:
            # a backslash escaping nothing stays as typed
            escaped.append(char)
        literal.append(char)
        pos += 1
    return pos, DelimiterRun(raw="".join(raw), escaped="".join(escaped), literal="".join(literal))


def is_boundary(char: str) -> bool:
    # punctuation only; symbols such as $ or + can start a word
    return isWhiteSpace(ord(char)) or unicodedata.category(char).startswith("P")


def starts_word(chars: Sequence[str], pos: int) -> bool:
    """True when a non-whitespace, non-punctuation character sits at ``pos``."""
    return pos < len(chars) and not is_boundary(chars[pos])
