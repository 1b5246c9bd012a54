from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

from .model import BlockType, InlineStyle, StyleAttributes

_COLOR_RE = re.compile(r"#[0-9A-Fa-f]{6}")


@dataclass
class StyleConfig:
    """Style attributes for every block type and inline style.

    The parser only reads this object; callers adjust it before asking for a
    styled document.
    """

    h1: StyleAttributes = field(default_factory=StyleAttributes)
    h2: StyleAttributes = field(default_factory=StyleAttributes)
    h3: StyleAttributes = field(default_factory=StyleAttributes)
    h4: StyleAttributes = field(default_factory=StyleAttributes)
    h5: StyleAttributes = field(default_factory=StyleAttributes)
    h6: StyleAttributes = field(default_factory=StyleAttributes)
    body: StyleAttributes = field(default_factory=StyleAttributes)
    bold: StyleAttributes = field(default_factory=StyleAttributes)
    italic: StyleAttributes = field(default_factory=StyleAttributes)
    link: StyleAttributes = field(default_factory=StyleAttributes)
    code: StyleAttributes = field(default_factory=StyleAttributes)

    def for_block(self, block_type: BlockType) -> StyleAttributes:
        return getattr(self, block_type.name.lower())

    def for_inline(self, style: InlineStyle) -> StyleAttributes | None:
        if style is InlineStyle.NONE:
            return None
        return getattr(self, style.value)


STYLE_NAMES = tuple(f.name for f in fields(StyleConfig))
ATTRIBUTE_NAMES = tuple(f.name for f in fields(StyleAttributes))


def load_style_config(text: str, base: StyleConfig | None = None) -> StyleConfig:
    """Parse a YAML mapping of style names to attribute mappings."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("Style config root must be a mapping of style names.")

    config = base or StyleConfig()
    for key, value in data.items():
        if key not in STYLE_NAMES:
            raise ValueError(f"Unknown style {key!r}; expected one of {', '.join(STYLE_NAMES)}.")
        if value is None:
            continue
        if not isinstance(value, dict):
            raise ValueError(f"Style {key!r} must be a mapping of attributes.")
        _apply_attributes(getattr(config, key), key, value)
    return config


def load_style_config_file(path: str | Path, base: StyleConfig | None = None) -> StyleConfig:
    return load_style_config(Path(path).read_text(encoding="utf-8"), base=base)


def _apply_attributes(attributes: StyleAttributes, style_name: str, values: dict) -> None:
    for name, value in values.items():
        if name not in ATTRIBUTE_NAMES:
            raise ValueError(f"Unknown attribute {name!r} in style {style_name!r}.")
        if name == "color":
            attributes.color = _normalize_color(value, style_name)
        elif name == "font_name":
            attributes.font_name = None if value is None else str(value)
        else:
            setattr(attributes, name, _to_number(value, f"{style_name}.{name}"))


def _to_number(value, label: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{label} must be a number, got {value!r}.")
    return float(value)


def _normalize_color(value, style_name: str) -> str:
    text = str(value).strip()
    if not text.startswith("#"):
        text = f"#{text}"
    if not _COLOR_RE.fullmatch(text):
        raise ValueError(f"{style_name}.color must be a #RRGGBB value, got {value!r}.")
    return text.upper()
