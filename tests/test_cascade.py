from dataclasses import replace

import pytest

from RichMarkdown.cascade import StyleCascade
from RichMarkdown.config import StyleConfig
from RichMarkdown.fonts import DocxStyleProvider
from RichMarkdown.markdown_parser import MarkdownParser
from RichMarkdown.model import BlockType, FontHandle, InlineStyle, StyleAttributes, TextStyle

HEADINGS = [BlockType.H1, BlockType.H2, BlockType.H3, BlockType.H4, BlockType.H5, BlockType.H6]


class NoVariantProvider(DocxStyleProvider):
    """Provider whose fonts have no italic or bold faces."""

    def italic_variant(self, font: FontHandle) -> FontHandle | None:
        return None

    def bold_variant(self, font: FontHandle) -> FontHandle | None:
        return None


def _cascade(config: StyleConfig | None = None, provider=None) -> StyleCascade:
    return StyleCascade(config or StyleConfig(), provider or DocxStyleProvider())


def test_defaults_use_provider_font_and_text_style_size():
    cascade = _cascade()
    h1 = cascade.resolve(BlockType.H1)
    body = cascade.resolve(BlockType.BODY)
    assert h1.font == FontHandle(name="Calibri", size=26.0)
    assert h1.text_style is TextStyle.TITLE1
    assert body.font.size == 11.0
    assert body.color == "#000000"


def test_heading_sizes_shrink_toward_h6():
    cascade = _cascade()
    sizes = [cascade.resolve(block).font.size for block in HEADINGS]
    assert sizes == sorted(sizes, reverse=True)


@pytest.mark.parametrize("block_type", HEADINGS)
def test_heading_font_name_falls_back_to_body(block_type):
    config = StyleConfig()
    config.body.font_name = "Georgia"
    for style in InlineStyle:
        assert _cascade(config).resolve(block_type, style).font.name == "Georgia"


def test_block_values_beat_body_values():
    config = StyleConfig(h2=StyleAttributes(font_name="Impact", font_size=30))
    config.body.font_name = "Georgia"
    config.body.font_size = 14
    cascade = _cascade(config)
    assert cascade.resolve(BlockType.H2).font == FontHandle(name="Impact", size=30)
    assert cascade.resolve(BlockType.H1).font == FontHandle(name="Georgia", size=14)


def test_link_overrides_color_and_keeps_block_font_when_unset():
    config = StyleConfig(
        h1=StyleAttributes(font_name="Impact", color="#111111"),
        link=StyleAttributes(color="#0000FF"),
    )
    resolved = _cascade(config).resolve(BlockType.H1, InlineStyle.LINK)
    assert resolved.color == "#0000FF"
    assert resolved.font.name == "Impact"

    config.link.font_name = "Courier New"
    config.link.font_size = 9
    assert _cascade(config).resolve(BlockType.H1, InlineStyle.LINK).font == FontHandle(name="Courier New", size=9)


def test_code_style_overrides_like_link():
    config = StyleConfig(code=StyleAttributes(font_name="Consolas", color="#00AA00"))
    resolved = _cascade(config).resolve(BlockType.BODY, InlineStyle.CODE)
    assert resolved.font.name == "Consolas"
    assert resolved.color == "#00AA00"


def test_bold_and_italic_keep_block_color():
    config = StyleConfig(
        body=StyleAttributes(color="#333333"),
        bold=StyleAttributes(color="#FF0000"),
        italic=StyleAttributes(color="#00FF00"),
    )
    cascade = _cascade(config)
    bold = cascade.resolve(BlockType.BODY, InlineStyle.BOLD)
    italic = cascade.resolve(BlockType.BODY, InlineStyle.ITALIC)
    assert bold.color == italic.color == "#333333"
    assert bold.font.bold and not bold.font.italic
    assert italic.font.italic and not italic.font.bold


def test_bold_weight_uses_system_font():
    config = StyleConfig()
    config.bold.font_weight = 700
    config.body.font_size = 12
    font = _cascade(config).resolve(BlockType.BODY, InlineStyle.BOLD).font
    assert font == FontHandle(name="Segoe UI", size=12, bold=True, weight=700)

    config.bold.font_weight = 400
    assert not _cascade(config).resolve(BlockType.BODY, InlineStyle.BOLD).font.bold


def test_missing_variants_fall_back_to_base_font():
    cascade = _cascade(provider=NoVariantProvider())
    base = cascade.resolve(BlockType.BODY).font
    assert cascade.resolve(BlockType.BODY, InlineStyle.ITALIC).font == base
    assert cascade.resolve(BlockType.BODY, InlineStyle.BOLD).font == base


def test_unknown_font_name_uses_preferred_font_at_resolved_size():
    config = StyleConfig(body=StyleAttributes(font_name="Nope", font_size=13))
    provider = DocxStyleProvider(available_fonts={"Georgia"})
    assert _cascade(config, provider).resolve(BlockType.H3).font == FontHandle(name="Calibri", size=13)


def test_styled_document_attaches_color_to_every_run():
    parser = MarkdownParser("Title\n=====\nplain **bold** *it* [link](http://x.org) \\*")
    parser.link.color = "#0000FF"
    styled = parser.styled()
    assert styled.text == parser.parse().text
    assert all(run.color for run in styled.runs)
    link = next(run for run in styled.runs if run.run.inline_style is InlineStyle.LINK)
    assert link.color == "#0000FF"
    assert styled.lines[0].runs[0].font_size == 26.0


def test_styled_document_sees_config_changes_made_before_each_call():
    parser = MarkdownParser("text")
    assert parser.styled().runs[0].font_name == "Calibri"
    parser.body = replace(parser.body, font_name="Georgia")
    assert parser.styled().runs[0].font_name == "Georgia"
