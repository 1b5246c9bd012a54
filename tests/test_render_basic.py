from pathlib import Path

from docx import Document as DocxReader
from docx.shared import Pt, RGBColor

from RichMarkdown.markdown_parser import MarkdownParser
from RichMarkdown.renderer_docx import render_document


def _render(markdown: str, tmp_path: Path, **colors) -> DocxReader:
    parser = MarkdownParser(markdown)
    for name, color in colors.items():
        getattr(parser, name).color = color
    out = tmp_path / "out" / "doc.docx"
    render_document(parser.styled(), out)
    assert out.exists()
    assert out.stat().st_size > 0
    return DocxReader(out)


def test_render_creates_one_paragraph_per_line(tmp_path: Path):
    reader = _render("Title\n=====\nSome **bold** text", tmp_path)
    assert len(reader.paragraphs) == 2
    assert reader.paragraphs[0].style.name == "Heading 1"
    assert reader.paragraphs[0].runs[0].text == "Title"
    assert reader.paragraphs[0].runs[0].font.size == Pt(26)
    body = reader.paragraphs[1]
    assert [run.text for run in body.runs] == ["Some ", "bold", " text"]
    assert [run.text for run in body.runs if run.bold] == ["bold"]


def test_render_applies_colors(tmp_path: Path):
    reader = _render("plain", tmp_path, body="#FF0000")
    assert reader.paragraphs[0].runs[0].font.color.rgb == RGBColor(0xFF, 0x00, 0x00)


def test_render_links_as_hyperlinks(tmp_path: Path):
    reader = _render("see [docs](http://example.com) now", tmp_path, link="#0000FF")
    xml = reader.paragraphs[0]._p.xml
    assert "<w:hyperlink" in xml
    assert "docs" in xml
    targets = [rel.target_ref for rel in reader.part.rels.values() if rel.is_external]
    assert targets == ["http://example.com"]
    assert [run.text for run in reader.paragraphs[0].runs] == ["see ", " now"]
