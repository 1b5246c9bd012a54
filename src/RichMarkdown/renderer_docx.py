from __future__ import annotations

from pathlib import Path

from docx import Document as DocxDocument
from docx.opc.constants import RELATIONSHIP_TYPE
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt

from . import fonts
from .model import BlockType, InlineStyle, StyledDocument, StyledLine, StyledRun

HEADING_SPACE_AFTER_PT = 6


def render_document(doc: StyledDocument, output_path: str | Path) -> None:
    output_path = Path(output_path)
    docx = build_docx(doc)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    docx.save(output_path)


def build_docx(doc: StyledDocument) -> DocxDocument:
    docx = DocxDocument()
    for line in doc.lines:
        _render_line(docx, line)
    return docx


def _render_line(docx: DocxDocument, line: StyledLine) -> None:
    paragraph = docx.add_paragraph()
    if line.block_type is not BlockType.BODY:
        paragraph.style = docx.styles[f"Heading {line.block_type.value}"]
        paragraph.paragraph_format.space_after = Pt(HEADING_SPACE_AFTER_PT)
    for styled in line.runs:
        if styled.run.inline_style is InlineStyle.LINK and styled.run.link_url:
            _add_hyperlink(paragraph, styled)
        else:
            run = paragraph.add_run(styled.text)
            fonts.set_run_font(run, styled)


def _add_hyperlink(paragraph, styled: StyledRun) -> None:
    rel_id = paragraph.part.relate_to(styled.run.link_url, RELATIONSHIP_TYPE.HYPERLINK, is_external=True)
    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), rel_id)
    run = paragraph.add_run(styled.text)
    fonts.set_run_font(run, styled)
    run.font.underline = True
    # move the formatted run inside the hyperlink element
    hyperlink.append(run._r)
    paragraph._p.append(hyperlink)
