from __future__ import annotations

"""
Render drafted minutes into a Word (.docx) document with python-docx.

Layout:
- page header with the organization name, page footer with "Page X of Y"
- centred title block (organization, meeting type, date and location)
- minutes body from the markdown tokenizer
- optional action-items table and a closing generator note
"""

import io
from typing import Sequence

from docx import Document
from docx.document import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor, Twips
from docx.text.paragraph import Paragraph

from backend.export.markdown import MarkdownBlock, parse_inline_spans, parse_markdown_blocks
from backend.minutes.models import (
    UNASSIGNED,
    ActionItem,
    Agenda,
    meeting_date,
    meeting_location,
    meeting_type_label,
)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

PRIMARY_COLOR = RGBColor(0x2E, 0x5A, 0x4C)
SECONDARY_COLOR = RGBColor(0x4A, 0x7C, 0x6F)
MUTED_COLOR = RGBColor(0x88, 0x88, 0x88)
FAINT_COLOR = RGBColor(0x99, 0x99, 0x99)
WHITE = RGBColor(0xFF, 0xFF, 0xFF)
TABLE_HEADER_FILL = "2E5A4C"
TABLE_STRIPE_FILL = "F5F5F5"
NO_DUE_DATE = "—"

_ACTION_COLUMNS = (("Assigned To", 2000), ("Task", 5000), ("Due Date", 2000))


def build_minutes_document(
    minutes: str,
    agenda: Agenda | None,
    action_items: Sequence[ActionItem],
    *,
    org_name: str,
    org_short_name: str,
    default_location: str,
) -> bytes:
    doc = Document()
    _configure_styles(doc)
    _configure_page(doc, org_name=org_name)

    _add_title_block(
        doc,
        org_name=org_name,
        meeting_type=meeting_type_label(agenda.type if agenda is not None else None),
        date_line=f"{meeting_date(agenda)} — {meeting_location(agenda, default_location)}",
    )

    for block in parse_markdown_blocks(minutes):
        _add_markdown_block(doc, block)

    if action_items:
        _add_action_items_table(doc, action_items)

    closing = doc.add_paragraph()
    closing.paragraph_format.space_before = Pt(20)
    _styled_run(
        closing,
        f"Minutes generated by {org_short_name} Meeting Manager",
        italic=True,
        size=Pt(9),
        color=FAINT_COLOR,
    )

    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def export_filename(org_short_name: str, date: str) -> str:
    # Header values must stay ASCII; anything else collapses to "-".
    safe_date = "".join(char if _is_filename_char(char) else "-" for char in date.strip())
    safe_prefix = "".join(char for char in org_short_name if _is_filename_char(char)) or "Meeting"
    return f"{safe_prefix}_Minutes_{safe_date.strip('-') or 'undated'}.docx"


def _is_filename_char(char: str) -> bool:
    return (char.isascii() and char.isalnum()) or char in "-_"


def _configure_styles(doc: DocxDocument) -> None:
    normal = doc.styles["Normal"]
    normal.font.name = "Arial"
    normal.font.size = Pt(12)

    heading_specs = (
        ("Heading 1", Pt(14), PRIMARY_COLOR, Pt(12), Pt(6)),
        ("Heading 2", Pt(12), SECONDARY_COLOR, Pt(10), Pt(5)),
    )
    for style_name, size, color, before, after in heading_specs:
        style = doc.styles[style_name]
        style.font.name = "Arial"
        style.font.size = size
        style.font.bold = True
        style.font.color.rgb = color
        style.paragraph_format.space_before = before
        style.paragraph_format.space_after = after


def _configure_page(doc: DocxDocument, *, org_name: str) -> None:
    section = doc.sections[0]
    for side in ("top_margin", "right_margin", "bottom_margin", "left_margin"):
        setattr(section, side, Inches(0.75))

    header = section.header.paragraphs[0]
    header.alignment = WD_ALIGN_PARAGRAPH.RIGHT
    _styled_run(header, f"{org_name} — Meeting Minutes", italic=True, size=Pt(9), color=MUTED_COLOR)

    footer = section.footer.paragraphs[0]
    footer.alignment = WD_ALIGN_PARAGRAPH.CENTER
    _styled_run(footer, "Page ", size=Pt(9))
    _add_field(footer, "PAGE", size=Pt(9))
    _styled_run(footer, " of ", size=Pt(9))
    _add_field(footer, "NUMPAGES", size=Pt(9))


def _add_title_block(doc: DocxDocument, *, org_name: str, meeting_type: str, date_line: str) -> None:
    lines = (
        (org_name.upper(), Pt(16), PRIMARY_COLOR, True, Pt(0)),
        (meeting_type, Pt(14), SECONDARY_COLOR, False, Pt(10)),
        (date_line, Pt(12), None, False, Pt(20)),
    )
    for text, size, color, bold, after in lines:
        paragraph = doc.add_paragraph()
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        paragraph.paragraph_format.space_after = after
        _styled_run(paragraph, text, bold=bold, size=size, color=color)


def _add_markdown_block(doc: DocxDocument, block: MarkdownBlock) -> None:
    if block.kind == "blank":
        doc.add_paragraph().paragraph_format.space_after = Pt(5)
        return

    if block.kind == "heading" and block.level in (1, 2):
        doc.add_heading(block.text, level=block.level)
        return

    if block.kind == "heading":
        paragraph = doc.add_paragraph()
        paragraph.paragraph_format.space_before = Pt(8)
        paragraph.paragraph_format.space_after = Pt(4)
        _styled_run(paragraph, block.text, bold=True)
        return

    paragraph = doc.add_paragraph()
    if block.kind == "bullet":
        paragraph.paragraph_format.left_indent = Twips(360)
        _styled_run(paragraph, "• ", bold=True)
    elif block.kind == "numbered":
        paragraph.paragraph_format.left_indent = Twips(360)
    else:
        paragraph.paragraph_format.space_after = Pt(5)
    _add_inline_runs(paragraph, block.text)


def _add_inline_runs(paragraph: Paragraph, text: str) -> None:
    spans = parse_inline_spans(text)
    if not spans:
        paragraph.add_run(text)
        return
    for span in spans:
        _styled_run(paragraph, span.text, bold=span.bold, italic=span.italic)


def _add_action_items_table(doc: DocxDocument, action_items: Sequence[ActionItem]) -> None:
    heading = doc.add_heading("Action Items", level=1)
    heading.paragraph_format.space_before = Pt(20)

    table = doc.add_table(rows=1, cols=len(_ACTION_COLUMNS))
    table.style = "Table Grid"
    _mark_header_row(table.rows[0])
    for cell, (title, width) in zip(table.rows[0].cells, _ACTION_COLUMNS):
        cell.width = Twips(width)
        _shade_cell(cell, TABLE_HEADER_FILL)
        _styled_run(cell.paragraphs[0], title, bold=True, color=WHITE)

    for index, item in enumerate(action_items):
        values = (item.assignee or UNASSIGNED, item.task, item.due_date or NO_DUE_DATE)
        cells = table.add_row().cells
        for cell, value, (_, width) in zip(cells, values, _ACTION_COLUMNS):
            cell.width = Twips(width)
            if index % 2 == 1:
                _shade_cell(cell, TABLE_STRIPE_FILL)
            cell.paragraphs[0].add_run(value)


def _styled_run(
    paragraph: Paragraph,
    text: str,
    *,
    bold: bool = False,
    italic: bool = False,
    size: Pt | None = None,
    color: RGBColor | None = None,
):
    run = paragraph.add_run(text)
    if bold:
        run.bold = True
    if italic:
        run.italic = True
    if size is not None:
        run.font.size = size
    if color is not None:
        run.font.color.rgb = color
    return run


def _add_field(paragraph: Paragraph, instruction: str, *, size: Pt) -> None:
    run = paragraph.add_run()
    run.font.size = size

    begin = OxmlElement("w:fldChar")
    begin.set(qn("w:fldCharType"), "begin")
    instr = OxmlElement("w:instrText")
    instr.set(qn("xml:space"), "preserve")
    instr.text = f" {instruction} "
    separate = OxmlElement("w:fldChar")
    separate.set(qn("w:fldCharType"), "separate")
    placeholder = OxmlElement("w:t")
    placeholder.text = "1"
    end = OxmlElement("w:fldChar")
    end.set(qn("w:fldCharType"), "end")

    for element in (begin, instr, separate, placeholder, end):
        run._r.append(element)


def _shade_cell(cell, fill: str) -> None:
    shading = OxmlElement("w:shd")
    shading.set(qn("w:val"), "clear")
    shading.set(qn("w:color"), "auto")
    shading.set(qn("w:fill"), fill)
    cell._tc.get_or_add_tcPr().append(shading)


def _mark_header_row(row) -> None:
    header_flag = OxmlElement("w:tblHeader")
    header_flag.set(qn("w:val"), "true")
    row._tr.get_or_add_trPr().append(header_flag)
