"""DOCX rendering of a warranty receipt with python-docx.

Layout: black company header, then the customer, device, payment and
warranty sections, optional observations, place/date, signature line and
contact footer.
"""

from pathlib import Path

from docx import Document
from docx.document import Document as DocumentObject
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Cm, Pt, RGBColor

from recibos.domain.duration import DAYS_PER_MONTH, DayConvention
from recibos.domain.receipt import WarrantyReceipt
from recibos.render.content import ReceiptContent, build_content

LABEL_COLOR = RGBColor(0x37, 0x41, 0x51)
VALUE_COLOR = RGBColor(0x1F, 0x29, 0x37)
IMEI_FONT = "Courier New"


def set_cell_shading(cell, color: str) -> None:
    """Set the background colour of a table cell (hex without #)."""
    shading_elm = OxmlElement("w:shd")
    shading_elm.set(qn("w:val"), "clear")
    shading_elm.set(qn("w:fill"), color)
    cell._tc.get_or_add_tcPr().append(shading_elm)


def set_paragraph_shading(paragraph, color: str) -> None:
    """Set the background colour of a paragraph (hex without #)."""
    shading_elm = OxmlElement("w:shd")
    shading_elm.set(qn("w:val"), "clear")
    shading_elm.set(qn("w:fill"), color)
    paragraph._p.get_or_add_pPr().append(shading_elm)


def _add_section_title(doc: DocumentObject, title: str) -> None:
    paragraph = doc.add_paragraph()
    paragraph.paragraph_format.space_before = Pt(15)
    paragraph.paragraph_format.space_after = Pt(10)
    run = paragraph.add_run(title)
    run.bold = True
    run.font.size = Pt(13)


def _write_label_value(paragraph, label: str, value: str, mono: bool = False) -> None:
    label_run = paragraph.add_run(f"{label}: ")
    label_run.bold = True
    label_run.font.size = Pt(11)
    label_run.font.color.rgb = LABEL_COLOR

    value_run = paragraph.add_run(value)
    value_run.font.size = Pt(11)
    value_run.font.color.rgb = VALUE_COLOR
    if mono:
        value_run.font.name = IMEI_FONT


def _add_info_table(doc: DocumentObject, rows: list[tuple[str, str]]) -> None:
    """Two label/value pairs per row."""
    table = doc.add_table(rows=0, cols=2)
    table.style = "Table Grid"
    table.alignment = WD_TABLE_ALIGNMENT.CENTER
    for i in range(0, len(rows), 2):
        cells = table.add_row().cells
        for cell, (label, value) in zip(cells, rows[i : i + 2]):
            _write_label_value(cell.paragraphs[0], label, value)


def _add_imei_rows(doc: DocumentObject, imeis: list[tuple[str, str]]) -> None:
    table = doc.add_table(rows=0, cols=1)
    table.style = "Table Grid"
    for (label, value), fill in zip(imeis, ("F3F4F6", "F9FAFB")):
        cell = table.add_row().cells[0]
        set_cell_shading(cell, fill)
        _write_label_value(cell.paragraphs[0], label, value, mono=True)


def _add_boxed_text(doc: DocumentObject, text: str, justify: bool = False) -> None:
    table = doc.add_table(rows=1, cols=1)
    table.style = "Table Grid"
    paragraph = table.rows[0].cells[0].paragraphs[0]
    if justify:
        paragraph.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY
        paragraph.paragraph_format.line_spacing = 1.5
    run = paragraph.add_run(text)
    run.font.size = Pt(11)
    run.font.color.rgb = VALUE_COLOR


def _add_centered(doc: DocumentObject, text: str, size: int = 10, bold: bool = False, before: int = 0):
    paragraph = doc.add_paragraph()
    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
    paragraph.paragraph_format.space_before = Pt(before)
    run = paragraph.add_run(text)
    run.font.size = Pt(size)
    run.bold = bold
    return paragraph


def build_document(content: ReceiptContent) -> DocumentObject:
    """Lay out receipt content as a Word document.

    Args:
        content: Display strings from build_content.

    Returns:
        python-docx Document, not yet saved.
    """
    doc = Document()

    for section in doc.sections:
        section.top_margin = Cm(1.27)
        section.bottom_margin = Cm(2.54)
        section.left_margin = Cm(2.54)
        section.right_margin = Cm(2.54)

    # Header
    header = doc.add_paragraph()
    header.alignment = WD_ALIGN_PARAGRAPH.CENTER
    set_paragraph_shading(header, "000000")
    header_run = header.add_run(content.header)
    header_run.bold = True
    header_run.font.size = Pt(14)
    header_run.font.color.rgb = RGBColor(0xFF, 0xFF, 0xFF)

    _add_section_title(doc, "DADOS DO BENEFICIÁRIO")
    _add_info_table(doc, content.customer_rows)

    _add_section_title(doc, "DADOS DO SMARTPHONE")
    _add_info_table(doc, content.device_rows)
    _add_imei_rows(doc, content.imeis)

    _add_section_title(doc, "DADOS DO PAGAMENTO")
    _add_boxed_text(doc, content.payment_statement, justify=True)

    _add_section_title(doc, "OBSERVAÇÕES DA GARANTIA")
    _add_boxed_text(doc, content.warranty_text)

    if content.observations:
        _add_section_title(doc, "OBSERVAÇÕES")
        _add_boxed_text(doc, content.observations)

    _add_centered(doc, content.place_and_date, size=11, before=24)
    _add_centered(doc, "_" * 40, size=11, before=36)
    _add_centered(doc, content.signature_name, size=11, bold=True)

    contact = _add_centered(doc, "", size=9, before=24)
    contact_label = contact.add_run("Contato: ")
    contact_label.bold = True
    contact_label.font.size = Pt(9)
    contact_value = contact.add_run(content.contact_line)
    contact_value.font.size = Pt(9)

    _add_centered(doc, content.company_line, size=9)
    _add_centered(doc, content.company_address, size=9)

    return doc


def build_receipt_document(
    receipt: WarrantyReceipt,
    instagram: str = "",
    day_convention: DayConvention = DAYS_PER_MONTH,
) -> DocumentObject:
    """Build the Word document for a receipt."""
    return build_document(build_content(receipt, instagram, day_convention))


def write_receipt_docx(
    receipt: WarrantyReceipt,
    output_path: Path,
    instagram: str = "",
    day_convention: DayConvention = DAYS_PER_MONTH,
) -> Path:
    """Render a receipt and save it as .docx.

    Args:
        receipt: Receipt to render.
        output_path: Destination file.
        instagram: Shop Instagram handle for the contact line.
        day_convention: Days per month used in the warranty text.

    Returns:
        The written path.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    build_receipt_document(receipt, instagram, day_convention).save(str(output_path))
    return output_path
