"""Receipt renderers: DOCX (python-docx) and a print-ready HTML view (Jinja2)."""

from recibos.render.content import ReceiptContent, build_content, payment_statement
from recibos.render.docx_document import build_receipt_document, write_receipt_docx
from recibos.render.print_view import render_receipt_html, write_receipt_html

__all__ = [
    "ReceiptContent",
    "build_content",
    "payment_statement",
    "build_receipt_document",
    "write_receipt_docx",
    "render_receipt_html",
    "write_receipt_html",
]
