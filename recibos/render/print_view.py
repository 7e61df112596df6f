"""Print-ready HTML view of a receipt (Jinja2).

The page is self-contained (inline CSS) so it can be opened straight from
disk and printed from the browser.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from recibos.dates import format_created_at
from recibos.domain.duration import DAYS_PER_MONTH, DayConvention
from recibos.domain.receipt import WarrantyReceipt
from recibos.render.content import DOCUMENT_TITLE, build_content

_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def render_receipt_html(
    receipt: WarrantyReceipt,
    instagram: str = "",
    day_convention: DayConvention = DAYS_PER_MONTH,
    created_at: str | None = None,
) -> str:
    """Render a receipt as a printable HTML page.

    Args:
        receipt: Receipt to render.
        instagram: Shop Instagram handle for the contact line.
        day_convention: Days per month used in the warranty text.
        created_at: Stored creation timestamp, shown in the page footer.

    Returns:
        HTML document as text.
    """
    template = _get_env().get_template("receipt.html")
    return template.render(
        title=DOCUMENT_TITLE,
        receipt=receipt,
        content=build_content(receipt, instagram, day_convention),
        created_at=format_created_at(created_at) if created_at else None,
    )


def write_receipt_html(
    receipt: WarrantyReceipt,
    output_path: Path,
    instagram: str = "",
    day_convention: DayConvention = DAYS_PER_MONTH,
    created_at: str | None = None,
) -> Path:
    """Render a receipt and save it as UTF-8 HTML."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    html = render_receipt_html(receipt, instagram, day_convention, created_at)
    output_path.write_text(html, encoding="utf-8")
    return output_path
