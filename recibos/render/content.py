"""Text blocks shared by the DOCX and HTML renderers."""

from dataclasses import dataclass

from recibos.domain.duration import DAYS_PER_MONTH, DayConvention, parse_canonical
from recibos.domain.formatting import format_brl
from recibos.domain.receipt import WarrantyReceipt

DOCUMENT_TITLE = "RECIBO DE GARANTIA"


@dataclass(frozen=True)
class ReceiptContent:
    """Everything a renderer prints, already as display strings."""

    header: str
    customer_rows: list[tuple[str, str]]
    device_rows: list[tuple[str, str]]
    imeis: list[tuple[str, str]]
    sale_value: str
    payment_statement: str
    warranty_text: str
    observations: str | None
    place_and_date: str
    signature_name: str
    contact_line: str
    company_line: str
    company_address: str


def payment_statement(receipt: WarrantyReceipt) -> str:
    """The "A importância de (...)" paragraph of the payment section."""
    imeis = f"IMEI {receipt.imei1}"
    if receipt.imei2:
        imeis += f" e IMEI {receipt.imei2}"
    return (
        f"A importância de ({receipt.sale_value_in_words.lower()}), correspondente ao valor total pago, "
        f"referente à compra de 01 (um) aparelho {receipt.product_type.lower()}, com memória "
        f"{receipt.rom_memory}ROM / {receipt.ram_memory}RAM, marca {receipt.brand}, modelo {receipt.model}, "
        f"{imeis}, conforme dados informados neste recibo."
    )


def contact_line(receipt: WarrantyReceipt, instagram: str = "") -> str:
    line = f"WhatsApp {receipt.company_phone2} | Tel. {receipt.company_phone1}"
    if instagram:
        line += f" | Instagram {instagram}"
    return line


def build_content(
    receipt: WarrantyReceipt,
    instagram: str = "",
    day_convention: DayConvention = DAYS_PER_MONTH,
) -> ReceiptContent:
    """Collect the printable text of a receipt.

    Args:
        receipt: Receipt to render.
        instagram: Shop Instagram handle for the contact line.
        day_convention: Days per month used to recompute the warranty days.

    Returns:
        ReceiptContent ready for a renderer.
    """
    imeis = [("IMEI 1", receipt.imei1)]
    if receipt.imei2:
        imeis.append(("IMEI 2", receipt.imei2))

    return ReceiptContent(
        header=f"{receipt.company_name.upper()} - {DOCUMENT_TITLE}",
        customer_rows=[
            ("Nome", receipt.customer_name),
            ("CPF", receipt.cpf),
            ("Telefone", receipt.phone),
            ("Cidade / Estado", f"{receipt.city} - {receipt.state}"),
        ],
        device_rows=[
            ("Marca", receipt.brand),
            ("Modelo", receipt.model),
            ("ROM", receipt.rom_memory),
            ("RAM", receipt.ram_memory),
        ],
        imeis=imeis,
        sale_value=format_brl(receipt.sale_value),
        payment_statement=payment_statement(receipt),
        warranty_text=parse_canonical(receipt.warranty_duration, day_convention).warranty_text,
        observations=receipt.observations or None,
        place_and_date=f"{receipt.issue_city}, {receipt.issue_date}",
        signature_name=receipt.signature_name,
        contact_line=contact_line(receipt, instagram),
        company_line=(
            f"{receipt.company_legal_name} | CNPJ {receipt.company_cnpj} | "
            f"IE {receipt.company_state_registration}"
        ),
        company_address=receipt.company_address,
    )
