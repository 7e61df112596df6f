"""Display formatting and input parsing helpers.

Pure functions: phone masks, BRL amounts and output file names.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from recibos.domain.taxpayer import only_digits

CENT = Decimal("0.01")

_THOUSANDS = r"\d{1,3}(?:\.\d{3})+"
_COMMA_AMOUNT = re.compile(rf"^(\d+|{_THOUSANDS}),(\d+)$")
_THOUSANDS_AMOUNT = re.compile(rf"^{_THOUSANDS}$")
_DOT_AMOUNT = re.compile(r"^\d+(?:\.\d{1,2})?$")


def format_phone(raw: str | None) -> str:
    """Format a (possibly partial) Brazilian phone number.

    Ten digits format as (00) 0000-0000, eleven as (00) 00000-0000.

    Args:
        raw: Phone number in any formatting.

    Returns:
        Best-effort formatted string.
    """
    digits = only_digits(raw)[:11]
    if not digits:
        return ""
    if len(digits) <= 2:
        return f"({digits}"

    area, number = digits[:2], digits[2:]
    if len(digits) == 11:
        return f"({area}) {number[:5]}-{number[5:]}"
    if len(number) > 4:
        return f"({area}) {number[:4]}-{number[4:]}"
    return f"({area}) {number}"


def parse_amount(raw: str) -> Decimal:
    """Parse an amount typed by the operator.

    Accepts "1500", "1500.50", "1500,50", "1.500,50" and "R$ 1.500,50".
    A comma always marks the decimal part; when there is no comma a single
    dot followed by one or two digits does. Dots used as thousands
    separators must group exactly three digits.

    Args:
        raw: Amount as typed.

    Returns:
        Amount as Decimal, rounded half-up to centavos.

    Raises:
        ValueError: If the text is not an amount.
    """
    text = raw.strip().replace("R$", "").replace(" ", "")

    comma_match = _COMMA_AMOUNT.match(text)
    if comma_match:
        whole, cents = comma_match.groups()
        text = f"{whole.replace('.', '')}.{cents}"
    elif _THOUSANDS_AMOUNT.match(text):
        text = text.replace(".", "")
    elif not _DOT_AMOUNT.match(text):
        raise ValueError(f"Valor inválido: {raw!r}")

    try:
        return Decimal(text).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Valor inválido: {raw!r}") from e


def format_brl(amount: Decimal | int | float) -> str:
    """Format an amount as Brazilian currency, e.g. R$ 1.500,50."""
    value = Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    formatted = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {formatted}"


def receipt_filename(customer_name: str, suffix: str) -> str:
    """Build the download name for a receipt, e.g. Recibo_Garantia_Maria_Silva.docx."""
    name = re.sub(r"\s+", "_", customer_name.strip()) or "cliente"
    name = re.sub(r"[\\/:*?\"<>|]", "", name)
    return f"Recibo_Garantia_{name}.{suffix.lstrip('.')}"
