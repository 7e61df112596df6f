"""Currency amounts written out in Brazilian Portuguese.

Used for the "valor por extenso" field of a receipt, e.g.
1500.50 -> "mil e quinhentos reais e cinquenta centavos".
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

UNITS = ["", "um", "dois", "três", "quatro", "cinco", "seis", "sete", "oito", "nove"]
TEENS = ["dez", "onze", "doze", "treze", "quatorze", "quinze", "dezesseis", "dezessete", "dezoito", "dezenove"]
TENS = ["", "", "vinte", "trinta", "quarenta", "cinquenta", "sessenta", "setenta", "oitenta", "noventa"]
HUNDREDS = [
    "",
    "cento",
    "duzentos",
    "trezentos",
    "quatrocentos",
    "quinhentos",
    "seiscentos",
    "setecentos",
    "oitocentos",
    "novecentos",
]

ONE_BILLION = 1_000_000_000
_CENTS = Decimal("0.01")


def three_digits_to_words(n: int) -> str:
    """Write out 0-999.

    Args:
        n: Number between 0 and 999.

    Returns:
        Words for the number, empty string for 0.
    """
    if not 0 <= n <= 999:
        raise ValueError(f"Expected 0-999, got {n}")
    if n == 0:
        return ""
    if n == 100:
        return "cem"

    hundreds, rest = divmod(n, 100)
    tens, units = divmod(rest, 10)

    parts = []
    if hundreds:
        parts.append(HUNDREDS[hundreds])

    if tens == 1:
        parts.append(TEENS[units])
    else:
        if tens:
            parts.append(TENS[tens])
        if units:
            parts.append(UNITS[units])

    return " e ".join(parts)


def _to_decimal(amount: Decimal | int | float | str) -> Decimal:
    if isinstance(amount, float):
        # str() keeps the shortest repr, so 0.1 stays 0.1
        amount = str(amount)
    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not a number: {amount!r}") from e
    if not value.is_finite():
        raise ValueError(f"Not a finite number: {amount!r}")
    return value


def _integer_to_words(integer_part: int) -> str:
    millions, rest = divmod(integer_part, 1_000_000)
    thousands, remaining = divmod(rest, 1000)

    result = ""
    if millions:
        result = "um milhão" if millions == 1 else f"{three_digits_to_words(millions)} milhões"

    if thousands:
        if result:
            result += " "
        result += "mil" if thousands == 1 else f"{three_digits_to_words(thousands)} mil"

    if remaining:
        if result:
            result += " e "
        result += three_digits_to_words(remaining)

    return result


def number_to_words(amount: Decimal | int | float | str) -> str:
    """Write a currency amount out in words.

    Args:
        amount: Non-negative amount in reais, below one billion. Rounded
            half-up to centavos before conversion.

    Returns:
        Amount in words with "real"/"reais" and "centavo"/"centavos".

    Raises:
        ValueError: If the amount is negative, too large or not a number.
    """
    value = _to_decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP)
    if value < 0:
        raise ValueError(f"Amount must not be negative: {amount!r}")
    if value >= ONE_BILLION:
        raise ValueError(f"Amount must be below one billion: {amount!r}")

    if value == 0:
        return "zero reais"

    integer_part = int(value)
    cents = int((value - integer_part) * 100)

    clauses = []
    if integer_part:
        words = _integer_to_words(integer_part)
        if integer_part % 1_000_000 == 0:
            # "um milhão de reais", "dois milhões de reais"
            words += " de"
        words += " real" if integer_part == 1 else " reais"
        clauses.append(words)

    if cents:
        words = three_digits_to_words(cents)
        words += " centavo" if cents == 1 else " centavos"
        clauses.append(words)

    return " e ".join(clauses)
