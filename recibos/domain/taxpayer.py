"""Brazilian taxpayer identifiers (CPF and CNPJ).

Pure functions for check-digit validation and display formatting. Both
kinds share the modulo-11 scheme and differ only in length and in the
starting weight of the weighted sum.
"""

import re
from dataclasses import dataclass
from enum import Enum


class TaxpayerKind(Enum):
    """Kind of taxpayer identifier."""

    CPF = "cpf"
    CNPJ = "cnpj"


@dataclass(frozen=True)
class _Scheme:
    length: int
    # starting weight = len(prefix) + weight_offset
    weight_offset: int
    format_rules: tuple[tuple[str, str], ...]


_SCHEMES: dict[TaxpayerKind, _Scheme] = {
    TaxpayerKind.CPF: _Scheme(
        length=11,
        weight_offset=1,
        format_rules=(
            (r"^(\d{3})(\d)", r"\1.\2"),
            (r"^(\d{3})\.(\d{3})(\d)", r"\1.\2.\3"),
            (r"^(\d{3})\.(\d{3})\.(\d{3})(\d)", r"\1.\2.\3-\4"),
        ),
    ),
    TaxpayerKind.CNPJ: _Scheme(
        length=14,
        weight_offset=-7,
        format_rules=(
            (r"^(\d{2})(\d)", r"\1.\2"),
            (r"^(\d{2})\.(\d{3})(\d)", r"\1.\2.\3"),
            (r"^(\d{2})\.(\d{3})\.(\d{3})(\d)", r"\1.\2.\3/\4"),
            (r"^(\d{2})\.(\d{3})\.(\d{3})/(\d{4})(\d)", r"\1.\2.\3/\4-\5"),
        ),
    ),
}

_NON_DIGITS = re.compile(r"\D")


def only_digits(raw: str | None) -> str:
    """Strip every non-digit character.

    Args:
        raw: Identifier in any formatting, or None.

    Returns:
        Digit-only string (empty for None).
    """
    if not raw:
        return ""
    return _NON_DIGITS.sub("", raw)


def _check_digit(prefix: str, start_weight: int) -> int:
    """Compute one modulo-11 check digit over a digit prefix."""
    total = 0
    weight = start_weight
    for char in prefix:
        total += int(char) * weight
        weight -= 1
        if weight < 2:
            weight = 9
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def validate(kind: TaxpayerKind, raw: str | None) -> bool:
    """Validate a CPF or CNPJ.

    Args:
        kind: Identifier kind.
        raw: Identifier in any formatting (dots, slashes, dashes, spaces).

    Returns:
        True only if the digits have the right length, are not all identical
        and both check digits match.
    """
    scheme = _SCHEMES[kind]
    digits = only_digits(raw)

    if len(digits) != scheme.length:
        return False

    if len(set(digits)) == 1:
        return False

    for position in (scheme.length - 2, scheme.length - 1):
        prefix = digits[:position]
        expected = _check_digit(prefix, len(prefix) + scheme.weight_offset)
        if int(digits[position]) != expected:
            return False

    return True


def format_taxpayer_id(kind: TaxpayerKind, raw: str | None) -> str:
    """Format a (possibly partial) CPF or CNPJ for display.

    Separators are only inserted once enough digits exist, so this is safe
    to call on every keystroke. Extra digits beyond the kind's length are
    dropped.

    Args:
        kind: Identifier kind.
        raw: Identifier in any formatting.

    Returns:
        Best-effort formatted string.
    """
    scheme = _SCHEMES[kind]
    formatted = only_digits(raw)[: scheme.length]
    for pattern, replacement in scheme.format_rules:
        formatted = re.sub(pattern, replacement, formatted, count=1)
    return formatted


def validate_cpf(raw: str | None) -> bool:
    """Validate a CPF (11 digits)."""
    return validate(TaxpayerKind.CPF, raw)


def validate_cnpj(raw: str | None) -> bool:
    """Validate a CNPJ (14 digits)."""
    return validate(TaxpayerKind.CNPJ, raw)


def format_cpf(raw: str | None) -> str:
    """Format as 000.000.000-00."""
    return format_taxpayer_id(TaxpayerKind.CPF, raw)


def format_cnpj(raw: str | None) -> str:
    """Format as 00.000.000/0000-00."""
    return format_taxpayer_id(TaxpayerKind.CNPJ, raw)


@dataclass(frozen=True)
class TaxpayerId:
    """Immutable, validated taxpayer identifier.

    The canonical value is the raw digit sequence; `formatted` is a view.
    """

    kind: TaxpayerKind
    digits: str

    @classmethod
    def parse(cls, kind: TaxpayerKind, raw: str) -> "TaxpayerId":
        """Build a TaxpayerId from any formatting.

        Raises:
            ValueError: If the identifier does not validate.
        """
        if not validate(kind, raw):
            raise ValueError(f"{kind.name} inválido: {raw!r}")
        return cls(kind=kind, digits=only_digits(raw))

    @property
    def formatted(self) -> str:
        return format_taxpayer_id(self.kind, self.digits)

    def __str__(self) -> str:
        return self.formatted
