"""Warranty duration strings.

The canonical form stored on every receipt is "<months> meses (<days> dias)".
Days are always derived from months with a single day-per-month convention;
the default (and the one the rest of the application uses) is 30.
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal

from recibos.domain.models import WarrantyDuration

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30
AVERAGE_DAYS_PER_MONTH = Decimal("30.44")
DEFAULT_WARRANTY_MONTHS = 12

DayConvention = int | Decimal

WARRANTY_DISCLAIMER = "Não cobre impacto, oxidação ou qualquer dano provocado por mau uso do aparelho."

_MONTHS_PATTERN = re.compile(r"(\d+)\s*(?:meses|mês|mes)\b", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedDuration:
    """Months recovered from a duration string plus the derived display text."""

    months: int
    days: int
    warranty_text: str


def _check_convention(day_convention: DayConvention) -> Decimal:
    convention = Decimal(str(day_convention))
    if convention not in (Decimal(DAYS_PER_MONTH), AVERAGE_DAYS_PER_MONTH):
        raise ValueError(f"Unsupported day-per-month convention: {day_convention}")
    return convention


def warranty_days(months: int, day_convention: DayConvention = DAYS_PER_MONTH) -> int:
    """Convert a month count to days.

    Args:
        months: Warranty length in months.
        day_convention: 30 (exact) or 30.44 (floored).

    Returns:
        Number of days.
    """
    convention = _check_convention(day_convention)
    # int() truncates toward zero, which is floor for positive values
    return int(months * convention)


def to_canonical(months: int, day_convention: DayConvention = DAYS_PER_MONTH) -> WarrantyDuration:
    """Build the canonical duration string.

    Args:
        months: Positive number of months.
        day_convention: 30 or 30.44 days per month.

    Returns:
        "<months> meses (<days> dias)".

    Raises:
        ValueError: If months is not a positive integer or the convention is unknown.
    """
    if isinstance(months, bool) or not isinstance(months, int) or months < 1:
        raise ValueError(f"Warranty months must be a positive integer, got {months!r}")
    return WarrantyDuration(f"{months} meses ({warranty_days(months, day_convention)} dias)")


def warranty_text(months: int, days: int) -> str:
    """Fixed warranty disclaimer sentence."""
    return f"Garantia válida por {months} meses ({days} dias). {WARRANTY_DISCLAIMER}"


def parse_canonical(text: str | None, day_convention: DayConvention = DAYS_PER_MONTH) -> ParsedDuration:
    """Recover the month count from a duration string.

    Days are recomputed from the months with `day_convention`, never read
    back from the string. Falls back to 12 months when nothing matches.

    Args:
        text: Duration string, normally produced by `to_canonical`.
        day_convention: 30 or 30.44 days per month.

    Returns:
        ParsedDuration with months, days and the warranty sentence.
    """
    match = _MONTHS_PATTERN.search(text or "")
    if match and int(match.group(1)) > 0:
        months = int(match.group(1))
    else:
        logger.warning(
            "Could not read warranty months from %r, falling back to %d months",
            text,
            DEFAULT_WARRANTY_MONTHS,
        )
        months = DEFAULT_WARRANTY_MONTHS

    days = warranty_days(months, day_convention)
    return ParsedDuration(months=months, days=days, warranty_text=warranty_text(months, days))
