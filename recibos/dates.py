"""Date utilities for recibos.

Receipts show dates the Brazilian way (dd/mm/yyyy); the stores keep
creation timestamps as ISO-8601 UTC.
"""

from datetime import datetime, timezone

import pandas as pd

MISSING_DATE = "Data não disponível"
INVALID_DATE = "Data inválida"


def normalize_issue_date(raw_date: str) -> str:
    """Normalize an issue date to dd/mm/yyyy.

    Uses pandas.to_datetime with dayfirst so "5/3/2025" and "05-03-2025"
    both mean 5 March 2025.

    Args:
        raw_date: Date as typed.

    Returns:
        Date in dd/mm/yyyy format.

    Raises:
        ValueError: If the date cannot be parsed.
    """
    text = raw_date.strip()
    if not text:
        raise ValueError("Empty date")
    try:
        parsed_date = pd.to_datetime(text, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e
    if pd.isna(parsed_date):
        raise ValueError(f"Could not parse date '{raw_date}'")
    return parsed_date.strftime("%d/%m/%Y")


def today_br(now: datetime | None = None) -> str:
    """Today's date as dd/mm/yyyy."""
    return (now or datetime.now()).strftime("%d/%m/%Y")


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with a Z suffix, millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_created_at(created_at: str | None) -> str:
    """Format a stored ISO timestamp as dd/mm/yyyy HH:MM in local time.

    Args:
        created_at: ISO-8601 timestamp or None.

    Returns:
        Formatted timestamp, or a placeholder when missing or unparsable.
    """
    if not created_at:
        return MISSING_DATE
    try:
        parsed = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    except ValueError:
        return INVALID_DATE
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%d/%m/%Y %H:%M")
