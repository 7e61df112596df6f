"""Tests for recibos.domain.duration pure functions."""

import logging
from decimal import Decimal

import pytest

from recibos.domain.duration import (
    AVERAGE_DAYS_PER_MONTH,
    WARRANTY_DISCLAIMER,
    parse_canonical,
    to_canonical,
    warranty_days,
    warranty_text,
)


class TestToCanonical:
    """Tests for to_canonical."""

    def test_thirty_day_months(self) -> None:
        """Should derive days with 30 days per month."""
        assert to_canonical(12) == "12 meses (360 dias)"
        assert to_canonical(3) == "3 meses (90 dias)"

    def test_average_month_floors(self) -> None:
        """Should floor days with the 30.44 convention."""
        assert to_canonical(12, AVERAGE_DAYS_PER_MONTH) == "12 meses (365 dias)"
        assert to_canonical(6, AVERAGE_DAYS_PER_MONTH) == "6 meses (182 dias)"

    def test_rejects_non_positive(self) -> None:
        """Should raise for zero or negative months."""
        with pytest.raises(ValueError):
            to_canonical(0)
        with pytest.raises(ValueError):
            to_canonical(-3)

    def test_rejects_bool(self) -> None:
        """Should not treat True as one month."""
        with pytest.raises(ValueError):
            to_canonical(True)

    def test_rejects_unknown_convention(self) -> None:
        """Should only accept 30 or 30.44 days per month."""
        with pytest.raises(ValueError):
            to_canonical(12, 31)


class TestWarrantyDays:
    """Tests for warranty_days."""

    def test_conventions(self) -> None:
        """Should multiply then floor."""
        assert warranty_days(1) == 30
        assert warranty_days(1, Decimal("30.44")) == 30
        assert warranty_days(24, Decimal("30.44")) == 730


class TestParseCanonical:
    """Tests for parse_canonical."""

    def test_round_trip(self) -> None:
        """Should recover the months written by to_canonical."""
        for months in (1, 3, 6, 12, 24):
            parsed = parse_canonical(to_canonical(months))
            assert parsed.months == months
            assert parsed.days == months * 30

    def test_round_trip_average(self) -> None:
        """Should round-trip when both sides use 30.44."""
        parsed = parse_canonical(to_canonical(12, AVERAGE_DAYS_PER_MONTH), AVERAGE_DAYS_PER_MONTH)

        assert parsed.months == 12
        assert parsed.days == 365

    def test_days_recomputed_from_months(self) -> None:
        """Should ignore the days written in the string."""
        parsed = parse_canonical("12 meses (999 dias)")

        assert parsed.days == 360

    def test_accepts_variants(self) -> None:
        """Should accept singular and unaccented forms in any case."""
        assert parse_canonical("1 mês").months == 1
        assert parse_canonical("6 mes").months == 6
        assert parse_canonical("Garantia de 3 MESES").months == 3

    def test_warranty_text(self) -> None:
        """Should build the fixed disclaimer sentence."""
        parsed = parse_canonical("6 meses (180 dias)")

        assert parsed.warranty_text == f"Garantia válida por 6 meses (180 dias). {WARRANTY_DISCLAIMER}"

    def test_falls_back_to_twelve_months(self, caplog: pytest.LogCaptureFixture) -> None:
        """Should default to 12 months and log a warning when nothing matches."""
        with caplog.at_level(logging.WARNING, logger="recibos.domain.duration"):
            parsed = parse_canonical("um ano")

        assert parsed.months == 12
        assert parsed.days == 360
        assert "falling back" in caplog.text

    def test_zero_months_falls_back(self) -> None:
        """Should treat 0 months as unreadable."""
        assert parse_canonical("0 meses").months == 12

    def test_none_falls_back(self) -> None:
        """Should accept None."""
        assert parse_canonical(None).months == 12


class TestWarrantyText:
    """Tests for warranty_text."""

    def test_mentions_exclusions(self) -> None:
        """Should include the misuse exclusions."""
        text = warranty_text(12, 360)

        assert text.startswith("Garantia válida por 12 meses (360 dias).")
        assert "impacto, oxidação" in text
