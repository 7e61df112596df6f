"""Tests for recibos.domain.taxpayer pure functions."""

import pytest

from recibos.domain.taxpayer import (
    TaxpayerId,
    TaxpayerKind,
    format_cnpj,
    format_cpf,
    only_digits,
    validate_cnpj,
    validate_cpf,
)


class TestOnlyDigits:
    """Tests for only_digits."""

    def test_strips_separators(self) -> None:
        """Should drop dots, slashes, dashes and spaces."""
        assert only_digits("06.227.875/0001-07") == "06227875000107"
        assert only_digits(" 529 982 247 25 ") == "52998224725"

    def test_none_is_empty(self) -> None:
        """Should return an empty string for None."""
        assert only_digits(None) == ""


class TestValidateCpf:
    """Tests for validate_cpf."""

    def test_valid_formatted(self) -> None:
        """Should accept a formatted valid CPF."""
        assert validate_cpf("529.982.247-25") is True

    def test_valid_digits_only(self) -> None:
        """Should accept the same CPF without separators."""
        assert validate_cpf("52998224725") is True

    def test_wrong_check_digit(self) -> None:
        """Should reject a CPF whose last digit is off by one."""
        assert validate_cpf("529.982.247-24") is False
        assert validate_cpf("529.982.247-35") is False

    def test_repeated_digits(self) -> None:
        """Should reject sequences of one repeated digit."""
        for digit in "0123456789":
            assert validate_cpf(digit * 11) is False

    def test_wrong_length(self) -> None:
        """Should reject anything that is not 11 digits."""
        assert validate_cpf("5299822472") is False
        assert validate_cpf("529982247250") is False
        assert validate_cpf("") is False
        assert validate_cpf(None) is False


class TestValidateCnpj:
    """Tests for validate_cnpj."""

    def test_valid(self) -> None:
        """Should accept valid CNPJs with and without formatting."""
        assert validate_cnpj("06.227.875/0001-07") is True
        assert validate_cnpj("06227875000107") is True
        assert validate_cnpj("11.222.333/0001-81") is True

    def test_wrong_check_digit(self) -> None:
        """Should reject a CNPJ with a wrong check digit."""
        assert validate_cnpj("06.227.875/0001-08") is False
        assert validate_cnpj("11.222.333/0001-91") is False

    def test_repeated_digits(self) -> None:
        """Should reject sequences of one repeated digit."""
        assert validate_cnpj("11111111111111") is False

    def test_cpf_is_not_a_cnpj(self) -> None:
        """Should reject an 11-digit value."""
        assert validate_cnpj("52998224725") is False


class TestFormat:
    """Tests for format_cpf and format_cnpj."""

    def test_full_cpf(self) -> None:
        """Should format 11 digits as 000.000.000-00."""
        assert format_cpf("52998224725") == "529.982.247-25"

    def test_full_cnpj(self) -> None:
        """Should format 14 digits as 00.000.000/0000-00."""
        assert format_cnpj("06227875000107") == "06.227.875/0001-07"

    def test_partial_cpf(self) -> None:
        """Should only insert separators once enough digits exist."""
        assert format_cpf("529") == "529"
        assert format_cpf("5299") == "529.9"
        assert format_cpf("5299822") == "529.982.2"
        assert format_cpf("5299822472") == "529.982.247-2"

    def test_partial_cnpj(self) -> None:
        """Should format a CNPJ being typed."""
        assert format_cnpj("06") == "06"
        assert format_cnpj("062278") == "06.227.8"
        assert format_cnpj("062278750001") == "06.227.875/0001"

    def test_reformat_is_stable(self) -> None:
        """Should give the same result for already formatted input."""
        assert format_cpf("529.982.247-25") == "529.982.247-25"
        assert format_cnpj("06.227.875/0001-07") == "06.227.875/0001-07"

    def test_reformat_partial_is_stable(self) -> None:
        """Should leave a partially typed, already formatted ID unchanged."""
        for partial in ("529", "5299", "5299822", "5299822472"):
            assert format_cpf(format_cpf(partial)) == format_cpf(partial)
        for partial in ("06", "062278", "062278750001", "0622787500010"):
            assert format_cnpj(format_cnpj(partial)) == format_cnpj(partial)

    def test_extra_digits_dropped(self) -> None:
        """Should truncate to the kind's length."""
        assert format_cpf("529982247251234") == "529.982.247-25"

    def test_empty(self) -> None:
        """Should return an empty string for empty input."""
        assert format_cpf("") == ""
        assert format_cnpj(None) == ""


class TestTaxpayerId:
    """Tests for the TaxpayerId value object."""

    def test_parse_keeps_digits(self) -> None:
        """Should store only digits and format on demand."""
        taxpayer = TaxpayerId.parse(TaxpayerKind.CPF, "529.982.247-25")

        assert taxpayer.digits == "52998224725"
        assert taxpayer.formatted == "529.982.247-25"
        assert str(taxpayer) == "529.982.247-25"

    def test_parse_rejects_invalid(self) -> None:
        """Should raise ValueError for an invalid identifier."""
        with pytest.raises(ValueError, match="CNPJ inválido"):
            TaxpayerId.parse(TaxpayerKind.CNPJ, "06.227.875/0001-00")

    def test_equality_ignores_formatting(self) -> None:
        """Should compare equal regardless of input formatting."""
        a = TaxpayerId.parse(TaxpayerKind.CNPJ, "06.227.875/0001-07")
        b = TaxpayerId.parse(TaxpayerKind.CNPJ, "06227875000107")

        assert a == b
