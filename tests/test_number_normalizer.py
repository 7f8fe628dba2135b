"""Unit tests for form number normalization."""

from decimal import Decimal

import pytest

from facturier.models.currency import EUR, TND
from facturier.pipeline.number_normalizer import normalize_number
from facturier.pipeline.rounding import format_amount, round_amount


@pytest.mark.parametrize(
    "value,expected",
    [
        ("12,5", Decimal("12.5")),
        ("12.5", Decimal("12.5")),
        ("  7 ", Decimal("7")),
        ("-3,25", Decimal("-3.25")),
        ("0,001", Decimal("0.001")),
        ("12.5 kg", Decimal("12.5")),
        ("1.2.3", Decimal("1.2")),
        ("12.", Decimal("12")),
        (2, Decimal("2")),
        (0.1, Decimal("0.1")),
        (Decimal("1.005"), Decimal("1.005")),
    ],
)
def test_normalize_number(value, expected):
    assert normalize_number(value) == expected


@pytest.mark.parametrize(
    "value",
    ["", "   ", "abc", ",", "-", None, "€12", float("nan"), float("inf"), Decimal("NaN")],
)
def test_invalid_input_degrades_to_zero(value):
    """Saisie invalide -> 0, jamais d'exception."""
    assert normalize_number(value) == Decimal("0")


def test_thousands_separators_are_not_accepted():
    """Only the leading number is read; "1 234" is 1, not 1234."""
    assert normalize_number("1 234") == Decimal("1")


@pytest.mark.parametrize("value", ["1e101", "-2,5e150", 10**200, 1e300, Decimal("1E+999999")])
def test_absurd_magnitudes_degrade_to_zero(value):
    assert normalize_number(value) == Decimal("0")


def test_large_but_plausible_values_are_kept():
    assert normalize_number("1e12") == Decimal("1E+12")
    assert normalize_number("1e100") == Decimal("1E+100")


def test_result_is_always_decimal():
    for value in ["3", 3, 3.0, Decimal("3"), "x"]:
        assert isinstance(normalize_number(value), Decimal)


@pytest.mark.parametrize("currency", [TND, EUR])
@pytest.mark.parametrize("separator", [".", ","])
@pytest.mark.parametrize("amount", ["0", "238", "1234.5678", "0.0449", "-12.3456"])
def test_format_then_parse_round_trip(currency, separator, amount):
    """Formatting a total and parsing it back recovers the rounded value."""
    value = Decimal(amount)
    text = format_amount(value, currency, separator)
    assert normalize_number(text) == round_amount(value, currency)
