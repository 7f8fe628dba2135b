"""Unit tests for the shared currency rounding policy."""

from decimal import Decimal

import pytest

from facturier.models.currency import EUR, TND
from facturier.pipeline.rounding import format_amount, format_quantity, round_amount, split_amount


def test_round_half_up_per_currency():
    assert round_amount(Decimal("1.0005"), TND) == Decimal("1.001")
    assert round_amount(Decimal("1.005"), EUR) == Decimal("1.01")
    assert round_amount(Decimal("-1.005"), EUR) == Decimal("-1.01")


def test_rounded_amount_has_currency_exponent():
    assert round_amount(Decimal("200"), TND).as_tuple().exponent == -3
    assert round_amount(Decimal("200"), EUR).as_tuple().exponent == -2


def test_third_decimal_differs_between_tnd_and_eur():
    value = Decimal("10.005")
    assert format_amount(value, TND) == "10.005"
    assert format_amount(value, EUR) == "10.01"


@pytest.mark.parametrize(
    "value,currency,expected",
    [
        (Decimal("238.0449"), TND, (238, 45)),
        (Decimal("12.995"), EUR, (13, 0)),
        (Decimal("0.5"), EUR, (0, 50)),
        (Decimal("-7.25"), EUR, (7, 25)),
        (Decimal("0"), TND, (0, 0)),
    ],
)
def test_split_amount(value, currency, expected):
    assert split_amount(value, currency) == expected


def test_format_amount():
    assert format_amount(Decimal("200"), TND) == "200.000"
    assert format_amount(Decimal("200"), EUR) == "200.00"
    assert format_amount(Decimal("1234.5"), EUR, ",") == "1234,50"


def test_format_amount_never_shows_negative_zero():
    assert format_amount(Decimal("-0.0001"), TND) == "0.000"


def test_huge_values_keep_every_digit():
    """Beyond the 28-digit default precision rounding still succeeds."""
    assert format_amount(Decimal("1E+30"), TND) == "1" + "0" * 30 + ".000"
    assert format_amount(Decimal("1190000000000000000000000000000.0005"), TND) == "1190000000000000000000000000000.001"
    assert split_amount(Decimal("1.19E+30"), EUR) == (119 * 10**28, 0)
    assert format_quantity(Decimal("1E+30")) == "1" + "0" * 30


@pytest.mark.parametrize(
    "value,separator,expected",
    [
        (Decimal("2.000"), ".", "2"),
        (Decimal("1.50"), ".", "1.5"),
        (Decimal("19"), ".", "19"),
        (Decimal("1E+2"), ".", "100"),
        (Decimal("7.5"), ",", "7,5"),
        (Decimal("-3"), ".", "-3"),
    ],
)
def test_format_quantity(value, separator, expected):
    assert format_quantity(value, separator) == expected
