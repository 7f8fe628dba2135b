"""Unit tests for invoice totals."""

from decimal import Decimal

import pytest

from facturier.models.currency import EUR, TND
from facturier.models.line_item import LineItem
from facturier.models.tax_config import TaxConfig
from facturier.pipeline.rounding import format_amount, round_amount
from facturier.pipeline.totals import compute_totals, round_totals


def _item(quantity: str, price: str) -> LineItem:
    return LineItem(description="Article", unit="U", quantity=Decimal(quantity), unit_price=Decimal(price))


TVA_19 = TaxConfig(applicable=True, rate_percent=Decimal("19"))
NO_TVA = TaxConfig(applicable=False, rate_percent=Decimal("19"))


def test_reference_invoice():
    """2 × 100.000 TND à 19 % -> 200 / 38 / 238."""
    totals = compute_totals([_item("2", "100.000")], TVA_19)
    assert totals.subtotal == Decimal("200")
    assert totals.tax_amount == Decimal("38")
    assert totals.grand_total == Decimal("238")

    shown = round_totals(totals, TND)
    assert format_amount(shown.subtotal, TND) == "200.000"
    assert format_amount(shown.tax_amount, TND) == "38.000"
    assert format_amount(shown.grand_total, TND) == "238.000"


def test_empty_items_give_zero_totals():
    totals = compute_totals([], TVA_19)
    assert totals.subtotal == 0
    assert totals.tax_amount == 0
    assert totals.grand_total == 0


def test_tax_not_applicable_ignores_rate():
    totals = compute_totals([_item("3", "10")], NO_TVA)
    assert totals.tax_amount == 0
    assert totals.grand_total == totals.subtotal == Decimal("30")


def test_negative_lines_are_accepted():
    """Avoir (credit note): a negative total is a valid result."""
    totals = compute_totals([_item("1", "50"), _item("-2", "40")], TVA_19)
    assert totals.subtotal == Decimal("-30")
    assert totals.tax_amount == Decimal("-5.7")
    assert totals.grand_total == Decimal("-35.7")


def test_no_per_line_rounding():
    """Rounding each line to 3 digits would give 0; the aggregate gives 0.001."""
    items = [_item("1", "0.0004")] * 3
    totals = compute_totals(items, NO_TVA)
    assert totals.subtotal == Decimal("0.0012")
    assert round_amount(totals.subtotal, TND) == Decimal("0.001")


def test_subtotal_is_exact_sum_of_line_totals():
    items = [_item("1.5", "3.333"), _item("0.25", "19.99"), _item("7", "0.001")]
    totals = compute_totals(items, TVA_19)
    assert totals.subtotal == sum(item.quantity * item.unit_price for item in items)


def test_compute_is_idempotent():
    items = [_item("1.5", "3.333"), _item("2", "0.1")]
    first = compute_totals(items, TVA_19)
    second = compute_totals(items, TVA_19)
    assert first == second
    assert str(first.grand_total) == str(second.grand_total)


@pytest.mark.parametrize(
    "tax",
    [
        TaxConfig(applicable=True, rate_percent=Decimal("0")),
        TaxConfig(applicable=True, rate_percent=Decimal("7")),
        TaxConfig(applicable=True, rate_percent=Decimal("13.5")),
        TaxConfig(applicable=False, rate_percent=Decimal("19")),
        TaxConfig(applicable=False, rate_percent=Decimal("0")),
    ],
)
def test_grand_total_invariant(tax):
    totals = compute_totals([_item("3", "33.333"), _item("1", "0.005")], tax)
    assert totals.grand_total == totals.subtotal + totals.tax_amount
    if not tax.applicable:
        assert totals.tax_amount == 0


def test_round_totals_rounds_each_value_independently():
    totals = compute_totals([_item("1", "10.005")], TaxConfig(applicable=True, rate_percent=Decimal("10")))
    eur = round_totals(totals, EUR)
    assert eur.subtotal == Decimal("10.01")
    assert eur.tax_amount == Decimal("1.00")
    assert eur.grand_total == Decimal("11.01")

    tnd = round_totals(totals, TND)
    assert tnd.subtotal == Decimal("10.005")
    assert tnd.grand_total == Decimal("11.006")
