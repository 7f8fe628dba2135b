"""Subtotal, TVA and grand total computation."""

from decimal import Decimal
from typing import Iterable

from ..models.currency import CurrencyPolicy
from ..models.invoice_totals import InvoiceTotals
from ..models.line_item import LineItem
from ..models.tax_config import TaxConfig
from .rounding import round_amount

_HUNDRED = Decimal(100)


def compute_totals(items: Iterable[LineItem], tax: TaxConfig) -> InvoiceTotals:
    """Compute invoice totals at full precision.

    - subtotal = sum(quantity × unit_price), no per-line rounding
    - tax_amount = subtotal × rate / 100 when tax is applicable, else 0
    - grand_total = subtotal + tax_amount

    Negative lines are summed like any other (credit notes). Rounding is a
    presentation step, see ``round_totals``.
    """
    subtotal = sum((item.total for item in items), Decimal(0))
    tax_amount = subtotal * tax.rate_percent / _HUNDRED if tax.applicable else Decimal(0)
    return InvoiceTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        grand_total=subtotal + tax_amount,
    )


def round_totals(totals: InvoiceTotals, currency: CurrencyPolicy) -> InvoiceTotals:
    """Presentation values: each total rounded independently to the currency."""
    return InvoiceTotals(
        subtotal=round_amount(totals.subtotal, currency),
        tax_amount=round_amount(totals.tax_amount, currency),
        grand_total=round_amount(totals.grand_total, currency),
    )
