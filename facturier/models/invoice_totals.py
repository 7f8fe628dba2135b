"""InvoiceTotals data model."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    """Derived totals of an invoice, at full precision.

    Attributes:
        subtotal: Sum of quantity × unit_price over all lines (Total HT)
        tax_amount: TVA amount (0 when tax is not applicable)
        grand_total: subtotal + tax_amount (Total TTC / Net à payer)
    """

    subtotal: Decimal
    tax_amount: Decimal
    grand_total: Decimal
