"""LineItem data model representing one row of an invoice draft."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class LineItem:
    """A normalized invoice line.

    Quantity and unit price are exact decimals; raw user strings never reach
    this model (see ``pipeline.number_normalizer``).

    Attributes:
        description: Free-text designation
        unit: Short unit label ("U", "Kg", "M", ...)
        quantity: Quantity (may be negative for credit notes)
        unit_price: Price per unit, excluding tax
        id: Opaque identifier carried over from the draft, never generated here
    """

    description: str
    unit: str
    quantity: Decimal
    unit_price: Decimal
    id: Optional[str] = None

    def __post_init__(self):
        """Reject unnormalized numeric fields."""
        if not isinstance(self.quantity, Decimal):
            raise TypeError(f"quantity must be Decimal, got {type(self.quantity).__name__}")
        if not isinstance(self.unit_price, Decimal):
            raise TypeError(f"unit_price must be Decimal, got {type(self.unit_price).__name__}")

    @property
    def total(self) -> Decimal:
        """Line total, unrounded."""
        return self.quantity * self.unit_price
