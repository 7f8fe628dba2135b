"""TaxConfig data model (TVA applicability and rate)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class TaxConfig:
    """TVA settings for one invoice.

    When ``applicable`` is False the rate is kept for display and editing
    but ignored by the totals computation.
    """

    applicable: bool
    rate_percent: Decimal

    def __post_init__(self):
        if not isinstance(self.rate_percent, Decimal):
            raise TypeError(f"rate_percent must be Decimal, got {type(self.rate_percent).__name__}")
        if self.rate_percent < 0:
            raise ValueError(f"rate_percent must be >= 0, got {self.rate_percent}")
