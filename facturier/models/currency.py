"""Currency policies: fractional digits and unit names per supported currency."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class CurrencyPolicy:
    """Rounding precision and naming for one currency.

    The fractional digit count is an invariant for every monetary value
    derived from an invoice in this currency: totals, tax and the amount
    in words all round to ``decimals`` digits.

    Attributes:
        code: ISO-like currency code ("TND", "EUR")
        decimals: Number of fractional digits
        major_unit: Spelled-out major unit (plural form)
        minor_unit: Spelled-out minor unit (plural form)
        symbol: Short symbol shown next to numerals
    """

    code: str
    decimals: int
    major_unit: str
    minor_unit: str
    symbol: str

    def __post_init__(self):
        if self.decimals < 0:
            raise ValueError(f"decimals must be >= 0, got {self.decimals}")


TND = CurrencyPolicy(code="TND", decimals=3, major_unit="Dinars", minor_unit="Millimes", symbol="DT")
EUR = CurrencyPolicy(code="EUR", decimals=2, major_unit="Euros", minor_unit="Centimes", symbol="€")

CURRENCIES: Dict[str, CurrencyPolicy] = {
    TND.code: TND,
    EUR.code: EUR,
}


def get_currency_policy(code: str) -> CurrencyPolicy:
    """Look up a currency policy by code (case-insensitive).

    Raises:
        ValueError: If the code is not a supported currency
    """
    key = (code or "").strip().upper()
    try:
        return CURRENCIES[key]
    except KeyError:
        raise ValueError(
            f"Unsupported currency: {code!r} (expected one of {', '.join(sorted(CURRENCIES))})"
        ) from None
