"""The single rounding policy shared by totals, numerals and amount in words.

Every monetary value shown on a document goes through ``round_amount``, so
the spelled-out amount can never disagree with the displayed numeral.
"""

from decimal import ROUND_HALF_UP, Context, Decimal, getcontext
from typing import Tuple

from ..models.currency import CurrencyPolicy


def _quantum(decimals: int) -> Decimal:
    return Decimal(1).scaleb(-decimals)


def _exact_context(value: Decimal, decimals: int) -> Context:
    """Context with enough digits to quantize ``value`` without InvalidOperation."""
    context = getcontext().copy()
    if value.is_finite() and value:
        context.prec = max(context.prec, value.adjusted() + decimals + 2)
    return context


def round_amount(value: Decimal, currency: CurrencyPolicy) -> Decimal:
    """Round to the currency's fractional digits, half away from zero.

    Works for any finite magnitude: very large quantities or prices widen
    the precision instead of raising ``decimal.InvalidOperation``.
    """
    rounded = value.quantize(
        _quantum(currency.decimals),
        rounding=ROUND_HALF_UP,
        context=_exact_context(value, currency.decimals),
    )
    # No "-0.000" on documents
    return rounded if rounded else abs(rounded)


def split_amount(value: Decimal, currency: CurrencyPolicy) -> Tuple[int, int]:
    """Split the rounded absolute value into (major units, minor units).

    Example: 238.0449 TND -> (238, 45); 12.995 EUR -> (13, 0).
    """
    rounded = abs(round_amount(value, currency))
    major = int(rounded)
    minor = int((rounded - major).scaleb(currency.decimals))
    return major, minor


def format_amount(value: Decimal, currency: CurrencyPolicy, decimal_separator: str = ".") -> str:
    """Format with exactly ``currency.decimals`` fractional digits, no grouping."""
    text = f"{round_amount(value, currency):f}"
    if decimal_separator != ".":
        text = text.replace(".", decimal_separator)
    return text


def format_quantity(value: Decimal, decimal_separator: str = ".") -> str:
    """Format a quantity or rate without trailing zeros ("2", "1.5", "19")."""
    if value == value.to_integral_value():
        text = f"{value.quantize(Decimal(1), context=_exact_context(value, 0)):f}"
    else:
        text = f"{value.normalize():f}"
    if decimal_separator != ".":
        text = text.replace(".", decimal_separator)
    return text
