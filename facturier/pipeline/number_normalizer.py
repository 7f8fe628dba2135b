"""Utilities for normalizing user-entered quantities and prices."""

import logging
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Union

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Inputs of 10^101 and above are typing accidents, not amounts
MAX_ADJUSTED_EXPONENT = 100

# Leading numeric prefix once "," has been turned into "."
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def normalize_number(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """Normalize a form value to an exact Decimal.

    Rules:
    - Decimal and int pass through exactly
    - float goes through its shortest repr, so 0.1 becomes Decimal("0.1")
    - Strings: trim, convert every "," to ".", parse the leading numeric prefix
      ("12,5" -> 12.5, "12.5 kg" -> 12.5, "1.2.3" -> 1.2)
    - Empty, non-numeric, NaN or infinite input returns 0, never raises
    - Magnitudes of 10^101 and above also return 0

    Currency symbols and thousands separators are not part of the accepted
    syntax: "1 234" parses as 1, "€12" as 0.
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        return _bounded(value, value) if value.is_finite() else ZERO

    if isinstance(value, int):
        return _bounded(Decimal(value), value)

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return ZERO
        return _bounded(Decimal(repr(value)), value)

    text = str(value).strip().replace(",", ".")
    if not text:
        return ZERO

    match = _NUMERIC_PREFIX.match(text)
    if not match:
        logger.debug("Non-numeric input %r normalized to 0", value)
        return ZERO

    try:
        number = Decimal(match.group(0))
    except InvalidOperation:
        logger.debug("Unparseable input %r normalized to 0", value)
        return ZERO

    return _bounded(number, value) if number.is_finite() else ZERO


def _bounded(number: Decimal, value) -> Decimal:
    if number and number.adjusted() > MAX_ADJUSTED_EXPONENT:
        logger.warning("Out-of-range input %r normalized to 0", value)
        return ZERO
    return number
