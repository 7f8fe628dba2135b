"""French spelled-out amounts ("montant en toutes lettres").

The grammar follows the conventions used on Tunisian and French invoices:

- 70-79 and 90-99 borrow from the teens (Soixante-Dix, Quatre-vingt-Onze)
- " et " joins 1 and 11 to the tens, except in the 80-series
- "Quatre-vingts" and "Cents" take an "s" only when nothing follows
- "Million" and "Milliard" are pluralized, "Mille" never is
"""

from decimal import Decimal

from ..models.currency import CurrencyPolicy
from .rounding import split_amount

UNITS = ["", "Un", "Deux", "Trois", "Quatre", "Cinq", "Six", "Sept", "Huit", "Neuf"]
TEENS = ["Dix", "Onze", "Douze", "Treize", "Quatorze", "Quinze", "Seize", "Dix-sept", "Dix-huit", "Dix-neuf"]
TENS = ["", "Dix", "Vingt", "Trente", "Quarante", "Cinquante", "Soixante", "Soixante-dix", "Quatre-vingt", "Quatre-vingt-dix"]

ZERO_WORD = "Zéro"
NEGATIVE_WORD = "Moins"

# (group size, singular scale word, pluralizable)
_SCALES = (
    (1_000_000_000, "Milliard", True),
    (1_000_000, "Million", True),
    (1_000, "Mille", False),
)

_MILLIARD = 1_000_000_000
_MILLIARDS_FROM = 1_000 * _MILLIARD


def _convert_tens(n: int) -> str:
    """Words for 0 < n < 100."""
    if n < 10:
        return UNITS[n]
    if n < 20:
        return TEENS[n - 10]

    tens, unit = divmod(n, 10)
    if tens in (7, 9):
        tens -= 1
        unit += 10

    words = TENS[tens]
    if tens == 8 and unit == 0:
        return words + "s"
    if unit == 0:
        return words

    if unit in (1, 11) and tens < 8:
        connector = " et "
    else:
        connector = "-"
    unit_word = UNITS[unit] if unit < 10 else TEENS[unit - 10]
    return words + connector + unit_word


def convert_under_1000(n: int) -> str:
    """Convert 0 <= n < 1000 to words; 0 gives an empty string."""
    if not 0 <= n < 1000:
        raise ValueError(f"convert_under_1000 expects 0 <= n < 1000, got {n}")

    parts = []
    hundreds, rest = divmod(n, 100)
    if hundreds:
        word = "Cent" if hundreds == 1 else f"{UNITS[hundreds]} Cent"
        if hundreds > 1 and rest == 0:
            word += "s"
        parts.append(word)
    if rest:
        parts.append(_convert_tens(rest))
    return " ".join(parts)


def number_to_words(n: int) -> str:
    """Convert a non-negative integer to French words.

    Beyond 999 999 999 999 the amount is counted in milliards
    ("Mille Milliards", "Deux Millions de Milliards").
    """
    if n < 0:
        raise ValueError(f"number_to_words expects a non-negative integer, got {n}")
    if n == 0:
        return ZERO_WORD
    if n >= _MILLIARDS_FROM:
        high, low = divmod(n, _MILLIARD)
        high_words = number_to_words(high)
        # "un million de milliards", but "mille milliards"
        joiner = " de " if high % 1_000_000 == 0 else " "
        text = f"{high_words}{joiner}Milliards"
        return f"{text} {number_to_words(low)}" if low else text

    parts = []
    remainder = n
    for size, scale, pluralize in _SCALES:
        group, remainder = divmod(remainder, size)
        if not group:
            continue
        if scale == "Mille" and group == 1:
            parts.append("Mille")
            continue
        word = f"{convert_under_1000(group)} {scale}"
        if pluralize and group > 1:
            word += "s"
        parts.append(word)

    if remainder:
        parts.append(convert_under_1000(remainder))
    return " ".join(parts)


def amount_to_words(amount: Decimal, currency: CurrencyPolicy) -> str:
    """Spell out a monetary amount in the currency's units.

    The amount is rounded with the same policy as every displayed total, then
    split into major and minor units. The minor-unit clause is only present
    when the fraction is non-zero.

    Example:
        >>> amount_to_words(Decimal("1250.5"), EUR)
        'Mille Deux Cent Cinquante Euros et Cinquante Centimes'
    """
    major, minor = split_amount(amount, currency)

    text = f"{number_to_words(major)} {currency.major_unit}"
    if minor:
        text += f" et {number_to_words(minor)} {currency.minor_unit}"
    if amount < 0 and (major or minor):
        text = f"{NEGATIVE_WORD} {text}"
    return text
