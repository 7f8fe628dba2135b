"""Document numbering and default company selection."""

import re
from datetime import date
from typing import Iterable, Optional, Sequence

from ..models.records import CompanyRecord

_NUMBER_PATTERN = re.compile(r"^(\d{4})-(\d+)$")


def next_invoice_number(existing_numbers: Iterable[str], year: Optional[int] = None) -> str:
    """Next number in the "YYYY-NNNN" sequence for ``year``.

    The sequence continues after the highest number already issued that
    year, so deleting a document never causes a number to be reused for a
    later one. Numbers in other formats are ignored.
    """
    year = year or date.today().year
    highest = 0
    for number in existing_numbers:
        match = _NUMBER_PATTERN.match((number or "").strip())
        if match and int(match.group(1)) == year:
            highest = max(highest, int(match.group(2)))
    return f"{year}-{highest + 1:04d}"


def select_default_company(companies: Sequence[CompanyRecord]) -> Optional[CompanyRecord]:
    """The company flagged as default, else the first one, else None."""
    for company in companies:
        if company.is_default:
            return company
    return companies[0] if companies else None
