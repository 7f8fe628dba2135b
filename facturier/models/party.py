"""Immutable snapshots of the parties named on an invoice."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .currency import CurrencyPolicy


@dataclass(frozen=True)
class PartySnapshot:
    """Client (counterparty) as it was when the invoice was created.

    The invoice owns this copy; later edits to the client record must not
    change documents generated from it.

    Attributes:
        name: Legal or trade name
        mf: Matricule fiscal (tax identification number)
        address: Postal address, may contain line breaks
        email: Optional e-mail address
        phone: Optional phone number
    """

    name: str
    mf: str
    address: str
    email: Optional[str] = None
    phone: Optional[str] = None


@dataclass(frozen=True)
class CompanySnapshot(PartySnapshot):
    """Issuing company as it was when the invoice was created.

    Attributes:
        currency: Company default currency
        letterhead: Embedded letterhead image (data URL or bare base64), if any
        hide_company_info: Omit the drawn company header when a letterhead is shown
    """

    currency: Optional[CurrencyPolicy] = None
    letterhead: Optional[str] = None
    hide_company_info: bool = False
