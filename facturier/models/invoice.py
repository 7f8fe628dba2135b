"""Invoice data model: a normalized facture or devis ready for the engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .currency import CurrencyPolicy
from .line_item import LineItem
from .party import CompanySnapshot, PartySnapshot
from .tax_config import TaxConfig


class DocumentType(Enum):
    """Document subtype. Both share the same computation and layout."""

    FACTURE = "facture"
    DEVIS = "devis"

    @property
    def title(self) -> str:
        return "DEVIS" if self is DocumentType.DEVIS else "FACTURE"

    @property
    def file_prefix(self) -> str:
        return "D" if self is DocumentType.DEVIS else "F"

    @property
    def due_date_label(self) -> str:
        return "Validité jusqu'au :" if self is DocumentType.DEVIS else "Échéance :"

    @property
    def counterparty_label(self) -> str:
        return "Devis pour :" if self is DocumentType.DEVIS else "Facturé à :"

    @property
    def closing_phrase(self) -> str:
        if self is DocumentType.DEVIS:
            return "Arrêté le présent devis à la somme de :"
        return "Arrêté la présente facture à la somme de :"


class InvoiceStatus(Enum):
    """Workflow status as stored with the record."""

    BROUILLON = "brouillon"
    PAYEE = "payée"
    EN_ATTENTE = "en_attente"
    ACCEPTE = "accepté"
    REFUSE = "refusé"


@dataclass(frozen=True)
class Invoice:
    """A normalized invoice or quote.

    Every default has already been applied at the record boundary
    (``pipeline.record_normalizer``); nothing here is optional by accident.
    ``client`` and ``company`` may be None only because the draft may lack
    them; the assembler refuses to lay out such a document.

    Attributes:
        id: Record identifier
        doc_type: FACTURE or DEVIS
        number: Document number, e.g. "2026-0001"
        date: Issue date as displayed
        due_date: Due date (facture) or validity date (devis), may be empty
        client: Owned snapshot of the counterparty
        company: Owned snapshot of the issuing company
        items: Normalized line items
        tax: TVA configuration
        currency: Currency of every amount on the document
        notes: Free-text footer notes
        status: Workflow status
    """

    id: str
    doc_type: DocumentType
    number: str
    date: str
    due_date: str
    client: Optional[PartySnapshot]
    company: Optional[CompanySnapshot]
    items: Tuple[LineItem, ...]
    tax: TaxConfig
    currency: CurrencyPolicy
    notes: str = ""
    status: InvoiceStatus = InvoiceStatus.BROUILLON
