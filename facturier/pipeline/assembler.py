"""Assembles a normalized invoice into a renderable document description."""

import logging
import re
from typing import Optional, Union

from ..config.profile_loader import LayoutProfile
from ..config.profile_manager import get_profile
from ..models.document import RenderableDocument
from ..models.invoice import DocumentType, Invoice
from ..models.records import InvoiceRecord
from .amount_in_words import amount_to_words
from .layout_planner import DocumentHeading, plan_layout
from .record_normalizer import normalize_invoice_record
from .totals import compute_totals

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
_PATH_CHARS = re.compile(r"[\\/]")


class MissingRelationError(ValueError):
    """Raised when an invoice lacks its client or issuing company."""
    pass


def build_export_filename(company_name: str, doc_type: DocumentType, number: str) -> str:
    """Suggested file name: COMPANY_F-<number>.pdf (D for a devis).

    Non-alphanumeric characters are stripped from the company name, which is
    then upper-cased: "Ma Société 2" -> "MASOCIT2".
    """
    safe_company = _NON_ALNUM.sub("", company_name).upper()
    safe_number = _PATH_CHARS.sub("-", number.strip())
    return f"{safe_company}_{doc_type.file_prefix}-{safe_number}.pdf"


def assemble_document(
    invoice: Union[Invoice, InvoiceRecord],
    profile: Optional[LayoutProfile] = None,
) -> RenderableDocument:
    """Compute totals, spell out the grand total and lay out the document.

    Args:
        invoice: Normalized Invoice, or a stored InvoiceRecord (normalized first)
        profile: Layout profile (active profile if None)

    Returns:
        RenderableDocument with ordered blocks and the suggested file name

    Raises:
        MissingRelationError: If no client or no issuing company is set
    """
    if isinstance(invoice, InvoiceRecord):
        invoice = normalize_invoice_record(invoice)

    if invoice.client is None:
        raise MissingRelationError(f"Invoice {invoice.number or invoice.id!r} has no client")
    if invoice.company is None:
        raise MissingRelationError(f"Invoice {invoice.number or invoice.id!r} has no issuing company")

    profile = profile or get_profile()
    totals = compute_totals(invoice.items, invoice.tax)
    words = amount_to_words(totals.grand_total, invoice.currency)

    blocks = plan_layout(
        invoice.company,
        invoice.client,
        invoice.items,
        totals,
        invoice.tax,
        invoice.currency,
        invoice.notes,
        heading=DocumentHeading(
            doc_type=invoice.doc_type,
            number=invoice.number,
            date=invoice.date,
            due_date=invoice.due_date,
        ),
        amount_in_words=words,
        profile=profile,
    )

    filename = build_export_filename(invoice.company.name, invoice.doc_type, invoice.number)
    logger.debug("Assembled %s with %d blocks", filename, len(blocks))
    return RenderableDocument(
        filename=filename,
        blocks=tuple(blocks),
        page_width=profile.page_width,
        page_height=profile.page_height,
        amount_in_words=words,
    )
