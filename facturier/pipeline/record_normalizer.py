"""Record boundary: turns stored records into normalized engine models.

Every default the stored data may rely on is applied here, once:

- ``tvaApplicable`` missing -> True
- ``tvaRate`` missing -> 19 when tax applies, else 0
- ``currency`` missing -> company currency -> configured default (TND)
- item ``unit`` missing or blank -> "U"
- ``type`` missing or unknown -> facture
- quantities, prices and rate -> exact Decimal via ``normalize_number``
"""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Iterable, List, Optional, Union

from pydantic import ValidationError

from ..config.settings import get_default_currency
from ..models.currency import CurrencyPolicy, get_currency_policy
from ..models.invoice import DocumentType, Invoice, InvoiceStatus
from ..models.line_item import LineItem
from ..models.party import CompanySnapshot, PartySnapshot
from ..models.records import ClientRecord, CompanyRecord, InvoiceItemRecord, InvoiceRecord
from ..models.tax_config import TaxConfig
from .number_normalizer import normalize_number

logger = logging.getLogger(__name__)

DEFAULT_UNIT = "U"
DEFAULT_TVA_RATE = Decimal("19")


def _currency_or_none(code: Optional[str]) -> Optional[CurrencyPolicy]:
    if not code:
        return None
    try:
        return get_currency_policy(code)
    except ValueError:
        logger.warning("Unknown currency %r ignored", code)
        return None


def snapshot_client(record: ClientRecord) -> PartySnapshot:
    """Copy a client record by value into an immutable snapshot."""
    return PartySnapshot(
        name=record.name,
        mf=record.mf,
        address=record.address,
        email=record.email or None,
        phone=record.phone or None,
    )


def snapshot_company(record: CompanyRecord) -> CompanySnapshot:
    """Copy a company record by value into an immutable snapshot."""
    return CompanySnapshot(
        name=record.name,
        mf=record.mf,
        address=record.address,
        email=record.email or None,
        phone=record.phone or None,
        currency=_currency_or_none(record.currency),
        letterhead=record.letterhead_url or None,
        hide_company_info=bool(record.hide_company_info_on_pdf),
    )


def normalize_item(record: InvoiceItemRecord) -> LineItem:
    """Normalize one stored or draft line item."""
    unit = (record.unit or "").strip() or DEFAULT_UNIT
    return LineItem(
        description=record.description,
        unit=unit,
        quantity=normalize_number(record.quantity),
        unit_price=normalize_number(record.unit_price),
        id=record.id,
    )


def resolve_currency(record: InvoiceRecord, company: Optional[CompanySnapshot]) -> CurrencyPolicy:
    """Invoice currency, then the issuing company's, then the configured default."""
    currency = _currency_or_none(record.currency)
    if currency is not None:
        return currency
    if company is not None and company.currency is not None:
        return company.currency
    return get_default_currency()


def _document_type(value: Optional[str]) -> DocumentType:
    try:
        return DocumentType((value or DocumentType.FACTURE.value).strip().lower())
    except ValueError:
        logger.warning("Unknown document type %r, using facture", value)
        return DocumentType.FACTURE


def _status(value: Optional[str]) -> InvoiceStatus:
    try:
        return InvoiceStatus(value or InvoiceStatus.BROUILLON.value)
    except ValueError:
        logger.warning("Unknown invoice status %r, using brouillon", value)
        return InvoiceStatus.BROUILLON


def normalize_invoice_record(
    record: InvoiceRecord,
    company_fallback: Optional[CompanyRecord] = None,
) -> Invoice:
    """Build a normalized Invoice from a stored record.

    Args:
        record: Invoice record as stored
        company_fallback: Company used when the record has no company snapshot
            (drafts created before a company was picked)

    Returns:
        Invoice with every default applied
    """
    company_record = record.company_snap or company_fallback
    company = snapshot_company(company_record) if company_record is not None else None
    client = snapshot_client(record.client_snap) if record.client_snap is not None else None

    applicable = True if record.tva_applicable is None else bool(record.tva_applicable)
    if record.tva_rate is None:
        rate = DEFAULT_TVA_RATE if applicable else Decimal(0)
    else:
        rate = normalize_number(record.tva_rate)
    if rate < 0:
        logger.warning("Negative TVA rate %s on %s clamped to 0", rate, record.number or record.id)
        rate = Decimal(0)

    return Invoice(
        id=record.id,
        doc_type=_document_type(record.type),
        number=record.number,
        date=record.date,
        due_date=record.due_date or "",
        client=client,
        company=company,
        items=tuple(normalize_item(item) for item in record.items),
        tax=TaxConfig(applicable=applicable, rate_percent=rate),
        currency=resolve_currency(record, company),
        notes=record.notes or "",
        status=_status(record.status),
    )


def parse_invoice_records(data: Union[dict, List[dict]]) -> List[InvoiceRecord]:
    """Validate raw JSON data (one record or a list) into InvoiceRecords.

    Raises:
        ValueError: If a record does not match the stored shape
    """
    raw_records = data if isinstance(data, list) else [data]
    records = []
    for index, raw in enumerate(raw_records):
        try:
            records.append(InvoiceRecord.model_validate(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid invoice record at index {index}: {e}") from e
    return records


def _read_json(path: Union[str, Path]):
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


def load_invoice_records(path: Union[str, Path]) -> List[InvoiceRecord]:
    """Load invoice records from a JSON export of the record store.

    Numbers are parsed as Decimal so stored prices keep their exact value.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON or holds invalid records
    """
    return parse_invoice_records(_read_json(path))


def load_company_records(path: Union[str, Path]) -> List[CompanyRecord]:
    """Load the stored companies (one record or a list) from a JSON export.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON or holds invalid records
    """
    data = _read_json(path)
    raw_records = data if isinstance(data, list) else [data]
    companies = []
    for index, raw in enumerate(raw_records):
        try:
            companies.append(CompanyRecord.model_validate(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid company record at index {index}: {e}") from e
    return companies


def normalize_invoices(
    records: Iterable[InvoiceRecord],
    company_fallback: Optional[CompanyRecord] = None,
) -> List[Invoice]:
    """Normalize a batch of records."""
    return [normalize_invoice_record(record, company_fallback) for record in records]
