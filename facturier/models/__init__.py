"""Data models for invoices, totals and renderable documents."""

from .currency import CURRENCIES, EUR, TND, CurrencyPolicy, get_currency_policy
from .document import (
    BlockKind,
    DocumentBlock,
    RenderableDocument,
    Shape,
    TableColumn,
    TableRow,
    TableSpec,
    TextRun,
)
from .invoice import DocumentType, Invoice, InvoiceStatus
from .invoice_totals import InvoiceTotals
from .line_item import LineItem
from .party import CompanySnapshot, PartySnapshot
from .tax_config import TaxConfig

__all__ = [
    "CURRENCIES",
    "EUR",
    "TND",
    "CurrencyPolicy",
    "get_currency_policy",
    "BlockKind",
    "DocumentBlock",
    "RenderableDocument",
    "Shape",
    "TableColumn",
    "TableRow",
    "TableSpec",
    "TextRun",
    "DocumentType",
    "Invoice",
    "InvoiceStatus",
    "InvoiceTotals",
    "LineItem",
    "CompanySnapshot",
    "PartySnapshot",
    "TaxConfig",
]
