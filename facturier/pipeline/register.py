"""Invoice register (history list) and dashboard summary."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List

from ..models.invoice import DocumentType, Invoice
from .rounding import round_amount
from .totals import compute_totals, round_totals


@dataclass
class RegisterRow:
    """One line of the invoice register, amounts rounded to the invoice currency."""
    doc_type: str
    number: str
    date: str
    due_date: str
    client: str
    currency: str
    subtotal: Decimal
    tax_amount: Decimal
    grand_total: Decimal
    status: str


@dataclass
class InvoiceSummary:
    """Dashboard figures.

    Revenue only counts factures (quotes are not revenue) and is kept per
    currency, since TND and EUR amounts cannot be added together.
    """
    invoice_count: int = 0
    quote_count: int = 0
    client_count: int = 0
    revenue: Dict[str, Decimal] = field(default_factory=dict)


def build_register_rows(invoices: Iterable[Invoice]) -> List[RegisterRow]:
    """One row per invoice, in the given order."""
    rows = []
    for invoice in invoices:
        totals = round_totals(compute_totals(invoice.items, invoice.tax), invoice.currency)
        rows.append(RegisterRow(
            doc_type=invoice.doc_type.value,
            number=invoice.number,
            date=invoice.date,
            due_date=invoice.due_date,
            client=invoice.client.name if invoice.client else "",
            currency=invoice.currency.code,
            subtotal=totals.subtotal,
            tax_amount=totals.tax_amount,
            grand_total=totals.grand_total,
            status=invoice.status.value,
        ))
    return rows


def summarize_invoices(invoices: Iterable[Invoice]) -> InvoiceSummary:
    """Count documents and distinct clients, sum facture revenue per currency.

    Revenue is summed at full precision and rounded once per currency.
    """
    summary = InvoiceSummary()
    raw_revenue: Dict[str, Decimal] = {}
    policies = {}
    clients = set()

    for invoice in invoices:
        if invoice.client is not None:
            clients.add((invoice.client.name, invoice.client.mf))
        if invoice.doc_type is DocumentType.DEVIS:
            summary.quote_count += 1
            continue
        summary.invoice_count += 1
        code = invoice.currency.code
        policies[code] = invoice.currency
        total = compute_totals(invoice.items, invoice.tax).grand_total
        raw_revenue[code] = raw_revenue.get(code, Decimal(0)) + total

    summary.client_count = len(clients)
    summary.revenue = {code: round_amount(value, policies[code]) for code, value in raw_revenue.items()}
    return summary
