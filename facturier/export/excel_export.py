"""Excel export of the invoice register with French column names."""

import logging
from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from ..models.currency import CURRENCIES
from ..models.invoice import Invoice
from ..pipeline.register import build_register_rows

logger = logging.getLogger(__name__)

SHEET_NAME = "Factures"

COLUMNS = [
    "Type",
    "Numéro",
    "Date",
    "Échéance",
    "Client",
    "Devise",
    "Total HT",
    "TVA",
    "Total TTC",
    "Statut",
]

_AMOUNT_COLUMNS = ("Total HT", "TVA", "Total TTC")


def _number_format(decimals: int) -> str:
    return "0." + "0" * decimals if decimals else "0"


def export_register_to_excel(invoices: Iterable[Invoice], output_path: Union[str, Path]) -> str:
    """Export one row per invoice to an Excel register.

    Args:
        invoices: Normalized invoices
        output_path: Path to output Excel file

    Returns:
        Path to created Excel file

    Excel structure:
    - Sheet "Factures", columns Type, Numéro, Date, Échéance, Client, Devise,
      Total HT, TVA, Total TTC, Statut
    - Amounts rounded to each row's own currency and formatted with its
      number of decimals (3 for TND, 2 for EUR)
    """
    rows = build_register_rows(invoices)
    df = pd.DataFrame(
        [
            {
                "Type": row.doc_type,
                "Numéro": row.number,
                "Date": row.date,
                "Échéance": row.due_date,
                "Client": row.client,
                "Devise": row.currency,
                "Total HT": float(row.subtotal),
                "TVA": float(row.tax_amount),
                "Total TTC": float(row.grand_total),
                "Statut": row.status,
            }
            for row in rows
        ],
        columns=COLUMNS,
    )

    output_path_obj = Path(output_path)
    output_path_obj.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path_obj, engine='openpyxl') as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME)
        worksheet = writer.sheets[SHEET_NAME]

        amount_idx = [df.columns.get_loc(name) for name in _AMOUNT_COLUMNS]
        for row, register_row in zip(worksheet.iter_rows(min_row=2, max_row=worksheet.max_row), rows):
            decimals = CURRENCIES[register_row.currency].decimals
            for idx in amount_idx:
                row[idx].number_format = _number_format(decimals)

        for idx, name in enumerate(COLUMNS, start=1):
            width = max([len(name)] + [len(str(v)) for v in df[name].tolist()]) + 2
            worksheet.column_dimensions[worksheet.cell(row=1, column=idx).column_letter].width = min(width, 50)

    logger.info("Exported %d invoice(s) to %s", len(rows), output_path_obj)
    return str(output_path_obj)
