"""Tests for document numbering and default company selection."""

from datetime import date

from facturier.models.records import CompanyRecord
from facturier.pipeline.numbering import next_invoice_number, select_default_company


def test_first_number_of_the_year():
    assert next_invoice_number([], 2026) == "2026-0001"


def test_continues_after_highest_number():
    existing = ["2026-0001", "2026-0007", "2026-0003", "2025-0100", "BROUILLON", "", None]
    assert next_invoice_number(existing, 2026) == "2026-0008"
    assert next_invoice_number(existing, 2025) == "2025-0101"
    assert next_invoice_number(existing, 2027) == "2027-0001"


def test_gaps_are_not_refilled():
    assert next_invoice_number(["2026-0001", "2026-0005"], 2026) == "2026-0006"


def test_sequence_past_four_digits():
    assert next_invoice_number(["2026-9999"], 2026) == "2026-10000"


def test_defaults_to_current_year():
    assert next_invoice_number([]) == f"{date.today().year}-0001"


def test_select_default_company():
    first = CompanyRecord(id="1", name="Alpha")
    flagged = CompanyRecord(id="2", name="Beta", isDefault=True)
    assert select_default_company([first, flagged]) is flagged
    assert select_default_company([first]) is first
    assert select_default_company([]) is None
