"""Tests for document assembly (record -> renderable document)."""

import pytest

from facturier.config.profile_loader import LayoutProfile
from facturier.models.document import BlockKind
from facturier.models.invoice import DocumentType
from facturier.models.records import InvoiceRecord
from facturier.pipeline.assembler import MissingRelationError, assemble_document, build_export_filename
from facturier.pipeline.record_normalizer import normalize_invoice_record


@pytest.fixture
def record_data():
    return {
        "id": "inv-1",
        "type": "facture",
        "number": "2026-0001",
        "date": "2026-10-19",
        "dueDate": "2026-11-18",
        "clientSnap": {"id": "c1", "name": "Client Exemple", "mf": "7654321/B", "address": "Sfax"},
        "companySnap": {"id": "co1", "name": "Ma Société", "mf": "1234567/A", "address": "Tunis"},
        "items": [{"id": "i1", "description": "Prestation", "unit": "U", "quantity": 2, "unitPrice": "100.000"}],
        "tvaApplicable": True,
        "tvaRate": 19,
        "currency": "TND",
        "notes": "",
        "status": "brouillon",
    }


def _texts(document, kind):
    return [run.text for block in document.blocks_of_kind(kind) for run in block.texts]


def test_reference_invoice_end_to_end(record_data):
    document = assemble_document(InvoiceRecord.model_validate(record_data), profile=LayoutProfile())

    assert document.amount_in_words == "Deux Cent Trente-Huit Dinars"
    totals = _texts(document, BlockKind.TOTALS_PANEL)
    assert "200.000 DT" in totals
    assert "38.000 DT" in totals
    assert "238.000 DT" in totals
    assert "Deux Cent Trente-Huit Dinars" in _texts(document, BlockKind.AMOUNT_IN_WORDS)
    assert document.filename == "MASOCIT_F-2026-0001.pdf"
    assert document.page_count == 1
    assert (document.page_width, document.page_height) == (210.0, 297.0)


def test_accepts_normalized_invoice(record_data):
    invoice = normalize_invoice_record(InvoiceRecord.model_validate(record_data))
    from_invoice = assemble_document(invoice, profile=LayoutProfile())
    from_record = assemble_document(InvoiceRecord.model_validate(record_data), profile=LayoutProfile())
    assert from_invoice == from_record


def test_assembly_is_pure(record_data):
    record = InvoiceRecord.model_validate(record_data)
    assert assemble_document(record, profile=LayoutProfile()) == assemble_document(record, profile=LayoutProfile())


def test_eur_invoice_words_and_numerals(record_data):
    record_data["currency"] = "EUR"
    record_data["items"][0]["unitPrice"] = "10.125"
    document = assemble_document(InvoiceRecord.model_validate(record_data), profile=LayoutProfile())

    # 20.25 HT, 3.8475 TVA, 24.0975 TTC -> 24.10
    assert "24.10 €" in _texts(document, BlockKind.TOTALS_PANEL)
    assert document.amount_in_words == "Vingt-Quatre Euros et Dix Centimes"


def test_devis_file_name(record_data):
    record_data["type"] = "devis"
    document = assemble_document(InvoiceRecord.model_validate(record_data), profile=LayoutProfile())
    assert document.filename == "MASOCIT_D-2026-0001.pdf"


def test_missing_client_raises(record_data):
    record_data.pop("clientSnap")
    with pytest.raises(MissingRelationError):
        assemble_document(InvoiceRecord.model_validate(record_data), profile=LayoutProfile())


def test_missing_company_raises(record_data):
    record_data.pop("companySnap")
    with pytest.raises(MissingRelationError):
        assemble_document(InvoiceRecord.model_validate(record_data), profile=LayoutProfile())


def test_missing_relation_is_value_error():
    assert issubclass(MissingRelationError, ValueError)


def test_uses_active_profile_when_none_given(record_data):
    document = assemble_document(InvoiceRecord.model_validate(record_data))
    assert document.blocks


@pytest.mark.parametrize(
    "company,doc_type,number,expected",
    [
        ("Acme", DocumentType.FACTURE, "2026-0001", "ACME_F-2026-0001.pdf"),
        ("Acme & Co.", DocumentType.DEVIS, "12/3", "ACMECO_D-12-3.pdf"),
        ("Ma Société 2", DocumentType.FACTURE, "7", "MASOCIT2_F-7.pdf"),
        ("Acme", DocumentType.FACTURE, " 2026\\0002 ", "ACME_F-2026-0002.pdf"),
    ],
)
def test_build_export_filename(company, doc_type, number, expected):
    assert build_export_filename(company, doc_type, number) == expected


def test_empty_invoice_is_laid_out(record_data):
    record_data["items"] = []
    document = assemble_document(InvoiceRecord.model_validate(record_data), profile=LayoutProfile())
    assert document.amount_in_words == "Zéro Dinars"
    assert "0.000 DT" in _texts(document, BlockKind.TOTALS_PANEL)


def test_totals_are_not_rounded_per_line(record_data):
    record_data["tvaApplicable"] = False
    record_data["items"] = [
        {"description": "A", "quantity": 1, "unitPrice": "0.0004"},
        {"description": "B", "quantity": 1, "unitPrice": "0.0004"},
        {"description": "C", "quantity": 1, "unitPrice": "0.0004"},
    ]
    document = assemble_document(InvoiceRecord.model_validate(record_data), profile=LayoutProfile())
    assert _texts(document, BlockKind.TOTALS_PANEL)[-1] == "0.001 DT"
    assert document.amount_in_words == "Zéro Dinars et Un Millimes"


def test_grand_total_beyond_999_milliards(record_data):
    """1e12 units at 1 DT with 19% TVA spells 1 190 milliards, never raises."""
    record_data["items"] = [{"description": "Volume", "unit": "U", "quantity": "1e12", "unitPrice": 1}]
    document = assemble_document(InvoiceRecord.model_validate(record_data), profile=LayoutProfile())

    assert document.amount_in_words == "Mille Cent Quatre-vingt-Dix Milliards Dinars"
    assert "1190000000000.000 DT" in _texts(document, BlockKind.TOTALS_PANEL)


def test_quantity_beyond_decimal_precision(record_data):
    record_data["items"] = [{"description": "Volume", "unit": "U", "quantity": "1e30", "unitPrice": 1}]
    document = assemble_document(InvoiceRecord.model_validate(record_data), profile=LayoutProfile())

    assert document.amount_in_words.endswith("Milliards Dinars")
    assert "1" + "0" * 30 + ".000 DT" in _texts(document, BlockKind.TOTALS_PANEL)
