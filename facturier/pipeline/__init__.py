"""Computation and layout pipeline for invoices and quotes."""

from .amount_in_words import amount_to_words, number_to_words
from .assembler import MissingRelationError, assemble_document
from .number_normalizer import normalize_number
from .totals import compute_totals

__all__ = [
    "amount_to_words",
    "number_to_words",
    "MissingRelationError",
    "assemble_document",
    "normalize_number",
    "compute_totals",
]
