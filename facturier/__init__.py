"""Facturier: invoice computation and document layout engine."""

__version__ = "0.1.0"
