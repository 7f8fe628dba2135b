"""Exporters: PDF documents and Excel registers."""
