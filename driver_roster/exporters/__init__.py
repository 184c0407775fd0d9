"""
Exporters package for the driver roster.

This module re-exports the adapter interfaces, the built-in adapters and the
registry so downstream code can import from `driver_roster.exporters` directly.
"""

from driver_roster.exporters.abstract import AbstractExporter, Exportable, ExportFn, tabulate
from driver_roster.exporters.json_export import JsonExporter, QuickBooksExporter, quickbooks_payload
from driver_roster.exporters.pdf import FmcsaExporter, PdfExporter, PdfStyle, fmcsa_table
from driver_roster.exporters.registry import ExportRegistry, default_registry
from driver_roster.exporters.tabular import CsvExporter, XlsxExporter

__all__ = [
    # Abstracts
    "AbstractExporter",
    "Exportable",
    "ExportFn",
    "tabulate",
    # Concrete adapters
    "CsvExporter",
    "FmcsaExporter",
    "JsonExporter",
    "PdfExporter",
    "PdfStyle",
    "QuickBooksExporter",
    "XlsxExporter",
    "fmcsa_table",
    "quickbooks_payload",
    # Registry
    "ExportRegistry",
    "default_registry",
]
