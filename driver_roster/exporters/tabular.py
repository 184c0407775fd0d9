"""
CSV and XLSX adapters.

Both share the generic shaping from `tabulate`: a header row of column labels
followed by one row per record, cells in column order.
"""

from __future__ import annotations

import csv
from datetime import date, datetime
from pathlib import Path
from typing import Any, Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from driver_roster.domain.models import Record
from driver_roster.exporters.abstract import AbstractExporter, cell_text, tabulate

SHEET_NAME = "Drivers"


class CsvExporter(AbstractExporter):
    """UTF-8 CSV with a header row."""

    name: str = "csv"
    description: str = "Comma-separated values with a header row."
    extension: str = "csv"

    def _write(self, path: Path, rows: Sequence[Record], columns: Sequence[Any]) -> None:
        header, body = tabulate(rows, columns)
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows([cell_text(v) for v in row] for row in body)


def _xlsx_cell(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float, str, date, datetime)):
        value = cell_text(value)
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


class XlsxExporter(AbstractExporter):
    """Excel workbook with a single "Drivers" sheet."""

    name: str = "xlsx"
    description: str = "Excel workbook (single sheet)."
    extension: str = "xlsx"

    def _write(self, path: Path, rows: Sequence[Record], columns: Sequence[Any]) -> None:
        header, body = tabulate(rows, columns)
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = SHEET_NAME
        sheet.append(header)
        for row in body:
            sheet.append([_xlsx_cell(v) for v in row])
        workbook.save(path)


__all__ = ["CsvExporter", "SHEET_NAME", "XlsxExporter"]
