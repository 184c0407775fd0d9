"""
Export adapter interfaces and row-shaping helpers.

Concrete adapters (CSV, XLSX, PDF, JSON and the fixed-schema QuickBooks / FMCSA
variants) implement the `Exportable` capability: given rows, columns and a
base file name they write exactly one artifact and return its path. Cells that
cannot be read or encoded degrade to '' so one bad record never aborts an
export.
"""

from __future__ import annotations

import abc
from pathlib import Path
from typing import Any, Callable, List, Protocol, Sequence, Tuple, runtime_checkable

from driver_roster.domain.models import Record, get_field
from driver_roster.utils.logging import get_logger

log = get_logger(__name__)

ExportFn = Callable[[Sequence[Record], Sequence[Any], str], Path]


@runtime_checkable
class Exportable(Protocol):
    """
    Common interface all export adapters must implement.

    Attributes
    ----------
    name : str
        Registry key (e.g. "csv", "fmcsa").
    description : str
        A human-friendly summary of the artifact.
    """

    name: str
    description: str

    def export(self, rows: Sequence[Record], columns: Sequence[Any], file_base_name: str) -> Path:
        """
        Write one artifact for `rows` and return where it was written.

        Parameters
        ----------
        rows : Sequence[Record]
            Filtered records, in display order.
        columns : Sequence[Any]
            Objects exposing `accessor_key` and `header` (resolved columns).
            Fixed-schema adapters ignore them.
        file_base_name : str
            File name without extension or variant suffix.
        """
        ...


class AbstractExporter(abc.ABC):
    """
    Base class for file-writing adapters.

    Subclasses set `name`, `description`, `extension` and optionally `suffix`
    (e.g. "-FMCSA"), and implement `_write`.
    """

    name: str
    description: str
    extension: str
    suffix: str = ""

    def __init__(self, output_dir: Path | str = "exports") -> None:
        self.output_dir = Path(output_dir)

    def target_path(self, file_base_name: str) -> Path:
        return self.output_dir / f"{file_base_name}{self.suffix}.{self.extension}"

    def export(self, rows: Sequence[Record], columns: Sequence[Any], file_base_name: str) -> Path:
        path = self.target_path(file_base_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._write(path, rows, columns)
        return path

    def __call__(self, rows: Sequence[Record], columns: Sequence[Any], file_base_name: str) -> Path:
        return self.export(rows, columns, file_base_name)

    @abc.abstractmethod
    def _write(self, path: Path, rows: Sequence[Record], columns: Sequence[Any]) -> None:  # pragma: no cover - interface only
        raise NotImplementedError


def column_key(column: Any) -> str:
    return column.accessor_key


def column_label(column: Any) -> str:
    return getattr(column, "header", None) or column.accessor_key


def cell_value(record: Record, key: str) -> Any:
    """Read one cell; missing values and unreadable records yield ''."""
    try:
        value = get_field(record, key)
    except Exception as exc:  # noqa: BLE001 - a bad record empties its cell, never the export
        log.debug("Unreadable cell emptied", extra={"key": key, "error": str(exc)})
        return ""
    return "" if value is None else value


def cell_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return str(value)
    except Exception:  # noqa: BLE001 - unencodable values become empty cells
        return ""


def tabulate(rows: Sequence[Record], columns: Sequence[Any]) -> Tuple[List[str], List[List[Any]]]:
    """
    Generic row shaping: header = column labels, body = cells in column order.
    """
    header = [column_label(c) for c in columns]
    keys = [column_key(c) for c in columns]
    body = [[cell_value(row, key) for key in keys] for row in rows]
    return header, body


__all__ = [
    "AbstractExporter",
    "ExportFn",
    "Exportable",
    "cell_text",
    "cell_value",
    "column_label",
    "tabulate",
]
