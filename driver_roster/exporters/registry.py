"""
Export adapter registry.

Maps a format name to an adapter (an `Exportable` or any callable with the
`(rows, columns, file_base_name) -> Path` contract). `export_as` is the single
place where adapter failures are converted into a reported `ExportFailure`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from driver_roster.domain.models import Record
from driver_roster.errors import ExportFailure, UnknownExportFormat
from driver_roster.exporters.abstract import ExportFn, Exportable
from driver_roster.exporters.json_export import JsonExporter, QuickBooksExporter
from driver_roster.exporters.pdf import FmcsaExporter, PdfExporter, PdfStyle
from driver_roster.exporters.tabular import CsvExporter, XlsxExporter
from driver_roster.utils.logging import get_logger

log = get_logger(__name__)

Adapter = Union[Exportable, ExportFn]


class ExportRegistry:
    def __init__(self) -> None:
        self._adapters: Dict[str, ExportFn] = {}
        self._descriptions: Dict[str, str] = {}

    def register(self, name: str, adapter: Adapter, description: str = "") -> None:
        """Register (or replace) the adapter for `name`."""
        if isinstance(adapter, Exportable):
            fn: ExportFn = adapter.export
            description = description or adapter.description
        elif callable(adapter):
            fn = adapter
        else:
            raise TypeError(f"Adapter for '{name}' must be callable or Exportable")
        if name in self._adapters:
            log.debug(f"Replacing export adapter '{name}'", extra={"format": name})
        self._adapters[name] = fn
        self._descriptions[name] = description

    def get(self, name: str) -> ExportFn:
        try:
            return self._adapters[name]
        except KeyError:
            raise UnknownExportFormat(name, self.names()) from None

    def names(self) -> List[str]:
        return list(self._adapters)

    def describe(self) -> Dict[str, str]:
        return dict(self._descriptions)

    def __contains__(self, name: object) -> bool:
        return name in self._adapters

    def export_as(
        self,
        name: str,
        rows: Sequence[Record],
        columns: Sequence[Any],
        file_base_name: str,
    ) -> Optional[Path]:
        """
        Run the adapter registered under `name`.

        Returns
        -------
        Path | None
            The written artifact, when the adapter reports one.

        Raises
        ------
        UnknownExportFormat
            If nothing is registered under `name`.
        ExportFailure
            If the adapter raised; the original error is chained.
        """
        adapter = self.get(name)
        try:
            path = adapter(rows, columns, file_base_name)
        except Exception as exc:  # noqa: BLE001 - any adapter failure is a failed export
            log.exception(
                f"[EXPORT FAILED] {name}",
                extra={"format": name, "file_base_name": file_base_name},
            )
            raise ExportFailure(name, file_base_name, str(exc)) from exc
        log.info(
            f"[EXPORT] {name}",
            extra={"format": name, "rows": len(rows), "path": str(path) if path else None},
        )
        return path


def default_registry(output_dir: Path | str = "exports", pdf_style: Optional[PdfStyle] = None) -> ExportRegistry:
    """Registry pre-loaded with the built-in adapters."""
    registry = ExportRegistry()
    for adapter in (
        CsvExporter(output_dir),
        XlsxExporter(output_dir),
        PdfExporter(output_dir, style=pdf_style),
        JsonExporter(output_dir),
        QuickBooksExporter(output_dir),
        FmcsaExporter(output_dir),
    ):
        registry.register(adapter.name, adapter)
    return registry


__all__ = ["Adapter", "ExportRegistry", "default_registry"]
