"""
Page controller: the single owner of page state.

Wires the record store, the filter engine, the column projector and the export
registry together. Holds the data-source mode, the current filter values and
a memo of the last filtered view.

Usage:
    controller = PageController.from_config(load_page_config(), get_settings())
    await controller.reload()
    controller.set_filter("status", "Active")
    outcome = controller.export("csv")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from driver_roster.config import DataSourceMode, PageConfig, Settings, get_settings
from driver_roster.domain.fixtures import MOCK_DRIVERS
from driver_roster.domain.models import Record
from driver_roster.errors import ExportFailure
from driver_roster.exporters.registry import ExportRegistry, default_registry
from driver_roster.filters.date_range import DateRange, DateRangeFilter
from driver_roster.filters.engine import apply_filters, empty_filter_values
from driver_roster.i18n import Translate, make_translator
from driver_roster.infrastructure.record_store import FixtureSource, RecordStore, RemoteSource, Source
from driver_roster.projector import ResolvedColumn, project_columns
from driver_roster.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ExportOutcome:
    format_name: str
    ok: bool
    path: Optional[Path] = None
    rows: int = 0
    error: Optional[str] = None


def _freeze_value(value: Any) -> Any:
    if isinstance(value, DateRange):
        return ("range", value.start, value.end)
    if isinstance(value, dict):
        return tuple(sorted((k, _freeze_value(v)) for k, v in value.items()))
    if isinstance(value, (list, tuple)):
        return tuple(_freeze_value(v) for v in value)
    return value


class PageController:
    def __init__(
        self,
        config: PageConfig,
        settings: Optional[Settings] = None,
        store: Optional[RecordStore] = None,
        registry: Optional[ExportRegistry] = None,
        translate: Optional[Translate] = None,
    ) -> None:
        self.config = config
        self.settings = settings or get_settings()
        self.store = store or RecordStore(fallback=MOCK_DRIVERS)
        self.registry = registry or default_registry(
            self.settings.export_dir, pdf_style=config.export.pdf
        )
        self.translate = translate or make_translator(config.i18n.lng or self.settings.language)
        self.mode: DataSourceMode = config.data_source.mode
        self.loading = False
        self._values: Dict[str, Any] = empty_filter_values(config.filters)
        self._memo: Optional[Tuple[Tuple[Record, ...], Any, List[Record]]] = None

    @classmethod
    def from_config(cls, config: PageConfig, settings: Optional[Settings] = None) -> "PageController":
        return cls(config, settings=settings)

    # ---- data acquisition

    def current_source(self) -> Source:
        if self.mode == "mock":
            return FixtureSource(records=MOCK_DRIVERS, delay_ms=self.settings.mock_delay_ms)
        api = self.config.data_source.api
        return RemoteSource(
            url=api.url,
            method=api.method,
            map_fn=api.resolve_mapper(),
            timeout_seconds=self.settings.fetch_timeout_seconds,
            attempts=self.settings.fetch_attempts,
        )

    async def reload(self) -> Tuple[Record, ...]:
        """Re-acquire records for the current mode."""
        self.loading = True
        try:
            return await self.store.load(self.current_source())
        finally:
            self.loading = False

    async def set_mode(self, mode: DataSourceMode) -> Tuple[Record, ...]:
        """Switch between mock and API data and reload."""
        self.mode = mode
        return await self.reload()

    def source_label(self) -> str:
        origin = self.store.loaded_from or self.mode
        return self.translate(f"page.source.{origin}")

    # ---- filter state

    @property
    def filter_values(self) -> Dict[str, Any]:
        return dict(self._values)

    def set_filter(self, filter_id: str, value: Any) -> None:
        self._definition(filter_id)
        self._values[filter_id] = value

    def patch_date_range(self, filter_id: str, start: Optional[str] = None, end: Optional[str] = None) -> DateRange:
        """Update one or both bounds of a date-range filter, keeping the other."""
        current = DateRange.coerce(self._values.get(filter_id))
        updated = DateRange(
            start=current.start if start is None else start,
            end=current.end if end is None else end,
        )
        self.set_filter(filter_id, updated)
        return updated

    def apply_preset(self, filter_id: str, preset_id: str, n: Optional[int] = None) -> DateRange:
        definition = self._definition(filter_id)
        if not isinstance(definition, DateRangeFilter):
            raise ValueError(f"Filter '{filter_id}' is not a date range")
        window = definition.preset(preset_id).range(n)
        self.set_filter(filter_id, window)
        return window

    def apply_values(self, values: Dict[str, Any]) -> None:
        for filter_id, value in values.items():
            self.set_filter(filter_id, value)

    def clear_filters(self) -> None:
        self._values = empty_filter_values(self.config.filters)

    def _definition(self, filter_id: str) -> Any:
        for definition in self.config.filters:
            if definition.id == filter_id:
                return definition
        raise KeyError(f"Unknown filter '{filter_id}'")

    # ---- derived views

    def filtered(self) -> List[Record]:
        """Current filtered view, memoized on (records identity, filter values)."""
        records = self.store.records
        key = _freeze_value(self._values)
        if self._memo is not None and self._memo[0] is records and self._memo[1] == key:
            return list(self._memo[2])
        result = apply_filters(records, self.config.filters, self._values)
        self._memo = (records, key, result)
        return list(result)

    def columns(self) -> List[ResolvedColumn]:
        return project_columns(self.config.table.columns, self.translate)

    # ---- export

    def export_formats(self) -> List[str]:
        return self.registry.names()

    def export(self, format_name: str, file_base_name: Optional[str] = None) -> ExportOutcome:
        """
        Export the current filtered view.

        A failing adapter is reported through `ExportOutcome(ok=False)`; an
        unregistered `format_name` raises `UnknownExportFormat`.
        """
        rows = self.filtered()
        base = file_base_name or self.config.export.file_base_name
        try:
            path = self.registry.export_as(format_name, rows, self.columns(), base)
        except ExportFailure as exc:
            return ExportOutcome(format_name=format_name, ok=False, rows=len(rows), error=exc.reason)
        return ExportOutcome(format_name=format_name, ok=True, path=path, rows=len(rows))


__all__ = ["ExportOutcome", "PageController"]
