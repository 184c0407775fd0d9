from __future__ import annotations

from datetime import date, timedelta

import pytest

from driver_roster import controller as controller_module
from driver_roster.config import load_page_config
from driver_roster.controller import PageController
from driver_roster.domain.fixtures import MOCK_DRIVERS
from driver_roster.errors import SourceUnavailable, UnknownExportFormat
from driver_roster.filters import DateRange
from driver_roster.infrastructure import record_store
from driver_roster.infrastructure.record_store import FixtureSource, RemoteSource

FIXTURE_SIZE = len(MOCK_DRIVERS)


@pytest.fixture
def controller(page_config, test_settings) -> PageController:
    return PageController(page_config, settings=test_settings)


@pytest.fixture
def api_down(monkeypatch):
    async def unavailable(url, method="GET", timeout_seconds=10.0, attempts=3):
        raise SourceUnavailable(url, "connection refused")

    monkeypatch.setattr(record_store, "fetch_payload", unavailable)


class TestLoading:
    @pytest.mark.asyncio
    async def test_reload_in_mock_mode(self, controller):
        records = await controller.reload()
        assert len(records) == FIXTURE_SIZE
        assert controller.loading is False
        assert controller.source_label() == "Mock data"

    def test_source_follows_mode(self, controller, test_settings):
        assert isinstance(controller.current_source(), FixtureSource)
        controller.mode = "api"
        source = controller.current_source()
        assert isinstance(source, RemoteSource)
        assert source.url == test_settings.api_url
        assert source.attempts == test_settings.fetch_attempts

    @pytest.mark.asyncio
    async def test_api_mode_falls_back(self, controller, api_down):
        records = await controller.set_mode("api")
        assert records == MOCK_DRIVERS
        assert controller.store.loaded_from == "fallback"
        assert controller.source_label() == "Mock data (API unavailable)"

    def test_label_before_first_load_uses_mode(self, controller):
        assert controller.source_label() == "Mock data"


class TestFilterState:
    def test_initial_values_are_empty(self, controller):
        assert controller.filter_values == {"status": "", "location": "", "hireDate": DateRange()}

    @pytest.mark.asyncio
    async def test_set_filter_narrows_view(self, controller):
        await controller.reload()
        controller.set_filter("status", "inactive")
        assert [r.id for r in controller.filtered()] == [2, 4, 6, 9]

    def test_unknown_filter_rejected(self, controller):
        with pytest.raises(KeyError):
            controller.set_filter("salary", "high")

    def test_patch_date_range_keeps_other_bound(self, controller):
        controller.patch_date_range("hireDate", start="2024-01-01")
        controller.patch_date_range("hireDate", end="2024-12-31")
        assert controller.filter_values["hireDate"] == DateRange(start="2024-01-01", end="2024-12-31")

    def test_apply_preset(self, controller):
        window = controller.apply_preset("hireDate", "last30")
        today = date.today()
        assert window == DateRange(start=(today - timedelta(days=30)).isoformat(), end=today.isoformat())
        assert controller.filter_values["hireDate"] == window

    def test_apply_preset_requires_date_filter(self, controller):
        with pytest.raises(ValueError):
            controller.apply_preset("status", "last7")

    @pytest.mark.asyncio
    async def test_clear_filters_restores_full_view(self, controller):
        await controller.reload()
        controller.apply_values({"status": "active", "location": "harar"})
        assert [r.id for r in controller.filtered()] == [7, 8]
        controller.clear_filters()
        assert len(controller.filtered()) == FIXTURE_SIZE

    @pytest.mark.asyncio
    async def test_filtered_view_is_memoized(self, controller, monkeypatch):
        calls = []
        original = controller_module.apply_filters

        def counting(records, spec, values):
            calls.append(1)
            return original(records, spec, values)

        monkeypatch.setattr(controller_module, "apply_filters", counting)
        await controller.reload()
        controller.set_filter("status", "Active")

        first = controller.filtered()
        second = controller.filtered()
        assert first == second
        assert len(calls) == 1

        controller.set_filter("status", "Inactive")
        controller.filtered()
        assert len(calls) == 2

        await controller.reload()
        controller.filtered()
        assert len(calls) == 3


class TestExport:
    @pytest.mark.asyncio
    async def test_export_current_view(self, controller, test_settings):
        await controller.reload()
        controller.set_filter("status", "Active")
        outcome = controller.export("csv")
        assert outcome.ok
        assert outcome.rows == 5
        assert outcome.path == test_settings.export_dir / "drivers-report.csv"
        assert outcome.path.exists()

    @pytest.mark.asyncio
    async def test_export_custom_base_name(self, controller, test_settings):
        await controller.reload()
        outcome = controller.export("fmcsa", file_base_name="audit")
        assert outcome.path == test_settings.export_dir / "audit-FMCSA.pdf"

    @pytest.mark.asyncio
    async def test_export_failure_is_reported(self, controller):
        def failing(rows, columns, file_base_name):
            raise OSError("read-only file system")

        controller.registry.register("csv", failing)
        await controller.reload()
        outcome = controller.export("csv")
        assert not outcome.ok
        assert outcome.path is None
        assert outcome.error == "read-only file system"

    @pytest.mark.asyncio
    async def test_export_unknown_format_raises(self, controller):
        await controller.reload()
        with pytest.raises(UnknownExportFormat):
            controller.export("docx")

    def test_export_formats(self, controller):
        assert controller.export_formats() == ["csv", "xlsx", "pdf", "json", "quickbooks", "fmcsa"]

    def test_columns_follow_config(self, test_settings):
        config = load_page_config(
            overrides={"table": {"columns": [{"accessorKey": "name", "headerKey": "col.name"}]}},
            settings=test_settings,
        )
        controller = PageController(config, settings=test_settings)
        assert [c.header for c in controller.columns()] == ["Name"]
