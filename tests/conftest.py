"""
Pytest configuration for the driver roster.

Provides fixtures for:
- Small, known record sets (including the two-driver scenario set)
- The default filter spec and resolved columns
- Settings with test-friendly overrides (no mock delay, single fetch attempt,
  exports under a temporary directory)
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List

import pytest

from driver_roster.config import DEFAULT_FILTERS, Settings, get_settings, load_page_config
from driver_roster.domain.models import ColumnDef, DriverRecord
from driver_roster.filters import Filterable, parse_filter_spec
from driver_roster.i18n import make_translator
from driver_roster.projector import ResolvedColumn, project_columns


@pytest.fixture
def scenario_records() -> List[DriverRecord]:
    return [
        DriverRecord(id=1, status="Active", location="Addis Ababa", hire_date="2024-01-15"),
        DriverRecord(id=2, status="Inactive", location="Bahir Dar", hire_date="2023-08-30"),
    ]


@pytest.fixture
def three_records() -> List[DriverRecord]:
    return [
        DriverRecord(id=1, name="Alemu Bekele", status="Active", location="Addis Ababa", hire_date="2024-01-15"),
        DriverRecord(id=2, name="Yerosen Birhanu", status="Inactive", location="Bahir Dar", hire_date="2023-08-30"),
        DriverRecord(id=3, name="Hareg kassaye", status="Active", location="Dire Dawa", hire_date="2025-11-10"),
    ]


@pytest.fixture
def default_spec() -> List[Filterable]:
    return parse_filter_spec(DEFAULT_FILTERS)


@pytest.fixture
def translate():
    return make_translator("en")


@pytest.fixture
def resolved_columns(translate) -> List[ResolvedColumn]:
    columns = [
        ColumnDef(accessor_key="id", header_key="col.id"),
        ColumnDef(accessor_key="name", header_key="col.name"),
        ColumnDef(accessor_key="status", header_key="col.status"),
        ColumnDef(accessor_key="location", header_key="col.location"),
        ColumnDef(accessor_key="hireDate", header_key="col.hireDate"),
    ]
    return project_columns(columns, translate)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings fixture with test-specific overrides.
    """
    return Settings(
        data_source_mode="mock",
        mock_delay_ms=0,
        fetch_attempts=1,
        fetch_timeout_seconds=2.0,
        export_dir=tmp_path / "exports",
        log_level="DEBUG",
        page_config_path=None,
    )


@pytest.fixture
def page_config(test_settings: Settings):
    return load_page_config(settings=test_settings)


@pytest.fixture
def clean_settings_cache() -> Iterator[None]:
    """Reset the cached settings around tests that change the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
