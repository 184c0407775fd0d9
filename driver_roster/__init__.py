"""
Driver roster - list, filter and export driver records.

This package provides the reusable core behind a driver administration page:

- A record store that loads drivers from a fixture or a remote API and falls
  back to the fixture when the API is unavailable
- A declarative filter engine (select, text and date-range filters)
- A column projector resolving headers through an injected translator
- An export adapter registry (CSV, XLSX, PDF, JSON, QuickBooks, FMCSA)
- A mock HTTP service and a command-line front end
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from driver_roster.config import PageConfig, Settings, get_settings, load_page_config
from driver_roster.controller import ExportOutcome, PageController
from driver_roster.domain import MOCK_DRIVERS, ColumnDef, DriverRecord, get_field
from driver_roster.errors import (
    ConfigError,
    ExportFailure,
    InvalidFilterValue,
    RosterError,
    SourceUnavailable,
    UnknownExportFormat,
)
from driver_roster.exporters import ExportRegistry, default_registry
from driver_roster.filters import apply_filters, empty_filter_values, parse_filter_spec
from driver_roster.infrastructure import FixtureSource, RecordStore, RemoteSource
from driver_roster.projector import ResolvedColumn, project_columns
from driver_roster.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "PageConfig",
    "Settings",
    "get_settings",
    "load_page_config",
    # Domain
    "ColumnDef",
    "DriverRecord",
    "MOCK_DRIVERS",
    "get_field",
    # Errors
    "ConfigError",
    "ExportFailure",
    "InvalidFilterValue",
    "RosterError",
    "SourceUnavailable",
    "UnknownExportFormat",
    # Core
    "ExportRegistry",
    "default_registry",
    "apply_filters",
    "empty_filter_values",
    "parse_filter_spec",
    "FixtureSource",
    "RecordStore",
    "RemoteSource",
    "ResolvedColumn",
    "project_columns",
    # Page controller
    "ExportOutcome",
    "PageController",
    # Logging
    "configure_logging",
    "get_logger",
]
