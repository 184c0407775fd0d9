"""
Configuration for the driver roster.

Two layers:

- `Settings` uses Pydantic Settings to load environment variables (and `.env`)
  for logging, data source, export and mock API defaults.
- `PageConfig` is the typed page configuration (data source, table columns,
  filter spec, export options). Every recognized option has a default;
  unrecognized keys are ignored. `load_page_config` overlays an optional JSON
  file and explicit overrides on top of the settings-derived defaults.
"""
from __future__ import annotations

import importlib
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from driver_roster.domain.models import ColumnDef
from driver_roster.errors import ConfigError
from driver_roster.exporters.pdf import PdfStyle
from driver_roster.filters.engine import FilterSpecItem, ensure_unique_ids, parse_filter_spec

DEFAULT_API_URL = "http://localhost:5000/drivers"
DEFAULT_FILE_BASE_NAME = "drivers-report"

DataSourceMode = Literal["mock", "api"]


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")
    language: str = Field("en", alias="APP_LANGUAGE")

    # Data source
    data_source_mode: DataSourceMode = Field("mock", alias="DATA_SOURCE_MODE")
    api_url: str = Field(DEFAULT_API_URL, alias="API_URL")
    api_method: str = Field("GET", alias="API_METHOD")
    fetch_timeout_seconds: float = Field(10.0, alias="FETCH_TIMEOUT_SECONDS", gt=0)
    fetch_attempts: int = Field(3, alias="FETCH_ATTEMPTS", ge=1)
    mock_delay_ms: int = Field(500, alias="MOCK_DELAY_MS", ge=0)

    # Export
    export_dir: Path = Field(Path("exports"), alias="EXPORT_DIR")
    file_base_name: str = Field(DEFAULT_FILE_BASE_NAME, alias="EXPORT_FILE_BASE_NAME")
    page_config_path: Optional[Path] = Field(None, alias="PAGE_CONFIG_PATH")

    # Mock API
    mock_api_host: str = Field("127.0.0.1", alias="MOCK_API_HOST")
    mock_api_port: int = Field(5000, alias="MOCK_API_PORT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


class _PageModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ApiSourceConfig(_PageModel):
    url: str = DEFAULT_API_URL
    method: str = "GET"
    map_fn: Optional[Union[str, Callable[..., Any]]] = Field(None, alias="map")

    def resolve_mapper(self) -> Optional[Callable[[Any], Any]]:
        """
        Return the payload mapper, importing it when given as "module:function".

        Raises
        ------
        ConfigError
            If the dotted path cannot be imported or is not callable.
        """
        if self.map_fn is None or callable(self.map_fn):
            return self.map_fn
        module_name, _, attr = self.map_fn.partition(":")
        if not module_name or not attr:
            raise ConfigError(f"Mapper must look like 'package.module:function', got {self.map_fn!r}")
        try:
            target = getattr(importlib.import_module(module_name), attr)
        except (ImportError, AttributeError) as exc:
            raise ConfigError(f"Cannot import mapper {self.map_fn!r}: {exc}") from exc
        if not callable(target):
            raise ConfigError(f"Mapper {self.map_fn!r} is not callable")
        return target


class DataSourceConfig(_PageModel):
    mode: DataSourceMode = "mock"
    api: ApiSourceConfig = Field(default_factory=ApiSourceConfig)


DEFAULT_COLUMNS: List[Dict[str, Any]] = [
    {"accessorKey": "id", "headerKey": "col.id"},
    {"accessorKey": "name", "headerKey": "col.name"},
    {"accessorKey": "status", "headerKey": "col.status"},
    {"accessorKey": "location", "headerKey": "col.location"},
    {"accessorKey": "hireDate", "headerKey": "col.hireDate"},
]

DEFAULT_FILTERS: List[Dict[str, Any]] = [
    {
        "kind": "select",
        "id": "status",
        "labelKey": "filter.status.label",
        "options": [
            {"value": "", "labelKey": "filter.status.all"},
            {"value": "Active", "labelKey": "filter.status.active"},
            {"value": "Inactive", "labelKey": "filter.status.inactive"},
        ],
    },
    {
        "kind": "text",
        "id": "location",
        "labelKey": "filter.location.label",
        "fields": ["location", "name"],
    },
    {
        "kind": "dateRange",
        "id": "hireDate",
        "labelKey": "filter.dateRange.label",
        "presets": [
            {"id": "last7", "labelKey": "filter.dateRange.preset.last7", "days": 7},
            {"id": "last30", "labelKey": "filter.dateRange.preset.last30", "days": 30},
        ],
    },
]


class TableConfig(_PageModel):
    columns: List[ColumnDef] = Field(
        default_factory=lambda: [ColumnDef.model_validate(c) for c in DEFAULT_COLUMNS]
    )


class ExportConfig(_PageModel):
    file_base_name: str = DEFAULT_FILE_BASE_NAME
    pdf: PdfStyle = Field(default_factory=PdfStyle)


class I18nConfig(_PageModel):
    lng: Optional[str] = None


def _default_filters() -> List[Any]:
    return parse_filter_spec(DEFAULT_FILTERS)


class PageConfig(_PageModel):
    title_key: str = "page.title"
    data_source: DataSourceConfig = Field(default_factory=DataSourceConfig)
    table: TableConfig = Field(default_factory=TableConfig)
    filters: List[FilterSpecItem] = Field(default_factory=_default_filters)
    export: ExportConfig = Field(default_factory=ExportConfig)
    i18n: I18nConfig = Field(default_factory=I18nConfig)

    @field_validator("filters")
    @classmethod
    def _unique_filter_ids(cls, value: List[Any]) -> List[Any]:
        ensure_unique_ids(value)
        return value


def _deep_merge(base: Dict[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overlay.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_merge(dict(merged[key]), value)
        else:
            merged[key] = value
    return merged


def _settings_defaults(settings: Settings) -> Dict[str, Any]:
    return {
        "dataSource": {
            "mode": settings.data_source_mode,
            "api": {"url": settings.api_url, "method": settings.api_method},
        },
        "export": {"fileBaseName": settings.file_base_name},
        "i18n": {"lng": settings.language},
    }


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot read page config {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Page config {path} must contain a JSON object")
    return payload


def load_page_config(
    path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    settings: Optional[Settings] = None,
) -> PageConfig:
    """
    Build the effective page configuration.

    Precedence (lowest to highest): model defaults, settings, the JSON file at
    `path` (or `settings.page_config_path`), then `overrides`. Nested objects
    are merged key by key, so an override of `dataSource.mode` keeps the
    configured API url.

    Raises
    ------
    ConfigError
        If the file is unreadable, the merged configuration is invalid, or
        `dataSource.api.map` names a function that cannot be imported.
    """
    settings = settings or get_settings()
    merged = _settings_defaults(settings)
    config_path = path or settings.page_config_path
    if config_path is not None:
        merged = _deep_merge(merged, _read_config_file(Path(config_path)))
    if overrides:
        merged = _deep_merge(merged, overrides)
    try:
        config = PageConfig.model_validate(merged)
    except (ValidationError, ValueError) as exc:
        raise ConfigError(f"Invalid page configuration: {exc}") from exc
    config.data_source.api.resolve_mapper()
    return config


__all__ = [
    "ApiSourceConfig",
    "DataSourceConfig",
    "DataSourceMode",
    "ExportConfig",
    "PageConfig",
    "Settings",
    "TableConfig",
    "get_settings",
    "load_page_config",
]
