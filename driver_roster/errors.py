"""
Error taxonomy for the driver roster.

Nothing here is fatal to the page: source failures fall back to the fixture set,
bad filter values make a filter match nothing, and only export failures are
surfaced to the caller as a failed operation.
"""

from __future__ import annotations


class RosterError(Exception):
    """Base class for all driver roster errors."""


class ConfigError(RosterError):
    """Page configuration could not be read or resolved."""


class SourceUnavailable(RosterError):
    """Driver records could not be fetched or decoded from a remote source."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Source {url} unavailable: {reason}")
        self.url = url
        self.reason = reason


class InvalidFilterValue(RosterError, ValueError):
    """A filter value (e.g. a date bound) cannot be interpreted."""


class UnknownExportFormat(RosterError, KeyError):
    """No export adapter is registered under the requested name."""

    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(name)
        self.name = name
        self.available = available

    def __str__(self) -> str:
        return f"Unknown export format '{self.name}'. Available: {', '.join(self.available)}"


class ExportFailure(RosterError):
    """An export adapter failed to produce its artifact."""

    def __init__(self, format_name: str, file_base_name: str, reason: str) -> None:
        super().__init__(f"Export '{format_name}' of '{file_base_name}' failed: {reason}")
        self.format_name = format_name
        self.file_base_name = file_base_name
        self.reason = reason


__all__ = [
    "RosterError",
    "ConfigError",
    "SourceUnavailable",
    "InvalidFilterValue",
    "UnknownExportFormat",
    "ExportFailure",
]
