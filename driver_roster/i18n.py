"""
Default translate collaborator.

The core only ever sees a `translate(key, params) -> str` callable; this module
provides a catalog-backed implementation. Unknown keys render as the key itself
so a missing string is visible rather than blank.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

from driver_roster.utils.logging import get_logger

log = get_logger(__name__)

Translate = Callable[..., str]

CATALOGS: Dict[str, Dict[str, str]] = {
    "en": {
        "page.title": "Drivers",
        "page.back": "Back",
        "page.reload": "Reload",
        "page.source.mock": "Mock data",
        "page.source.api": "Live API",
        "page.source.fallback": "Mock data (API unavailable)",
        "page.filters.title": "Filters",
        "page.filters.apply": "Apply",
        "page.filters.clear": "Clear",
        "col.id": "ID",
        "col.name": "Name",
        "col.status": "Status",
        "col.location": "Location",
        "col.hireDate": "Hire Date",
        "filter.status.label": "Status",
        "filter.status.all": "All",
        "filter.status.active": "Active",
        "filter.status.inactive": "Inactive",
        "filter.location.label": "Location or name",
        "filter.dateRange.label": "Hire date",
        "filter.dateRange.preset.last7": "Last {n} days",
        "filter.dateRange.preset.last30": "Last {n} days",
        "empty.noRows": "No drivers match the current filters.",
    },
}


class _SafeParams(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def make_translator(language: str = "en", catalogs: Optional[Mapping[str, Mapping[str, str]]] = None) -> Translate:
    """
    Build a translate function for `language`, falling back to English.
    """
    available = catalogs if catalogs is not None else CATALOGS
    catalog = available.get(language)
    if catalog is None:
        log.warning(f"No catalog for language '{language}', using 'en'", extra={"language": language})
        catalog = available.get("en", {})

    def translate(key: str, params: Optional[Mapping[str, Any]] = None) -> str:
        template = catalog.get(key, key)
        if not params:
            return template
        return template.format_map(_SafeParams(params))

    return translate


__all__ = ["CATALOGS", "Translate", "make_translator"]
