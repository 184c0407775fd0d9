"""
Filter engine package.

Re-exports the capability interface, the three filter kinds and the engine
entry points so callers can import from `driver_roster.filters` directly.
"""

from driver_roster.filters.abstract import FilterDefinition, Filterable, Predicate
from driver_roster.filters.date_range import DatePreset, DateRange, DateRangeFilter, parse_when
from driver_roster.filters.engine import (
    FilterSpecItem,
    apply_filters,
    empty_filter_values,
    filter_kinds,
    parse_filter_spec,
)
from driver_roster.filters.select import FilterOption, SelectFilter
from driver_roster.filters.text import TextFilter

__all__ = [
    # Abstracts
    "FilterDefinition",
    "Filterable",
    "Predicate",
    # Kinds
    "DatePreset",
    "DateRange",
    "DateRangeFilter",
    "FilterOption",
    "SelectFilter",
    "TextFilter",
    # Engine
    "FilterSpecItem",
    "apply_filters",
    "empty_filter_values",
    "filter_kinds",
    "parse_filter_spec",
    "parse_when",
]
