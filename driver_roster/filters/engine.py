"""
Filter engine: evaluate a FilterSpec against a record sequence.

Filters are combined with AND semantics; a filter whose id is absent from the
value map, or whose value is empty, passes every record. The engine is a pure
function: it never mutates its inputs and preserves input order.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Iterable, List, Mapping, Sequence, Union

from pydantic import Field, TypeAdapter

from driver_roster.domain.models import Record
from driver_roster.filters.abstract import Filterable, Predicate
from driver_roster.filters.date_range import DateRange, DateRangeFilter
from driver_roster.filters.select import SelectFilter
from driver_roster.filters.text import TextFilter

FilterSpecItem = Annotated[
    Union[SelectFilter, TextFilter, DateRangeFilter],
    Field(discriminator="kind"),
]

_SPEC_ADAPTER: TypeAdapter[List[FilterSpecItem]] = TypeAdapter(List[FilterSpecItem])


def _filter_kinds() -> Dict[str, type]:
    """Registry of available filter kinds."""
    return {
        "select": SelectFilter,
        "text": TextFilter,
        "dateRange": DateRangeFilter,
    }


def filter_kinds() -> List[str]:
    """List available filter kinds."""
    return sorted(_filter_kinds().keys())


def parse_filter_spec(items: Iterable[Any]) -> List[Filterable]:
    """
    Validate raw filter definitions (dicts or models) into filter objects.

    Raises
    ------
    pydantic.ValidationError
        On unknown kinds or malformed definitions.
    ValueError
        If two definitions share an id.
    """
    spec = _SPEC_ADAPTER.validate_python(list(items))
    ensure_unique_ids(spec)
    return list(spec)


def ensure_unique_ids(spec: Sequence[Filterable]) -> None:
    seen: set[str] = set()
    for definition in spec:
        if definition.id in seen:
            raise ValueError(f"Duplicate filter id '{definition.id}'")
        seen.add(definition.id)


def empty_filter_values(spec: Sequence[Filterable]) -> Dict[str, Any]:
    """The 'no constraint' value for every filter in `spec`."""
    values: Dict[str, Any] = {}
    for definition in spec:
        values[definition.id] = DateRange() if definition.kind == "dateRange" else ""
    return values


def apply_filters(
    records: Sequence[Record],
    spec: Sequence[Filterable],
    values: Mapping[str, Any],
) -> List[Record]:
    """
    Return the records that satisfy every active filter, in input order.

    Parameters
    ----------
    records : Sequence[Record]
        Unfiltered records; never modified.
    spec : Sequence[Filterable]
        Filter definitions, evaluated conjunctively.
    values : Mapping[str, Any]
        Current value per filter id. Missing ids are inactive.
    """
    predicates: List[Predicate] = []
    for definition in spec:
        if definition.id not in values:
            continue
        check = definition.predicate(values[definition.id])
        if check is not None:
            predicates.append(check)

    if not predicates:
        return list(records)
    return [record for record in records if all(check(record) for check in predicates)]


__all__ = [
    "FilterSpecItem",
    "apply_filters",
    "empty_filter_values",
    "ensure_unique_ids",
    "filter_kinds",
    "parse_filter_spec",
]
