"""Select filter: case-insensitive exact match against one field."""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from driver_roster.domain.models import Record, get_field
from driver_roster.filters.abstract import FilterDefinition, Predicate, text_of


class FilterOption(BaseModel):
    value: str
    label_key: Optional[str] = None
    label: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SelectFilter(FilterDefinition):
    """
    Exact, case-insensitive equality between `field` and the selected value.

    `field` defaults to the filter id. An empty selection passes every record.
    """

    kind: Literal["select"] = "select"
    field: Optional[str] = None
    options: List[FilterOption] = []

    @property
    def target_field(self) -> str:
        return self.field or self.id

    def predicate(self, value: Any) -> Optional[Predicate]:
        wanted = text_of(value).lower()
        if not wanted:
            return None
        target = self.target_field

        def _check(record: Record) -> bool:
            return text_of(get_field(record, target)).lower() == wanted

        return _check


__all__ = ["FilterOption", "SelectFilter"]
