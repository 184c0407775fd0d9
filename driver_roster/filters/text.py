"""Text filter: case-insensitive substring search over one or more fields."""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import Field

from driver_roster.domain.models import Record, get_field
from driver_roster.filters.abstract import FilterDefinition, Predicate, text_of


class TextFilter(FilterDefinition):
    """
    Matches when the trimmed query occurs in any of `fields`.

    `fields` defaults to the filter id alone; the default page configuration
    searches location OR name. `debounce_ms` is an input hint for interactive
    front ends and has no effect on matching.
    """

    kind: Literal["text"] = "text"
    fields: Optional[List[str]] = None
    debounce_ms: int = Field(0, ge=0)

    @property
    def target_fields(self) -> List[str]:
        return list(self.fields) if self.fields else [self.id]

    def predicate(self, value: Any) -> Optional[Predicate]:
        query = text_of(value).strip().lower()
        if not query:
            return None
        targets = self.target_fields

        def _check(record: Record) -> bool:
            return any(query in text_of(get_field(record, f)).lower() for f in targets)

        return _check


__all__ = ["TextFilter"]
