"""
Filter capability interface.

Every filter kind (select, text, dateRange) is a pydantic model carrying its
declarative definition and implementing the `Filterable` capability, so the
engine dispatches on the definition object instead of branching on `kind`.
"""

from __future__ import annotations

import abc
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from driver_roster.domain.models import Record

Predicate = Callable[[Record], bool]


@runtime_checkable
class Filterable(Protocol):
    """
    Common interface all filter kinds must implement.

    Attributes
    ----------
    id : str
        Key into the filter-value map.
    kind : str
        Discriminator naming the variant.
    """

    id: str
    kind: str

    def is_active(self, value: Any) -> bool:
        """Whether `value` constrains anything at all."""
        ...

    def predicate(self, value: Any) -> Optional[Predicate]:
        """
        Compile `value` into a record predicate.

        Returns None when the value is inactive (the filter passes everything).
        """
        ...


class FilterDefinition(BaseModel, abc.ABC):
    """
    Base class for declarative filter definitions.

    Subclasses set a `kind` literal and implement `predicate`.
    """

    id: str
    label_key: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="ignore"
    )

    @abc.abstractmethod
    def predicate(self, value: Any) -> Optional[Predicate]:  # pragma: no cover - interface only
        raise NotImplementedError

    def is_active(self, value: Any) -> bool:
        return self.predicate(value) is not None

    def matches(self, record: Record, value: Any) -> bool:
        """Evaluate a single record; an inactive value always matches."""
        check = self.predicate(value)
        return True if check is None else check(record)


def text_of(value: Any) -> str:
    """Render a record field or filter value as comparable text."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


__all__ = [
    "Filterable",
    "FilterDefinition",
    "Predicate",
    "text_of",
]
