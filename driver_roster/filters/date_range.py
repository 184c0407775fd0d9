"""
Date-range filter and presets.

Bounds are inclusive: the start bound is the start of its day and the end bound
is pushed to 23:59:59 so a record hired on the end date is kept. Record dates
that cannot be parsed fail any active range; unparseable bounds make the filter
match nothing.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any, Callable, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from driver_roster.domain.models import Record, get_field
from driver_roster.errors import InvalidFilterValue
from driver_roster.filters.abstract import FilterDefinition, Predicate, text_of
from driver_roster.utils.logging import get_logger

log = get_logger(__name__)

END_OF_DAY = time(23, 59, 59)

Translate = Callable[..., str]


def parse_when(value: Any) -> datetime:
    """
    Parse an ISO date or datetime into a naive datetime.

    Raises
    ------
    InvalidFilterValue
        If the value is empty or not ISO-8601.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    else:
        text = text_of(value).strip()
        if not text:
            raise InvalidFilterValue("empty date")
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidFilterValue(f"not an ISO date: {text!r}") from exc
    return parsed.replace(tzinfo=None)


class DateRange(BaseModel):
    """Current value of a dateRange filter; '' means an open bound."""

    start: str = ""
    end: str = ""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def coerce(cls, value: Any) -> "DateRange":
        if value is None:
            return cls()
        if isinstance(value, DateRange):
            return value
        if isinstance(value, Mapping):
            return cls(start=_iso(value.get("start")), end=_iso(value.get("end")))
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(start=_iso(value[0]), end=_iso(value[1]))
        raise InvalidFilterValue(f"unsupported date range value: {value!r}")

    @property
    def is_open(self) -> bool:
        return not self.start.strip() and not self.end.strip()

    def lower_bound(self) -> Optional[datetime]:
        if not self.start.strip():
            return None
        return datetime.combine(parse_when(self.start).date(), time.min)

    def upper_bound(self) -> Optional[datetime]:
        if not self.end.strip():
            return None
        return datetime.combine(parse_when(self.end).date(), END_OF_DAY)


def _iso(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()[:10]
    return text_of(value)


class DatePreset(BaseModel):
    """
    Named range ending today, e.g. "last 7 days".

    `days` is the default window; `range(n)` may override it.
    """

    id: str
    label_key: Optional[str] = None
    days: int = Field(7, ge=0)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def range(self, n: Optional[int] = None, today: Optional[date] = None) -> DateRange:
        window = self.days if n is None else n
        end = today or date.today()
        return DateRange(start=(end - timedelta(days=window)).isoformat(), end=end.isoformat())

    def label(self, translate: Translate, n: Optional[int] = None) -> str:
        key = self.label_key or self.id
        return translate(key, {"n": self.days if n is None else n})


class DateRangeFilter(FilterDefinition):
    """Inclusive range over a date field (defaults to the filter id)."""

    kind: Literal["dateRange"] = "dateRange"
    field: Optional[str] = None
    presets: List[DatePreset] = []

    @property
    def target_field(self) -> str:
        return self.field or self.id

    def preset(self, preset_id: str) -> DatePreset:
        for preset in self.presets:
            if preset.id == preset_id:
                return preset
        raise KeyError(f"Unknown preset '{preset_id}' for filter '{self.id}'")

    def predicate(self, value: Any) -> Optional[Predicate]:
        try:
            window = DateRange.coerce(value)
            if window.is_open:
                return None
            lower = window.lower_bound()
            upper = window.upper_bound()
        except InvalidFilterValue as exc:
            log.warning(
                f"Invalid value for filter '{self.id}'; no record can match",
                extra={"filter": self.id, "error": str(exc)},
            )
            return _match_nothing

        target = self.target_field

        def _check(record: Record) -> bool:
            try:
                when = parse_when(get_field(record, target))
            except InvalidFilterValue:
                return False
            if lower is not None and when < lower:
                return False
            if upper is not None and when > upper:
                return False
            return True

        return _check


def _match_nothing(record: Record) -> bool:
    return False


__all__ = [
    "DatePreset",
    "DateRange",
    "DateRangeFilter",
    "END_OF_DAY",
    "parse_when",
]
