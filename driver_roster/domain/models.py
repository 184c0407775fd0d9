"""
Domain models for the driver roster.

Defines the canonical driver record, the column specification consumed by the
table projector and exporters, and the field access helper shared by the
filter engine and the exporters. Records coming from a custom mapper may be
plain mappings rather than `DriverRecord`; `get_field` reads both.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DriverRecord(BaseModel):
    """
    Canonical representation of a single driver.

    Instances are frozen; a refetch replaces the whole collection rather than
    patching records in place.
    """

    id: Optional[int] = Field(None, description="Stable identifier, unique within a loaded set.")
    name: str = Field("", description="Driver full name.")
    status: str = Field("", description="Active / Inactive (compared case-insensitively).")
    location: str = Field("", description="City or depot.")
    hire_date: str = Field("", alias="hireDate", description="ISO-8601 hire date.")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @classmethod
    def from_loose(cls, raw: Mapping[str, Any]) -> "DriverRecord":
        """
        Normalize a loosely-typed driver-like object.

        `name` comes from name/fullName, `status` from status/state, `location`
        from location/city and `hireDate` from hireDate/hiredOn; the first
        non-empty value wins and missing fields become ''.
        """
        return cls(
            id=_coerce_id(raw.get("id")),
            name=_first_non_empty(raw, "name", "fullName"),
            status=_first_non_empty(raw, "status", "state"),
            location=_first_non_empty(raw, "location", "city"),
            hire_date=_first_non_empty(raw, "hireDate", "hiredOn"),
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ColumnDef(BaseModel):
    """
    One entry of a ColumnSpec.

    `header_key` is resolved through the translate collaborator; `header` is a
    literal label used when no key is given.
    """

    accessor_key: str
    header_key: Optional[str] = None
    header: Optional[str] = None
    width: Optional[int] = Field(None, ge=1)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


Record = Union[DriverRecord, Mapping[str, Any]]


def _first_non_empty(raw: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = raw.get(key)
        if value is None or value == "":
            continue
        return value if isinstance(value, str) else str(value)
    return ""


def _coerce_id(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@lru_cache(maxsize=256)
def _model_attr(model_cls: type[BaseModel], key: str) -> Optional[str]:
    for name, info in model_cls.model_fields.items():
        if key == name or key == info.alias:
            return name
    return None


def get_field(record: Record, key: str) -> Any:
    """
    Read `key` from a record, accepting either the wire name (``hireDate``)
    or the attribute name (``hire_date``). Unknown keys yield None.
    """
    if isinstance(record, Mapping):
        return record.get(key)
    if isinstance(record, BaseModel):
        attr = _model_attr(type(record), key)
        return getattr(record, attr) if attr else None
    return getattr(record, key, None)


__all__ = [
    "ColumnDef",
    "DriverRecord",
    "Record",
    "get_field",
]
