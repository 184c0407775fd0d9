"""
Record store: the unfiltered driver collection.

Loads from a literal fixture or a remote descriptor and fails soft: any fetch,
decode or mapping problem is logged and the configured fixture set is served
instead. The collection is an immutable tuple that is replaced wholesale on
every load, never patched.

Overlapping loads are ticketed; only the most recently *started* load may
replace the collection, so a slow earlier fetch cannot overwrite a newer one.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from driver_roster.domain.fixtures import MOCK_DRIVERS
from driver_roster.domain.models import DriverRecord, Record, get_field
from driver_roster.errors import SourceUnavailable
from driver_roster.infrastructure.remote import fetch_payload
from driver_roster.utils.logging import get_logger

log = get_logger(__name__)

PayloadMapper = Callable[[Any], Iterable[Any]]


@dataclass(frozen=True)
class FixtureSource:
    """In-memory records, optionally served after a simulated delay."""

    records: Sequence[Record] = MOCK_DRIVERS
    delay_ms: int = 0


@dataclass(frozen=True)
class RemoteSource:
    """HTTP endpoint returning a JSON array of driver-like objects."""

    url: str
    method: str = "GET"
    map_fn: Optional[PayloadMapper] = None
    timeout_seconds: float = 10.0
    attempts: int = 3


Source = Union[FixtureSource, RemoteSource, Sequence[Record]]


def default_map(payload: Any) -> List[DriverRecord]:
    """
    Normalize a decoded payload into canonical records.

    Raises
    ------
    ValueError
        If the payload is not a JSON array.
    """
    if not isinstance(payload, list):
        raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
    records: List[DriverRecord] = []
    for position, item in enumerate(payload):
        if not isinstance(item, dict):
            log.warning(
                "Skipping non-object driver entry",
                extra={"position": position, "entry_type": type(item).__name__},
            )
            continue
        records.append(DriverRecord.from_loose(item))
    return records


def freeze_records(items: Iterable[Any]) -> Tuple[Record, ...]:
    """
    Make records read-only and enforce id uniqueness (first occurrence wins).
    """
    frozen: List[Record] = []
    seen: set[Any] = set()
    for item in items:
        record = MappingProxyType(dict(item)) if isinstance(item, dict) else item
        record_id = get_field(record, "id")
        try:
            duplicate = record_id is not None and record_id in seen
        except TypeError:
            # unhashable ids count as absent
            record_id = None
            duplicate = False
        if duplicate:
            log.warning("Dropping driver with duplicate id", extra={"id": record_id})
            continue
        if record_id is not None:
            seen.add(record_id)
        frozen.append(record)
    return tuple(frozen)


async def fetch_records(source: RemoteSource) -> Tuple[Record, ...]:
    """
    Fetch, map and freeze records from a remote source.

    Raises
    ------
    SourceUnavailable
        On any transport, decode or mapping failure.
    """
    payload = await fetch_payload(
        source.url,
        method=source.method,
        timeout_seconds=source.timeout_seconds,
        attempts=source.attempts,
    )
    mapper = source.map_fn or default_map
    try:
        return freeze_records(mapper(payload))
    except Exception as exc:  # noqa: BLE001 - any mapper failure means the source is unusable
        raise SourceUnavailable(source.url, f"mapping failed: {exc}") from exc


class RecordStore:
    """
    Holder of the current driver collection.

    Parameters
    ----------
    fallback : Sequence[Record]
        Records served when a remote source fails.
    """

    def __init__(self, fallback: Sequence[Record] = MOCK_DRIVERS) -> None:
        self._fallback = freeze_records(fallback)
        self._records: Tuple[Record, ...] = ()
        self._ticket = 0
        self.loaded_from: Optional[str] = None

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    async def load(self, source: Source) -> Tuple[Record, ...]:
        """
        Acquire records from `source` and, unless a newer load has started
        meanwhile, make them the current collection. Never raises for source
        failures.
        """
        self._ticket += 1
        ticket = self._ticket
        records, origin = await self._acquire(source)
        if ticket != self._ticket:
            log.debug(
                "Discarding stale load result",
                extra={"ticket": ticket, "latest_ticket": self._ticket, "origin": origin},
            )
            return records
        self._records = records
        self.loaded_from = origin
        log.info(f"Loaded {len(records)} drivers", extra={"origin": origin, "rows": len(records)})
        return records

    async def _acquire(self, source: Source) -> Tuple[Tuple[Record, ...], str]:
        if isinstance(source, RemoteSource):
            try:
                return await fetch_records(source), "api"
            except SourceUnavailable as exc:
                log.warning(
                    "Driver source unavailable, serving fixture",
                    extra={"url": exc.url, "error": exc.reason},
                )
                return self._fallback, "fallback"
        if isinstance(source, FixtureSource):
            if source.delay_ms:
                await asyncio.sleep(source.delay_ms / 1000)
            return freeze_records(source.records), "mock"
        return freeze_records(source), "mock"


__all__ = [
    "FixtureSource",
    "RecordStore",
    "RemoteSource",
    "Source",
    "default_map",
    "fetch_records",
    "freeze_records",
]
