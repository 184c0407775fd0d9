"""
Infrastructure package for the driver roster.

Centralizes data acquisition concerns (remote fetch with retry, the record
store and its fixture fallback). Keep this layer focused on I/O, decoupled
from filtering and export logic.
"""

from driver_roster.infrastructure.record_store import (
    FixtureSource,
    RecordStore,
    RemoteSource,
    Source,
    default_map,
    freeze_records,
)
from driver_roster.infrastructure.remote import fetch_payload

__all__ = [
    "FixtureSource",
    "RecordStore",
    "RemoteSource",
    "Source",
    "default_map",
    "fetch_payload",
    "freeze_records",
]
