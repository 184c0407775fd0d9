"""
Domain package for the driver roster.

Exports the canonical record, column definitions and the fixture set.
Keep this package focused on data definitions and normalization concerns.
"""

from driver_roster.domain.fixtures import MOCK_DRIVERS
from driver_roster.domain.models import (
    ColumnDef,
    DriverRecord,
    Record,
    get_field,
)

__all__ = [
    "ColumnDef",
    "DriverRecord",
    "MOCK_DRIVERS",
    "Record",
    "get_field",
]
