"""
Column/table projector.

Resolves a ColumnSpec into display columns: a translated header and a width.
The `id` column is narrower than the rest unless its column definition pins a width.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from driver_roster.domain.models import ColumnDef
from driver_roster.i18n import Translate

ID_COLUMN_WIDTH = 50
DEFAULT_COLUMN_WIDTH = 150


@dataclass(frozen=True)
class ResolvedColumn:
    accessor_key: str
    header: str
    size: int


def project_columns(columns: Sequence[ColumnDef], translate: Translate) -> List[ResolvedColumn]:
    resolved: List[ResolvedColumn] = []
    for column in columns:
        if column.header_key:
            header = translate(column.header_key)
        else:
            header = column.header or column.accessor_key
        if column.width is not None:
            size = column.width
        elif column.accessor_key == "id":
            size = ID_COLUMN_WIDTH
        else:
            size = DEFAULT_COLUMN_WIDTH
        resolved.append(ResolvedColumn(accessor_key=column.accessor_key, header=header, size=size))
    return resolved


__all__ = [
    "DEFAULT_COLUMN_WIDTH",
    "ID_COLUMN_WIDTH",
    "ResolvedColumn",
    "project_columns",
]
