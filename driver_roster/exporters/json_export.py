"""
JSON adapters: the generic dump and the QuickBooks reshaping.

Neither uses the column spec; the generic adapter writes whole records
(optionally reshaped by an injected mapper) as a pretty-printed array.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from driver_roster.domain.models import Record
from driver_roster.exporters.abstract import AbstractExporter, cell_value

Mapper = Callable[[Sequence[Record]], Any]


def record_payload(record: Record) -> Dict[str, Any]:
    if hasattr(record, "to_dict"):
        return record.to_dict()
    return dict(record)


class JsonExporter(AbstractExporter):
    """Pretty-printed JSON array of records."""

    name: str = "json"
    description: str = "Pretty-printed JSON array of the filtered records."
    extension: str = "json"

    def __init__(self, output_dir: Path | str = "exports", mapper: Optional[Mapper] = None) -> None:
        super().__init__(output_dir)
        self.mapper = mapper

    def _write(self, path: Path, rows: Sequence[Record], columns: Sequence[Any]) -> None:
        out = self.mapper(rows) if self.mapper else [record_payload(r) for r in rows]
        path.write_text(json.dumps(out, indent=2, ensure_ascii=False, default=str), encoding="utf-8")


def quickbooks_payload(rows: Sequence[Record]) -> List[Dict[str, Any]]:
    """Reshape records into QuickBooks-style entity references."""
    return [
        {
            "TxnDate": cell_value(r, "hireDate"),
            "EntityRef": {"name": cell_value(r, "name"), "value": cell_value(r, "id")},
            "Status": cell_value(r, "status"),
            "Location": cell_value(r, "location"),
        }
        for r in rows
    ]


class QuickBooksExporter(JsonExporter):
    name: str = "quickbooks"
    description: str = "QuickBooks-shaped JSON (TxnDate / EntityRef / Status / Location)."
    suffix: str = "-QuickBooks"

    def __init__(self, output_dir: Path | str = "exports") -> None:
        super().__init__(output_dir, mapper=quickbooks_payload)


__all__ = [
    "JsonExporter",
    "QuickBooksExporter",
    "quickbooks_payload",
    "record_payload",
]
