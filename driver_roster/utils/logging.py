"""
Logging setup shared by the CLI, the mock API and the library code.

Library modules only ever call `get_logger(__name__)` and pass context through
`extra=`; the entry points decide how records are rendered by calling
`configure_logging` once. Console output is a one-line human format; with
`json_logs=True` every record becomes a single JSON object whose keys include
the `extra=` attributes (origin, url, format, rows, ...).

Usage:
    from driver_roster.utils.logging import configure_logging, get_logger

    configure_logging(level="INFO", json_logs=False)
    log = get_logger(__name__)
    log.info("Export written", extra={"format": "csv", "rows": 9})
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord(
        name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None
    ).__dict__
) | {"message", "asctime", "taskName"}

# Third-party loggers pinned to their own level regardless of the root level.
_LIBRARY_LEVELS = {
    "aiohttp.access": "INFO",
    "fpdf": "WARNING",
    "fontTools": "WARNING",
}


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as JSON string."""
    payload: Dict[str, Any] = {
        "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    for key, value in record.__dict__.items():
        if key not in _STANDARD_ATTRS and key != "extra":
            payload[key] = value
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        payload.update(nested)
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def _logging_dict(level: str, formatter: str) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "format": "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
                "datefmt": "%H:%M:%S",
            },
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": "ext://sys.stderr",
            }
        },
        "loggers": {name: {"level": lib_level} for name, lib_level in _LIBRARY_LEVELS.items()},
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    force: bool = True,
) -> None:
    """
    Install the stderr handler on the root logger.

    Parameters
    ----------
    level : str
        Root level name ("DEBUG", "INFO", ...); case-insensitive.
    json_logs : bool
        Emit one JSON object per record instead of the console format.
    force : bool
        Replace an existing configuration. With False the call does nothing
        once the root logger has handlers, so a host application keeps its own.
    """
    if not force and logging.getLogger().handlers:
        return
    logging.config.dictConfig(_logging_dict(level.upper(), "json" if json_logs else "console"))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter"]
