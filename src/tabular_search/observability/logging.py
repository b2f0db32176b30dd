"""Structured JSON logging with trace correlation.

Search diagnostics passed through ``extra=`` (``query``, ``matches``,
``rejected`` and friends, see ``SEARCH_FIELDS``) are grouped under a single
``search`` object so log pipelines can index them without knowing which
module emitted the line. Any other extras land at the top level.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import sys
from typing import Any

import orjson
from pydantic import BaseModel

from tabular_search.config import Settings
from tabular_search.observability.context import get_trace_context


SEARCH_FIELDS = frozenset(
    {"query", "considered", "rejected", "degenerate", "matches", "fuzzy", "warning"}
)
_RECORD_ATTRIBUTES = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line, carrying trace ids and grouped search fields."""

    max_message_length = 2000
    max_query_length = 200
    max_value_length = 500

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_trace_context()
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": _clip(record.getMessage(), self.max_message_length),
            "trace_id": ctx.get("trace_id", ""),
            "span_id": ctx.get("span_id", ""),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        search: dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRIBUTES or key.startswith("_"):
                continue
            if key == "query" and isinstance(value, str):
                search[key] = _clip(value, self.max_query_length)
            elif key in SEARCH_FIELDS:
                search[key] = value
            elif isinstance(value, str):
                entry[key] = _clip(value, self.max_value_length)
            else:
                entry[key] = value
        if search:
            entry["search"] = search

        return orjson.dumps(entry, default=_to_json).decode("utf-8")


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def _to_json(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (set, frozenset)):
        try:
            return sorted(value)
        except TypeError:
            return list(value)
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    return repr(value)


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    *,
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Install a single stdout handler on the root logger.

    Args:
        level: Root log level name; unknown names fall back to INFO.
        json_output: Use ``JsonFormatter`` instead of a plain text format.
        logger_levels: Per-logger level overrides (logger name -> level name).
    """
    root = logging.getLogger()
    root.setLevel(_level(level))
    for existing in root.handlers[:]:
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JsonFormatter() if json_output else logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )
    root.addHandler(handler)

    for name, name_level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(_level(name_level))


def configure_logging_from_settings(
    settings: Settings | None = None,
    *,
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Configure logging from ``LOG_LEVEL`` and ``LOG_JSON``."""
    settings = settings or Settings()
    configure_logging(settings.log_level, settings.log_json, logger_levels=logger_levels)


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO
