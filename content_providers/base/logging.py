"""Structured logging for providers and the format resolver.

Rationale:
- Every event is one JSON object (``{"event": ..., "provider": ..., ...}``), so
  resolution steps and HTTP failures can be grepped or shipped as-is.
- ``LogContext`` carries provider, path and target view; callers never build
  those fields by hand.
- Handlers are attached once per logger name and later calls reuse them.
"""
from __future__ import annotations

import json
import logging
import sys
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# LogRecord attributes that are never copied into the JSON line
_RECORD_INTERNALS = frozenset(
    (
        "msg", "args", "levelname", "levelno", "name", "pathname", "filename", "module",
        "exc_info", "exc_text", "stack_info", "lineno", "funcName", "created", "msecs",
        "relativeCreated", "thread", "threadName", "processName", "process", "taskName",
    )
)


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` attributes are merged in."""

    def format(self, record: logging.LogRecord) -> str:
        line: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {
            key: value
            for key, value in vars(record).items()
            if not key.startswith("_") and key not in _RECORD_INTERNALS
        }
        for key, value in extras.items():
            line.setdefault(key, value)
        return json.dumps(line, ensure_ascii=False, default=str)


@dataclass
class LogContext:
    """Who/what an event is about: provider id, content path, requested view."""

    provider: Optional[str] = None
    path: Optional[str] = None
    target: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        flat = asdict(self)
        flat.update(flat.pop("extra") or {})
        return {key: value for key, value in flat.items() if value is not None}


def _make_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter() if json_mode else logging.Formatter(PLAIN_FORMAT))
    return handler


def get_logger(name: str = "content_providers", json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    if getattr(logger, "_content_providers_configured", False):
        return logger
    logger.setLevel(level)
    logger.handlers[:] = [_make_handler(json_mode, level)]
    logger._content_providers_configured = True  # type: ignore[attr-defined]
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: Optional[LogContext] = None,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update({key: value for key, value in fields.items() if value is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "JsonFormatter",
    "LogContext",
    "get_logger",
    "log_event",
]
