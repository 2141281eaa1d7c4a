"""Structured logging on top of loguru.

Every record carries a trace id. Inside :func:`log_context` the id and any
extra fields are shared by all records, which is how one HTTP request's
dataset load, normalization and series build end up correlated.
"""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import IO, Any, Iterator
from uuid import uuid4

from loguru import logger

from mcflation.core.logging.config import LogConfig

# Promoted to top-level payload keys; everything else lands under "context".
PROMOTED_KEYS = ("trace_id", "source", "error_code")

_TRACE_ID: ContextVar[str | None] = ContextVar("mcflation_trace_id", default=None)
_FIELDS: ContextVar[dict[str, Any]] = ContextVar("mcflation_log_fields", default={})

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def current_trace_id() -> str | None:
    """Return the trace id of the enclosing :func:`log_context`, if any."""

    return _TRACE_ID.get()


def _patch_record(record: dict[str, Any]) -> None:
    extra = record["extra"]
    # Outside a context every record gets its own id; nothing is stored.
    if not extra.get("trace_id"):
        extra["trace_id"] = _TRACE_ID.get() or uuid4().hex

    # Values bound on the record win over the surrounding context.
    for key, value in _FIELDS.get().items():
        if key == "trace_id":
            continue
        if extra.get(key) is None:
            extra[key] = value

    for key in PROMOTED_KEYS:
        extra.setdefault(key, None)


def to_payload(record: dict[str, Any]) -> dict[str, Any]:
    """Flatten a loguru record into the JSON document written by the sinks."""

    extra = record["extra"]
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["name"],
        "message": record["message"],
    }
    payload.update({key: extra.get(key) for key in PROMOTED_KEYS})
    context = {key: value for key, value in extra.items() if key not in PROMOTED_KEYS}
    if context:
        payload["context"] = context
    if record["exception"] is not None:
        payload["exception"] = str(record["exception"])
    return payload


class _JsonLinesSink:
    """Writes one JSON document per record to a text stream or an append-only file."""

    def __init__(self, target: IO[str] | str) -> None:
        if isinstance(target, str):
            Path(target).parent.mkdir(parents=True, exist_ok=True)
        self._target = target

    def __call__(self, message: Any) -> None:
        line = json.dumps(to_payload(message.record), default=str) + "\n"
        if isinstance(self._target, str):
            with open(self._target, "a", encoding="utf-8") as handle:
                handle.write(line)
            return
        self._target.write(line)
        self._target.flush()


def _apply(config: LogConfig) -> None:
    handlers: list[dict[str, Any]] = []
    if config.console_output:
        stream = config.console_stream or sys.stderr
        if config.format == "console":
            handlers.append({"sink": stream, "level": config.level, "format": _CONSOLE_FORMAT})
        else:
            handlers.append({"sink": _JsonLinesSink(stream), "level": config.level})
    if config.file_output and config.file_path:
        handlers.append({"sink": _JsonLinesSink(config.file_path), "level": config.level})

    logger.configure(handlers=handlers, patcher=_patch_record, extra=dict(config.extra))


def configure_logging(level: str = "INFO", **kwargs: Any) -> None:
    """(Re)configure the global logger; ``kwargs`` are :class:`LogConfig` fields."""

    _apply(LogConfig(level=level.upper(), **kwargs))


class StructuredLogger:
    """A configured logger plus the :func:`log_context` helper."""

    def __init__(self, config: LogConfig | None = None) -> None:
        self.config = config or LogConfig()
        _apply(self.config)
        self.logger = logger

    def configure(self, **kwargs: Any) -> None:
        self.config = self.config.model_copy(update=kwargs)
        _apply(self.config)

    def context(self, *, trace_id: str | None = None, **fields: Any):
        return log_context(trace_id=trace_id, **fields)


def get_logger(name: str | None = None) -> Any:
    """Return the logger, bound to ``logger_name`` when a name is given."""

    return logger.bind(logger_name=name) if name else logger


def bind(**fields: Any) -> Any:
    return logger.bind(**fields)


@contextmanager
def log_context(*, trace_id: str | None = None, **fields: Any) -> Iterator[str]:
    """Share ``trace_id`` (a fresh one when omitted) and ``fields`` with nested records."""

    fields_token = _FIELDS.set({**_FIELDS.get(), **fields})
    active = trace_id or uuid4().hex
    trace_token = _TRACE_ID.set(active)
    try:
        yield active
    finally:
        _TRACE_ID.reset(trace_token)
        _FIELDS.reset(fields_token)


configure_logging()


__all__ = [
    "PROMOTED_KEYS",
    "StructuredLogger",
    "bind",
    "configure_logging",
    "current_trace_id",
    "get_logger",
    "log_context",
    "logger",
    "to_payload",
]
