"""Observability – LogSink protocol, LogLevel, StructlogSink and get_logger."""
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol

import structlog


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class LogSink(Protocol):
    """Port: structured ``emit(level, event, fields)``.

    Behaviors only compose field maps; rendering is the sink's business.
    """

    def emit(self, level: LogLevel, event: str, fields: Mapping[str, Any]) -> None: ...


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


class StructlogSink:
    """Default :class:`LogSink` writing through a structlog logger."""

    def __init__(self, name: str = "mp_mediator.pipeline", logger: Any = None) -> None:
        self._log = logger if logger is not None else get_logger(name)

    def emit(self, level: LogLevel, event: str, fields: Mapping[str, Any]) -> None:
        getattr(self._log, LogLevel(level).value)(event, **dict(fields))


__all__ = ["LogLevel", "LogSink", "StructlogSink", "get_logger"]
