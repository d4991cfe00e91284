"""Observability – structured logging ports and helpers."""
from mp_mediator.observability.logging.factory import configure_logging
from mp_mediator.observability.logging.filters import SensitiveFieldsFilter
from mp_mediator.observability.logging.sink import LogLevel, LogSink, StructlogSink, get_logger

__all__ = [
    "LogLevel",
    "LogSink",
    "SensitiveFieldsFilter",
    "StructlogSink",
    "configure_logging",
    "get_logger",
]
