"""Application pipeline – UnhandledExceptionBehavior.

Outermost link of the default stack. Records failures that no inner
behavior logged: cancellation before the chain starts, a crashing or
cancelled validator, or any request type excluded from the logging
behavior. The exception is always re-raised unchanged.
"""
from __future__ import annotations

import asyncio
from typing import Any, ClassVar

from mp_mediator.application.context import DispatchContext
from mp_mediator.application.pipeline.behavior import Behavior, Next, caller_fields, mark_logged, was_logged
from mp_mediator.kernel.errors import BaseError, ErrorCategory, classify
from mp_mediator.observability.logging import LogLevel, LogSink, StructlogSink


class UnhandledExceptionBehavior(Behavior):
    """Log at error any exception that escapes the chain unlogged, then rethrow."""

    runs_when_cancelled: ClassVar[bool] = True

    def __init__(self, sink: LogSink | None = None) -> None:
        self._sink = sink or StructlogSink()

    async def __call__(self, request: Any, context: DispatchContext, next_: Next) -> Any:
        try:
            return await next_(request, context)
        except asyncio.CancelledError as exc:
            if not was_logged(context, exc):
                mark_logged(context, exc)
                self._sink.emit(
                    LogLevel.WARNING,
                    "dispatch.cancelled",
                    {"request": type(request).__name__, **caller_fields(context), "status": "cancelled"},
                )
            raise
        except Exception as exc:
            category = classify(exc)
            if category is not ErrorCategory.VALIDATION and not was_logged(context, exc):
                mark_logged(context, exc)
                self._sink.emit(
                    LogLevel.ERROR,
                    "dispatch.failed",
                    {
                        "request": type(request).__name__,
                        **caller_fields(context),
                        "status": "failed",
                        "unhandled": True,
                        "error_type": type(exc).__name__,
                        "error_category": category.value,
                        "error_message": exc.message if isinstance(exc, BaseError) else str(exc),
                        "exc_info": exc,
                    },
                )
            raise


__all__ = ["UnhandledExceptionBehavior"]
