"""Application pipeline – LoggingBehavior.

One ``dispatch.started`` record per dispatch followed by exactly one
terminal record: ``dispatch.succeeded``, ``dispatch.failed`` or
``dispatch.cancelled``. Errors are re-raised untouched.
"""
from __future__ import annotations

import asyncio
import dataclasses
import time
from typing import Any, Callable

from mp_mediator.application.context import DispatchContext
from mp_mediator.application.masking import DataMasker, MaskingRule, PayloadMasker
from mp_mediator.application.pipeline.behavior import Behavior, Next, caller_fields, mark_logged
from mp_mediator.kernel.errors import BaseError, ErrorCategory, classify
from mp_mediator.kernel.security.pii import DEFAULT_SENSITIVE_FIELDS
from mp_mediator.kernel.types import Err
from mp_mediator.observability.logging import LogLevel, LogSink, StructlogSink


@dataclasses.dataclass(frozen=True)
class LoggingOptions:
    slow_request_threshold_ms: float = 1000.0
    log_request_data: bool = False
    log_response_data: bool = False
    max_serialized_length: int = 1000
    include_user_context: bool = True
    excluded_request_types: frozenset[str] = frozenset()
    sensitive_fields: frozenset[str] = DEFAULT_SENSITIVE_FIELDS
    masking_rules: tuple[MaskingRule, ...] = ()


class LoggingBehavior(Behavior):
    """Record start, elapsed time and outcome of every dispatch.

    Success below ``slow_request_threshold_ms`` logs at info, at or above it
    at warning. Failures log at error with the exception attached, except
    validation failures which are user-correctable and log at warning.
    """

    def __init__(
        self,
        sink: LogSink | None = None,
        options: LoggingOptions | None = None,
        *,
        timer: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._sink = sink or StructlogSink()
        self._options = options or LoggingOptions()
        self._timer = timer
        self._payloads = PayloadMasker(
            DataMasker(list(self._options.masking_rules), self._options.sensitive_fields),
            max_length=self._options.max_serialized_length,
        )

    @property
    def options(self) -> LoggingOptions:
        return self._options

    async def __call__(self, request: Any, context: DispatchContext, next_: Next) -> Any:
        name = type(request).__name__
        if name in self._options.excluded_request_types:
            return await next_(request, context)

        scope = {"request": name, **caller_fields(context, include_user=self._options.include_user_context)}
        started = dict(scope)
        if self._options.log_request_data:
            started["request_data"] = self._payloads.render(request)
        self._sink.emit(LogLevel.INFO, "dispatch.started", started)

        start = self._timer()
        try:
            result = await next_(request, context)
        except asyncio.CancelledError as exc:
            self._sink.emit(
                LogLevel.WARNING,
                "dispatch.cancelled",
                {**scope, "elapsed_ms": self._elapsed(start), "status": "cancelled"},
            )
            mark_logged(context, exc)
            raise
        except Exception as exc:
            self._log_failure(scope, self._elapsed(start), exc)
            mark_logged(context, exc)
            raise

        elapsed = self._elapsed(start)
        if isinstance(result, Err):
            self._log_failure(scope, elapsed, result.error, returned=True)
        else:
            self._log_success(scope, elapsed, result)
        return result

    def _log_success(self, scope: dict[str, Any], elapsed_ms: float, result: Any) -> None:
        slow = elapsed_ms >= self._options.slow_request_threshold_ms
        fields = {**scope, "elapsed_ms": elapsed_ms, "status": "success", "slow": slow}
        if slow:
            fields["threshold_ms"] = self._options.slow_request_threshold_ms
        if self._options.log_response_data:
            fields["response_data"] = self._payloads.render(result)
        self._sink.emit(LogLevel.WARNING if slow else LogLevel.INFO, "dispatch.succeeded", fields)

    def _log_failure(
        self,
        scope: dict[str, Any],
        elapsed_ms: float,
        exc: BaseException,
        *,
        returned: bool = False,
    ) -> None:
        category = classify(exc)
        fields: dict[str, Any] = {
            **scope,
            "elapsed_ms": elapsed_ms,
            "status": "failed",
            "error_type": type(exc).__name__,
            "error_category": category.value,
            "error_message": exc.message if isinstance(exc, BaseError) else str(exc),
        }
        if isinstance(exc, BaseError):
            fields["error_code"] = exc.code
        if returned:
            fields["returned"] = True
        if category is ErrorCategory.VALIDATION:
            self._sink.emit(LogLevel.WARNING, "dispatch.failed", fields)
            return
        fields["exc_info"] = exc
        self._sink.emit(LogLevel.ERROR, "dispatch.failed", fields)

    def _elapsed(self, start: float) -> float:
        return round((self._timer() - start) * 1000, 2)


__all__ = ["LoggingBehavior", "LoggingOptions"]
