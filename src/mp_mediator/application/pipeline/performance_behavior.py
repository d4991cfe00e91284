"""Application pipeline – PerformanceBehavior and latency categories."""
from __future__ import annotations

import asyncio
import dataclasses
import time
from enum import Enum
from typing import Any, Callable

from mp_mediator.application.context import DispatchContext
from mp_mediator.application.pipeline.behavior import Behavior, Next, caller_fields
from mp_mediator.config.validation import InvalidSettingValueError
from mp_mediator.kernel.types import Err
from mp_mediator.observability.logging import LogLevel, LogSink, StructlogSink
from mp_mediator.observability.metrics import Metrics


class PerformanceCategory(str, Enum):
    FAST = "fast"
    NORMAL = "normal"
    ACCEPTABLE = "acceptable"
    SLOW = "slow"
    VERY_SLOW = "very_slow"


@dataclasses.dataclass(frozen=True)
class PerformanceThresholds:
    """Upper bounds (exclusive, milliseconds) of each category.

    ``warning_ms`` is independent of the categories: at or above it a
    ``dispatch.threshold_exceeded`` warning is emitted.
    """

    fast_ms: float = 100.0
    normal_ms: float = 500.0
    acceptable_ms: float = 1000.0
    slow_ms: float = 3000.0
    warning_ms: float = 500.0

    def __post_init__(self) -> None:
        bounds = [
            ("fast_ms", self.fast_ms),
            ("normal_ms", self.normal_ms),
            ("acceptable_ms", self.acceptable_ms),
            ("slow_ms", self.slow_ms),
        ]
        previous = 0.0
        for name, value in bounds:
            if value <= previous:
                raise InvalidSettingValueError(name, value, "category bounds must be positive and strictly increasing")
            previous = value
        if self.warning_ms <= 0:
            raise InvalidSettingValueError("warning_ms", self.warning_ms, "must be positive")

    def categorize(self, elapsed_ms: float) -> PerformanceCategory:
        if elapsed_ms < self.fast_ms:
            return PerformanceCategory.FAST
        if elapsed_ms < self.normal_ms:
            return PerformanceCategory.NORMAL
        if elapsed_ms < self.acceptable_ms:
            return PerformanceCategory.ACCEPTABLE
        if elapsed_ms < self.slow_ms:
            return PerformanceCategory.SLOW
        return PerformanceCategory.VERY_SLOW


class PerformanceBehavior(Behavior):
    """Time everything downstream, including failures and cancellations."""

    def __init__(
        self,
        sink: LogSink | None = None,
        thresholds: PerformanceThresholds | None = None,
        *,
        metrics: Metrics | None = None,
        timer: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._sink = sink or StructlogSink()
        self._thresholds = thresholds or PerformanceThresholds()
        self._timer = timer
        self._latency = metrics.histogram("dispatch.latency_ms", "Dispatch latency", "ms") if metrics else None
        self._slow = metrics.counter("dispatch.slow", "Dispatches over the warning threshold") if metrics else None

    @property
    def thresholds(self) -> PerformanceThresholds:
        return self._thresholds

    async def __call__(self, request: Any, context: DispatchContext, next_: Next) -> Any:
        start = self._timer()
        outcome = "success"
        try:
            result = await next_(request, context)
            if isinstance(result, Err):
                outcome = "failure"
            return result
        except asyncio.CancelledError:
            outcome = "cancelled"
            raise
        except Exception:
            outcome = "failure"
            raise
        finally:
            elapsed_ms = round((self._timer() - start) * 1000, 2)
            self._record(type(request).__name__, context, elapsed_ms, outcome)

    def _record(self, name: str, context: DispatchContext, elapsed_ms: float, outcome: str) -> None:
        category = self._thresholds.categorize(elapsed_ms)
        labels = {"request": name, "category": category.value, "outcome": outcome}
        if self._latency is not None:
            self._latency.record(elapsed_ms, labels)

        fields = {
            "request": name,
            **caller_fields(context),
            "elapsed_ms": elapsed_ms,
            "category": category.value,
            "outcome": outcome,
        }
        self._sink.emit(LogLevel.DEBUG, "dispatch.performance", fields)
        if elapsed_ms >= self._thresholds.warning_ms:
            if self._slow is not None:
                self._slow.add(1.0, labels)
            self._sink.emit(
                LogLevel.WARNING,
                "dispatch.threshold_exceeded",
                {**fields, "threshold_ms": self._thresholds.warning_ms},
            )


__all__ = ["PerformanceBehavior", "PerformanceCategory", "PerformanceThresholds"]
