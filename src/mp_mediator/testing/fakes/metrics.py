"""Testing fakes – FakeMetricsRegistry."""
from __future__ import annotations

from mp_mediator.observability.metrics.ports import Counter, Histogram, Labels, Metrics


class FakeInstrument(Counter, Histogram):
    """Records every measurement as ``(value, labels)``; serves as counter and histogram."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.calls: list[tuple[float, Labels | None]] = []

    def add(self, value: float = 1.0, labels: Labels | None = None) -> None:
        self.calls.append((value, labels))

    def record(self, value: float, labels: Labels | None = None) -> None:
        self.calls.append((value, labels))

    @property
    def values(self) -> list[float]:
        return [value for value, _ in self.calls]

    @property
    def total(self) -> float:
        return sum(self.values)


class FakeMetricsRegistry(Metrics):
    """In-memory :class:`Metrics` double.

    Usage::

        metrics = FakeMetricsRegistry()
        behavior = PerformanceBehavior(metrics=metrics)
        ...
        metrics.assert_counter_incremented("dispatch.slow", 1)
        assert metrics.histogram_values("dispatch.latency_ms") == [12.5]
    """

    def __init__(self) -> None:
        self._counters: dict[str, FakeInstrument] = {}
        self._histograms: dict[str, FakeInstrument] = {}

    def counter(self, name: str, description: str = "", unit: str = "") -> FakeInstrument:
        return self._counters.setdefault(name, FakeInstrument(name))

    def histogram(self, name: str, description: str = "", unit: str = "ms") -> FakeInstrument:
        return self._histograms.setdefault(name, FakeInstrument(name))

    def histogram_values(self, name: str) -> list[float]:
        instrument = self._histograms.get(name)
        return instrument.values if instrument is not None else []

    def assert_counter_incremented(self, name: str, n: int = 1) -> None:
        """Fail unless *name* received exactly *n* ``add`` calls."""
        counter = self._counters.get(name)
        assert counter is not None, f"Counter '{name}' was never created"
        assert len(counter.calls) == n, f"Counter '{name}' got {len(counter.calls)} add(s), expected {n}"

    def reset(self) -> None:
        self._counters.clear()
        self._histograms.clear()


__all__ = ["FakeInstrument", "FakeMetricsRegistry"]
