"""Observability – NoopMetrics, the default when no backend is wired."""
from __future__ import annotations

from mp_mediator.observability.metrics.ports import Counter, Histogram, Labels, Metrics


class _Discard(Counter, Histogram):
    def add(self, value: float = 1.0, labels: Labels | None = None) -> None:
        return None

    def record(self, value: float, labels: Labels | None = None) -> None:
        return None


_DISCARD = _Discard()


class NoopMetrics(Metrics):
    def counter(self, name: str, description: str = "", unit: str = "") -> Counter:
        return _DISCARD

    def histogram(self, name: str, description: str = "", unit: str = "ms") -> Histogram:
        return _DISCARD


__all__ = ["NoopMetrics"]
