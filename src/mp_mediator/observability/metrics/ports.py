"""Observability – metric instrument ports used by PerformanceBehavior.

Labels are plain string mappings; the performance behavior always sets
``request``, ``category`` and ``outcome``.
"""
from __future__ import annotations

import abc
from collections.abc import Mapping

Labels = Mapping[str, str]


class Counter(abc.ABC):
    @abc.abstractmethod
    def add(self, value: float = 1.0, labels: Labels | None = None) -> None: ...


class Histogram(abc.ABC):
    @abc.abstractmethod
    def record(self, value: float, labels: Labels | None = None) -> None: ...


class Metrics(abc.ABC):
    """Port: creates (or returns the existing) instrument for a name."""

    @abc.abstractmethod
    def counter(self, name: str, description: str = "", unit: str = "") -> Counter: ...

    @abc.abstractmethod
    def histogram(self, name: str, description: str = "", unit: str = "ms") -> Histogram: ...


__all__ = ["Counter", "Histogram", "Labels", "Metrics"]
