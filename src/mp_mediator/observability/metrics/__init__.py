"""Observability – metrics ports."""
from mp_mediator.observability.metrics.noop import NoopMetrics
from mp_mediator.observability.metrics.ports import Counter, Histogram, Labels, Metrics

__all__ = ["Counter", "Histogram", "Labels", "Metrics", "NoopMetrics"]
