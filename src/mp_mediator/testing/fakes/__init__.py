"""Testing fakes – in-memory doubles for kernel and observability ports."""
from mp_mediator.testing.fakes.identity import StaticCurrentUserProvider
from mp_mediator.testing.fakes.logging import LogRecord, RecordingLogSink
from mp_mediator.testing.fakes.metrics import FakeMetricsRegistry
from mp_mediator.testing.fakes.transactions import InMemoryTransactionManager
from mp_mediator.kernel.time import FrozenClock

__all__ = [
    "FakeMetricsRegistry",
    "FrozenClock",
    "InMemoryTransactionManager",
    "LogRecord",
    "RecordingLogSink",
    "StaticCurrentUserProvider",
]
