"""Testing support – in-memory doubles for the pipeline ports.

Usage::

    from mp_mediator.testing.fakes import InMemoryTransactionManager, RecordingLogSink

    sink = RecordingLogSink()
    builder = add_default_behaviors(PipelineBuilder(), transactions=InMemoryTransactionManager(), sink=sink)
"""

from mp_mediator.testing.fakes import (
    FakeMetricsRegistry,
    InMemoryTransactionManager,
    LogRecord,
    RecordingLogSink,
    StaticCurrentUserProvider,
)

__all__ = [
    "FakeMetricsRegistry",
    "InMemoryTransactionManager",
    "LogRecord",
    "RecordingLogSink",
    "StaticCurrentUserProvider",
]
