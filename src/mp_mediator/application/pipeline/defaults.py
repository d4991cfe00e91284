"""Application pipeline – recommended behavior order.

1. UnhandledException – records any failure no inner behavior logged.
2. Validation – reject before any side effect.
3. Logging – every attempt that passed validation (validation logs its own rejections).
4. Performance – time only validated work.
5. Transaction – unit of work as close to the handler as possible.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from mp_mediator.application.pipeline.logging_behavior import LoggingBehavior
from mp_mediator.application.pipeline.performance_behavior import PerformanceBehavior
from mp_mediator.application.pipeline.transaction_behavior import TransactionBehavior
from mp_mediator.application.pipeline.unhandled_exception_behavior import UnhandledExceptionBehavior
from mp_mediator.application.pipeline.validation_behavior import ValidationBehavior
from mp_mediator.kernel.ddd import TransactionManager
from mp_mediator.observability.logging import LogSink, StructlogSink
from mp_mediator.observability.metrics import Metrics

if TYPE_CHECKING:
    from mp_mediator.application.cqrs.registry import PipelineBuilder
    from mp_mediator.config.settings.pipeline import PipelineSettings


def add_default_behaviors(
    builder: PipelineBuilder,
    *,
    settings: PipelineSettings | None = None,
    transactions: TransactionManager | None = None,
    sink: LogSink | None = None,
    metrics: Metrics | None = None,
) -> PipelineBuilder:
    """Register the standard behaviors on *builder* in the recommended order.

    The transaction behavior is only added when *transactions* is given.
    """
    from mp_mediator.config.settings.pipeline import PipelineSettings

    settings = settings or PipelineSettings()
    sink = sink or StructlogSink()
    builder.add_behavior(UnhandledExceptionBehavior(sink))
    builder.add_behavior(ValidationBehavior(builder.validators, settings.validation_options(), sink))
    builder.add_behavior(LoggingBehavior(sink, settings.logging_options()))
    builder.add_behavior(PerformanceBehavior(sink, settings.performance_thresholds(), metrics=metrics))
    if transactions is not None:
        builder.add_behavior(TransactionBehavior(transactions, sink))
    return builder


__all__ = ["add_default_behaviors"]
