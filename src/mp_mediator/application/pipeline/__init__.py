"""Application pipeline – behavior chain and the standard behaviors."""
from mp_mediator.application.pipeline.behavior import (
    Behavior,
    BehaviorFn,
    BehaviorRegistration,
    FunctionBehavior,
    Next,
    as_behavior,
    caller_fields,
    mark_logged,
    was_logged,
)
from mp_mediator.application.pipeline.pipeline import Pipeline
from mp_mediator.application.pipeline.validation_behavior import ValidationBehavior, ValidationOptions
from mp_mediator.application.pipeline.logging_behavior import LoggingBehavior, LoggingOptions
from mp_mediator.application.pipeline.performance_behavior import (
    PerformanceBehavior,
    PerformanceCategory,
    PerformanceThresholds,
)
from mp_mediator.application.pipeline.transaction_behavior import TransactionBehavior
from mp_mediator.application.pipeline.unhandled_exception_behavior import UnhandledExceptionBehavior
from mp_mediator.application.pipeline.defaults import add_default_behaviors

__all__ = [
    "Behavior",
    "BehaviorFn",
    "BehaviorRegistration",
    "FunctionBehavior",
    "LoggingBehavior",
    "LoggingOptions",
    "Next",
    "PerformanceBehavior",
    "PerformanceCategory",
    "PerformanceThresholds",
    "Pipeline",
    "TransactionBehavior",
    "UnhandledExceptionBehavior",
    "ValidationBehavior",
    "ValidationOptions",
    "add_default_behaviors",
    "as_behavior",
    "caller_fields",
    "mark_logged",
    "was_logged",
]
