"""
mp_mediator – in-process request dispatch with a behavior pipeline.

Import path convention::

    from mp_mediator.application.cqrs import Command, Query, Mediator, PipelineBuilder
    from mp_mediator.application.pipeline import ValidationBehavior, TransactionBehavior
    from mp_mediator.kernel.errors import ValidationError, HandlerNotFoundError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
