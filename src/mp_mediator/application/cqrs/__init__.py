"""Application CQRS – requests, handlers, dispatch context, registration, Mediator."""
from mp_mediator.application.context import CancellationToken, DispatchContext
from mp_mediator.application.cqrs.requests import (
    Command,
    Query,
    Request,
    RequestKind,
    is_command,
    request_kind,
)
from mp_mediator.application.cqrs.handlers import (
    CommandHandler,
    FunctionHandler,
    HandlerFn,
    QueryHandler,
    RequestHandler,
    as_handler,
)
from mp_mediator.application.cqrs.registry import PipelineBuilder, PipelineConfiguration
from mp_mediator.application.cqrs.mediator import Mediator

__all__ = [
    "CancellationToken",
    "Command",
    "CommandHandler",
    "DispatchContext",
    "FunctionHandler",
    "HandlerFn",
    "Mediator",
    "PipelineBuilder",
    "PipelineConfiguration",
    "Query",
    "QueryHandler",
    "Request",
    "RequestHandler",
    "RequestKind",
    "as_handler",
    "is_command",
    "request_kind",
]
