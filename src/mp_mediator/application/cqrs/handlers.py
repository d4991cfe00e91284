"""Application CQRS – RequestHandler, CommandHandler, QueryHandler."""
from __future__ import annotations

import abc
import inspect
from typing import Any, Awaitable, Callable, Generic, TypeVar

from mp_mediator.application.context import DispatchContext

TRequest = TypeVar("TRequest")
R = TypeVar("R")

HandlerFn = Callable[[Any, DispatchContext], Awaitable[Any]]


class RequestHandler(abc.ABC, Generic[TRequest, R]):
    """Handle a single request type and return its result."""

    @abc.abstractmethod
    async def handle(self, request: TRequest, context: DispatchContext) -> R: ...


class CommandHandler(RequestHandler[TRequest, R]):
    """Handler for a :class:`~mp_mediator.application.cqrs.requests.Command`."""


class QueryHandler(RequestHandler[TRequest, R]):
    """Handler for a :class:`~mp_mediator.application.cqrs.requests.Query`."""


class FunctionHandler(RequestHandler[Any, Any]):
    """Adapts an ``async def fn(request, context)`` to :class:`RequestHandler`."""

    def __init__(self, fn: HandlerFn) -> None:
        if not inspect.iscoroutinefunction(fn):
            raise TypeError(f"Handler {fn!r} must be an async function")
        self._fn = fn

    async def handle(self, request: Any, context: DispatchContext) -> Any:
        return await self._fn(request, context)

    def __repr__(self) -> str:
        return f"FunctionHandler({getattr(self._fn, '__qualname__', self._fn)!r})"


def as_handler(candidate: RequestHandler[Any, Any] | HandlerFn) -> RequestHandler[Any, Any]:
    if isinstance(candidate, RequestHandler):
        return candidate
    if callable(candidate):
        return FunctionHandler(candidate)
    raise TypeError(f"Not a handler: {candidate!r}")


__all__ = [
    "CommandHandler",
    "FunctionHandler",
    "HandlerFn",
    "QueryHandler",
    "RequestHandler",
    "as_handler",
]
