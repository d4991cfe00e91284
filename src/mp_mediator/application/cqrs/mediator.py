"""Application CQRS – Mediator: the dispatch entry point.

Usage::

    mediator = Mediator(configuration, current_user=user_provider)
    thing = await mediator.dispatch(CreateThing(name="Widget"))

    match await mediator.send(CreateThing(name="")):
        case Ok(value=thing): ...
        case Err(error=ValidationError() as exc): ...
"""
from __future__ import annotations

import asyncio
from typing import Any, TypeVar

from mp_mediator.application.context import CancellationToken, DispatchContext
from mp_mediator.application.cqrs.registry import PipelineConfiguration
from mp_mediator.application.cqrs.requests import Request
from mp_mediator.kernel.errors import BaseError, ConfigurationError
from mp_mediator.kernel.security.identity import CurrentUserProvider
from mp_mediator.kernel.time import Clock, SystemClock
from mp_mediator.kernel.types import Err, Ok, Result

R = TypeVar("R")


class Mediator:
    """Resolves the handler, runs the behavior chain and returns the raw result.

    The mediator holds only read-only configuration; concurrent dispatches
    share nothing but the registry.
    """

    def __init__(
        self,
        configuration: PipelineConfiguration,
        *,
        current_user: CurrentUserProvider | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._configuration = configuration
        self._current_user = current_user
        self._clock = clock or SystemClock()

    @property
    def configuration(self) -> PipelineConfiguration:
        return self._configuration

    async def dispatch(
        self,
        request: Request[R] | Any,
        *,
        parent: DispatchContext | None = None,
        correlation_id: str | None = None,
        cancellation: CancellationToken | None = None,
    ) -> R:
        """Run *request* through the pipeline and its handler.

        Raises whatever the chain raises, unchanged in type.
        ``HandlerNotFoundError`` is raised before any behavior runs.
        """
        context = self._open_context(parent, correlation_id, cancellation)
        try:
            handler = self._configuration.handler_for(type(request))
            return await self._configuration.pipeline.execute(request, context, handler.handle)
        except Exception as exc:
            _attach_correlation(exc, context.ensure_correlation_id())
            raise

    async def send(
        self,
        request: Request[R] | Any,
        *,
        parent: DispatchContext | None = None,
        correlation_id: str | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Result[R, BaseError]:
        """Like :meth:`dispatch` but returns ``Ok``/``Err`` for expected failures.

        Configuration errors, foreign exceptions and cancellation are raised.
        A handler that already returns ``Ok``/``Err`` is passed through.
        """
        try:
            value = await self.dispatch(
                request, parent=parent, correlation_id=correlation_id, cancellation=cancellation
            )
        except ConfigurationError:
            raise
        except BaseError as exc:
            return Err(exc)
        if isinstance(value, (Ok, Err)):
            return value
        return Ok(value)

    def _open_context(
        self,
        parent: DispatchContext | None,
        correlation_id: str | None,
        cancellation: CancellationToken | None,
    ) -> DispatchContext:
        if parent is not None:
            return parent.child(self._clock)
        user = self._current_user.current_user() if self._current_user is not None else None
        return DispatchContext.new(
            correlation_id=correlation_id,
            user=user,
            cancellation=cancellation,
            clock=self._clock,
        )


def _attach_correlation(exc: BaseException, correlation_id: str) -> None:
    if isinstance(exc, BaseError):
        if exc.correlation_id is None:
            exc.correlation_id = correlation_id
        return
    if isinstance(exc, asyncio.CancelledError):
        return
    note = f"correlation_id={correlation_id}"
    if note not in getattr(exc, "__notes__", ()):
        exc.add_note(note)


__all__ = ["Mediator"]
