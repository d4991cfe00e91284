"""Application pipeline – Pipeline class."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from mp_mediator.application.context import DispatchContext
from mp_mediator.application.pipeline.behavior import (
    Behavior,
    BehaviorFn,
    BehaviorRegistration,
    Next,
    as_behavior,
)
from mp_mediator.kernel.errors import PipelineContractError


class Pipeline:
    """Immutable ordered chain of behaviors wrapped around a terminal handler.

    The first registered behavior is the outermost wrapper: its pre-logic
    runs first and its post-logic runs last.
    """

    def __init__(self, registrations: Iterable[BehaviorRegistration] = ()) -> None:
        self._registrations: tuple[BehaviorRegistration, ...] = tuple(registrations)

    def add(
        self,
        behavior: Behavior | BehaviorFn,
        applies_to: tuple[type, ...] | None = None,
    ) -> "Pipeline":
        """Return a new pipeline with *behavior* appended (fluent API)."""
        registration = BehaviorRegistration(as_behavior(behavior), applies_to)
        return Pipeline((*self._registrations, registration))

    @property
    def registrations(self) -> tuple[BehaviorRegistration, ...]:
        return self._registrations

    def __len__(self) -> int:
        return len(self._registrations)

    async def execute(self, request: Any, context: DispatchContext, handler: Next) -> Any:
        """Execute the chain for *request*, ending with *handler*."""
        chain: Next = _terminal(handler)
        for registration in reversed(self._registrations):
            if registration.applies(request):
                chain = _link(registration, chain)
        return await chain(request, context)


def _terminal(handler: Next) -> Next:
    async def _run(request: Any, context: DispatchContext) -> Any:
        context.cancellation.raise_if_cancelled()
        return await handler(request, context)

    return _run


def _link(registration: BehaviorRegistration, next_: Next) -> Next:
    behavior = registration.behavior
    check = not behavior.runs_when_cancelled

    async def _run(request: Any, context: DispatchContext) -> Any:
        if check:
            context.cancellation.raise_if_cancelled()
        return await behavior(request, context, _once(next_, registration.name))

    return _run


def _once(next_: Next, owner: str) -> Next:
    # One guard per link per dispatch; never shared across calls.
    called = False

    async def _guarded(request: Any, context: DispatchContext) -> Any:
        nonlocal called
        if called:
            raise PipelineContractError(f"{owner} called next more than once")
        called = True
        return await next_(request, context)

    return _guarded


__all__ = ["Pipeline"]
