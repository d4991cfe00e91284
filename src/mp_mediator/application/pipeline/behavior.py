"""Application pipeline – Behavior base and registration entries."""
from __future__ import annotations

import abc
import dataclasses
import inspect
from typing import Any, Awaitable, Callable, ClassVar

from mp_mediator.application.context import DispatchContext
from mp_mediator.kernel.security.identity import ANONYMOUS

_LOGGED_FAILURES = "pipeline.logged_failures"

Next = Callable[[Any, DispatchContext], Awaitable[Any]]
BehaviorFn = Callable[[Any, DispatchContext, Next], Awaitable[Any]]


class Behavior(abc.ABC):
    """Single node in the behavior chain.

    Either call ``next_`` exactly once or short-circuit by returning or
    raising without calling it. The pipeline checks cancellation before
    entering a behavior unless it sets ``runs_when_cancelled``.
    """

    runs_when_cancelled: ClassVar[bool] = False

    @abc.abstractmethod
    async def __call__(self, request: Any, context: DispatchContext, next_: Next) -> Any: ...


class FunctionBehavior(Behavior):
    """Adapts ``async def fn(request, context, next_)`` to :class:`Behavior`."""

    def __init__(self, fn: BehaviorFn) -> None:
        if not inspect.iscoroutinefunction(fn):
            raise TypeError(f"Behavior {fn!r} must be an async function")
        self._fn = fn

    async def __call__(self, request: Any, context: DispatchContext, next_: Next) -> Any:
        return await self._fn(request, context, next_)

    def __repr__(self) -> str:
        return f"FunctionBehavior({getattr(self._fn, '__qualname__', self._fn)!r})"


@dataclasses.dataclass(frozen=True)
class BehaviorRegistration:
    """A behavior plus the optional request-type filter it applies to.

    ``applies_to=None`` means every request; otherwise ``isinstance`` is used,
    so ``(Command,)`` selects all commands.
    """

    behavior: Behavior
    applies_to: tuple[type, ...] | None = None

    def applies(self, request: Any) -> bool:
        return self.applies_to is None or isinstance(request, self.applies_to)

    @property
    def name(self) -> str:
        return type(self.behavior).__name__


def as_behavior(candidate: Behavior | BehaviorFn) -> Behavior:
    if isinstance(candidate, Behavior):
        return candidate
    if callable(candidate):
        return FunctionBehavior(candidate)
    raise TypeError(f"Not a behavior: {candidate!r}")


def caller_fields(context: DispatchContext, *, include_user: bool = True) -> dict[str, Any]:
    """Correlation and identity fields shared by every pipeline log record."""
    fields: dict[str, Any] = {"correlation_id": context.ensure_correlation_id()}
    if context.is_nested:
        fields["depth"] = context.depth
    if include_user:
        user = context.user
        fields["user_id"] = user.id if user is not None else ANONYMOUS
        fields["user_name"] = (user.name or ANONYMOUS) if user is not None else ANONYMOUS
        fields["is_authenticated"] = bool(user is not None and user.is_authenticated)
    return fields


def mark_logged(context: DispatchContext, exc: BaseException) -> None:
    """Record that *exc* already produced a terminal record for this dispatch."""
    context.items.setdefault(_LOGGED_FAILURES, []).append(exc)


def was_logged(context: DispatchContext, exc: BaseException) -> bool:
    return any(seen is exc for seen in context.items.get(_LOGGED_FAILURES, ()))


__all__ = [
    "Behavior",
    "BehaviorFn",
    "BehaviorRegistration",
    "FunctionBehavior",
    "Next",
    "as_behavior",
    "caller_fields",
    "mark_logged",
    "was_logged",
]
