"""Application validation – Validator port and FunctionValidator."""
from __future__ import annotations

import abc
import inspect
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Generic, TypeVar

from mp_mediator.application.validation.failure import ValidationFailure

if TYPE_CHECKING:
    from mp_mediator.application.context import DispatchContext

TRequest = TypeVar("TRequest")

ValidatorFn = Callable[
    [Any, "DispatchContext"],
    Sequence[ValidationFailure] | Awaitable[Sequence[ValidationFailure]],
]


class Validator(abc.ABC, Generic[TRequest]):
    """Checks one request type and returns every failure it finds.

    Validators must not have side effects visible to other validators;
    the validation behavior may run them concurrently.
    """

    @abc.abstractmethod
    async def validate(
        self, request: TRequest, context: DispatchContext
    ) -> Sequence[ValidationFailure]: ...


class FunctionValidator(Validator[Any]):
    """Adapts a plain (sync or async) callable to :class:`Validator`."""

    def __init__(self, fn: ValidatorFn) -> None:
        self._fn = fn

    async def validate(self, request: Any, context: DispatchContext) -> Sequence[ValidationFailure]:
        result = self._fn(request, context)
        if inspect.isawaitable(result):
            result = await result
        return list(result or ())

    def __repr__(self) -> str:
        return f"FunctionValidator({getattr(self._fn, '__name__', self._fn)!r})"


def as_validator(candidate: Validator[Any] | ValidatorFn) -> Validator[Any]:
    if isinstance(candidate, Validator):
        return candidate
    if callable(candidate):
        return FunctionValidator(candidate)
    raise TypeError(f"Not a validator: {candidate!r}")


__all__ = ["FunctionValidator", "Validator", "ValidatorFn", "as_validator"]
