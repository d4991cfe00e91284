"""Result[T, E] returned by ``Mediator.send``.

Expected failures travel as values so callers can ``match`` on them::

    match await mediator.send(CreateThing(name="Widget")):
        case Ok(value):
            ...
        case Err(ValidationError() as exc):
            ...
"""

from __future__ import annotations

import dataclasses
from typing import Callable, Generic, NoReturn, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Exception)
F = TypeVar("F", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise ValueError(f"Called unwrap_err on {self!r}")

    def map(self, func: Callable[[T], U]) -> Ok[U]:
        return Ok(func(self.value))

    def map_err(self, func: Callable[[Exception], Exception]) -> Ok[T]:  # noqa: ARG002
        return self


@dataclasses.dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant; exceptions compare by identity, so does ``Err``."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def map(self, func: Callable[[object], object]) -> Err[E]:  # noqa: ARG002
        return self

    def map_err(self, func: Callable[[E], F]) -> Err[F]:
        return Err(func(self.error))


type Result[T, E] = Ok[T] | Err[E]

__all__ = ["Err", "Ok", "Result"]
