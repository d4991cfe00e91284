"""Application validation – ValidatorRegistry."""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from mp_mediator.application.validation.validator import Validator, ValidatorFn, as_validator
from mp_mediator.kernel.errors import ConfigurationError


class ValidatorRegistry:
    """Validators per request type, in registration order.

    Writable during startup; :meth:`freeze` makes it read-only so it can be
    shared by concurrent dispatches without locking.
    """

    def __init__(self) -> None:
        self._pending: dict[type, list[Validator[Any]]] = {}
        self._frozen: Mapping[type, tuple[Validator[Any], ...]] | None = None

    def register(self, request_type: type, validator: Validator[Any] | ValidatorFn) -> None:
        if self._frozen is not None:
            raise ConfigurationError(
                f"Cannot register a validator for {request_type.__name__!r}: registry is frozen"
            )
        self._pending.setdefault(request_type, []).append(as_validator(validator))

    def freeze(self) -> None:
        if self._frozen is None:
            self._frozen = MappingProxyType({t: tuple(v) for t, v in self._pending.items()})

    @property
    def frozen(self) -> bool:
        return self._frozen is not None

    def for_request(self, request_type: type) -> tuple[Validator[Any], ...]:
        if self._frozen is not None:
            return self._frozen.get(request_type, ())
        return tuple(self._pending.get(request_type, ()))

    def request_types(self) -> frozenset[type]:
        source = self._frozen if self._frozen is not None else self._pending
        return frozenset(source)


__all__ = ["ValidatorRegistry"]
