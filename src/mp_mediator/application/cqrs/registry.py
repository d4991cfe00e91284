"""Application CQRS – PipelineBuilder and the immutable PipelineConfiguration.

All wiring happens once at startup::

    builder = PipelineBuilder()
    builder.add_handler(CreateThing, CreateThingHandler(repo))

    @builder.handler(GetThing)
    async def get_thing(query: GetThing, context: DispatchContext) -> Thing | None:
        ...

    builder.add_validator(CreateThing, CreateThingValidator())
    builder.add_behavior(ValidationBehavior(builder.validators))
    configuration = builder.build()

Duplicate handlers fail at registration; validators without a handler fail
at :meth:`PipelineBuilder.build`.
"""
from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Any, Callable, Mapping, TypeVar

from mp_mediator.application.cqrs.handlers import HandlerFn, RequestHandler, as_handler
from mp_mediator.application.pipeline.behavior import Behavior, BehaviorFn, BehaviorRegistration, as_behavior
from mp_mediator.application.pipeline.pipeline import Pipeline
from mp_mediator.application.validation.registry import ValidatorRegistry
from mp_mediator.application.validation.validator import Validator, ValidatorFn
from mp_mediator.kernel.errors import (
    ConfigurationError,
    DuplicateHandlerError,
    HandlerNotFoundError,
    OrphanValidatorError,
)

H = TypeVar("H", bound=Callable[..., Any])


@dataclasses.dataclass(frozen=True)
class PipelineConfiguration:
    """Read-only result of the registration step, safe to share across dispatches."""

    handlers: Mapping[type, RequestHandler[Any, Any]]
    pipeline: Pipeline
    validators: ValidatorRegistry

    def handler_for(self, request_type: type) -> RequestHandler[Any, Any]:
        handler = self.handlers.get(request_type)
        if handler is None:
            raise HandlerNotFoundError(request_type)
        return handler

    def has_handler(self, request_type: type) -> bool:
        return request_type in self.handlers


class PipelineBuilder:
    """Collects handlers, behaviors and validators; produces a PipelineConfiguration."""

    def __init__(self) -> None:
        self._handlers: dict[type, RequestHandler[Any, Any]] = {}
        self._behaviors: list[BehaviorRegistration] = []
        self._validators = ValidatorRegistry()
        self._built = False

    @property
    def validators(self) -> ValidatorRegistry:
        """Registry shared with :class:`ValidationBehavior`; frozen by :meth:`build`."""
        return self._validators

    def add_handler(
        self, request_type: type, handler: RequestHandler[Any, Any] | HandlerFn
    ) -> "PipelineBuilder":
        self._ensure_open()
        if request_type in self._handlers:
            raise DuplicateHandlerError(request_type)
        self._handlers[request_type] = as_handler(handler)
        return self

    def handler(self, request_type: type) -> Callable[[H], H]:
        """Decorator form of :meth:`add_handler`.

        Accepts an async function or a :class:`RequestHandler` subclass with a
        no-argument constructor.
        """

        def decorator(target: H) -> H:
            if isinstance(target, type) and issubclass(target, RequestHandler):
                self.add_handler(request_type, target())
            else:
                self.add_handler(request_type, target)
            return target

        return decorator

    def add_behavior(
        self,
        behavior: Behavior | BehaviorFn,
        applies_to: tuple[type, ...] | type | None = None,
    ) -> "PipelineBuilder":
        """Append *behavior*; the first one added is the outermost wrapper."""
        self._ensure_open()
        if isinstance(applies_to, type):
            applies_to = (applies_to,)
        self._behaviors.append(BehaviorRegistration(as_behavior(behavior), applies_to))
        return self

    def add_validator(
        self, request_type: type, validator: Validator[Any] | ValidatorFn
    ) -> "PipelineBuilder":
        self._ensure_open()
        self._validators.register(request_type, validator)
        return self

    def build(self) -> PipelineConfiguration:
        self._ensure_open()
        orphans = self._validators.request_types() - frozenset(self._handlers)
        if orphans:
            raise OrphanValidatorError(orphans)
        self._validators.freeze()
        self._built = True
        return PipelineConfiguration(
            handlers=MappingProxyType(dict(self._handlers)),
            pipeline=Pipeline(self._behaviors),
            validators=self._validators,
        )

    def _ensure_open(self) -> None:
        if self._built:
            raise ConfigurationError("PipelineBuilder.build() was already called")


__all__ = ["PipelineBuilder", "PipelineConfiguration"]
