"""Unit tests for handler registration and the Mediator."""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Any

import pytest

from mp_mediator.application.cqrs import (
    CancellationToken,
    Command,
    CommandHandler,
    DispatchContext,
    Mediator,
    PipelineBuilder,
    Query,
    RequestKind,
    is_command,
    request_kind,
)
from mp_mediator.application.pipeline import Behavior, Next
from mp_mediator.application.validation import ValidationFailure
from mp_mediator.kernel.errors import (
    ConfigurationError,
    DomainError,
    DuplicateHandlerError,
    HandlerNotFoundError,
    OrphanValidatorError,
    ValidationError,
)
from mp_mediator.kernel.security import CurrentUser
from mp_mediator.kernel.types import Err, Ok
from mp_mediator.testing.fakes import StaticCurrentUserProvider


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class CreateThing(Command[dict]):
    name: str


@dataclasses.dataclass(frozen=True)
class GetThing(Query[dict]):
    id: str


@dataclasses.dataclass(frozen=True)
class Unregistered(Query[None]):
    pass


class CreateThingHandler(CommandHandler[CreateThing, dict]):
    def __init__(self) -> None:
        self.calls = 0

    async def handle(self, request: CreateThing, context: DispatchContext) -> dict:
        self.calls += 1
        return {"id": "42", "name": request.name}


async def get_thing(query: GetThing, context: DispatchContext) -> dict:
    return {"id": query.id}


def build_mediator(**kwargs: Any) -> tuple[Mediator, CreateThingHandler]:
    handler = CreateThingHandler()
    builder = PipelineBuilder().add_handler(CreateThing, handler).add_handler(GetThing, get_thing)
    return Mediator(builder.build(), **kwargs), handler


# ---------------------------------------------------------------------------
# Request kinds
# ---------------------------------------------------------------------------


class TestRequestKinds:
    def test_command_and_query(self) -> None:
        assert request_kind(CreateThing("x")) is RequestKind.COMMAND
        assert request_kind(GetThing("1")) is RequestKind.QUERY
        assert is_command(CreateThing("x"))
        assert not is_command(GetThing("1"))

    def test_plain_object_has_no_kind(self) -> None:
        assert request_kind(object()) is None
        assert not is_command(object())


# ---------------------------------------------------------------------------
# PipelineBuilder
# ---------------------------------------------------------------------------


class TestPipelineBuilder:
    def test_duplicate_handler_fails_at_registration(self) -> None:
        builder = PipelineBuilder().add_handler(GetThing, get_thing)
        with pytest.raises(DuplicateHandlerError):
            builder.add_handler(GetThing, get_thing)

    def test_decorator_registers_function(self) -> None:
        builder = PipelineBuilder()

        @builder.handler(GetThing)
        async def handle(query: GetThing, context: DispatchContext) -> dict:
            return {"id": query.id}

        configuration = builder.build()
        assert configuration.has_handler(GetThing)
        assert handle is not None

    def test_decorator_instantiates_handler_class(self) -> None:
        builder = PipelineBuilder()
        builder.handler(CreateThing)(CreateThingHandler)
        configuration = builder.build()
        assert isinstance(configuration.handler_for(CreateThing), CreateThingHandler)

    def test_sync_handler_rejected(self) -> None:
        def sync_handler(query: GetThing, context: DispatchContext) -> dict:
            return {}

        with pytest.raises(TypeError):
            PipelineBuilder().add_handler(GetThing, sync_handler)  # type: ignore[arg-type]

    def test_orphan_validator_fails_build(self) -> None:
        builder = PipelineBuilder().add_validator(CreateThing, lambda request, context: [])
        with pytest.raises(OrphanValidatorError) as exc_info:
            builder.build()
        assert exc_info.value.request_types == (CreateThing,)

    def test_build_freezes_validators(self) -> None:
        builder = PipelineBuilder().add_handler(GetThing, get_thing)
        builder.add_validator(GetThing, lambda request, context: [])
        configuration = builder.build()
        assert configuration.validators.frozen
        with pytest.raises(ConfigurationError):
            configuration.validators.register(GetThing, lambda request, context: [])

    def test_builder_is_single_use(self) -> None:
        builder = PipelineBuilder()
        builder.build()
        with pytest.raises(ConfigurationError):
            builder.add_handler(GetThing, get_thing)
        with pytest.raises(ConfigurationError):
            builder.build()

    def test_handlers_mapping_is_read_only(self) -> None:
        configuration = PipelineBuilder().add_handler(GetThing, get_thing).build()
        with pytest.raises(TypeError):
            configuration.handlers[CreateThing] = None  # type: ignore[index]


# ---------------------------------------------------------------------------
# Mediator.dispatch
# ---------------------------------------------------------------------------


class TestMediatorDispatch:
    def test_routes_to_handler(self) -> None:
        mediator, handler = build_mediator()
        assert asyncio.run(mediator.dispatch(CreateThing("Widget"))) == {"id": "42", "name": "Widget"}
        assert handler.calls == 1

    def test_function_handler(self) -> None:
        mediator, _ = build_mediator()
        assert asyncio.run(mediator.dispatch(GetThing("7"))) == {"id": "7"}

    def test_handler_not_found_before_any_behavior(self) -> None:
        trace: list[str] = []

        class Tracing(Behavior):
            async def __call__(self, request: Any, context: DispatchContext, next_: Next) -> Any:
                trace.append("behavior")
                return await next_(request, context)

        mediator = Mediator(PipelineBuilder().add_behavior(Tracing()).build())
        with pytest.raises(HandlerNotFoundError):
            asyncio.run(mediator.dispatch(Unregistered()))
        assert trace == []

    def test_handler_not_found_carries_correlation_id(self) -> None:
        mediator = Mediator(PipelineBuilder().build())
        with pytest.raises(HandlerNotFoundError) as exc_info:
            asyncio.run(mediator.dispatch(Unregistered(), correlation_id="corr-404"))
        assert exc_info.value.correlation_id == "corr-404"

        with pytest.raises(HandlerNotFoundError) as exc_info:
            asyncio.run(mediator.dispatch(Unregistered()))
        assert exc_info.value.correlation_id

    def test_lookup_is_exact_type(self) -> None:
        @dataclasses.dataclass(frozen=True)
        class SpecialGet(GetThing):
            pass

        mediator, _ = build_mediator()
        with pytest.raises(HandlerNotFoundError):
            asyncio.run(mediator.dispatch(SpecialGet("1")))

    def test_context_carries_user_and_correlation(self) -> None:
        seen: list[DispatchContext] = []

        async def handler(query: GetThing, context: DispatchContext) -> None:
            seen.append(context)

        user = CurrentUser(id="u-1", name="ada")
        mediator = Mediator(
            PipelineBuilder().add_handler(GetThing, handler).build(),
            current_user=StaticCurrentUserProvider(user),
        )
        asyncio.run(mediator.dispatch(GetThing("1"), correlation_id="corr-1"))
        assert seen[0].user == user
        assert seen[0].correlation_id == "corr-1"
        assert seen[0].depth == 0

    def test_error_gets_correlation_id(self) -> None:
        async def handler(query: GetThing, context: DispatchContext) -> None:
            raise DomainError("rule broken")

        mediator = Mediator(PipelineBuilder().add_handler(GetThing, handler).build())
        with pytest.raises(DomainError) as exc_info:
            asyncio.run(mediator.dispatch(GetThing("1"), correlation_id="corr-9"))
        assert exc_info.value.correlation_id == "corr-9"

    def test_foreign_error_gets_note(self) -> None:
        async def handler(query: GetThing, context: DispatchContext) -> None:
            raise KeyError("x")

        mediator = Mediator(PipelineBuilder().add_handler(GetThing, handler).build())
        with pytest.raises(KeyError) as exc_info:
            asyncio.run(mediator.dispatch(GetThing("1"), correlation_id="corr-9"))
        assert "correlation_id=corr-9" in exc_info.value.__notes__

    def test_nested_dispatch_shares_correlation(self) -> None:
        contexts: list[DispatchContext] = []
        builder = PipelineBuilder()

        @builder.handler(GetThing)
        async def inner(query: GetThing, context: DispatchContext) -> dict:
            contexts.append(context)
            return {"id": query.id}

        @builder.handler(CreateThing)
        async def outer(command: CreateThing, context: DispatchContext) -> dict:
            contexts.append(context)
            return await mediator.dispatch(GetThing("inner"), parent=context)

        mediator = Mediator(builder.build())
        assert asyncio.run(mediator.dispatch(CreateThing("x"))) == {"id": "inner"}
        outer_ctx, inner_ctx = contexts
        assert inner_ctx.correlation_id == outer_ctx.correlation_id is not None
        assert inner_ctx.depth == 1
        assert inner_ctx.is_nested
        assert inner_ctx.cancellation is outer_ctx.cancellation

    def test_concurrent_dispatches_are_isolated(self) -> None:
        seen: dict[str, str] = {}

        async def handler(query: GetThing, context: DispatchContext) -> str:
            context.items["id"] = query.id
            await asyncio.sleep(0)
            seen[query.id] = context.items["id"]
            return context.ensure_correlation_id()

        mediator = Mediator(PipelineBuilder().add_handler(GetThing, handler).build())

        async def main() -> list[str]:
            return await asyncio.gather(*(mediator.dispatch(GetThing(str(i))) for i in range(50)))

        correlation_ids = asyncio.run(main())
        assert len(set(correlation_ids)) == 50
        assert all(seen[k] == k for k in seen)
        assert len(seen) == 50

    def test_cancellation_token_stops_dispatch(self) -> None:
        mediator, handler = build_mediator()
        token = CancellationToken()
        token.cancel()

        async def main() -> bool:
            try:
                await mediator.dispatch(CreateThing("x"), cancellation=token)
            except asyncio.CancelledError:
                return True
            return False

        assert asyncio.run(main()) is True
        assert handler.calls == 0


# ---------------------------------------------------------------------------
# Mediator.send
# ---------------------------------------------------------------------------


class TestMediatorSend:
    def test_ok(self) -> None:
        mediator, _ = build_mediator()
        assert asyncio.run(mediator.send(GetThing("1"))) == Ok({"id": "1"})

    def test_expected_failure_is_err(self) -> None:
        async def handler(query: GetThing, context: DispatchContext) -> None:
            raise ValidationError([ValidationFailure("id", "bad")])

        mediator = Mediator(PipelineBuilder().add_handler(GetThing, handler).build())
        result = asyncio.run(mediator.send(GetThing("1")))
        assert isinstance(result, Err)
        assert isinstance(result.error, ValidationError)

    def test_configuration_error_is_raised(self) -> None:
        mediator, _ = build_mediator()
        with pytest.raises(HandlerNotFoundError):
            asyncio.run(mediator.send(Unregistered()))

    def test_foreign_exception_is_raised(self) -> None:
        async def handler(query: GetThing, context: DispatchContext) -> None:
            raise RuntimeError("bug")

        mediator = Mediator(PipelineBuilder().add_handler(GetThing, handler).build())
        with pytest.raises(RuntimeError):
            asyncio.run(mediator.send(GetThing("1")))

    def test_handler_result_passes_through(self) -> None:
        failure = DomainError("no")

        async def handler(query: GetThing, context: DispatchContext) -> Err[DomainError]:
            return Err(failure)

        mediator = Mediator(PipelineBuilder().add_handler(GetThing, handler).build())
        assert asyncio.run(mediator.send(GetThing("1"))) == Err(failure)
