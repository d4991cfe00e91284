"""Application CQRS – Request, Command, Query envelopes."""
from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

R = TypeVar("R")


class RequestKind(str, Enum):
    """Fixed per request type; decides whether a unit of work is opened."""

    COMMAND = "command"
    QUERY = "query"


class Request(Generic[R]):
    """Marker base for a dispatchable operation producing ``R``.

    Concrete requests are usually frozen dataclasses::

        @dataclasses.dataclass(frozen=True)
        class CreateThing(Command[ThingCreated]):
            name: str
    """

    kind: ClassVar[RequestKind | None] = None


class Command(Request[R]):
    """Marker base for commands (intent to change state)."""

    kind: ClassVar[RequestKind | None] = RequestKind.COMMAND


class Query(Request[R]):
    """Marker base for queries (read-only intent)."""

    kind: ClassVar[RequestKind | None] = RequestKind.QUERY


def request_kind(request: Any) -> RequestKind | None:
    return getattr(type(request), "kind", None)


def is_command(request: Any) -> bool:
    return request_kind(request) is RequestKind.COMMAND


__all__ = ["Command", "Query", "Request", "RequestKind", "is_command", "request_kind"]
