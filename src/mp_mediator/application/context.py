"""Application – DispatchContext and CancellationToken.

The context is created at dispatch entry and passed explicitly to every
behavior and to the handler. Nothing here is stored in globals or
context variables.
"""
from __future__ import annotations

import asyncio
import dataclasses
from datetime import datetime
from typing import Any
from uuid import uuid4

from mp_mediator.kernel.security.identity import CurrentUser
from mp_mediator.kernel.time import Clock, SystemClock

_SYSTEM_CLOCK = SystemClock()


class CancellationToken:
    """Caller-owned cancellation signal shared by a dispatch call tree."""

    __slots__ = ("_cancelled", "_reason")

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: str | None = None

    def cancel(self, reason: str | None = None) -> None:
        self._cancelled = True
        self._reason = reason

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str | None:
        return self._reason

    def raise_if_cancelled(self) -> None:
        """Raise :class:`asyncio.CancelledError` once :meth:`cancel` was called."""
        if self._cancelled:
            raise asyncio.CancelledError(self._reason or "dispatch cancelled")


@dataclasses.dataclass(eq=False)
class DispatchContext:
    """Ephemeral per-call state of one dispatch."""

    correlation_id: str | None = None
    started_at: datetime = dataclasses.field(default_factory=_SYSTEM_CLOCK.now)
    user: CurrentUser | None = None
    cancellation: CancellationToken = dataclasses.field(default_factory=CancellationToken)
    transaction: Any = None
    depth: int = 0
    items: dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def new(
        cls,
        *,
        correlation_id: str | None = None,
        user: CurrentUser | None = None,
        cancellation: CancellationToken | None = None,
        clock: Clock | None = None,
    ) -> "DispatchContext":
        return cls(
            correlation_id=correlation_id,
            started_at=(clock or _SYSTEM_CLOCK).now(),
            user=user,
            cancellation=cancellation or CancellationToken(),
        )

    def ensure_correlation_id(self) -> str:
        """Return the correlation id, generating one on first use."""
        if self.correlation_id is None:
            self.correlation_id = str(uuid4())
        return self.correlation_id

    def child(self, clock: Clock | None = None) -> "DispatchContext":
        """Context for a nested dispatch issued from within this one.

        Shares correlation id, user, cancellation and the active unit of
        work; gets its own start timestamp and item bag.
        """
        return DispatchContext(
            correlation_id=self.ensure_correlation_id(),
            started_at=(clock or _SYSTEM_CLOCK).now(),
            user=self.user,
            cancellation=self.cancellation,
            transaction=self.transaction,
            depth=self.depth + 1,
        )

    @property
    def is_nested(self) -> bool:
        return self.depth > 0


__all__ = ["CancellationToken", "DispatchContext"]
