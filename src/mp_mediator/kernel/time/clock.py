"""Kernel time – the clock behind dispatch start timestamps."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: source of timezone-aware ``datetime`` values."""

    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Deterministic clock for tests; only moves when told to.

    Naive datetimes are rejected so every ``DispatchContext.started_at`` is
    comparable regardless of which clock produced it.
    """

    def __init__(self, instant: datetime | None = None) -> None:
        self._instant = self._aware(instant or datetime(2000, 1, 1, tzinfo=UTC))

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = self._aware(instant)

    def advance(self, delta: timedelta | None = None, **kwargs: float) -> datetime:
        """Move forward by *delta* or by ``timedelta(**kwargs)``; return the new time."""
        self._instant += delta if delta is not None else timedelta(**kwargs)
        return self._instant

    @staticmethod
    def _aware(instant: datetime) -> datetime:
        if instant.tzinfo is None:
            raise ValueError("FrozenClock needs a timezone-aware datetime")
        return instant


__all__ = ["Clock", "FrozenClock", "SystemClock"]
