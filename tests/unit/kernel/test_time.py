"""Unit tests for kernel clocks."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from mp_mediator.kernel.time import FrozenClock, SystemClock


class TestSystemClock:
    def test_returns_aware_utc(self) -> None:
        assert SystemClock().now().tzinfo is not None


class TestFrozenClock:
    def test_fixed_and_advance(self) -> None:
        start = datetime(2024, 1, 1, tzinfo=UTC)
        clock = FrozenClock(start)
        assert clock.now() == start
        assert clock.advance(seconds=30) == start + timedelta(seconds=30)
        clock.advance(timedelta(minutes=1))
        assert (clock.now() - start).total_seconds() == 90

    def test_set(self) -> None:
        clock = FrozenClock()
        instant = datetime(2030, 6, 1, tzinfo=UTC)
        clock.set(instant)
        assert clock.now() == instant

    def test_naive_datetime_rejected(self) -> None:
        with pytest.raises(ValueError):
            FrozenClock(datetime(2024, 1, 1))
