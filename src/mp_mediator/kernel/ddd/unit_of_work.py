"""Unit of Work port: transactional boundary consumed by the transaction behavior."""

from __future__ import annotations

import abc
from typing import Any


class TransactionManager(abc.ABC):
    """Port: manage unit-of-work lifecycle (begin/commit/rollback).

    The handle returned by :meth:`begin` is opaque to the pipeline; it is
    stored on the dispatch context so handlers can reach their session.
    """

    @abc.abstractmethod
    async def begin(self) -> Any: ...

    async def save_changes(self, handle: Any) -> None:  # noqa: B027
        """Persist pending changes before commit. No-op unless overridden."""

    @abc.abstractmethod
    async def commit(self, handle: Any) -> None: ...

    @abc.abstractmethod
    async def rollback(self, handle: Any) -> None: ...

    @abc.abstractmethod
    def is_active(self, handle: Any) -> bool: ...


__all__ = ["TransactionManager"]
