"""SQLAlchemy adapter – SqlAlchemyTransactionManager.

The transaction handle is the ``AsyncSession`` itself, so handlers reach it
through ``context.transaction``::

    manager = SqlAlchemyTransactionManager(async_sessionmaker(engine))

    async def create_thing(command: CreateThing, context: DispatchContext) -> dict:
        session: AsyncSession = context.transaction
        session.add(ThingRow(name=command.name))
        ...
"""
from __future__ import annotations

from typing import Any

from mp_mediator.kernel.ddd import TransactionManager


class SqlAlchemyTransactionManager(TransactionManager):
    """SQLAlchemy async transaction manager, one session per unit of work."""

    def __init__(self, session_factory: Any) -> None:
        self._factory = session_factory

    async def begin(self) -> Any:
        session = self._factory()
        await session.begin()
        return session

    async def save_changes(self, handle: Any) -> None:
        await handle.flush()

    async def commit(self, handle: Any) -> None:
        try:
            await handle.commit()
        finally:
            await handle.close()

    async def rollback(self, handle: Any) -> None:
        try:
            await handle.rollback()
        finally:
            await handle.close()

    def is_active(self, handle: Any) -> bool:
        return bool(handle.in_transaction())


__all__ = ["SqlAlchemyTransactionManager"]
