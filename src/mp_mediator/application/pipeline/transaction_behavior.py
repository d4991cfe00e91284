"""Application pipeline – TransactionBehavior.

Wraps command handlers in a unit of work. Queries pass straight through.
A nested command dispatched while a unit of work is active joins it and
leaves commit/rollback to the outermost dispatch.
"""
from __future__ import annotations

import asyncio
from typing import Any

from mp_mediator.application.context import DispatchContext
from mp_mediator.application.cqrs.requests import is_command
from mp_mediator.application.pipeline.behavior import Behavior, Next, caller_fields
from mp_mediator.kernel.ddd import TransactionManager
from mp_mediator.kernel.errors import CommitError, RollbackError
from mp_mediator.kernel.types import Err
from mp_mediator.observability.logging import LogLevel, LogSink, StructlogSink


class TransactionBehavior(Behavior):
    """Commit on success, roll back on any failure, cancellation included.

    The original error always propagates unchanged. Only a failing commit
    (after the handler succeeded) or a failing rollback raise new errors:
    :class:`CommitError` and :class:`RollbackError`.
    """

    def __init__(self, manager: TransactionManager, sink: LogSink | None = None) -> None:
        self._manager = manager
        self._sink = sink or StructlogSink()

    async def __call__(self, request: Any, context: DispatchContext, next_: Next) -> Any:
        if not is_command(request):
            return await next_(request, context)

        name = type(request).__name__
        if context.transaction is not None and self._manager.is_active(context.transaction):
            self._sink.emit(LogLevel.DEBUG, "transaction.joined", {"request": name, **caller_fields(context)})
            return await next_(request, context)

        handle = await self._manager.begin()
        context.transaction = handle
        self._sink.emit(LogLevel.DEBUG, "transaction.began", {"request": name, **caller_fields(context)})
        try:
            try:
                result = await next_(request, context)
            except (Exception, asyncio.CancelledError) as exc:
                await self._rollback(name, context, handle, exc)
                raise
            if isinstance(result, Err):
                await self._rollback(name, context, handle, result.error)
                return result
            await self._commit(name, context, handle)
            return result
        finally:
            context.transaction = None

    async def _commit(self, name: str, context: DispatchContext, handle: Any) -> None:
        try:
            await self._manager.save_changes(handle)
            await self._manager.commit(handle)
        except asyncio.CancelledError:
            await self._rollback(name, context, handle, None)
            raise
        except Exception as exc:
            self._sink.emit(
                LogLevel.CRITICAL,
                "transaction.commit_failed",
                {"request": name, **caller_fields(context), "error_type": type(exc).__name__, "exc_info": exc},
            )
            await self._rollback_quietly(name, context, handle)
            raise CommitError(f"Commit failed after {name} succeeded", cause=exc) from exc
        self._sink.emit(LogLevel.DEBUG, "transaction.committed", {"request": name, **caller_fields(context)})

    async def _rollback(
        self,
        name: str,
        context: DispatchContext,
        handle: Any,
        original: BaseException | None,
    ) -> None:
        try:
            await self._manager.rollback(handle)
        except Exception as exc:
            self._log_rollback_failure(name, context, exc)
            if original is None or isinstance(original, asyncio.CancelledError):
                # cancellation is re-raised by the caller
                return
            raise RollbackError(original=original, cause=exc) from exc
        self._sink.emit(
            LogLevel.INFO,
            "transaction.rolled_back",
            {
                "request": name,
                **caller_fields(context),
                "reason": type(original).__name__ if original is not None else "cancelled",
            },
        )

    async def _rollback_quietly(self, name: str, context: DispatchContext, handle: Any) -> None:
        try:
            await self._manager.rollback(handle)
        except Exception as exc:
            self._log_rollback_failure(name, context, exc)

    def _log_rollback_failure(self, name: str, context: DispatchContext, exc: Exception) -> None:
        self._sink.emit(
            LogLevel.CRITICAL,
            "transaction.rollback_failed",
            {"request": name, **caller_fields(context), "error_type": type(exc).__name__, "exc_info": exc},
        )


__all__ = ["TransactionBehavior"]
