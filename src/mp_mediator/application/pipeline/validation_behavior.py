"""Application pipeline – ValidationBehavior.

Runs every validator registered for the request type before the rest of
the chain. Any failure raises :class:`ValidationError` and ``next`` is never
called, so the handler never sees an invalid request.
"""
from __future__ import annotations

import asyncio
import dataclasses
from collections.abc import Sequence
from typing import Any

from mp_mediator.application.context import DispatchContext
from mp_mediator.application.masking import DataMasker, truncate
from mp_mediator.application.pipeline.behavior import Behavior, Next, caller_fields, mark_logged
from mp_mediator.application.validation.failure import ValidationFailure, group_by_field
from mp_mediator.application.validation.registry import ValidatorRegistry
from mp_mediator.application.validation.validator import Validator
from mp_mediator.kernel.errors import ValidationError
from mp_mediator.kernel.security.pii import DEFAULT_SENSITIVE_FIELDS
from mp_mediator.observability.logging import LogLevel, LogSink, StructlogSink


@dataclasses.dataclass(frozen=True)
class ValidationOptions:
    """Validation behavior knobs.

    ``stop_on_first_failure`` runs validators one by one and stops after the
    first validator that reports failures; only the failures found up to
    that point are reported. Off by default: completeness over latency.
    """

    stop_on_first_failure: bool = False
    parallel: bool = True
    max_errors: int = 0
    excluded_request_types: frozenset[str] = frozenset()
    warn_on_missing_validators: bool = False
    sensitive_fields: frozenset[str] = DEFAULT_SENSITIVE_FIELDS
    max_attempted_value_length: int = 100


class ValidationBehavior(Behavior):
    """Fail fast with an aggregated :class:`ValidationError`."""

    def __init__(
        self,
        validators: ValidatorRegistry,
        options: ValidationOptions | None = None,
        sink: LogSink | None = None,
    ) -> None:
        self._validators = validators
        self._options = options or ValidationOptions()
        self._sink = sink or StructlogSink()
        self._masker = DataMasker(sensitive_fields=self._options.sensitive_fields)

    @property
    def options(self) -> ValidationOptions:
        return self._options

    async def __call__(self, request: Any, context: DispatchContext, next_: Next) -> Any:
        name = type(request).__name__
        if name in self._options.excluded_request_types:
            self._sink.emit(LogLevel.DEBUG, "validation.skipped", {"request": name, "reason": "excluded"})
            return await next_(request, context)

        validators = self._validators.for_request(type(request))
        if not validators:
            if self._options.warn_on_missing_validators:
                self._sink.emit(
                    LogLevel.WARNING,
                    "validation.missing_validators",
                    {"request": name, **caller_fields(context, include_user=False)},
                )
            return await next_(request, context)

        failures = await self._collect(validators, request, context)
        if failures:
            failures = self._limit(name, failures)
            sanitized = [self._sanitize(f) for f in failures]
            self._log_failures(name, context, sanitized)
            error = ValidationError(sanitized)
            mark_logged(context, error)
            raise error
        return await next_(request, context)

    async def _collect(
        self,
        validators: tuple[Validator[Any], ...],
        request: Any,
        context: DispatchContext,
    ) -> list[ValidationFailure]:
        failures: list[ValidationFailure] = []
        if self._options.stop_on_first_failure:
            for validator in validators:
                context.cancellation.raise_if_cancelled()
                found = await validator.validate(request, context)
                if found:
                    failures.extend(found)
                    break
        elif self._options.parallel:
            for found in await self._run_parallel(validators, request, context):
                failures.extend(found)
        else:
            for validator in validators:
                context.cancellation.raise_if_cancelled()
                failures.extend(await validator.validate(request, context))
        return group_by_field(failures)

    @staticmethod
    async def _run_parallel(
        validators: tuple[Validator[Any], ...],
        request: Any,
        context: DispatchContext,
    ) -> list[Sequence[ValidationFailure]]:
        # A crashing validator cancels its siblings; none outlives the dispatch.
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(v.validate(request, context)) for v in validators]
        except ExceptionGroup as errors:
            raise errors.exceptions[0] from None
        return [task.result() for task in tasks]

    def _limit(self, name: str, failures: list[ValidationFailure]) -> list[ValidationFailure]:
        limit = self._options.max_errors
        if limit <= 0 or len(failures) <= limit:
            return failures
        self._sink.emit(
            LogLevel.WARNING,
            "validation.truncated",
            {"request": name, "total_errors": len(failures), "max_errors": limit},
        )
        return failures[:limit]

    def _sanitize(self, failure: ValidationFailure) -> ValidationFailure:
        value = self._masker.mask_value(failure.field, failure.attempted_value)
        if value is not None and not isinstance(value, (bool, int, float)):
            value = truncate(str(value), self._options.max_attempted_value_length)
        return dataclasses.replace(failure, attempted_value=value)

    def _log_failures(
        self, name: str, context: DispatchContext, failures: list[ValidationFailure]
    ) -> None:
        fields_failed = list(dict.fromkeys(f.field for f in failures))
        self._sink.emit(
            LogLevel.WARNING,
            "validation.failed",
            {
                "request": name,
                **caller_fields(context),
                "error_count": len(failures),
                "fields": fields_failed,
                "strategy": self._strategy(),
                "failures": [
                    {**f.to_dict(), "attempted_value": f.attempted_value} for f in failures
                ],
            },
        )

    def _strategy(self) -> str:
        if self._options.stop_on_first_failure:
            return "stop_on_first_failure"
        return "parallel" if self._options.parallel else "sequential"


__all__ = ["ValidationBehavior", "ValidationOptions"]
