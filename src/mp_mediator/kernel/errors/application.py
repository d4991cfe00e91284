"""Application-layer errors: configuration faults and request validation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from mp_mediator.kernel.errors.base import BaseError, ErrorCategory

if TYPE_CHECKING:
    from mp_mediator.application.validation.failure import ValidationFailure


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class ConfigurationError(ApplicationError):
    """Wiring fault detected at startup or first dispatch. Never retried."""

    default_code = "configuration_error"
    category = ErrorCategory.CONFIGURATION
    severity = "critical"


class HandlerNotFoundError(ConfigurationError):
    """No handler is registered for the dispatched request type."""

    default_code = "handler_not_found"

    def __init__(self, request_type: type, **kwargs: Any) -> None:
        super().__init__(f"No handler registered for {request_type.__name__!r}", **kwargs)
        self.request_type = request_type


class DuplicateHandlerError(ConfigurationError):
    """A second handler was registered for the same request type."""

    default_code = "duplicate_handler"

    def __init__(self, request_type: type, **kwargs: Any) -> None:
        super().__init__(
            f"A handler is already registered for {request_type.__name__!r}", **kwargs
        )
        self.request_type = request_type


class OrphanValidatorError(ConfigurationError):
    """Validators were registered for request types that have no handler."""

    default_code = "orphan_validator"

    def __init__(self, request_types: Iterable[type], **kwargs: Any) -> None:
        self.request_types = tuple(request_types)
        names = ", ".join(sorted(t.__name__ for t in self.request_types))
        super().__init__(f"Validators registered without a handler: {names}", **kwargs)


class PipelineContractError(ConfigurationError):
    """A behavior broke the chain contract (e.g. called ``next`` twice)."""

    default_code = "pipeline_contract_violation"


class ValidationError(ApplicationError):
    """Request data does not meet validation rules.

    ``failures`` keeps every :class:`ValidationFailure` in reporting order;
    ``errors`` is the same list as plain dicts.
    """

    default_code = "validation_error"
    category = ErrorCategory.VALIDATION
    severity = "warning"

    def __init__(
        self,
        failures: Sequence[ValidationFailure],
        message: str = "One or more validation failures have occurred.",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.failures: tuple[ValidationFailure, ...] = tuple(failures)

    @property
    def errors(self) -> list[dict[str, Any]]:
        return [failure.to_dict() for failure in self.failures]

    def by_field(self) -> dict[str, list[str]]:
        """Messages grouped by field path, in reporting order."""
        grouped: dict[str, list[str]] = {}
        for failure in self.failures:
            grouped.setdefault(failure.field, []).append(failure.message)
        return grouped

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "DuplicateHandlerError",
    "HandlerNotFoundError",
    "OrphanValidatorError",
    "PipelineContractError",
    "ValidationError",
]
