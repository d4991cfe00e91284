"""Infrastructure errors: I/O failures and unit-of-work faults."""

from __future__ import annotations

from typing import Any

from mp_mediator.kernel.errors.base import BaseError, ErrorCategory


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"
    category = ErrorCategory.INFRASTRUCTURE


class ExternalServiceError(InfrastructureError):
    """An external service returned an unexpected response."""

    default_code = "external_service_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"External service '{service}' error", **kwargs)
        self.service = service
        self.status_code = status_code


class RollbackError(InfrastructureError):
    """Rolling back a unit of work failed.

    ``original`` is the failure that triggered the rollback, if any.
    """

    default_code = "rollback_failed"
    severity = "critical"

    def __init__(
        self,
        message: str = "Unit of work rollback failed",
        *,
        original: BaseException | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.original = original


class CommitError(InfrastructureError):
    """Commit failed after the handler succeeded; effects may be partially applied."""

    default_code = "commit_failed"
    category = ErrorCategory.CONSISTENCY
    severity = "critical"

    def __init__(self, message: str = "Unit of work commit failed", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


__all__ = [
    "CommitError",
    "ExternalServiceError",
    "InfrastructureError",
    "RollbackError",
]
