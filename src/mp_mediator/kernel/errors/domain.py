"""Domain errors: raised by handlers when a business rule says no.

They pass through every behavior unchanged; the transaction behavior rolls
back and the logging behavior reports them with category ``domain``.
"""

from __future__ import annotations

from typing import Any

from mp_mediator.kernel.errors.base import BaseError, ErrorCategory


class DomainError(BaseError):
    default_code = "domain_error"
    category = ErrorCategory.DOMAIN


class InvariantViolationError(DomainError):
    """An aggregate would end up in an invalid state; ``rule`` names the invariant."""

    default_code = "invariant_violation"

    def __init__(self, message: str, *, rule: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.rule = rule
        if rule is not None:
            self.detail.setdefault("rule", rule)


class NotFoundError(DomainError):
    default_code = "not_found"

    def __init__(self, resource: str, identifier: Any = None, **kwargs: Any) -> None:
        where = f" '{identifier}'" if identifier is not None else ""
        super().__init__(f"{resource}{where} not found", **kwargs)
        self.resource = resource
        self.identifier = identifier
        self.detail.setdefault("resource", resource)
        if identifier is not None:
            self.detail.setdefault("identifier", str(identifier))


class ConflictError(DomainError):
    """The request clashes with current state (duplicate key, stale version)."""

    default_code = "conflict"


__all__ = [
    "ConflictError",
    "DomainError",
    "InvariantViolationError",
    "NotFoundError",
]
