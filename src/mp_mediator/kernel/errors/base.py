"""Root error class and error categories for the mp-mediator hierarchy."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Classification preserved intact through the behavior chain."""

    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    DOMAIN = "domain"
    INFRASTRUCTURE = "infrastructure"
    CONSISTENCY = "consistency"
    UNEXPECTED = "unexpected"


class BaseError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Arbitrary extra context (serialisable dict).
        cause: Original exception that triggered this error.
    """

    default_code: str = "base_error"
    category: ErrorCategory = ErrorCategory.UNEXPECTED
    severity: str = "error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        self.correlation_id: str | None = None
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        """Return a JSON-serialisable single-line string representation."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (safe for logging / HTTP responses)."""
        payload: dict[str, Any] = {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
        }
        if self.correlation_id is not None:
            payload["correlation_id"] = self.correlation_id
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


def classify(exc: BaseException) -> ErrorCategory:
    """Return the :class:`ErrorCategory` of *exc*; foreign exceptions are ``UNEXPECTED``."""
    if isinstance(exc, BaseError):
        return exc.category
    return ErrorCategory.UNEXPECTED


__all__ = ["BaseError", "ErrorCategory", "classify"]
