"""Observability – SensitiveFieldsFilter, a structlog processor.

Last line of defence: behaviors already mask payloads, but fields bound by
application code still pass through here before rendering.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mp_mediator.kernel.security.pii import DEFAULT_SENSITIVE_FIELDS, is_sensitive


class SensitiveFieldsFilter:
    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = sensitive_fields or DEFAULT_SENSITIVE_FIELDS

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        return self.redact_deep(event_dict)

    def redact(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Top-level keys only."""
        return {k: self.REDACTED if self._hit(k) else v for k, v in data.items()}

    def redact_deep(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return {k: self.REDACTED if self._hit(k) else self._walk(v) for k, v in data.items()}

    def _walk(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return self.redact_deep(value)
        if isinstance(value, list):
            return [self._walk(item) for item in value]
        return value

    def _hit(self, key: Any) -> bool:
        return isinstance(key, str) and is_sensitive(key, self._fields)


__all__ = ["SensitiveFieldsFilter"]
