"""Application validation – ValidationFailure."""
from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass(frozen=True)
class ValidationFailure:
    """One failed rule: field path, message and optional machine-readable code."""

    field: str
    message: str
    code: str | None = None
    attempted_value: Any = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"field": self.field, "message": self.message}
        if self.code is not None:
            payload["code"] = self.code
        return payload


def group_by_field(failures: list[ValidationFailure]) -> list[ValidationFailure]:
    """Stable regroup: fields in first-seen order, failures within a field in input order."""
    buckets: dict[str, list[ValidationFailure]] = {}
    for failure in failures:
        buckets.setdefault(failure.field, []).append(failure)
    return [failure for bucket in buckets.values() for failure in bucket]


__all__ = ["ValidationFailure", "group_by_field"]
