"""Application validation – RuleValidator with fluent per-field rules.

Usage::

    class CreateThingValidator(RuleValidator[CreateThing]):
        def __init__(self) -> None:
            super().__init__()
            self.rule_for("name").not_empty().max_length(200)
            self.rule_for("price").greater_than(0)
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from mp_mediator.application.validation.failure import ValidationFailure
from mp_mediator.application.validation.validator import Validator

if TYPE_CHECKING:
    from mp_mediator.application.context import DispatchContext

TRequest = TypeVar("TRequest")

_Check = Callable[[Any], bool]


class FieldRules:
    """Ordered checks for one field; every failing check is reported."""

    def __init__(self, field: str, getter: Callable[[Any], Any]) -> None:
        self.field = field
        self._getter = getter
        self._checks: list[tuple[_Check, str, str]] = []

    def must(self, predicate: _Check, message: str, code: str = "predicate") -> "FieldRules":
        self._checks.append((predicate, message, code))
        return self

    def not_empty(self, message: str | None = None) -> "FieldRules":
        def check(value: Any) -> bool:
            if value is None:
                return False
            if isinstance(value, str):
                return bool(value.strip())
            try:
                return len(value) > 0
            except TypeError:
                return True

        return self.must(check, message or f"'{self.field}' must not be empty.", "not_empty")

    def max_length(self, limit: int, message: str | None = None) -> "FieldRules":
        return self.must(
            lambda v: v is None or len(v) <= limit,
            message or f"'{self.field}' must be {limit} characters or fewer.",
            "max_length",
        )

    def min_length(self, limit: int, message: str | None = None) -> "FieldRules":
        return self.must(
            lambda v: v is not None and len(v) >= limit,
            message or f"'{self.field}' must be at least {limit} characters.",
            "min_length",
        )

    def matches(self, pattern: str, message: str | None = None) -> "FieldRules":
        compiled = re.compile(pattern)
        return self.must(
            lambda v: isinstance(v, str) and compiled.fullmatch(v) is not None,
            message or f"'{self.field}' is not in the correct format.",
            "matches",
        )

    def greater_than(self, bound: Any, message: str | None = None) -> "FieldRules":
        return self.must(
            lambda v: v is not None and v > bound,
            message or f"'{self.field}' must be greater than {bound}.",
            "greater_than",
        )

    def evaluate(self, request: Any) -> list[ValidationFailure]:
        value = self._getter(request)
        return [
            ValidationFailure(self.field, message, code, value)
            for predicate, message, code in self._checks
            if not predicate(value)
        ]


class RuleValidator(Validator[TRequest], Generic[TRequest]):
    """Validator assembled from :meth:`rule_for` declarations."""

    def __init__(self) -> None:
        self._rules: list[FieldRules] = []

    def rule_for(self, field: str, getter: Callable[[Any], Any] | None = None) -> FieldRules:
        """Start rules for *field*; nested paths (``"address.city"``) resolve attribute by attribute."""
        rules = FieldRules(field, getter or _attribute_path(field))
        self._rules.append(rules)
        return rules

    async def validate(
        self, request: TRequest, context: DispatchContext
    ) -> Sequence[ValidationFailure]:
        failures: list[ValidationFailure] = []
        for rules in self._rules:
            failures.extend(rules.evaluate(request))
        return failures


def _attribute_path(path: str) -> Callable[[Any], Any]:
    parts = path.split(".")

    def get(obj: Any) -> Any:
        for part in parts:
            if obj is None:
                return None
            obj = obj.get(part) if isinstance(obj, dict) else getattr(obj, part, None)
        return obj

    return get


__all__ = ["FieldRules", "RuleValidator"]
