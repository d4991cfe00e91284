"""Unit tests for validators, fluent rules and the validator registry."""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Any

import pytest

from mp_mediator.application.context import DispatchContext
from mp_mediator.application.validation import (
    FunctionValidator,
    RuleValidator,
    ValidationFailure,
    ValidatorRegistry,
    as_validator,
    group_by_field,
)
from mp_mediator.kernel.errors import ConfigurationError


@dataclasses.dataclass
class Address:
    city: str


@dataclasses.dataclass
class Signup:
    name: str = "ada"
    email: str = "ada@example.com"
    age: int = 30
    address: Address | None = None


class SignupValidator(RuleValidator[Signup]):
    def __init__(self) -> None:
        super().__init__()
        self.rule_for("name").not_empty().max_length(5)
        self.rule_for("email").matches(r"[^@]+@[^@]+")
        self.rule_for("age").greater_than(17)
        self.rule_for("address.city").not_empty("City is required.")


def validate(validator: Any, request: Any) -> list[ValidationFailure]:
    return list(asyncio.run(validator.validate(request, DispatchContext())))


# ---------------------------------------------------------------------------
# ValidationFailure
# ---------------------------------------------------------------------------


class TestValidationFailure:
    def test_to_dict_omits_missing_code(self) -> None:
        assert ValidationFailure("name", "bad").to_dict() == {"field": "name", "message": "bad"}

    def test_group_by_field_is_stable(self) -> None:
        failures = [
            ValidationFailure("a", "1"),
            ValidationFailure("b", "2"),
            ValidationFailure("a", "3"),
        ]
        assert [f.message for f in group_by_field(failures)] == ["1", "3", "2"]


# ---------------------------------------------------------------------------
# RuleValidator
# ---------------------------------------------------------------------------


class TestRuleValidator:
    def test_valid_request(self) -> None:
        assert validate(SignupValidator(), Signup(address=Address("Lisbon"))) == []

    def test_every_failing_rule_is_reported(self) -> None:
        failures = validate(SignupValidator(), Signup(name="", email="nope", age=10))
        assert [(f.field, f.code) for f in failures] == [
            ("name", "not_empty"),
            ("email", "matches"),
            ("age", "greater_than"),
            ("address.city", "not_empty"),
        ]

    def test_default_not_empty_message(self) -> None:
        failures = validate(SignupValidator(), Signup(name="   ", address=Address("x")))
        assert failures[0].message == "'name' must not be empty."
        assert failures[0].attempted_value == "   "

    def test_max_length(self) -> None:
        failures = validate(SignupValidator(), Signup(name="Bartholomew", address=Address("x")))
        assert [f.code for f in failures] == ["max_length"]

    def test_nested_path_custom_message(self) -> None:
        failures = validate(SignupValidator(), Signup(address=Address("")))
        assert failures == [ValidationFailure("address.city", "City is required.", "not_empty", "")]

    def test_dict_requests(self) -> None:
        class DictValidator(RuleValidator[dict]):
            def __init__(self) -> None:
                super().__init__()
                self.rule_for("user.name").min_length(2)

        failures = validate(DictValidator(), {"user": {"name": "a"}})
        assert failures[0].code == "min_length"

    def test_custom_predicate(self) -> None:
        class EvenValidator(RuleValidator[Signup]):
            def __init__(self) -> None:
                super().__init__()
                self.rule_for("age").must(lambda v: v % 2 == 0, "Age must be even.")

        failures = validate(EvenValidator(), Signup(age=31))
        assert failures[0].code == "predicate"
        assert failures[0].message == "Age must be even."


# ---------------------------------------------------------------------------
# FunctionValidator
# ---------------------------------------------------------------------------


class TestFunctionValidator:
    def test_sync_function(self) -> None:
        validator = as_validator(lambda request, context: [ValidationFailure("x", "bad")])
        assert isinstance(validator, FunctionValidator)
        assert validate(validator, object())[0].field == "x"

    def test_async_function(self) -> None:
        async def check(request: Any, context: DispatchContext) -> list[ValidationFailure]:
            return []

        assert validate(FunctionValidator(check), object()) == []

    def test_none_result_means_valid(self) -> None:
        assert validate(FunctionValidator(lambda request, context: None), object()) == []

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(TypeError):
            as_validator("nope")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# ValidatorRegistry
# ---------------------------------------------------------------------------


class TestValidatorRegistry:
    def test_registration_order_kept(self) -> None:
        first = FunctionValidator(lambda r, c: [])
        second = FunctionValidator(lambda r, c: [])
        registry = ValidatorRegistry()
        registry.register(Signup, first)
        registry.register(Signup, second)
        assert registry.for_request(Signup) == (first, second)

    def test_unknown_type_has_none(self) -> None:
        assert ValidatorRegistry().for_request(Signup) == ()

    def test_frozen_rejects_registration(self) -> None:
        registry = ValidatorRegistry()
        registry.register(Signup, lambda r, c: [])
        registry.freeze()
        assert registry.frozen
        assert len(registry.for_request(Signup)) == 1
        with pytest.raises(ConfigurationError):
            registry.register(Signup, lambda r, c: [])

    def test_request_types(self) -> None:
        registry = ValidatorRegistry()
        registry.register(Signup, lambda r, c: [])
        assert registry.request_types() == frozenset({Signup})
