"""Application validation – validator port, failures, fluent rules."""
from mp_mediator.application.validation.failure import ValidationFailure, group_by_field
from mp_mediator.application.validation.registry import ValidatorRegistry
from mp_mediator.application.validation.rules import FieldRules, RuleValidator
from mp_mediator.application.validation.validator import (
    FunctionValidator,
    Validator,
    ValidatorFn,
    as_validator,
)

__all__ = [
    "FieldRules",
    "FunctionValidator",
    "RuleValidator",
    "ValidationFailure",
    "Validator",
    "ValidatorFn",
    "ValidatorRegistry",
    "as_validator",
    "group_by_field",
]
