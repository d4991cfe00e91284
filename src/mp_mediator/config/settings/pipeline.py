"""Config settings – PipelineSettings.

Every behavior option in one env-loadable dataclass (prefix ``MEDIATOR_``)::

    MEDIATOR_SLOW_REQUEST_THRESHOLD_MS=750
    MEDIATOR_STOP_ON_FIRST_FAILURE=true
    MEDIATOR_SENSITIVE_FIELDS=password,token,pin
"""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from mp_mediator.application.pipeline.logging_behavior import LoggingOptions
from mp_mediator.application.pipeline.performance_behavior import PerformanceThresholds
from mp_mediator.application.pipeline.validation_behavior import ValidationOptions
from mp_mediator.config.settings.base import Settings
from mp_mediator.config.validation import InvalidSettingValueError
from mp_mediator.kernel.security.pii import DEFAULT_SENSITIVE_FIELDS


@dataclasses.dataclass
class PipelineSettings(Settings):
    _prefix: ClassVar[str] = "MEDIATOR"

    # logging
    slow_request_threshold_ms: float = 1000.0
    log_request_data: bool = False
    log_response_data: bool = False
    max_serialized_length: int = 1000
    include_user_context: bool = True
    logging_excluded_request_types: frozenset[str] = frozenset()

    # performance
    fast_threshold_ms: float = 100.0
    normal_threshold_ms: float = 500.0
    acceptable_threshold_ms: float = 1000.0
    slow_threshold_ms: float = 3000.0
    performance_warning_threshold_ms: float = 500.0

    # validation
    stop_on_first_failure: bool = False
    parallel_validation: bool = True
    max_validation_errors: int = 0
    warn_on_missing_validators: bool = False
    validation_excluded_request_types: frozenset[str] = frozenset()

    sensitive_fields: frozenset[str] = DEFAULT_SENSITIVE_FIELDS

    def _validate(self) -> None:
        if self.slow_request_threshold_ms <= 0:
            raise InvalidSettingValueError(
                "slow_request_threshold_ms", self.slow_request_threshold_ms, "must be positive"
            )
        if self.max_serialized_length < 0:
            raise InvalidSettingValueError(
                "max_serialized_length", self.max_serialized_length, "must not be negative"
            )
        if self.max_validation_errors < 0:
            raise InvalidSettingValueError(
                "max_validation_errors", self.max_validation_errors, "must not be negative"
            )
        self.performance_thresholds()

    def logging_options(self) -> LoggingOptions:
        return LoggingOptions(
            slow_request_threshold_ms=self.slow_request_threshold_ms,
            log_request_data=self.log_request_data,
            log_response_data=self.log_response_data,
            max_serialized_length=self.max_serialized_length,
            include_user_context=self.include_user_context,
            excluded_request_types=frozenset(self.logging_excluded_request_types),
            sensitive_fields=frozenset(self.sensitive_fields),
        )

    def performance_thresholds(self) -> PerformanceThresholds:
        return PerformanceThresholds(
            fast_ms=self.fast_threshold_ms,
            normal_ms=self.normal_threshold_ms,
            acceptable_ms=self.acceptable_threshold_ms,
            slow_ms=self.slow_threshold_ms,
            warning_ms=self.performance_warning_threshold_ms,
        )

    def validation_options(self) -> ValidationOptions:
        return ValidationOptions(
            stop_on_first_failure=self.stop_on_first_failure,
            parallel=self.parallel_validation,
            max_errors=self.max_validation_errors,
            excluded_request_types=frozenset(self.validation_excluded_request_types),
            warn_on_missing_validators=self.warn_on_missing_validators,
            sensitive_fields=frozenset(self.sensitive_fields),
        )


__all__ = ["PipelineSettings"]
