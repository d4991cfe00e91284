"""Config validation errors.

All of them are configuration errors: raised at startup, never wrapped in
``Err`` by ``Mediator.send`` and never retried.
"""
from mp_mediator.kernel.errors import ConfigurationError


class ConfigError(ConfigurationError):
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' is required but not set",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """Present but unusable, e.g. a negative threshold or non-numeric port."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}'={value!r} rejected: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
