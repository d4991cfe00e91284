"""Config settings – EnvSettingsLoader, DotenvSettingsLoader.

Values are coerced from their string form according to the field's type
hint: ``bool`` accepts ``1/true/yes/on``, ``list`` and ``frozenset`` take a
comma-separated string. Unset fields keep their dataclass default.
"""
from __future__ import annotations

import abc
import dataclasses
import os
import typing
from collections.abc import Mapping
from typing import Any, TypeVar

from dotenv import load_dotenv

from mp_mediator.config.settings.base import Settings
from mp_mediator.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class SettingsLoader(abc.ABC):
    """Port: build a :class:`Settings` subclass from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Reads ``<PREFIX>_<FIELD>`` keys from *environ* (``os.environ`` by default)."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        hints = typing.get_type_hints(settings_class)
        values: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):
            key = settings_class.env_key(field.name)
            if key not in environ:
                if not _has_default(field):
                    raise MissingRequiredSettingError(key)
                continue
            raw = environ[key]
            try:
                values[field.name] = _coerce(raw, hints.get(field.name, str))
            except ValueError as exc:
                raise InvalidSettingValueError(key, raw, str(exc)) from exc

        try:
            return settings_class(**values)
        except ConfigError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Cannot build {settings_class.__name__}: {exc}", cause=exc) from exc


class DotenvSettingsLoader(SettingsLoader):
    """Loads *env_file* into the process environment, then reads it like :class:`EnvSettingsLoader`.

    Variables already set in the environment win unless ``override=True``.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        load_dotenv(self._env_file, override=self._override)
        return EnvSettingsLoader().load(settings_class)


def _has_default(field: dataclasses.Field[Any]) -> bool:
    return field.default is not dataclasses.MISSING or field.default_factory is not dataclasses.MISSING


def _coerce(raw: str, hint: Any) -> Any:
    if hint is bool:
        return raw.strip().lower() in _TRUTHY
    if hint in (int, float):
        return hint(raw.strip())
    origin = typing.get_origin(hint)
    if origin in (list, frozenset):
        items = [part.strip() for part in raw.split(",")]
        return origin(item for item in items if item)
    return raw


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
