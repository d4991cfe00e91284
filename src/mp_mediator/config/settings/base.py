"""Config settings – Settings base class.

Subclasses are dataclasses whose fields map to ``<PREFIX>_<FIELD>``
environment variables; ``_validate`` runs after construction whichever
loader built the instance.
"""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar


@dataclasses.dataclass
class Settings:
    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override for cross-field checks; raise ``InvalidSettingValueError``."""

    @classmethod
    def env_key(cls, field_name: str) -> str:
        key = f"{cls._prefix}_{field_name}" if cls._prefix else field_name
        return key.upper()

    def as_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


__all__ = ["Settings"]
