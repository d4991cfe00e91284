"""Application masking – explicit per-field masking rules."""
from __future__ import annotations

import dataclasses
import fnmatch
import hashlib
from typing import Any, Literal

MASK = "***MASKED***"

MaskingStrategy = Literal["redact", "hash", "partial"]


@dataclasses.dataclass(frozen=True)
class MaskingRule:
    """Mask keys matching *field_pattern* (fnmatch, case-insensitive).

    ``hash`` keeps values correlatable across log lines without revealing
    them; ``partial`` keeps ``keep_start``/``keep_end`` characters visible.
    """

    field_pattern: str
    strategy: MaskingStrategy = "redact"
    salt: str = ""
    keep_start: int = 2
    keep_end: int = 2

    def __post_init__(self) -> None:
        if self.strategy not in ("redact", "hash", "partial"):
            raise ValueError(f"Unknown masking strategy {self.strategy!r}")

    def matches(self, key: str) -> bool:
        return fnmatch.fnmatchcase(key.lower(), self.field_pattern.lower())

    def apply(self, value: Any) -> str:
        if self.strategy == "hash":
            return hashlib.sha256(f"{self.salt}{value}".encode()).hexdigest()[:8]
        if self.strategy == "partial":
            text = str(value)
            hidden = len(text) - self.keep_start - self.keep_end
            if hidden <= 0:
                return "*" * len(text)
            return text[: self.keep_start] + "*" * hidden + text[len(text) - self.keep_end :]
        return MASK


__all__ = ["MASK", "MaskingRule", "MaskingStrategy"]
