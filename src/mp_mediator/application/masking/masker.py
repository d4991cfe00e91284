"""Application masking – DataMasker and PayloadMasker."""
from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from typing import Any

from mp_mediator.application.masking.rules import MASK, MaskingRule
from mp_mediator.kernel.security.pii import DEFAULT_SENSITIVE_FIELDS, is_sensitive

TRUNCATED_SUFFIX = "... (truncated)"


class DataMasker:
    """Recursively masks mapping values.

    Explicit *rules* win; any remaining key recognised as sensitive is
    redacted.
    """

    def __init__(
        self,
        rules: list[MaskingRule] | None = None,
        sensitive_fields: frozenset[str] = DEFAULT_SENSITIVE_FIELDS,
    ) -> None:
        self._rules = tuple(rules or ())
        self._sensitive_fields = sensitive_fields

    def mask(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return self.mask_any(dict(data))

    def mask_any(self, node: Any) -> Any:
        """Mask mappings nested anywhere inside *node*."""
        if isinstance(node, Mapping):
            return {key: self._mask_entry(str(key), value) for key, value in node.items()}
        if isinstance(node, (list, tuple)):
            return [self.mask_any(item) for item in node]
        return node

    def mask_value(self, field_path: str, value: Any) -> Any:
        """Mask a single attempted value reported for *field_path*."""
        if is_sensitive(field_path, self._sensitive_fields):
            return MASK
        return self.mask_any(value)

    def _mask_entry(self, key: str, value: Any) -> Any:
        rule = next((r for r in self._rules if r.matches(key)), None)
        if rule is not None:
            return rule.apply(value)
        if is_sensitive(key, self._sensitive_fields):
            return MASK
        return self.mask_any(value)


class PayloadMasker:
    """Serialise a request/response for logging: to plain data, masked, JSON, truncated."""

    def __init__(self, masker: DataMasker | None = None, max_length: int = 1000, max_depth: int = 3) -> None:
        self._masker = masker or DataMasker()
        self._max_length = max_length
        self._max_depth = max_depth

    def render(self, payload: Any) -> str | None:
        if payload is None:
            return None
        data = self._masker.mask_any(self._to_plain(payload, 0))
        text = json.dumps(data, ensure_ascii=False, default=str, separators=(",", ":"))
        return truncate(text, self._max_length)

    def _to_plain(self, obj: Any, depth: int) -> Any:
        if depth > self._max_depth:
            return repr(obj)
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            obj = {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
        elif hasattr(obj, "model_dump"):
            obj = obj.model_dump()
        elif hasattr(obj, "__dict__") and not isinstance(obj, type):
            obj = {k: v for k, v in vars(obj).items() if not k.startswith("_")}
        if isinstance(obj, Mapping):
            return {str(k): self._to_plain(v, depth + 1) for k, v in obj.items()}
        if isinstance(obj, (list, tuple, set, frozenset)):
            return [self._to_plain(item, depth + 1) for item in obj]
        return obj


def truncate(text: str, max_length: int) -> str:
    """Cut *text* to *max_length* characters plus a marker; ``0`` means unlimited."""
    if max_length > 0 and len(text) > max_length:
        return text[:max_length] + TRUNCATED_SUFFIX
    return text


__all__ = ["MASK", "TRUNCATED_SUFFIX", "DataMasker", "PayloadMasker", "truncate"]
