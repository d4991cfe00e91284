"""Kernel security – default sensitive field names and matching."""
from __future__ import annotations

import re

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "password", "passwd", "secret", "token", "apikey", "api_key",
    "authorization", "creditcard", "credit_card", "card_number", "cvv", "ssn",
})

_SEPARATORS = re.compile(r"[\s_\-.]")


def normalize_field_name(name: str) -> str:
    """``"API-Key"`` → ``"apikey"``; separators and case are ignored."""
    return _SEPARATORS.sub("", name).lower()


def is_sensitive(field_path: str, sensitive_fields: frozenset[str] = DEFAULT_SENSITIVE_FIELDS) -> bool:
    """True when any segment of a dotted/indexed *field_path* names a sensitive field.

    ``"user.password"``, ``"Credentials[0].ApiKey"`` and ``"access_token"``
    all match with the default set.
    """
    wanted = {normalize_field_name(f) for f in sensitive_fields}
    for segment in re.split(r"[.\[\]]", field_path):
        key = normalize_field_name(segment)
        if not key:
            continue
        if key in wanted or any(key.endswith(w) for w in wanted):
            return True
    return False


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "is_sensitive", "normalize_field_name"]
