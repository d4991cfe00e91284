"""Kernel security – caller identity and sensitive-data vocabulary."""
from mp_mediator.kernel.security.identity import ANONYMOUS, CurrentUser, CurrentUserProvider
from mp_mediator.kernel.security.pii import DEFAULT_SENSITIVE_FIELDS, is_sensitive, normalize_field_name

__all__ = [
    "ANONYMOUS",
    "CurrentUser",
    "CurrentUserProvider",
    "DEFAULT_SENSITIVE_FIELDS",
    "is_sensitive",
    "normalize_field_name",
]
