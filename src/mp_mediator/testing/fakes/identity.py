"""Testing fakes – StaticCurrentUserProvider."""
from __future__ import annotations

from mp_mediator.kernel.security.identity import CurrentUser


class StaticCurrentUserProvider:
    """Returns the same user (or ``None``) for every dispatch."""

    def __init__(self, user: CurrentUser | None = None) -> None:
        self.user = user

    def current_user(self) -> CurrentUser | None:
        return self.user


__all__ = ["StaticCurrentUserProvider"]
