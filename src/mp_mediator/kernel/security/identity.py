"""Kernel security – CurrentUser and the identity provider port."""
from __future__ import annotations

import dataclasses
from typing import Protocol


@dataclasses.dataclass(frozen=True)
class CurrentUser:
    """Caller identity as seen by the pipeline."""
    id: str
    name: str | None = None
    is_authenticated: bool = True


ANONYMOUS = "Anonymous"


class CurrentUserProvider(Protocol):
    """Port: resolve the caller of the current dispatch, if any."""

    def current_user(self) -> CurrentUser | None: ...


__all__ = ["ANONYMOUS", "CurrentUser", "CurrentUserProvider"]
