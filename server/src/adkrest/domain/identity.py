"""Identity triple addressing a session from outside the service."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SessionIdentity:
    """``session_id`` is empty when the caller lets the store pick one."""

    app_name: str
    user_id: str
    session_id: str = ""


__all__ = ["SessionIdentity"]
