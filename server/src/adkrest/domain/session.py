"""Validated, read-only session snapshot handed to the transport layer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from adkrest.errors import SessionValidationError
from adkrest.json_types import EventRecord, JsonValue


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Projection of an agent session for external consumption.

    Instances are validated on construction, so a snapshot that exists is a
    snapshot that passed every check. ``state`` and ``events`` may be empty but
    never ``None``; they are copied into a read-only mapping and a tuple.
    """

    session_id: str
    app_name: str
    user_id: str
    updated_at: int
    events: tuple[EventRecord, ...] | None
    state: Mapping[str, JsonValue] | None

    def __post_init__(self) -> None:
        self.validate()
        object.__setattr__(self, "state", MappingProxyType(dict(self.state or {})))
        object.__setattr__(self, "events", tuple(self.events or ()))

    def validate(self) -> None:
        """Raise on the first invalid field; the check order is fixed."""
        if not self.app_name:
            raise SessionValidationError("app_name", "app_name is empty in received session")
        if not self.user_id:
            raise SessionValidationError("user_id", "user_id is empty in received session")
        if not self.session_id:
            raise SessionValidationError("session_id", "session_id is empty in received session")
        if self.updated_at == 0:
            raise SessionValidationError("updated_at", "updated_at is empty")
        if self.state is None:
            raise SessionValidationError("state", "state is missing")
        if self.events is None:
            raise SessionValidationError("events", "events is missing")


__all__ = ["SessionSnapshot"]
