"""Ports describing the session objects and store the service reads from."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any, Protocol

from adkrest.domain.identity import SessionIdentity
from adkrest.domain.state_delta import NormalizedStateDelta
from adkrest.json_types import EventRecord, JsonValue


class SessionSource(Protocol):
    """Live session object owned by a store."""

    @property
    def id(self) -> str:
        """Session identifier."""

    @property
    def app_name(self) -> str:
        """Owning application name."""

    @property
    def user_id(self) -> str:
        """Owning user identifier."""

    @property
    def last_update_time(self) -> datetime | float:
        """Last update as a datetime or Unix seconds."""

    @property
    def state(self) -> Mapping[str, Any] | None:
        """Current state entries."""

    @property
    def events(self) -> Iterable[object] | None:
        """Session events in order."""


class SessionStorePort(Protocol):
    """Store holding sessions and applying state changes to them."""

    def get(self, identity: SessionIdentity) -> SessionSource | None:
        """Return the session for ``identity`` or ``None`` when absent."""

    def create(
        self,
        identity: SessionIdentity,
        *,
        state: Mapping[str, JsonValue],
        events: Sequence[EventRecord],
    ) -> SessionSource:
        """Create a session; an empty ``identity.session_id`` lets the store assign one."""

    def apply_state_delta(
        self,
        identity: SessionIdentity,
        delta: NormalizedStateDelta,
    ) -> SessionSource:
        """Apply ``delta`` and return the updated session; raise ``LookupError`` when absent."""


__all__ = ["SessionSource", "SessionStorePort"]
