"""Build validated session snapshots from store-owned session objects."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import asdict, is_dataclass
from datetime import datetime
from typing import TypeAlias

from pydantic import BaseModel

from adkrest.application.ports.session_store import SessionSource
from adkrest.domain.session import SessionSnapshot
from adkrest.json_types import EventRecord

EventMapper: TypeAlias = Callable[[object], EventRecord]


def event_record(event: object) -> EventRecord:
    """Coerce a store event into a plain JSON object without interpreting it."""
    if isinstance(event, BaseModel):
        return event.model_dump(mode="json", by_alias=True, exclude_none=True)
    if is_dataclass(event) and not isinstance(event, type):
        return asdict(event)
    if isinstance(event, Mapping):
        return dict(event)
    raise TypeError(f"unsupported event record type {type(event).__name__}")


def _unix_seconds(value: datetime | float) -> int:
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError("last_update_time must be a timezone-aware datetime")
        return int(value.timestamp())
    return int(value)


def build_session_snapshot(
    session: SessionSource,
    *,
    map_event: EventMapper = event_record,
) -> SessionSnapshot:
    """Copy ``session`` into a snapshot and validate it.

    State and events are copied so the snapshot never aliases the store's
    containers. Raises ``SessionValidationError`` when the session is missing
    a required field, and ``ValueError`` for a naive ``last_update_time``.
    """
    source_state = session.state
    source_events = session.events
    return SessionSnapshot(
        session_id=session.id,
        app_name=session.app_name,
        user_id=session.user_id,
        updated_at=_unix_seconds(session.last_update_time),
        events=None if source_events is None else tuple(map_event(event) for event in source_events),
        state=source_state,
    )


__all__ = ["EventMapper", "build_session_snapshot", "event_record"]
