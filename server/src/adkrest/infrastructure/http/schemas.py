"""Pydantic wire shapes for the session HTTP API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from adkrest.domain.session import SessionSnapshot


class SessionModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    app_name: str = Field(alias="appName")
    user_id: str = Field(alias="userId")
    last_update_time: int = Field(alias="lastUpdateTime")
    events: list[dict[str, Any]]
    state: dict[str, Any]

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot) -> SessionModel:
        return cls(
            id=snapshot.session_id,
            app_name=snapshot.app_name,
            user_id=snapshot.user_id,
            last_update_time=snapshot.updated_at,
            events=list(snapshot.events or ()),
            state=dict(snapshot.state or {}),
        )


class CreateSessionRequestModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: dict[str, Any] | None = None
    events: list[dict[str, Any]] | None = None


class PatchSessionStateDeltaRequestModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Values follow the state delta grammar; directives are resolved after parsing.
    state_delta: dict[str, Any] = Field(default_factory=dict, alias="stateDelta")


__all__ = [
    "CreateSessionRequestModel",
    "PatchSessionStateDeltaRequestModel",
    "SessionModel",
]
