"""HTTP route definitions for the session API."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import ValidationError

from adkrest.application.ports.session_store import SessionSource, SessionStorePort
from adkrest.application.snapshot import EventMapper, build_session_snapshot, event_record
from adkrest.domain.identity import SessionIdentity
from adkrest.domain.state_delta import normalize_state_delta
from adkrest.errors import IdentityError, StateDeltaError
from adkrest.infrastructure.http.schemas import (
    CreateSessionRequestModel,
    PatchSessionStateDeltaRequestModel,
    SessionModel,
)
from adkrest.infrastructure.parsers import parse_session_identity

logger = logging.getLogger("adkrest.http")

SESSIONS_PATH = "/apps/{app_name}/users/{user_id}/sessions"
SESSION_PATH = SESSIONS_PATH + "/{session_id}"


@dataclass(frozen=True)
class SessionRouteDeps:
    store: SessionStorePort
    map_event: EventMapper = event_record


def add_session_routes(app: FastAPI, dependency_provider: Callable[[], SessionRouteDeps]) -> None:
    def get_dependencies() -> SessionRouteDeps:
        return dependency_provider()

    @app.get(
        SESSION_PATH,
        response_model=SessionModel,
        description="Return a validated snapshot of a session.",
    )
    def get_session(
        request: Request,
        deps: SessionRouteDeps = Depends(get_dependencies),  # noqa: B008
    ) -> SessionModel:
        identity = _identity_from_request(request)
        try:
            session = deps.store.get(identity)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail="session not found") from exc
        if session is None:
            raise HTTPException(status_code=404, detail="session not found")
        return _snapshot_response(session, deps)

    @app.post(
        SESSIONS_PATH,
        response_model=SessionModel,
        description="Create a session with a store-assigned id.",
    )
    @app.post(
        SESSION_PATH,
        response_model=SessionModel,
        description="Create a session with the given id.",
    )
    def create_session(
        request: Request,
        payload: CreateSessionRequestModel | None = None,
        deps: SessionRouteDeps = Depends(get_dependencies),  # noqa: B008
    ) -> SessionModel:
        identity = _identity_from_request(request)
        body = payload or CreateSessionRequestModel()
        try:
            session = deps.store.create(
                identity,
                state=body.state or {},
                events=body.events or [],
            )
        except LookupError as exc:
            raise HTTPException(status_code=404, detail="session not found") from exc
        logger.info(
            "session created",
            extra={"data": {"app_name": identity.app_name, "user_id": identity.user_id}},
        )
        return _snapshot_response(session, deps)

    @app.patch(
        SESSION_PATH,
        response_model=SessionModel,
        description="Apply a state delta; {\"$adk_state_update\": \"delete\"} removes a key.",
    )
    def patch_session_state(
        request: Request,
        payload: PatchSessionStateDeltaRequestModel,
        deps: SessionRouteDeps = Depends(get_dependencies),  # noqa: B008
    ) -> SessionModel:
        identity = _identity_from_request(request)
        try:
            delta = normalize_state_delta(payload.state_delta)
        except StateDeltaError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        try:
            session = deps.store.apply_state_delta(identity, delta)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail="session not found") from exc
        logger.info(
            "session state delta applied",
            extra={
                "data": {
                    "session_id": identity.session_id,
                    "updated_keys": sorted(delta.updates()),
                    "deleted_keys": sorted(delta.deleted_keys()),
                }
            },
        )
        return _snapshot_response(session, deps)


# --- Helpers ---


def _identity_from_request(request: Request) -> SessionIdentity:
    try:
        return parse_session_identity(request.path_params)
    except (IdentityError, ValidationError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _snapshot_response(session: SessionSource, deps: SessionRouteDeps) -> SessionModel:
    try:
        snapshot = build_session_snapshot(session, map_event=deps.map_event)
    except ValueError as exc:
        # SessionValidationError, or a naive last_update_time from the store.
        logger.exception(
            "store returned an invalid session",
            extra={
                "data": {
                    "field": getattr(exc, "field", "last_update_time"),
                    "session_id": getattr(session, "id", None),
                }
            },
        )
        raise HTTPException(status_code=500, detail="session snapshot invalid") from exc
    return SessionModel.from_snapshot(snapshot)


__all__ = ["SESSIONS_PATH", "SESSION_PATH", "SessionRouteDeps", "add_session_routes"]
