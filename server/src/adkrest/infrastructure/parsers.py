"""Parsing helpers for transport-supplied session parameters."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from adkrest.domain.identity import SessionIdentity
from adkrest.errors import IdentityError


class _SessionIdentityParams(BaseModel):
    # Path and query variables arrive as strings, but numeric ids are accepted too.
    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    session_id: str = Field(default="", description="Optional; empty lets the store assign one.")
    app_name: str = Field(default="", description="Required.")
    user_id: str = Field(default="", description="Required.")


_REQUIRED_IDENTITY_FIELDS: tuple[str, ...] = ("app_name", "user_id")

_IDENTITY_PARAMS_ADAPTER = TypeAdapter(_SessionIdentityParams)


def parse_session_identity(params: Mapping[str, object]) -> SessionIdentity:
    """Decode ``session_id``/``app_name``/``user_id`` from transport parameters.

    Values that cannot be read as strings raise pydantic's ``ValidationError``;
    a required parameter that is missing or empty raises ``IdentityError``.
    """
    parsed = _IDENTITY_PARAMS_ADAPTER.validate_python(dict(params))
    for field in _REQUIRED_IDENTITY_FIELDS:
        if not getattr(parsed, field):
            raise IdentityError(field)
    return SessionIdentity(
        app_name=parsed.app_name,
        user_id=parsed.user_id,
        session_id=parsed.session_id,
    )


__all__ = ["parse_session_identity"]
