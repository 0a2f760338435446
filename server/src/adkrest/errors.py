"""Exceptions raised by the session snapshot and state-delta core."""

from __future__ import annotations


class SessionModelError(Exception):
    """Base class for session model failures."""


class SessionValidationError(SessionModelError, ValueError):
    """Raised when a session snapshot has an empty, zero or missing field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class StateDeltaError(SessionModelError):
    """Base class for malformed state delta directives."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key


class DirectiveTypeError(StateDeltaError, TypeError):
    """Raised when a directive's operation value is not a string."""

    def __init__(self, key: str, observed_type: str) -> None:
        super().__init__(
            key,
            f"invalid directive value type for key {key!r}: expected string, got {observed_type}",
        )
        self.observed_type = observed_type


class UnknownDirectiveError(StateDeltaError, ValueError):
    """Raised when a directive names an operation that is not supported."""

    def __init__(self, key: str, operation: str) -> None:
        super().__init__(key, f"unknown state update directive {operation!r} for key {key!r}")
        self.operation = operation


class IdentityError(SessionModelError, ValueError):
    """Raised when a required session identity parameter is missing."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} parameter is required")
        self.field = field


__all__ = [
    "DirectiveTypeError",
    "IdentityError",
    "SessionModelError",
    "SessionValidationError",
    "StateDeltaError",
    "UnknownDirectiveError",
]
