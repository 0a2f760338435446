"""State delta directives and their normalization.

A state delta maps state keys to new values. A value is either a literal that
replaces the stored value, or a directive object such as
``{"$adk_state_update": "delete"}`` requesting an operation on the key.
Directives are only recognised at the top level of each value; a directive
nested inside a literal map is just data.

Any map carrying the marker key is read as a directive, so callers cannot
store a literal map that uses ``$adk_state_update`` as one of its keys.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias

from adkrest.errors import DirectiveTypeError, UnknownDirectiveError

STATE_UPDATE_KEY = "$adk_state_update"


class StateOperation(str, Enum):
    """Operations a directive object may request."""

    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class Keep:
    """Replace the key's stored value with ``value``, which may itself be ``None``."""

    value: Any


@dataclass(frozen=True, slots=True)
class Delete:
    """Remove the key from state."""

    def __repr__(self) -> str:
        return "DELETE"


DELETE = Delete()

StateChange: TypeAlias = Keep | Delete


def parse_delta_value(key: str, value: object) -> StateChange:
    """Classify a single delta value as a literal or a directive."""
    if not isinstance(value, Mapping) or STATE_UPDATE_KEY not in value:
        return Keep(value)

    operation = value[STATE_UPDATE_KEY]
    if not isinstance(operation, str):
        raise DirectiveTypeError(key, type(operation).__name__)
    try:
        parsed = StateOperation(operation)
    except ValueError as exc:
        raise UnknownDirectiveError(key, operation) from exc

    match parsed:
        case StateOperation.DELETE:
            return DELETE


class NormalizedStateDelta(Mapping[str, StateChange]):
    """Read-only mapping of state keys to the change requested for each."""

    __slots__ = ("_changes",)

    def __init__(self, changes: Mapping[str, StateChange] | None = None) -> None:
        self._changes: dict[str, StateChange] = dict(changes or {})

    def __getitem__(self, key: str) -> StateChange:
        return self._changes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._changes)

    def __len__(self) -> int:
        return len(self._changes)

    def updates(self) -> dict[str, Any]:
        """Return the literal replacements keyed by state key."""
        return {key: change.value for key, change in self._changes.items() if isinstance(change, Keep)}

    def deleted_keys(self) -> frozenset[str]:
        """Return the keys marked for removal."""
        return frozenset(key for key, change in self._changes.items() if isinstance(change, Delete))

    def to_store_delta(self) -> dict[str, Any]:
        """Flatten into the form stores apply, where ``None`` removes a key.

        A ``Keep(None)`` literal and a deletion collapse to the same value here,
        so only use this for stores that treat ``None`` as a delete.
        """
        return {
            key: change.value if isinstance(change, Keep) else None
            for key, change in self._changes.items()
        }

    def __repr__(self) -> str:
        return f"NormalizedStateDelta({self._changes!r})"


def normalize_state_delta(delta: Mapping[str, object]) -> NormalizedStateDelta:
    """Resolve directive values in ``delta``.

    Literal values are carried by reference. The input is never mutated, and
    the first invalid directive aborts the whole call.
    """
    changes: dict[str, StateChange] = {}
    for key, value in delta.items():
        changes[key] = parse_delta_value(key, value)
    return NormalizedStateDelta(changes)


__all__ = [
    "DELETE",
    "STATE_UPDATE_KEY",
    "Delete",
    "Keep",
    "NormalizedStateDelta",
    "StateChange",
    "StateOperation",
    "normalize_state_delta",
    "parse_delta_value",
]
