"""Type aliases for JSON-compatible session payloads.

Session state and event records cross the wire as JSON. These aliases keep the
domain layer honest about that without importing pydantic outside the boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

from typing_extensions import TypeAliasType

JsonPrimitive: TypeAlias = str | int | float | bool | None

if TYPE_CHECKING:
    JsonValue: TypeAlias = JsonPrimitive | list["JsonValue"] | dict[str, "JsonValue"]
    JsonObject: TypeAlias = dict[str, JsonValue]
else:
    JsonValue = TypeAliasType(
        "JsonValue",
        JsonPrimitive | list["JsonValue"] | dict[str, "JsonValue"],
    )
    JsonObject = TypeAliasType("JsonObject", dict[str, JsonValue])

# Events are opaque to the core; they pass through as JSON objects.
EventRecord: TypeAlias = JsonObject

__all__ = [
    "EventRecord",
    "JsonObject",
    "JsonPrimitive",
    "JsonValue",
]
