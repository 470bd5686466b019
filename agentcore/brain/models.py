"""
Brain Models - Type-safe records for the timeline, stores and modules

WHAT: Pydantic models for timeline events, stored-value envelopes, knowledge
      entries and todo items
WHERE: agentcore/brain/models.py - data layer
WHO: Brain, memory stores and extension modules creating/validating records
TIME: Model validation <1ms

All timestamps are timezone-aware UTC. Events are frozen once created; the
timeline only ever holds immutable records.

Boundary Notes:
- StoredValue is the only on-disk value format of the durable store
- Event payloads are opaque; no validation beyond presence
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .errors import MemorySerializationError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """RFC 3339 rendering with second precision, e.g. ``2026-10-17T09:30:00Z``."""
    return ts.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


class Event(BaseModel):
    """
    A single thing that happened to the agent.

    Examples:
    - ``Event(type="inbound_message", payload="hi")``
    - ``Event(type="conversation_message", payload="user: what's up?")``
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=utc_now)
    type: str = Field(min_length=1)
    payload: Any = None

    def digest_line(self) -> str:
        return f"{format_timestamp(self.timestamp)}: {self.type}"


class StoredValue(BaseModel):
    """Envelope persisted by the durable store: an encoding tag plus encoded data."""

    encoding: Literal["json"] = "json"
    data: str

    @classmethod
    def wrap(cls, value: Any) -> StoredValue:
        try:
            encoded = json.dumps(value, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise MemorySerializationError(f"Value of type {type(value).__name__} is not serializable: {exc}") from exc
        # json coerces tuples to lists and non-string dict keys to strings
        if json.loads(encoded) != value:
            raise MemorySerializationError(f"Value of type {type(value).__name__} does not survive a JSON round trip")
        return cls(data=encoded)

    def unwrap(self) -> Any:
        try:
            return json.loads(self.data)
        except ValueError as exc:
            raise MemorySerializationError(f"Stored value is not valid {self.encoding}: {exc}") from exc

    @classmethod
    def from_raw(cls, raw: str) -> StoredValue:
        try:
            return cls.model_validate_json(raw)
        except ValueError as exc:
            raise MemorySerializationError(f"Malformed stored envelope: {exc}") from exc


class KnowledgeEntry(BaseModel):
    """A question/answer pair held by the knowledge module."""

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str
    created_at: datetime = Field(default_factory=utc_now)


class TodoItem(BaseModel):
    id: int = Field(ge=1)
    title: str = Field(min_length=1)
    completed: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    completed_at: datetime | None = None


__all__ = [
    "Event",
    "KnowledgeEntry",
    "StoredValue",
    "TodoItem",
    "format_timestamp",
    "utc_now",
]
