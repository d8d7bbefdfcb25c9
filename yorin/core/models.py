"""yorin.core.models

The canonical event record.

An event handed to the delivery core is immutable; the core only queues and
serializes it. Shaping (renaming, defaulting, validation) happens upstream in
:mod:`yorin.events`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field


class ServerEvent(BaseModel):
    """One tracked occurrence, ready for wire transmission."""

    event_name: str = Field(min_length=1)
    user_id: str | None = None
    anonymous_user_id: str | None = None
    session_id: str | None = None
    properties: dict[str, Any] | None = None
    page_url: str | None = None
    page_title: str | None = None
    referrer: str | None = None
    user_agent: str | None = None
    timestamp: str | None = None

    model_config = {"frozen": True}

    def to_wire(self) -> dict[str, Any]:
        """JSON-compatible dict. Absent top-level fields are omitted, not sent as null."""

        return self.model_dump(mode="json", exclude_none=True)


def coerce_event(value: ServerEvent | Mapping[str, Any]) -> ServerEvent:
    """Accept a prebuilt event or a plain mapping with the same keys."""

    if isinstance(value, ServerEvent):
        return value
    return ServerEvent.model_validate(dict(value))
