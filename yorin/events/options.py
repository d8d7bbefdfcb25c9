"""yorin.events.options

Per-call correlation options. Frozen: shaping never mutates caller input.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EventOptions:
    anonymous_user_id: str | None = None
    session_id: str | None = None
    timestamp: str | None = None


@dataclass(frozen=True, slots=True)
class TrackingOptions(EventOptions):
    page_url: str | None = None
    page_title: str | None = None
    referrer: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, slots=True)
class PageOptions:
    url: str | None = None
    title: str | None = None
    referrer: str | None = None


@dataclass(frozen=True, slots=True)
class SubscriptionOptions(EventOptions):
    user_id: str | None = None
    group_id: str | None = None
