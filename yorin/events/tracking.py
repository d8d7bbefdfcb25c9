"""yorin.events.tracking

Custom events and page views.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from yorin.core.exceptions import EventValidationError
from yorin.core.models import ServerEvent
from yorin.core.time import iso_timestamp
from yorin.events._shared import compact, correlation
from yorin.events.options import PageOptions, TrackingOptions

PAGE = "page"


def track_event(
    event_name: str,
    user_id: str | None = None,
    properties: Mapping[str, Any] | None = None,
    options: TrackingOptions | None = None,
) -> ServerEvent:
    """Shape a custom event.

    Server events must be attributable: either ``user_id`` or a ``group_id``
    inside ``properties`` is required.
    """

    if not event_name:
        raise EventValidationError("Event name is required")

    if not user_id and not (properties or {}).get("group_id"):
        raise EventValidationError("Either user_id or group_id (in properties) is required for server events")

    opts = options or TrackingOptions()
    return ServerEvent(
        event_name=event_name,
        user_id=user_id,
        properties=dict(properties) if properties is not None else None,
        page_url=opts.page_url,
        page_title=opts.page_title,
        referrer=opts.referrer,
        user_agent=opts.user_agent,
        **correlation(opts),
    )


def page_event(
    name: str | None = None,
    user_id: str | None = None,
    properties: Mapping[str, Any] | None = None,
    options: PageOptions | None = None,
) -> ServerEvent:
    opts = options or PageOptions()
    return ServerEvent(
        event_name=PAGE,
        user_id=user_id,
        properties=compact({"name": name, **(properties or {})}),
        page_url=opts.url,
        page_title=opts.title or name,
        referrer=opts.referrer,
        timestamp=iso_timestamp(),
    )
