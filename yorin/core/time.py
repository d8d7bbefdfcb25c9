"""yorin.core.time

The only time helper surface in the codebase.

Wire timestamps follow the JavaScript ``toISOString`` shape so that events
from every SDK sort identically on the ingestion side.
"""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return an aware UTC datetime."""

    return datetime.now(tz=UTC)


def iso_timestamp(dt: datetime | None = None) -> str:
    """Format ``dt`` (default: now) as ``YYYY-MM-DDTHH:MM:SS.mmmZ``.

    Naive datetimes are assumed to be UTC.
    """

    value = dt or utc_now()
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"

