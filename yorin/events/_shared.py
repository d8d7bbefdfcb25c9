"""Helpers shared by the event managers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from yorin.core.time import iso_timestamp
from yorin.events.options import EventOptions


def compact(values: Mapping[str, Any]) -> dict[str, Any]:
    """Drop ``None`` values; the wire has no notion of an explicit absent field."""

    return {k: v for k, v in values.items() if v is not None}


def correlation(options: EventOptions | None) -> dict[str, Any]:
    opts = options or EventOptions()
    return {
        "anonymous_user_id": opts.anonymous_user_id,
        "session_id": opts.session_id,
        "timestamp": opts.timestamp or iso_timestamp(),
    }


def rename_aliases(properties: Mapping[str, Any], aliases: Mapping[str, str]) -> dict[str, Any]:
    """Copy ``properties`` without ``None`` values, renaming shorthand keys.

    A shorthand is only renamed when its reserved target is not given as well.
    Key order is preserved.
    """

    out: dict[str, Any] = {}
    for key, value in properties.items():
        if value is None:
            continue
        target = aliases.get(key)
        if target is not None and target not in properties:
            out[target] = value
        else:
            out[key] = value
    return out
