"""yorin.events.groups

Groups are companies, teams, workspaces. The group id always travels inside
``properties`` so that group events need no user.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from yorin.core.exceptions import EventValidationError
from yorin.core.models import ServerEvent
from yorin.events._shared import correlation, rename_aliases
from yorin.events.options import EventOptions

ADD_OR_UPDATE_GROUP = "addOrUpdateGroup"
DELETE_GROUP = "deleteGroup"


def add_or_update_group_event(
    group_id: str,
    user_id: str | None = None,
    properties: Mapping[str, Any] | None = None,
    options: EventOptions | None = None,
) -> ServerEvent:
    if not group_id:
        raise EventValidationError("Group ID is required for addOrUpdateGroup")

    props: dict[str, Any] = {"group_id": group_id}
    if properties:
        props.update(rename_aliases(properties, {"name": "$name"}))

    return ServerEvent(
        event_name=ADD_OR_UPDATE_GROUP,
        user_id=user_id,
        properties=props,
        **correlation(options),
    )


def delete_group_event(
    group_id: str,
    user_id: str | None = None,
    options: EventOptions | None = None,
) -> ServerEvent:
    if not group_id:
        raise EventValidationError("Group ID is required for deleteGroup")

    return ServerEvent(
        event_name=DELETE_GROUP,
        user_id=user_id,
        properties={"group_id": group_id},
        **correlation(options),
    )
