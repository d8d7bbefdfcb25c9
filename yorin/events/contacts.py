"""yorin.events.contacts

Contacts are people. ``email`` and ``name`` are accepted as shorthands for the
reserved ``$email`` and ``$full_name`` properties.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from yorin.core.exceptions import EventValidationError
from yorin.core.models import ServerEvent
from yorin.events._shared import correlation, rename_aliases
from yorin.events.options import EventOptions

ADD_OR_UPDATE_CONTACT = "addOrUpdateContact"
DELETE_CONTACT = "deleteContact"

CONTACT_ALIASES = {"email": "$email", "name": "$full_name"}


def add_or_update_contact_event(
    user_id: str,
    properties: Mapping[str, Any] | None = None,
    options: EventOptions | None = None,
) -> ServerEvent:
    if not user_id:
        raise EventValidationError("User ID is required for addOrUpdateContact")

    props: dict[str, Any] = {}
    if properties:
        props = rename_aliases(properties, CONTACT_ALIASES)

    return ServerEvent(
        event_name=ADD_OR_UPDATE_CONTACT,
        user_id=user_id,
        properties=props,
        **correlation(options),
    )


def delete_contact_event(user_id: str, options: EventOptions | None = None) -> ServerEvent:
    if not user_id:
        raise EventValidationError("User ID is required for deleteContact")

    return ServerEvent(
        event_name=DELETE_CONTACT,
        user_id=user_id,
        properties={},
        **correlation(options),
    )
