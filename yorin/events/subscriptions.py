"""yorin.events.subscriptions

Subscription lifecycle events.

The subscriber is polymorphic:
- ``contact``: the subscriber is a user; the event's ``user_id`` is that user
- ``group``: the subscriber is a group; ``user_id`` is optional acting-user context

Known fields become ``$``-prefixed properties. Custom fields pass through,
including ``subscriber_id``, which is also sent as ``$subscriber_id``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from yorin.core.exceptions import EventValidationError
from yorin.core.models import ServerEvent
from yorin.events._shared import compact, correlation
from yorin.events.options import SubscriptionOptions

SUBSCRIPTION = "subscription"

# Fields copied verbatim under a `$` prefix.
_PREFIXED_FIELDS = (
    "external_subscription_id",
    "amount",
    "currency",
    "billing_cycle",
    "description",
    "setup_fee",
    "billing_interval",
    "features",
    "notes",
    "provider",
    "started_at",
    "trial_ends_at",
    "current_period_end",
    "current_period_start",
    "cancelled_at",
    "ends_at",
)

_RESERVED_FIELDS = set(_PREFIXED_FIELDS) | {"plan_id", "plan_name", "status", "subscriber_type"}


def subscription_event(
    subscription: Mapping[str, Any],
    options: SubscriptionOptions | None = None,
) -> ServerEvent:
    opts = options or SubscriptionOptions()

    plan_id = subscription.get("plan_id")
    if not plan_id:
        raise EventValidationError("plan_id is required for subscription events")

    status = subscription.get("status")
    if not status:
        raise EventValidationError("status is required for subscription events")

    subscriber_type = subscription.get("subscriber_type")
    subscriber_id = subscription.get("subscriber_id")
    user_id: str | None = None

    if subscriber_type == "contact":
        subscriber_id = subscriber_id or opts.user_id
        if not subscriber_id:
            raise EventValidationError("userId is required for contact subscriptions")
        user_id = subscriber_id
    elif subscriber_type == "group":
        subscriber_id = subscriber_id or opts.group_id
        if not subscriber_id:
            raise EventValidationError("groupId is required for group subscriptions")
        user_id = opts.user_id

    plan_name = subscription.get("plan_name") or plan_id

    properties: dict[str, Any] = {
        "$plan_name": plan_name,
        "$plan": plan_name,
        "$status": status,
        "$subscriber_type": subscriber_type,
        "$subscriber_id": subscriber_id,
    }
    for field in _PREFIXED_FIELDS:
        properties[f"${field}"] = subscription.get(field)
    properties.update({k: v for k, v in subscription.items() if k not in _RESERVED_FIELDS})

    return ServerEvent(
        event_name=SUBSCRIPTION,
        user_id=user_id,
        properties=compact(properties),
        **correlation(opts),
    )
