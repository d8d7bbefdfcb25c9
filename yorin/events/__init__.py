"""yorin.events

Per-event-type shaping. Every manager returns a :class:`~yorin.core.models.ServerEvent`
ready for the delivery core, or raises :class:`~yorin.core.exceptions.EventValidationError`.
"""

from yorin.events.contacts import add_or_update_contact_event, delete_contact_event
from yorin.events.groups import add_or_update_group_event, delete_group_event
from yorin.events.options import EventOptions, PageOptions, SubscriptionOptions, TrackingOptions
from yorin.events.payments import payment_event
from yorin.events.subscriptions import subscription_event
from yorin.events.tracking import page_event, track_event

__all__ = [
    "EventOptions",
    "PageOptions",
    "SubscriptionOptions",
    "TrackingOptions",
    "add_or_update_contact_event",
    "add_or_update_group_event",
    "delete_contact_event",
    "delete_group_event",
    "page_event",
    "payment_event",
    "subscription_event",
    "track_event",
]
