"""yorin.events.payments

Payment events.

Known payment fields are renamed to ``$``-prefixed properties; the ingestion
side extracts those into dedicated columns. Everything else travels as-is.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from yorin.core.exceptions import EventValidationError
from yorin.core.models import ServerEvent
from yorin.events._shared import compact, correlation
from yorin.events.options import EventOptions

PAYMENTS = "$payments"

PAYMENT_FIELDS = {
    "payment_id": "$transaction_id",
    "amount": "$amount",
    "currency": "$currency",
    "payment_method": "$payment_method",
    "payment_status": "$status",
}


def payment_event(
    user_id: str,
    payment: Mapping[str, Any],
    options: EventOptions | None = None,
) -> ServerEvent:
    if not user_id:
        raise EventValidationError("User ID is required for payment events")

    if not payment.get("amount") or not payment.get("currency"):
        raise EventValidationError("Amount and currency are required for payment events")

    properties: dict[str, Any] = {target: payment.get(source) for source, target in PAYMENT_FIELDS.items()}
    properties.update({k: v for k, v in payment.items() if k not in PAYMENT_FIELDS})

    return ServerEvent(
        event_name=PAYMENTS,
        user_id=user_id,
        properties=compact(properties),
        **correlation(options),
    )
