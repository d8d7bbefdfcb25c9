"""yorin.sdk

The public facade: shape an event, hand it to the delivery core.

Usage::

    async with Yorin(secret_key="sk_live_...") as yorin:
        await yorin.track("signup", user_id="u_1", properties={"plan": "pro"})

Leaving the block flushes whatever is still queued.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from yorin.core.client import DeliveryClient
from yorin.core.config import Settings
from yorin.core.log import LOGGER_NAME
from yorin.core.models import ServerEvent
from yorin.core.transport import Transport
from yorin.events import (
    EventOptions,
    PageOptions,
    SubscriptionOptions,
    TrackingOptions,
    add_or_update_contact_event,
    add_or_update_group_event,
    delete_contact_event,
    delete_group_event,
    page_event,
    payment_event,
    subscription_event,
    track_event,
)


class Yorin:
    def __init__(
        self,
        secret_key: str | None = None,
        api_url: str | None = None,
        *,
        debug: bool | None = None,
        batch_size: int | None = None,
        flush_interval_ms: int | None = None,
        enable_batching: bool | None = None,
        retry_attempts: int | None = None,
        retry_delay_ms: int | None = None,
        timeout_s: float | None = None,
        config_file: Path | None = None,
        settings: Settings | None = None,
        transport: Transport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Validate configuration and start the delivery core.

        Unset arguments fall back to ``YORIN_*`` environment variables, then to
        ``config_file`` (YAML), then to defaults. A prebuilt ``settings`` skips
        all of that.

        Without an injected ``logger`` each instance logs through its own child
        of the ``yorin`` logger, set to ``settings.logging.level`` (DEBUG when
        ``debug`` is on). An injected logger is only touched by ``debug``.

        Raises:
            ConfigError: missing or malformed secret key, API URL, or tunables.
        """

        if settings is not None:
            self.settings = settings
        else:
            overrides: dict[str, Any] = {
                "secret_key": secret_key,
                "api_url": api_url,
                "debug": debug,
                "batch_size": batch_size,
                "flush_interval_ms": flush_interval_ms,
                "enable_batching": enable_batching,
                "retry_attempts": retry_attempts,
                "retry_delay_ms": retry_delay_ms,
                "timeout_s": timeout_s,
            }
            if config_file is not None:
                self.settings = Settings.from_yaml(config_file, **overrides)
            else:
                self.settings = Settings.load(**overrides)

        if logger is None:
            logger = _instance_logger(logging.DEBUG if self.settings.debug else self.settings.logging.level)
        elif self.settings.debug:
            logger.setLevel(logging.DEBUG)

        self.client = DeliveryClient(self.settings.delivery(), transport=transport, logger=logger)

    # === CONTACT MANAGEMENT ===

    async def add_or_update_contact(
        self,
        user_id: str,
        properties: Mapping[str, Any] | None = None,
        options: EventOptions | None = None,
    ) -> None:
        await self.client.send(add_or_update_contact_event(user_id, properties, options))

    async def delete_contact(self, user_id: str, options: EventOptions | None = None) -> None:
        await self.client.send(delete_contact_event(user_id, options))

    # === GROUP MANAGEMENT ===

    async def add_or_update_group(
        self,
        group_id: str,
        user_id: str | None = None,
        properties: Mapping[str, Any] | None = None,
        options: EventOptions | None = None,
    ) -> None:
        await self.client.send(add_or_update_group_event(group_id, user_id, properties, options))

    async def delete_group(
        self,
        group_id: str,
        user_id: str | None = None,
        options: EventOptions | None = None,
    ) -> None:
        await self.client.send(delete_group_event(group_id, user_id, options))

    # === PAYMENTS & SUBSCRIPTIONS ===

    async def payment(
        self,
        user_id: str,
        payment: Mapping[str, Any],
        options: EventOptions | None = None,
    ) -> None:
        await self.client.send(payment_event(user_id, payment, options))

    async def subscription(
        self,
        subscription: Mapping[str, Any],
        options: SubscriptionOptions | None = None,
    ) -> None:
        await self.client.send(subscription_event(subscription, options))

    # === GENERAL TRACKING ===

    async def track(
        self,
        event_name: str,
        user_id: str | None = None,
        properties: Mapping[str, Any] | None = None,
        options: TrackingOptions | None = None,
    ) -> None:
        await self.client.send(track_event(event_name, user_id, properties, options))

    async def page(
        self,
        name: str | None = None,
        user_id: str | None = None,
        properties: Mapping[str, Any] | None = None,
        options: PageOptions | None = None,
    ) -> None:
        await self.client.send(page_event(name, user_id, properties, options))

    # === BATCH & LIFECYCLE ===

    async def track_batch(self, events: Iterable[ServerEvent | Mapping[str, Any]]) -> None:
        await self.client.send_batch(events)

    async def flush(self) -> None:
        await self.client.flush()

    async def destroy(self) -> None:
        await self.client.destroy()

    async def __aenter__(self) -> Yorin:
        await self.client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.client.destroy()


_instance_ids = itertools.count(1)


def _instance_logger(level: int | str) -> logging.Logger:
    log = logging.getLogger(LOGGER_NAME).getChild(f"client.{next(_instance_ids)}")
    log.setLevel(level)
    return log
