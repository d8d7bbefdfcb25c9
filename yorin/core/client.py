"""yorin.core.client

The delivery core.

Events arrive one at a time (:meth:`DeliveryClient.send`) or in bulk
(:meth:`DeliveryClient.send_batch`). With batching enabled they wait in a
:class:`~yorin.core.batching.BatchQueue` until one of three triggers drains it:

- size: the queue reaches ``batch_size``
- time: the flush timer ticks every ``flush_interval_ms``
- manual: :meth:`flush` or :meth:`destroy`

Every drain is atomic (no ``await`` between taking the events and emptying the
queue), so overlapping flushes never send the same event twice. Sends larger
than ``MAX_BATCH_EVENTS`` are split and posted chunk by chunk, in order.

Lifecycle: Active → Destroyed. There is no paused state.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from yorin.core.batching import MAX_BATCH_EVENTS, BatchQueue, chunked
from yorin.core.config import DeliveryConfig
from yorin.core.exceptions import ClientClosedError, DeliveryError
from yorin.core.models import ServerEvent, coerce_event
from yorin.core.retry import Sleep, retry_with_backoff
from yorin.core.transport import Transport
from yorin.security.redaction import sanitize_for_log

# Transient failures: anything the endpoint or the network can do to us.
RETRYABLE: tuple[type[BaseException], ...] = (DeliveryError, httpx.HTTPError)


class DeliveryClient:
    def __init__(
        self,
        config: DeliveryConfig,
        *,
        transport: Transport | None = None,
        logger: logging.Logger | None = None,
        sleep: Sleep | None = None,
    ) -> None:
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self._transport = transport or Transport(config.api_url, config.secret_key, timeout_s=config.timeout_s)
        self._queue = BatchQueue()
        self._sleep = sleep
        self._timer: asyncio.Task[None] | None = None
        self._tick_tasks: set[asyncio.Task[None]] = set()
        self._closed = False

        self.logger.debug(
            "client_initialized",
            extra={
                "api_url": config.api_url,
                "batch_size": config.batch_size,
                "flush_interval_ms": config.flush_interval_ms,
                "enable_batching": config.enable_batching,
            },
        )

        # The timer needs a running loop; without one it starts on first use.
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            self._ensure_timer()

    @property
    def pending(self) -> int:
        """Number of events waiting in the queue."""

        return len(self._queue)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def timer_running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def send(self, event: ServerEvent | Mapping[str, Any]) -> None:
        """Queue ``event`` (or post it immediately when batching is off).

        Reaching ``batch_size`` flushes the queue before returning.
        """

        ev = coerce_event(event)
        self._check_open()
        self._ensure_timer()

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug("event_received", extra={"event": sanitize_for_log(ev.to_wire())})

        if not self.config.enable_batching:
            await self._deliver([ev])
            return

        # enqueue + threshold check: no await in between
        if self._queue.enqueue(ev) >= self.config.batch_size:
            await self._flush_queue()

    async def send_batch(self, events: Iterable[ServerEvent | Mapping[str, Any]]) -> None:
        """Post ``events`` directly, bypassing the queue.

        An empty batch is logged and ignored.
        """

        batch = [coerce_event(e) for e in events]
        self._check_open()
        if not batch:
            self.logger.warning("empty_batch_ignored")
            return
        self._ensure_timer()
        await self._deliver_chunked(batch)

    async def flush(self) -> None:
        """Drain the queue and post whatever was in it. No-op when empty."""

        if not self._closed:
            self._ensure_timer()
        await self._flush_queue()

    async def destroy(self) -> None:
        """Stop the timer, flush what is left, release the HTTP client.

        Never raises: a failed final flush is logged. Safe to call twice.
        """

        if self._timer is not None:
            self._timer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._timer
            self._timer = None

        first_close = not self._closed
        self._closed = True

        try:
            await self._flush_queue()
        except Exception:  # noqa: BLE001 - shutdown path never raises
            self.logger.error("destroy_flush_failed", exc_info=True)

        if self._tick_tasks:
            await asyncio.gather(*self._tick_tasks, return_exceptions=True)

        if first_close:
            await self._transport.aclose()

    aclose = destroy

    async def __aenter__(self) -> DeliveryClient:
        self._ensure_timer()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.destroy()

    def _check_open(self) -> None:
        if self._closed:
            raise ClientClosedError("Client has been destroyed")

    async def _flush_queue(self) -> None:
        events = self._queue.drain()
        if not events:
            return
        await self._deliver_chunked(events)

    async def _deliver_chunked(self, events: list[ServerEvent]) -> None:
        if len(events) <= MAX_BATCH_EVENTS:
            await self._deliver(events)
            return

        chunks = chunked(events, MAX_BATCH_EVENTS)
        self.logger.info("batch_split", extra={"count": len(events), "chunks": len(chunks)})
        for chunk in chunks:
            await self._deliver(chunk)

    async def _deliver(self, events: list[ServerEvent]) -> None:
        # Failures go to the caller; only the timer and destroy paths log them.
        await retry_with_backoff(
            lambda: self._transport.send(events),
            self.config.retry_attempts,
            self.config.retry_delay_ms,
            retry_on=RETRYABLE,
            sleep=self._sleep,
        )
        self.logger.info("events_sent", extra={"count": len(events)})

    def _ensure_timer(self) -> None:
        if self._timer is not None or self._closed:
            return
        if not self.config.enable_batching or self.config.flush_interval_ms <= 0:
            return
        self._timer = asyncio.get_running_loop().create_task(self._run_flush_timer(), name="yorin-flush-timer")

    async def _run_flush_timer(self) -> None:
        interval_s = self.config.flush_interval_ms / 1000
        while True:
            await asyncio.sleep(interval_s)
            if not self._queue:
                continue
            self.logger.debug("timer_flush", extra={"count": len(self._queue)})
            # Each tick flushes in its own task; the timer never waits on the network.
            task = asyncio.create_task(self._flush_queue())
            self._tick_tasks.add(task)
            task.add_done_callback(self._on_tick_done)

    def _on_tick_done(self, task: asyncio.Task[None]) -> None:
        self._tick_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.error("timer_flush_failed", exc_info=exc)
