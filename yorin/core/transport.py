"""yorin.core.transport

One POST per call. No retries here; the caller wraps :meth:`Transport.send`
in :func:`yorin.core.retry.retry_with_backoff`.

Wire format:
- exactly one event → a JSON object
- two or more → a JSON array

Receivers must accept both.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from yorin import __version__
from yorin.core.exceptions import ApiResponseError, HttpStatusError
from yorin.core.models import ServerEvent

logger = logging.getLogger(__name__)

EVENTS_PATH = "/v1/events"


def build_payload(events: Sequence[ServerEvent]) -> dict[str, Any] | list[dict[str, Any]]:
    if len(events) == 1:
        return events[0].to_wire()
    return [ev.to_wire() for ev in events]


class Transport:
    def __init__(
        self,
        api_url: str,
        secret_key: str,
        *,
        timeout_s: float = 20.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = f"{api_url.rstrip('/')}{EVENTS_PATH}"
        self._secret_key = secret_key
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_s)

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._secret_key}",
            "User-Agent": f"yorin-python/{__version__}",
        }

    async def send(self, events: Sequence[ServerEvent]) -> None:
        """POST ``events`` (non-empty) and verify the ingestion response.

        Raises:
            HttpStatusError: non-2xx status.
            ApiResponseError: 2xx whose body is not ``{"success": true, ...}``.
            httpx.HTTPError: network-level failures, unchanged.
        """

        if not events:
            raise ValueError("Transport.send requires at least one event")

        resp = await self._client.post(self.url, json=build_payload(events), headers=self.headers)

        if not resp.is_success:
            raise HttpStatusError(resp.status_code, resp.text)

        try:
            body = resp.json()
        except ValueError as e:
            raise ApiResponseError(f"Invalid response body: {resp.text[:200]}") from e

        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiResponseError(message if isinstance(message, str) else None)

        logger.debug("ingestion_accepted", extra={"count": len(events), "status": resp.status_code})

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
