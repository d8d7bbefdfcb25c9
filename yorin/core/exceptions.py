"""yorin.core.exceptions

Errors are part of the interface.

Construction fails loudly. Delivery fails retryably. Shutdown does not fail.
"""

from __future__ import annotations


class YorinError(Exception):
    """Base exception for yorin."""


class ConfigError(YorinError):
    """Configuration is missing, invalid, or inconsistent."""


class EventValidationError(YorinError):
    """An event could not be shaped: a required identifier or field is missing."""


class ClientClosedError(YorinError):
    """The delivery client was destroyed and no longer accepts events."""


class DeliveryError(YorinError):
    """Events did not reach the ingestion endpoint. Retry-eligible."""


class HttpStatusError(DeliveryError):
    """The endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class ApiResponseError(DeliveryError):
    """The endpoint answered 2xx but reported ``success: false``."""

    DEFAULT_MESSAGE = "Failed to send events"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.DEFAULT_MESSAGE)


class RetryExhaustedError(DeliveryError):
    """No attempt was made or none succeeded, and no underlying failure is available."""
