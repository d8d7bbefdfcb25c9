"""yorin.core

Core primitives: configuration, the canonical event, and the delivery core.

If a module needs to exist, it should probably depend only on this package.
"""

from .batching import MAX_BATCH_EVENTS, BatchQueue, chunked
from .client import DeliveryClient
from .config import DeliveryConfig, Settings
from .exceptions import YorinError
from .models import ServerEvent
from .retry import retry_with_backoff
from .time import iso_timestamp, utc_now
from .transport import Transport

__all__ = [
    "MAX_BATCH_EVENTS",
    "BatchQueue",
    "DeliveryClient",
    "DeliveryConfig",
    "ServerEvent",
    "Settings",
    "Transport",
    "YorinError",
    "chunked",
    "iso_timestamp",
    "retry_with_backoff",
    "utc_now",
]
