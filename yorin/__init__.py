"""yorin — server-side event tracking.

Events are shaped by :mod:`yorin.events`, queued and delivered by
:mod:`yorin.core.client`. The :class:`Yorin` facade ties both together.
"""

from __future__ import annotations

__all__ = [
    "__version__",
    "DEFAULT_API_URL",
    "Yorin",
]

__version__ = "1.0.0"

DEFAULT_API_URL = "https://ingest.yorin.io"


def __getattr__(name: str):
    # Lazy: the facade pulls in httpx + pydantic.
    if name == "Yorin":
        from yorin.sdk import Yorin

        return Yorin
    raise AttributeError(f"module 'yorin' has no attribute {name!r}")
