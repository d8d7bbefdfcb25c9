"""yorin.security.urls

Endpoint URL checks.

The ingestion endpoint is operator-supplied, so the policy is syntactic only
(self-hosted and local collectors are legitimate targets):
- Only allow http/https
- Require a host
- Deny userinfo in URL (credentials belong in the Authorization header)
- Deny query strings and fragments (the request path is appended)
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse


@dataclass(frozen=True, slots=True)
class UrlCheck:
    allowed: bool
    reason: str | None = None
    host: str | None = None


def check_url(url: str) -> UrlCheck:
    """Validate an ingestion base URL."""

    if not isinstance(url, str) or not url.strip():
        return UrlCheck(False, reason="empty_url")

    try:
        u = urlparse(url.strip())
        # Accessing .port validates it.
        _ = u.port
    except ValueError:
        return UrlCheck(False, reason="invalid_url")

    scheme = (u.scheme or "").lower()
    if scheme not in ("http", "https"):
        return UrlCheck(False, reason="scheme_not_allowed")

    if u.username or u.password:
        return UrlCheck(False, reason="userinfo_not_allowed")

    host = (u.hostname or "").lower().strip()
    if not host:
        return UrlCheck(False, reason="missing_host")

    if u.query or u.fragment:
        return UrlCheck(False, reason="query_not_allowed", host=host)

    return UrlCheck(True, host=host)
