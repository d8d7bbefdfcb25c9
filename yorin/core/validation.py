"""yorin.core.validation

Credential and endpoint checks run once, before a client exists.
"""

from __future__ import annotations

from typing import Any

from yorin.security.urls import check_url

SECRET_KEY_PREFIX = "sk_"


def validate_secret_key(key: Any) -> bool:
    """Secret keys are non-empty strings starting with ``sk_``."""

    if not key or not isinstance(key, str):
        return False
    return key.startswith(SECRET_KEY_PREFIX)


def validate_api_url(url: Any) -> bool:
    if not isinstance(url, str):
        return False
    return check_url(url).allowed
