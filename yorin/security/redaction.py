"""yorin.security.redaction

Secret redaction helpers.

Debug logs may carry whole events. Redact likely secrets before anything hits logs.
"""

from __future__ import annotations

import copy
import re
from typing import Any

_REDACTION_PATTERNS: list[tuple[str, str]] = [
    # Generic key/value
    (r"(?i)(api[_-]?key|secret|password)\s*[:=]\s*[^\s\"']+", "[REDACTED]"),
    # Yorin secret keys
    (r"\bsk_[A-Za-z0-9_]{6,}", "[REDACTED]"),
    # Bearer credentials
    (r"(?i)bearer\s+[A-Za-z0-9._~+/=-]+", "Bearer [REDACTED]"),
    # JWT
    (r"eyJ[a-zA-Z0-9_-]+\.eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+", "[REDACTED]"),
]

_SENSITIVE_FIELD_NAMES = {
    "api_key",
    "apikey",
    "secret",
    "secret_key",
    "password",
    "token",
    "auth",
    "authorization",
    "stripe_session_id",
}


def redact_secrets(text: str) -> str:
    out = text
    for pattern, repl in _REDACTION_PATTERNS:
        out = re.sub(pattern, repl, out)
    return out


def sanitize_for_log(data: Any) -> Any:
    """Deep-copy and redact sensitive fields + embedded secrets."""

    def _walk(obj: Any) -> Any:
        if isinstance(obj, dict):
            new: dict[str, Any] = {}
            for k, v in obj.items():
                if str(k).lower().lstrip("$") in _SENSITIVE_FIELD_NAMES:
                    new[k] = "[REDACTED]"
                else:
                    new[k] = _walk(v)
            return new
        if isinstance(obj, (list, tuple)):
            return [_walk(v) for v in obj]
        if isinstance(obj, str):
            return redact_secrets(obj)
        return obj

    return _walk(copy.deepcopy(data))
