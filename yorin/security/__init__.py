"""yorin.security

Log-safety and endpoint checks.

The secret key travels in one header and nowhere else.
"""

from yorin.security.redaction import redact_secrets, sanitize_for_log
from yorin.security.urls import UrlCheck, check_url

__all__ = [
    "UrlCheck",
    "check_url",
    "redact_secrets",
    "sanitize_for_log",
]
