"""yorin.core.log

Logger setup for applications and the CLI.

The library itself only calls ``logging.getLogger(__name__)``; handlers are the
host application's business unless it asks for ours.
"""

from __future__ import annotations

import json
import logging
from typing import Any

LOGGER_NAME = "yorin"

# Attributes present on every LogRecord; anything else came in through `extra=`.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, msg, plus `extra` fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for k, v in record.__dict__.items():
            if k not in _RESERVED and not k.startswith("_"):
                entry[k] = v
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def configure_logging(level: str | int = "WARNING", *, json_output: bool = False) -> logging.Logger:
    """Attach a single stream handler to the ``yorin`` logger.

    Idempotent: a second call replaces the handler installed by the first.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    for h in list(logger.handlers):
        if getattr(h, "_yorin_handler", False):
            logger.removeHandler(h)

    handler = logging.StreamHandler()
    handler._yorin_handler = True  # type: ignore[attr-defined]
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
