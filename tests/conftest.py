from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# pytest may run without installing the project; ensure repo root is importable.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from tests.unit._fakes import API_URL, SECRET_KEY, FakeIngestion  # noqa: E402
from yorin.core.client import DeliveryClient  # noqa: E402
from yorin.core.config import DeliveryConfig  # noqa: E402
from yorin.core.log import LOGGER_NAME  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_yorin_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Host YORIN_* variables must not leak into settings tests."""

    for key in list(os.environ):
        if key.upper().startswith("YORIN_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def ingestion() -> FakeIngestion:
    return FakeIngestion()


@pytest.fixture()
def delivery_config() -> Callable[..., DeliveryConfig]:
    """Factory for delivery configs: small batches, no timer, no backoff delay."""

    def _make(**overrides: Any) -> DeliveryConfig:
        values: dict[str, Any] = {
            "api_url": API_URL,
            "secret_key": SECRET_KEY,
            "batch_size": 3,
            "flush_interval_ms": 0,
            "enable_batching": True,
            "retry_attempts": 3,
            "retry_delay_ms": 0,
        }
        values.update(overrides)
        return DeliveryConfig(**values)

    return _make


@pytest.fixture()
def make_client(ingestion: FakeIngestion, delivery_config: Callable[..., DeliveryConfig]) -> Callable[..., DeliveryClient]:
    def _make(*, sleep: Any = None, **overrides: Any) -> DeliveryClient:
        return DeliveryClient(
            delivery_config(**overrides),
            transport=ingestion.transport(),
            logger=logging.getLogger("test"),
            sleep=sleep,
        )

    return _make


@pytest.fixture()
def yorin_logger():  # noqa: ANN201
    """The ``yorin`` logger, restored to its prior level, handlers, and propagation."""

    logger = logging.getLogger(LOGGER_NAME)
    saved = (logger.level, list(logger.handlers), logger.propagate)
    yield logger
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]
    logger.propagate = saved[2]


@pytest.fixture()
def anyio_backend() -> str:
    """The delivery core is built on asyncio; run anyio-marked tests on it only."""

    return "asyncio"
