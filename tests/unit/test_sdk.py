from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests.unit._fakes import SECRET_KEY, FakeIngestion
from yorin.core.exceptions import ConfigError, EventValidationError
from yorin.events import SubscriptionOptions
from yorin.sdk import Yorin


def _yorin(ingestion: FakeIngestion, **kwargs) -> Yorin:  # noqa: ANN003
    kwargs.setdefault("secret_key", SECRET_KEY)
    kwargs.setdefault("retry_delay_ms", 0)
    return Yorin(transport=ingestion.transport(), logger=logging.getLogger("test"), **kwargs)


def test_constructor_requires_secret_key() -> None:
    with pytest.raises(ConfigError, match="secret key is required"):
        Yorin()


def test_constructor_validates_key_format() -> None:
    with pytest.raises(ConfigError, match='start with "sk_"'):
        Yorin(secret_key="live_123")


def test_constructor_validates_api_url() -> None:
    with pytest.raises(ConfigError, match="Invalid API URL format"):
        Yorin(secret_key=SECRET_KEY, api_url="nope")


def test_constructor_reads_env(monkeypatch: pytest.MonkeyPatch, ingestion: FakeIngestion) -> None:
    monkeypatch.setenv("YORIN_SECRET_KEY", "sk_env_9")
    monkeypatch.setenv("YORIN_BATCH_SIZE", "7")

    y = Yorin(transport=ingestion.transport())

    assert y.settings.secret_key == "sk_env_9"
    assert y.client.config.batch_size == 7


def test_constructor_reads_yaml(tmp_path: Path, ingestion: FakeIngestion) -> None:
    cfg = tmp_path / "yorin.yaml"
    cfg.write_text("secret_key: sk_file_1\nenable_batching: false\n")

    y = Yorin(config_file=cfg, transport=ingestion.transport())

    assert y.client.config.enable_batching is False


@pytest.mark.anyio
async def test_facade_shapes_and_batches(ingestion: FakeIngestion) -> None:
    async with _yorin(ingestion, batch_size=100) as y:
        await y.add_or_update_contact("u1", {"email": "a@b.co"})
        await y.delete_contact("u2")
        await y.add_or_update_group("g1", "u1", {"name": "Acme"})
        await y.delete_group("g2")
        await y.payment("u1", {"amount": 10, "currency": "USD"})
        await y.subscription(
            {"plan_id": "pro", "status": "active", "subscriber_type": "contact"},
            SubscriptionOptions(user_id="u1"),
        )
        await y.track("clicked", "u1", {"button": "buy"})
        await y.page("Home", "u1")
        assert ingestion.requests == []

    assert len(ingestion.requests) == 1
    names = [e["event_name"] for e in ingestion.bodies[0]]
    assert names == [
        "addOrUpdateContact",
        "deleteContact",
        "addOrUpdateGroup",
        "deleteGroup",
        "$payments",
        "subscription",
        "clicked",
        "page",
    ]


@pytest.mark.anyio
async def test_track_batch_and_flush(ingestion: FakeIngestion) -> None:
    y = _yorin(ingestion, batch_size=100)

    await y.track_batch([{"event_name": "a", "user_id": "u1"}, {"event_name": "b", "user_id": "u2"}])
    await y.track("c", "u3")
    await y.flush()
    await y.destroy()

    assert len(ingestion.requests) == 2
    assert [e["event_name"] for e in ingestion.bodies[0]] == ["a", "b"]
    assert ingestion.bodies[1]["event_name"] == "c"


@pytest.mark.anyio
async def test_invalid_event_is_rejected_before_queueing(ingestion: FakeIngestion) -> None:
    y = _yorin(ingestion)

    with pytest.raises(EventValidationError):
        await y.track("clicked")

    assert y.client.pending == 0
    await y.destroy()
    assert ingestion.requests == []


def test_debug_lowers_logger_level(ingestion: FakeIngestion) -> None:
    logger = logging.getLogger("test.debug")
    logger.setLevel(logging.WARNING)

    Yorin(secret_key=SECRET_KEY, debug=True, transport=ingestion.transport(), logger=logger)

    assert logger.level == logging.DEBUG


def test_debug_stays_with_its_instance(ingestion: FakeIngestion) -> None:
    loud = Yorin(secret_key=SECRET_KEY, debug=True, transport=ingestion.transport())
    quiet = Yorin(secret_key=SECRET_KEY, transport=ingestion.transport())

    assert loud.client.logger.isEnabledFor(logging.DEBUG)
    assert not quiet.client.logger.isEnabledFor(logging.DEBUG)
    assert not quiet.client.logger.isEnabledFor(logging.INFO)
    assert loud.client.logger.name.startswith("yorin.client.")
    assert loud.client.logger is not quiet.client.logger


def test_logging_level_setting_applies_to_instance_logger(
    monkeypatch: pytest.MonkeyPatch, ingestion: FakeIngestion
) -> None:
    monkeypatch.setenv("YORIN_LOGGING__LEVEL", "info")

    y = Yorin(secret_key=SECRET_KEY, transport=ingestion.transport())

    assert y.settings.logging.level == "INFO"
    assert y.client.logger.isEnabledFor(logging.INFO)
    assert not y.client.logger.isEnabledFor(logging.DEBUG)


def test_unknown_logging_level_is_a_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("YORIN_LOGGING__LEVEL", "chatty")

    with pytest.raises(ConfigError, match="Unknown log level: CHATTY"):
        Yorin(secret_key=SECRET_KEY)


def test_blank_secret_key_falls_back_to_env(monkeypatch: pytest.MonkeyPatch, ingestion: FakeIngestion) -> None:
    monkeypatch.setenv("YORIN_SECRET_KEY", "sk_env_1")

    y = Yorin(secret_key="", transport=ingestion.transport())

    assert y.settings.secret_key == "sk_env_1"
