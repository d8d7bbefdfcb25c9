from __future__ import annotations

import json
import logging
from pathlib import Path

import httpx
import pytest

from tests.unit._fakes import SECRET_KEY, FakeIngestion
from yorin import cli
from yorin.cli import build_parser, main
from yorin.core.log import JsonFormatter
from yorin.sdk import Yorin


@pytest.fixture()
def wired(monkeypatch: pytest.MonkeyPatch, ingestion: FakeIngestion) -> FakeIngestion:
    def _make_yorin(ctx: cli.CliContext) -> Yorin:
        return Yorin(
            config_file=ctx.config_file,
            secret_key=SECRET_KEY,
            retry_attempts=1,
            transport=ingestion.transport(),
            logger=logging.getLogger("test"),
        )

    monkeypatch.setattr(cli, "_make_yorin", _make_yorin)
    return ingestion


def test_cli_help_includes_subcommands(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main([])
    assert rc == 2
    out = capsys.readouterr().out
    assert "track" in out
    assert "page" in out
    assert "batch" in out


def test_cli_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["--version"])
    assert rc == 0
    assert capsys.readouterr().out.startswith("yorin v")


def test_parser_track_args() -> None:
    args = build_parser().parse_args(["track", "signup", "--user-id", "u1", "--properties", '{"a": 1}'])
    assert args.command == "track"
    assert args.event_name == "signup"
    assert args.user_id == "u1"


def test_cli_track_sends_event(wired: FakeIngestion) -> None:
    rc = main(["track", "signup", "--user-id", "u1", "--properties", '{"plan": "pro"}'])
    assert rc == 0
    assert len(wired.requests) == 1
    body = wired.bodies[0]
    assert body["event_name"] == "signup"
    assert body["properties"] == {"plan": "pro"}


def test_cli_page_sends_event(wired: FakeIngestion) -> None:
    rc = main(["page", "Pricing", "--user-id", "u1", "--url", "https://x.test/pricing"])
    assert rc == 0
    assert wired.bodies[0]["page_url"] == "https://x.test/pricing"
    assert wired.bodies[0]["page_title"] == "Pricing"


def test_cli_batch_sends_file(tmp_path: Path, wired: FakeIngestion) -> None:
    f = tmp_path / "events.json"
    f.write_text(json.dumps([{"event_name": "a", "user_id": "u1"}, {"event_name": "b", "user_id": "u2"}]))

    rc = main(["batch", str(f)])

    assert rc == 0
    assert [e["event_name"] for e in wired.bodies[0]] == ["a", "b"]


def test_cli_rejects_bad_properties(wired: FakeIngestion, capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["track", "signup", "--user-id", "u1", "--properties", "[1, 2]"])
    assert rc == 2
    assert "properties" in capsys.readouterr().err
    assert wired.requests == []


def test_cli_reports_validation_failure(wired: FakeIngestion, capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["track", "signup"])
    assert rc == 1
    assert "Either user_id or group_id" in capsys.readouterr().err


def test_cli_reports_delivery_failure(wired: FakeIngestion, capsys: pytest.CaptureFixture[str]) -> None:
    wired.default = httpx.Response(401, text="Unauthorized")

    rc = main(["track", "signup", "--user-id", "u1"])

    assert rc == 1
    assert "HTTP 401: Unauthorized" in capsys.readouterr().err


def test_cli_missing_secret_key(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["track", "signup", "--user-id", "u1"])
    assert rc == 1
    assert "YORIN_SECRET_KEY" in capsys.readouterr().err


@pytest.mark.anyio
async def test_logging_settings_configure_cli_logger(tmp_path: Path, yorin_logger: logging.Logger) -> None:
    cfg = tmp_path / "yorin.yaml"
    cfg.write_text(f"secret_key: {SECRET_KEY}\nlogging:\n  level: info\n  json_output: true\n")

    y = cli._make_yorin(cli.CliContext(config_file=cfg))
    await y.destroy()

    assert y.client.logger is yorin_logger
    assert yorin_logger.level == logging.INFO
    installed = [h for h in yorin_logger.handlers if getattr(h, "_yorin_handler", False)]
    assert len(installed) == 1
    assert isinstance(installed[0].formatter, JsonFormatter)


@pytest.mark.anyio
async def test_log_level_flag_beats_logging_settings(
    monkeypatch: pytest.MonkeyPatch, yorin_logger: logging.Logger
) -> None:
    monkeypatch.setenv("YORIN_SECRET_KEY", SECRET_KEY)
    monkeypatch.setenv("YORIN_LOGGING__LEVEL", "ERROR")

    y = cli._make_yorin(cli.CliContext(config_file=None, log_level="DEBUG"))
    await y.destroy()

    assert yorin_logger.level == logging.DEBUG
