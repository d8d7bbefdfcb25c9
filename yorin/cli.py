"""yorin.cli

Command line entry point: send events from a shell or a cron job.

Design constraints:
- argparse-based.
- Credentials come from the environment (``YORIN_SECRET_KEY``, ``YORIN_API_URL``)
  or a YAML file given with ``--config``; never from argv.
- Every command flushes and destroys the client before exiting.

Exit codes: 0 sent, 1 rejected or undeliverable, 2 usage.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx

from yorin.core.exceptions import YorinError

EPILOG = "Secret keys are read from YORIN_SECRET_KEY, never from the command line."


@dataclass(frozen=True)
class CliContext:
    config_file: Path | None
    log_level: str | None = None
    json_logs: bool = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yorin",
        description="Send server-side analytics events to Yorin.",
        epilog=EPILOG,
    )
    parser.add_argument("--version", action="store_true", help="Print version and exit.")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file.")
    parser.add_argument("--log-level", default=None, help="Log level for the yorin logger (default: logging.level setting).")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as one JSON object per line.")

    sub = parser.add_subparsers(dest="command")

    p_track = sub.add_parser("track", help="Send a custom event")
    p_track.add_argument("event_name")
    p_track.add_argument("--user-id", default=None)
    p_track.add_argument("--properties", default=None, help="JSON object of event properties.")

    p_page = sub.add_parser("page", help="Send a page view")
    p_page.add_argument("name", nargs="?", default=None)
    p_page.add_argument("--user-id", default=None)
    p_page.add_argument("--url", default=None)
    p_page.add_argument("--title", default=None)

    p_batch = sub.add_parser("batch", help="Send canonical events from a JSON array file")
    p_batch.add_argument("file", type=Path)

    return parser


def _print_version() -> None:
    from yorin import __version__

    print(f"yorin v{__version__}")


def _parse_properties(raw: str | None) -> dict[str, Any] | None:
    if raw is None:
        return None
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("--properties must be a JSON object")
    return data


def _make_yorin(ctx: CliContext):
    from yorin.core.config import Settings
    from yorin.core.log import configure_logging
    from yorin.sdk import Yorin

    settings = Settings.from_yaml(ctx.config_file) if ctx.config_file is not None else Settings.load()
    logger = configure_logging(
        ctx.log_level or settings.logging.level,
        json_output=ctx.json_logs or settings.logging.json_output,
    )
    return Yorin(settings=settings, logger=logger)


async def _run(ctx: CliContext, action: Callable[[Any], Awaitable[None]]) -> None:
    yorin = _make_yorin(ctx)
    try:
        await action(yorin)
        await yorin.flush()
    finally:
        await yorin.destroy()


def _cmd_track(ctx: CliContext, args: argparse.Namespace) -> Callable[[Any], Awaitable[None]]:
    properties = _parse_properties(args.properties)

    async def action(yorin: Any) -> None:
        await yorin.track(args.event_name, user_id=args.user_id, properties=properties)

    return action


def _cmd_page(ctx: CliContext, args: argparse.Namespace) -> Callable[[Any], Awaitable[None]]:
    from yorin.events import PageOptions

    options = PageOptions(url=args.url, title=args.title)

    async def action(yorin: Any) -> None:
        await yorin.page(args.name, user_id=args.user_id, options=options)

    return action


def _cmd_batch(ctx: CliContext, args: argparse.Namespace) -> Callable[[Any], Awaitable[None]]:
    events = json.loads(Path(args.file).read_text(encoding="utf-8"))
    if not isinstance(events, list):
        raise ValueError(f"{args.file} must contain a JSON array of events")

    async def action(yorin: Any) -> None:
        await yorin.track_batch(events)

    return action


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        _print_version()
        return 0

    if not args.command:
        parser.print_help()
        return 2

    ctx = CliContext(config_file=args.config, log_level=args.log_level, json_logs=args.json_logs)

    dispatch: dict[str, Callable[[CliContext, argparse.Namespace], Callable[[Any], Awaitable[None]]]] = {
        "track": _cmd_track,
        "page": _cmd_page,
        "batch": _cmd_batch,
    }

    fn = dispatch.get(str(args.command))
    if fn is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 2

    try:
        action = fn(ctx, args)
    except (ValueError, OSError) as e:
        print(f"invalid input: {e}", file=sys.stderr)
        return 2

    try:
        asyncio.run(_run(ctx, action))
    except (YorinError, httpx.HTTPError, ValueError) as e:
        print(f"{args.command} failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
