"""Command-line front door for simon.

Parses CLI options, configures logging, and resolves the settings file.
Then dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import ConfigurationError, ProcessSpawnError
from .events import DEFAULT_EXIT_KEY, EventMuxConfig
from .logs import configure_logging
from .runtime.app import load_app, run_browser
from .settings import default_config_path
from .tabs import App, MediaTab

EXIT_SPAWN_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def describe_tabs(app: App) -> str:
    """Return one line per tab with its kind and item counts."""
    lines: list[str] = []
    for tab in app.tabs:
        payload = tab.payload
        if isinstance(payload, MediaTab):
            detail = f"media, {len(payload.media)} item(s)"
            if payload.subs is not None:
                detail += f", {len(payload.subs)} subtitle(s)"
            detail += f", command: {payload.command.program}"
        else:
            detail = f"{payload.kind} (not supported)"
        lines.append(f"{tab.priority:>4}  {tab.name}: {detail}")
    return "\n".join(lines) + "\n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simon",
        description="Browse configured media tabs in the terminal and launch a player.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Settings file (default: {default_config_path()}).",
    )
    parser.add_argument(
        "--tick-ms",
        type=_positive_int,
        default=250,
        help="Interval between idle ticks in milliseconds (default: 250).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument("--log-level", default=None, help="Log level name or number (default: WARNING).")
    parser.add_argument("--list", action="store_true", help="Print configured tabs and exit.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the browser.

    Configuration errors exit with status 2 before any terminal mode change;
    a player that cannot be spawned exits with status 1 after the terminal
    has been restored.
    """
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, log_file=args.log_file)
    config_path = args.config if args.config is not None else default_config_path()

    try:
        if args.list:
            sys.stdout.write(describe_tabs(load_app(config_path)))
            return
        tick_rate = args.tick_ms / 1000.0
        run_browser(
            config_path,
            EventMuxConfig(exit_key=DEFAULT_EXIT_KEY, tick_rate=tick_rate, poll_ms=args.tick_ms),
        )
    except ConfigurationError as exc:
        sys.stderr.write(f"simon: {exc}\n")
        raise SystemExit(EXIT_CONFIG_ERROR) from exc
    except ProcessSpawnError as exc:
        sys.stderr.write(f"simon: {exc}\n")
        raise SystemExit(EXIT_SPAWN_FAILURE) from exc
