"""Interactive bootstrap: settings -> tabs -> terminal -> dispatch loop."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..events import EventMuxConfig
from ..launcher import ProcessLauncher
from ..settings import settings_from_file
from ..tabs import App, build_app
from ..terminal import TerminalController
from .loop import LoopStats, run_main_loop

logger = logging.getLogger(__name__)


def load_app(config_path: Path) -> App:
    """Read settings and scan every tab; raises ``ConfigurationError``."""
    return build_app(settings_from_file(config_path))


def run_browser(config_path: Path, mux_config: EventMuxConfig | None = None) -> LoopStats:
    """Build tabs, then run the UI with raw/alternate mode held around the loop.

    Tabs are built before any terminal mode change so configuration errors
    leave the terminal untouched.
    """
    app = load_app(config_path)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        raise SystemExit("simon needs an interactive terminal.")

    terminal = TerminalController(stdin_fd, stdout_fd)
    launcher = ProcessLauncher(terminal)
    with terminal.raw_mode():
        stats = run_main_loop(app, terminal, stdin_fd, launcher, mux_config)
    logger.info(
        "session ended: %d event(s), %d launch(es), %d refresh(es)",
        stats.events,
        stats.launches,
        stats.refreshes,
    )
    return stats
