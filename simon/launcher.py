"""External player launch with terminal hand-off.

The child owns the tty until it exits: TUI mode is left before spawning and
restored afterwards on every path, including spawn failure.
"""

from __future__ import annotations

import contextlib
import logging
import signal
import subprocess
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ProcessSpawnError
from .state import Effect
from .terminal import TerminalController

logger = logging.getLogger(__name__)

MEDIA_PLACEHOLDER = "{0}"
SUBTITLE_PLACEHOLDER = "{1}"


@dataclass(frozen=True)
class CommandTemplate:
    """Program plus arguments that may contain placeholder tokens."""

    program: str
    args: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LaunchResult:
    """Outcome of one launch; ``effect`` is always ``Effect.REFRESH``."""

    argv: tuple[str, ...]
    returncode: int
    effect: Effect = Effect.REFRESH


def build_argv(
    template: CommandTemplate,
    path: Path,
    subtitle: Path | None = None,
) -> list[str]:
    """Substitute placeholders into ``template`` and return the full argv.

    Arguments mentioning the subtitle placeholder are dropped when no
    subtitle is given.
    """
    argv = [template.program]
    for arg in template.args:
        if SUBTITLE_PLACEHOLDER in arg:
            if subtitle is None:
                continue
            arg = arg.replace(SUBTITLE_PLACEHOLDER, str(subtitle))
        argv.append(arg.replace(MEDIA_PLACEHOLDER, str(path)))
    return argv


def _let_child_take_sigint(signum, frame) -> None:
    logger.debug("interrupt passed to child process")


@contextlib.contextmanager
def _sigint_deferred_to_child() -> Iterator[None]:
    """Swallow SIGINT in this process while a child owns the terminal.

    Not ``SIG_IGN``: an ignored disposition would be inherited by the child.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, _let_child_take_sigint)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


class ProcessLauncher:
    """Run a command template against a selected file and wait for it."""

    def __init__(self, terminal: TerminalController) -> None:
        self.terminal = terminal

    def launch(
        self,
        path: Path,
        template: CommandTemplate,
        subtitle: Path | None = None,
    ) -> LaunchResult:
        argv = build_argv(template, path, subtitle)
        logger.info("launching %s", argv)
        with self.terminal.suspended(), _sigint_deferred_to_child():
            try:
                proc = subprocess.run(argv, check=False)
            except (OSError, subprocess.SubprocessError) as exc:
                logger.error("launch failed for %s: %s", argv, exc)
                raise ProcessSpawnError(argv, exc) from exc
        if proc.returncode != 0:
            logger.warning("%s exited with status %d", argv[0], proc.returncode)
        else:
            logger.info("%s exited cleanly", argv[0])
        return LaunchResult(argv=tuple(argv), returncode=proc.returncode)


__all__ = [
    "CommandTemplate",
    "LaunchResult",
    "MEDIA_PLACEHOLDER",
    "ProcessLauncher",
    "SUBTITLE_PLACEHOLDER",
    "build_argv",
]
