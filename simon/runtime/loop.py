"""Dispatch loop for the terminal UI.

Pulls one event at a time from the event stream, routes it through the
navigation state machine, and redraws when something changed. A refresh
effect replaces the event stream and re-reads terminal geometry.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..events import EventMux, EventMuxConfig, InputEvent, TickEvent
from ..launcher import ProcessLauncher
from ..navigation import NavigationStateMachine
from ..render import build_frame
from ..state import Effect
from ..tabs import App, MediaTab, Tab
from ..terminal import TerminalController

logger = logging.getLogger(__name__)

EventMuxFactory = Callable[[int, EventMuxConfig], EventMux]


@dataclass
class LoopStats:
    """Counters reported back to the caller once the loop exits."""

    events: int = 0
    refreshes: int = 0
    launches: int = 0


def run_main_loop(
    app: App,
    terminal: TerminalController,
    stdin_fd: int,
    launcher: ProcessLauncher,
    mux_config: EventMuxConfig | None = None,
    mux_factory: EventMuxFactory = EventMux,
) -> LoopStats:
    """Run until a quit effect or until keyboard input ends.

    ``ProcessSpawnError`` propagates to the caller.
    """
    config = mux_config if mux_config is not None else EventMuxConfig()
    stats = LoopStats()
    events = mux_factory(stdin_fd, config)

    def launch(_tab: Tab, media_tab: MediaTab) -> None:
        # Nothing may read the tty while the child owns it.
        events.stop()
        stats.launches += 1
        result = launcher.launch(
            media_tab.selected_media(),
            media_tab.command,
            media_tab.selected_subtitle(),
        )
        if result.returncode != 0:
            app.status_message = f"{result.argv[0]} exited with status {result.returncode}"

    machine = NavigationStateMachine(app, launch)
    size = terminal.size()
    dirty = True
    try:
        while True:
            if dirty:
                terminal.write(build_frame(app, size.columns, size.lines, app.status_message))
                dirty = False

            event = events.next()
            stats.events += 1
            if isinstance(event, TickEvent):
                if events.input_exhausted():
                    logger.warning("keyboard input closed; leaving")
                    break
                current = terminal.size()
                if current != size:
                    size = current
                    dirty = True
            elif isinstance(event, InputEvent):
                app.status_message = ""
                dirty = True

            effect = machine.handle(event)
            if effect is Effect.QUIT:
                logger.info("quit requested")
                break
            if effect is Effect.REFRESH:
                stats.refreshes += 1
                events.stop()
                events = mux_factory(stdin_fd, config)
                size = terminal.size()
                dirty = True
    finally:
        events.stop()
    return stats


__all__ = ["LoopStats", "run_main_loop"]
