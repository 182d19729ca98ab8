"""End-to-end session tests: real event threads, real child processes.

The terminal is replaced by a recorder so no tty is required; keys are fed
through a pipe the way a raw-mode tty would deliver them.
"""

from __future__ import annotations

import contextlib
import io
import json
import os
import sys
import tempfile
import threading
import time
import unittest
from contextlib import redirect_stderr
from pathlib import Path
from unittest import mock

from simon import cli
from simon.events import EventMuxConfig
from simon.launcher import ProcessLauncher
from simon.runtime.app import load_app
from simon.runtime.loop import run_main_loop
from simon.state import AppCursor

RECORD_ARGV = "import json, sys; json.dump(sys.argv[1:], open(sys.argv[1], 'w'))"


class RecordingTerminal:
    def __init__(self) -> None:
        self.calls: list[str] = []
        self.frames: list[str] = []

    @contextlib.contextmanager
    def suspended(self):
        self.calls.append("leave")
        try:
            yield
        finally:
            self.calls.append("enter")

    def size(self) -> os.terminal_size:
        return os.terminal_size((70, 20))

    def write(self, payload: str) -> None:
        self.frames.append(payload)


def _wait_for(predicate, timeout_seconds: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout_seconds
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


class SessionFlowTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name).resolve()
        self.media = self.root / "media"
        self.media.mkdir()
        for name in ("a.mp4", "b.mp4", "skip.txt"):
            (self.media / name).write_bytes(b"")
        self.record = self.root / "argv.json"
        self.config = self.root / "simon.config.toml"
        self.config.write_text(
            "[movies]\n"
            'name = "Movies"\n'
            'kind = "media"\n'
            "priority = 1\n"
            f"media_dirs = [{json.dumps(str(self.media))}]\n"
            'media_types = ["mp4"]\n'
            "[movies.command]\n"
            f"program = {json.dumps(sys.executable)}\n"
            f"args = [\"-c\", {json.dumps(RECORD_ARGV)}, {json.dumps(str(self.record))}, \"{{0}}\"]\n",
            encoding="utf-8",
        )

    def test_play_launches_child_and_session_resumes_until_quit(self) -> None:
        app = load_app(self.config)
        terminal = RecordingTerminal()
        read_fd, write_fd = os.pipe()
        self.addCleanup(os.close, read_fd)
        self.addCleanup(os.close, write_fd)
        outcome: dict[str, object] = {}

        def run() -> None:
            try:
                outcome["stats"] = run_main_loop(
                    app,
                    terminal,
                    read_fd,
                    ProcessLauncher(terminal),
                    EventMuxConfig(tick_rate=0.02, poll_ms=20),
                )
            except BaseException as exc:
                outcome["error"] = exc

        loop_thread = threading.Thread(target=run, daemon=True)
        loop_thread.start()
        # DOWN, ENTER, DOWN selects b.mp4; p plays it.
        os.write(write_fd, b"\x1b[B\r\x1b[Bp")
        self.assertTrue(_wait_for(lambda: self.record.exists() and self.record.stat().st_size > 0))
        self.assertTrue(_wait_for(lambda: terminal.calls == ["leave", "enter"]))
        os.write(write_fd, b"q")
        loop_thread.join(timeout=5.0)

        self.assertFalse(loop_thread.is_alive())
        self.assertNotIn("error", outcome)
        stats = outcome["stats"]
        self.assertEqual(stats.launches, 1)
        self.assertEqual(stats.refreshes, 1)
        argv = json.loads(self.record.read_text(encoding="utf-8"))
        self.assertEqual(argv, [str(self.record), str(self.media / "b.mp4")])
        self.assertIs(app.cursor, AppCursor.TAB_CONTENTS)
        self.assertEqual(
            [t for t in threading.enumerate() if t.name.startswith("simon-") and t.is_alive()],
            [],
        )

    def test_empty_media_tab_aborts_before_terminal_is_touched(self) -> None:
        for path in self.media.iterdir():
            path.unlink()
        stderr = io.StringIO()
        with mock.patch("simon.cli.configure_logging"), mock.patch(
            "simon.runtime.app.TerminalController"
        ) as controller_cls, redirect_stderr(stderr), self.assertRaises(SystemExit) as ctx:
            cli.main(["--config", str(self.config)])

        self.assertEqual(ctx.exception.code, 2)
        controller_cls.assert_not_called()
        self.assertIn("Movies", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
