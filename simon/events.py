"""Merged keyboard and tick event stream for the dispatch loop.

Two daemon producers feed one queue: a keyboard reader decoding keys from the
tty fd, and a ticker emitting ``TICK`` at a fixed interval regardless of
input. The foreground loop is the only consumer.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Union

from .errors import ChannelClosedError
from .input import KeyReader

logger = logging.getLogger(__name__)

DEFAULT_EXIT_KEY = "q"
DEFAULT_TICK_RATE = 0.25


@dataclass(frozen=True)
class InputEvent:
    """One decoded key token."""

    key: str


@dataclass(frozen=True)
class TickEvent:
    """Periodic wake-up with no payload."""


TICK = TickEvent()

Event = Union[InputEvent, TickEvent]


@dataclass(frozen=True)
class EventMuxConfig:
    """Producer settings.

    ``poll_ms`` bounds how long the keyboard thread waits for a byte before
    re-checking its stop signal. ``None`` makes the read fully blocking, in
    which case ``stop()`` returns only after the next byte arrives.
    """

    exit_key: str = DEFAULT_EXIT_KEY
    tick_rate: float = DEFAULT_TICK_RATE
    poll_ms: int | None = int(DEFAULT_TICK_RATE * 1000)


class EventMux:
    """Own the keyboard and ticker threads and expose their merged output."""

    def __init__(
        self,
        stdin_fd: int,
        config: EventMuxConfig | None = None,
        reader_factory: Callable[[int], KeyReader] = KeyReader,
    ) -> None:
        self.config = config if config is not None else EventMuxConfig()
        self._queue: Queue[Event] = Queue()
        self._closed = threading.Event()
        self._stop_keys = threading.Event()
        self._stop_ticks = threading.Event()
        self._stop_lock = threading.Lock()
        self._reader = reader_factory(stdin_fd)
        self._keys_thread = threading.Thread(
            target=self._run_keys,
            name="simon-keys",
            daemon=True,
        )
        self._tick_thread = threading.Thread(
            target=self._run_ticks,
            name="simon-tick",
            daemon=True,
        )
        self._keys_thread.start()
        self._tick_thread.start()

    def __enter__(self) -> EventMux:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.stop()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def producers_alive(self) -> bool:
        """Return whether either producer thread is still running."""
        return self._keys_thread.is_alive() or self._tick_thread.is_alive()

    def input_exhausted(self) -> bool:
        """Return whether the keyboard thread has ended and nothing is queued."""
        return not self._keys_thread.is_alive() and self._queue.empty()

    def _deliver(self, event: Event) -> None:
        if self._closed.is_set():
            raise ChannelClosedError("event stream stopped")
        self._queue.put(event)

    def _run_keys(self) -> None:
        logger.debug("keyboard reader started")
        try:
            while not self._stop_keys.is_set():
                key = self._reader.read_key(timeout_ms=self.config.poll_ms)
                if key:
                    self._deliver(InputEvent(key))
                    if key == self.config.exit_key:
                        logger.debug("keyboard reader saw exit key")
                        return
                if self._reader.eof:
                    logger.debug("keyboard reader reached end of input")
                    return
        except ChannelClosedError:
            return
        except OSError as exc:
            logger.warning("keyboard reader stopped: %s", exc)
        finally:
            logger.debug("keyboard reader exited")

    def _run_ticks(self) -> None:
        logger.debug("ticker started")
        try:
            while not self._stop_ticks.wait(self.config.tick_rate):
                self._deliver(TICK)
        except ChannelClosedError:
            return
        finally:
            logger.debug("ticker exited")

    def next(self, timeout: float | None = None) -> Event | None:
        """Block until one event is available.

        Returns ``None`` only when ``timeout`` elapses. Raises
        ``ChannelClosedError`` once the stream is stopped.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            if self._closed.is_set():
                raise ChannelClosedError("event stream stopped")
            wait = self.config.tick_rate
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return None
                wait = min(wait, remaining)
            try:
                return self._queue.get(timeout=wait)
            except Empty:
                continue

    def try_next(self) -> Event | None:
        """Return a queued event without blocking, or ``None``."""
        if self._closed.is_set():
            return None
        try:
            return self._queue.get_nowait()
        except Empty:
            return None

    def stop(self) -> None:
        """Signal both producers, wait for them, and discard undelivered events.

        Safe to call repeatedly and from a ``with`` block exit.
        """
        with self._stop_lock:
            self._closed.set()
            self._stop_keys.set()
            self._stop_ticks.set()
            for worker in (self._keys_thread, self._tick_thread):
                if worker is not threading.current_thread():
                    worker.join()
            while True:
                try:
                    self._queue.get_nowait()
                except Empty:
                    break


__all__ = [
    "DEFAULT_EXIT_KEY",
    "DEFAULT_TICK_RATE",
    "Event",
    "EventMux",
    "EventMuxConfig",
    "InputEvent",
    "TICK",
    "TickEvent",
]
