"""Low-level terminal input decoding.

Reads raw bytes from a tty fd and translates them into normalized key tokens.
Handles ESC-sequence timing and arrow keys in both CSI and SS3 forms.
Anything that cannot be decoded becomes an empty token and is dropped.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25

UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
ESC = "ESC"
ENTER = "ENTER"
TAB = "TAB"
BACKSPACE = "BACKSPACE"

_ARROWS = {b"A": UP, b"B": DOWN, b"C": RIGHT, b"D": LEFT}


class KeyReader:
    """Decode keys from ``fd``, keeping look-ahead bytes between calls."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._pending: list[bytes] = []
        self.eof = False

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        if self._pending:
            return self._pending.pop(0)
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if not ch:
            self.eof = True
            return None
        return ch

    def wait_readable(self, timeout_ms: int | None) -> bool:
        """Return whether a byte is available within ``timeout_ms``.

        ``None`` waits without bound.
        """
        if self._pending:
            return True
        timeout = None if timeout_ms is None else max(0.0, timeout_ms / 1000.0)
        ready, _, _ = select.select([self.fd], [], [], timeout)
        return bool(ready)

    def read_key(self, timeout_ms: int | None = None) -> str:
        """Read one key token, or ``""`` on timeout, EOF, or malformed input."""
        if self._pending:
            ch = self._pending.pop(0)
        else:
            if timeout_ms is not None and not self.wait_readable(timeout_ms):
                return ""
            ch = os.read(self.fd, 1)
            if not ch:
                self.eof = True
                return ""

        if ch in {b"\r", b"\n"}:
            return ENTER
        if ch == b"\t":
            return TAB
        if ch in {b"\x08", b"\x7f"}:
            return BACKSPACE
        if ch == b"\x1b":
            return self._read_escape()
        return self._decode_utf8(ch)

    def _read_escape(self) -> str:
        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return ESC
        if seq not in {b"[", b"O"}:
            # Lone ESC followed by an ordinary key.
            self._pending.append(seq)
            return ESC
        final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return ESC
        if final in _ARROWS:
            return _ARROWS[final]
        if seq == b"O":
            return ""
        # Swallow the rest of an unsupported CSI sequence.
        while not (0x40 <= final[0] <= 0x7E):
            final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if final is None:
                return ""
        return ""

    def _decode_utf8(self, lead: bytes) -> str:
        value = lead[0]
        if value < 0x80:
            return lead.decode("ascii")
        if value >> 5 == 0b110:
            extra = 1
        elif value >> 4 == 0b1110:
            extra = 2
        elif value >> 3 == 0b11110:
            extra = 3
        else:
            return ""
        buf = bytearray(lead)
        for _ in range(extra):
            part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return ""
            buf += part
        try:
            return buf.decode("utf-8")
        except UnicodeDecodeError:
            return ""


__all__ = [
    "BACKSPACE",
    "DOWN",
    "ENTER",
    "ESC",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyReader",
    "LEFT",
    "RIGHT",
    "TAB",
    "UP",
]
