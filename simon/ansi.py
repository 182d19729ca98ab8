"""Display-width helpers for plain text drawn inside boxes."""

from __future__ import annotations

import unicodedata


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def fit(text: str, cols: int) -> str:
    """Clip ``text`` to ``cols`` display columns and pad it with spaces."""
    if cols <= 0:
        return ""
    out: list[str] = []
    used = 0
    for ch in text:
        if not ch.isprintable():
            ch = "?"
        width = char_display_width(ch)
        if used + width > cols:
            break
        out.append(ch)
        used += width
    out.append(" " * (cols - used))
    return "".join(out)
