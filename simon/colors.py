"""Named colors accepted in tab settings and their ANSI foreground codes."""

from __future__ import annotations

DEFAULT_BASE_COLOR = "white"
DEFAULT_HIGHLIGHT_COLOR = "yellow"

COLOR_CODES: dict[str, str] = {
    "black": "30",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
    "white": "37",
    "gray": "90",
    "light_red": "91",
    "light_green": "92",
    "light_yellow": "93",
    "light_blue": "94",
    "light_magenta": "95",
    "light_cyan": "96",
}


def fg(color: str, bold: bool = False) -> str:
    """Return the SGR escape for ``color``; unknown names reset to default."""
    code = COLOR_CODES.get(color, "39")
    return f"\033[1;{code}m" if bold else f"\033[{code}m"


RESET = "\033[0m"
