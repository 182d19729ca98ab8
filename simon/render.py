"""Frame rendering for the tab bar and media lists.

Builds one full-screen ANSI frame from ``App`` state. Presentation only: the
caller writes the returned string to the terminal.
"""

from __future__ import annotations

from pathlib import Path

from .ansi import display_width, fit
from .colors import RESET, fg
from .select_loop import SelectLoop
from .state import AppCursor, MediaCursor
from .tabs import App, MediaTab, Tab

TITLE = "Simon"
HIGHLIGHT_SYMBOL = ">"
TAB_BAR_ROWS = 3
MIN_LIST_ROWS = 3


def list_window_start(selected: int, total: int, visible: int) -> int:
    """Return the first visible row index keeping ``selected`` on screen."""
    if visible <= 0 or total <= visible:
        return 0
    start = max(0, selected - visible + 1)
    return min(start, total - visible)


def _box(
    title: str,
    body: list[str],
    width: int,
    height: int,
    border_color: str,
    title_color: str | None = None,
) -> list[str]:
    """Return ``height`` rows of a bordered box ``width`` columns wide."""
    inner = max(0, width - 2)
    border = fg(border_color)
    title_style = fg(title_color or border_color, bold=title_color is not None)
    label = fit(title, min(display_width(title), inner))
    top = (
        f"{border}┌{RESET}{title_style}{label}{RESET}"
        f"{border}{'─' * max(0, inner - display_width(label))}┐{RESET}"
    )
    rows = [top]
    for row in range(max(0, height - 2)):
        text = body[row] if row < len(body) else " " * inner
        rows.append(f"{border}│{RESET}{text}{border}│{RESET}")
    rows.append(f"{border}└{'─' * inner}┘{RESET}")
    return rows[:height]


def _tab_titles(app: App, inner: int) -> str:
    tab = app.current_tab()
    parts: list[str] = []
    for idx, other in enumerate(app.tabs):
        color = tab.highlight_color if idx == app.tabs.index else tab.base_color
        parts.append(f"{fg(color)}{other.name}{RESET}")
    plain = " │ ".join(other.name for other in app.tabs)
    used = display_width(plain)
    if used + 1 > inner:
        return fit(plain, inner)
    return " " + " │ ".join(parts) + " " * (inner - used - 1)


def _list_rows(
    items: SelectLoop[Path],
    inner: int,
    visible: int,
    style: str,
) -> list[str]:
    start = list_window_start(items.index, len(items), visible)
    rows: list[str] = []
    for idx in range(start, min(len(items), start + visible)):
        name = items.items[idx].name
        if idx == items.index:
            rows.append(f"{style}{fit(HIGHLIGHT_SYMBOL + name, inner)}{RESET}")
        else:
            rows.append(fit(" " + name, inner))
    return rows


def _media_page(tab: Tab, media_tab: MediaTab, has_focus: bool, width: int, height: int) -> list[str]:
    cursor = media_tab.cursor
    media_width = width
    subs_box: list[str] = []
    if media_tab.subs is not None:
        media_width = width // 2
        subs_width = width - media_width
        subs_focus = has_focus and cursor in {MediaCursor.SUBS_LIST_OUT, MediaCursor.SUBS_LIST_IN}
        subs_active = has_focus and cursor is MediaCursor.SUBS_LIST_IN
        subs_color = tab.highlight_color if subs_active else tab.base_color
        subs_box = _box(
            "Subtitles",
            _list_rows(media_tab.subs, subs_width - 2, height - 2, fg(subs_color, bold=True)),
            subs_width,
            height,
            tab.highlight_color if subs_focus else tab.base_color,
            subs_color,
        )

    media_focus = has_focus and cursor in {MediaCursor.LIST_OUT, MediaCursor.LIST_IN}
    media_active = has_focus and cursor is MediaCursor.LIST_IN
    media_color = tab.highlight_color if media_active else tab.base_color
    media_box = _box(
        "Media",
        _list_rows(media_tab.media, media_width - 2, height - 2, fg(media_color, bold=True)),
        media_width,
        height,
        tab.highlight_color if media_focus else tab.base_color,
        media_color,
    )
    if not subs_box:
        return media_box
    return [left + right for left, right in zip(media_box, subs_box)]


def _blank_page(tab: Tab, width: int, height: int) -> list[str]:
    return _box("", [fit(" Nothing to show for this tab.", width - 2)], width, height, tab.base_color)


def build_frame(app: App, width: int, height: int, status: str = "") -> str:
    """Return a full-screen frame for ``app`` at the given geometry."""
    width = max(4, width)
    tab = app.current_tab()
    bar_color = tab.highlight_color if app.cursor is AppCursor.TAB_LIST else tab.base_color
    rows = _box(TITLE, [_tab_titles(app, width - 2)], width, TAB_BAR_ROWS, bar_color)

    status_rows = 1 if status else 0
    body_height = max(MIN_LIST_ROWS, height - TAB_BAR_ROWS - status_rows)
    has_focus = app.cursor is AppCursor.TAB_CONTENTS
    if isinstance(tab.payload, MediaTab):
        rows.extend(_media_page(tab, tab.payload, has_focus, width, body_height))
    else:
        rows.extend(_blank_page(tab, width, body_height))
    if status:
        rows.append(f"\033[7m{fit(status, width)}{RESET}")

    return "\033[H\033[J" + "\r\n".join(rows[: max(1, height)])


__all__ = ["build_frame", "list_window_start"]
