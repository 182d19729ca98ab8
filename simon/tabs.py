"""Tab model built once from settings.

Per-tab selection indices and cursors are the only state that changes after
startup; everything else here is fixed for the process lifetime.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .colors import DEFAULT_BASE_COLOR, DEFAULT_HIGHLIGHT_COLOR
from .errors import ConfigurationError
from .launcher import CommandTemplate
from .scan import find_files_in
from .select_loop import SelectLoop
from .settings import TabSettings
from .state import AppCursor, MediaCursor

logger = logging.getLogger(__name__)

MEDIA_KIND = "media"

FileFinder = Callable[[Iterable[str], Iterable[str]], list[Path]]


@dataclass
class MediaTab:
    media: SelectLoop[Path]
    command: CommandTemplate
    subs: SelectLoop[Path] | None = None
    cursor: MediaCursor = MediaCursor.LIST_OUT

    def selected_media(self) -> Path:
        return self.media.current()

    def selected_subtitle(self) -> Path | None:
        return self.subs.current() if self.subs is not None else None


@dataclass
class BlankTab:
    """Placeholder payload for tab kinds this build does not understand."""

    kind: str


TabPayload = Union[MediaTab, BlankTab]


@dataclass
class Tab:
    name: str
    payload: TabPayload
    priority: int = 0
    base_color: str = DEFAULT_BASE_COLOR
    highlight_color: str = DEFAULT_HIGHLIGHT_COLOR


@dataclass
class App:
    """Everything the dispatch loop mutates: tab selection and focus."""

    tabs: SelectLoop[Tab]
    cursor: AppCursor = AppCursor.TAB_LIST
    status_message: str = ""

    def current_tab(self) -> Tab:
        return self.tabs.current()


def build_media_tab(settings: TabSettings, find: FileFinder = find_files_in) -> MediaTab:
    """Scan configured directories and build a media payload.

    Raises ``ConfigurationError`` for missing settings and
    ``EmptySelectionError`` when no media files match.
    """
    if settings.media_types is None:
        raise ConfigurationError(
            f"Configuration error for {settings.name}, you must provide media_types "
            f'for a kind="media" tab'
        )
    if settings.media_dirs is None:
        raise ConfigurationError(
            f"Configuration error for {settings.name}, you must provide media_dirs "
            f'for a kind="media" tab'
        )
    if settings.command is None:
        raise ConfigurationError(
            f"Configuration error for {settings.name}, you must provide a command "
            f'for a kind="media" tab'
        )

    media = SelectLoop(
        find(settings.media_dirs, settings.media_types),
        label=f"media list for tab {settings.name!r}",
    )

    subs: SelectLoop[Path] | None = None
    if settings.subs_dirs is not None:
        if settings.subs_types is None:
            raise ConfigurationError(
                f"Configuration error for {settings.name}, subs_dirs requires subs_types"
            )
        found = find(settings.subs_dirs, settings.subs_types)
        if found:
            subs = SelectLoop(found, label=f"subtitle list for tab {settings.name!r}")
        else:
            logger.warning("tab %s: no subtitle files found, subtitle list disabled", settings.name)

    logger.info(
        "tab %s: %d media file(s), %d subtitle file(s)",
        settings.name,
        len(media),
        len(subs) if subs is not None else 0,
    )
    return MediaTab(media=media, command=settings.command, subs=subs)


def build_tab(settings: TabSettings, find: FileFinder = find_files_in) -> Tab:
    if settings.kind == MEDIA_KIND:
        payload: TabPayload = build_media_tab(settings, find)
    else:
        logger.warning("tab %s has unknown kind %r", settings.name, settings.kind)
        payload = BlankTab(kind=settings.kind)
    return Tab(
        name=settings.name,
        payload=payload,
        priority=settings.priority,
        base_color=settings.base_color,
        highlight_color=settings.highlight_color,
    )


def build_app(settings: Sequence[TabSettings], find: FileFinder = find_files_in) -> App:
    """Build every tab up front so configuration errors surface before the UI starts."""
    return App(tabs=SelectLoop((build_tab(tab, find) for tab in settings), label="tab list"))


__all__ = [
    "App",
    "BlankTab",
    "MEDIA_KIND",
    "MediaTab",
    "Tab",
    "build_app",
    "build_media_tab",
    "build_tab",
]
