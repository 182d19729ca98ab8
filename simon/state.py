"""Focus scopes and dispatch effects shared by navigation and its callers."""

from __future__ import annotations

from enum import Enum


class AppCursor(Enum):
    """Top-level focus: the tab bar or the active tab's contents."""

    TAB_LIST = "tab_list"
    TAB_CONTENTS = "tab_contents"


class MediaCursor(Enum):
    """Focus inside a media tab.

    ``*_OUT`` means the list frame is focused; ``*_IN`` means its rows are.
    """

    LIST_OUT = "list_out"
    LIST_IN = "list_in"
    SUBS_LIST_OUT = "subs_list_out"
    SUBS_LIST_IN = "subs_list_in"


class Effect(Enum):
    """What the dispatch driver must do after one event."""

    NONE = "none"
    BUBBLE = "bubble"
    QUIT = "quit"
    REFRESH = "refresh"
