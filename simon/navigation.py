"""Focus routing for the tab list, tab contents, and media lists.

Each event is handled by exactly one scope. Tab-local handlers either consume
a key or answer ``Effect.BUBBLE`` so the app level can move focus back to the
tab bar. Process and terminal work is delegated to the injected launch
callback; this module only mutates selection and cursor state.
"""

from __future__ import annotations

from collections.abc import Callable

from .events import Event, InputEvent
from .input import DOWN, ENTER, ESC, LEFT, RIGHT, UP
from .keymap import KeyBinding, KeyRegistry
from .state import AppCursor, Effect, MediaCursor
from .tabs import App, MediaTab, Tab

QUIT_KEYS = frozenset({ESC, "q"})
PLAY_KEY = "p"

LaunchCallback = Callable[[Tab, MediaTab], object]


class NavigationStateMachine:
    """Apply one event at a time to ``app`` and report what the driver must do."""

    def __init__(self, app: App, launch: LaunchCallback) -> None:
        self.app = app
        self._launch = launch
        self._tab_list_keys = KeyRegistry().register_bindings(
            KeyBinding((LEFT,), self._previous_tab),
            KeyBinding((RIGHT,), self._next_tab),
            KeyBinding((DOWN,), self._enter_tab_contents),
        )
        self._media_keys: dict[MediaCursor, KeyRegistry] = {
            MediaCursor.LIST_OUT: KeyRegistry().register_bindings(
                KeyBinding((UP,), self._bubble),
                KeyBinding((ENTER,), self._focus(MediaCursor.LIST_IN)),
                KeyBinding((RIGHT,), self._focus_subtitles),
                KeyBinding((PLAY_KEY,), self._play),
            ),
            MediaCursor.LIST_IN: KeyRegistry().register_bindings(
                KeyBinding((UP,), self._previous_media),
                KeyBinding((DOWN,), self._next_media),
                KeyBinding((ENTER,), self._focus(MediaCursor.LIST_OUT)),
                KeyBinding((PLAY_KEY,), self._play),
            ),
            MediaCursor.SUBS_LIST_OUT: KeyRegistry().register_bindings(
                KeyBinding((UP,), self._bubble),
                KeyBinding((LEFT,), self._focus(MediaCursor.LIST_OUT)),
                KeyBinding((ENTER,), self._focus(MediaCursor.SUBS_LIST_IN)),
                KeyBinding((PLAY_KEY,), self._play),
            ),
            MediaCursor.SUBS_LIST_IN: KeyRegistry().register_bindings(
                KeyBinding((UP,), self._previous_subtitle),
                KeyBinding((DOWN,), self._next_subtitle),
                KeyBinding((ENTER,), self._focus(MediaCursor.SUBS_LIST_OUT)),
                KeyBinding((PLAY_KEY,), self._play),
            ),
        }

    @property
    def cursor(self) -> AppCursor:
        return self.app.cursor

    def handle(self, event: Event) -> Effect:
        """Route ``event`` to the active scope; ticks never change state."""
        if not isinstance(event, InputEvent):
            return Effect.NONE
        key = event.key
        if key in QUIT_KEYS:
            return Effect.QUIT
        if self.app.cursor is AppCursor.TAB_LIST:
            return self._tab_list_keys.dispatch(key) or Effect.NONE

        effect = self.handle_tab_key(self.app.current_tab(), key)
        if effect is Effect.BUBBLE:
            if key == UP:
                self.app.cursor = AppCursor.TAB_LIST
            return Effect.NONE
        return effect

    def handle_tab_key(self, tab: Tab, key: str) -> Effect:
        """Handle ``key`` inside ``tab``; unknown tab kinds bubble everything."""
        if not isinstance(tab.payload, MediaTab):
            return Effect.BUBBLE
        registry = self._media_keys[tab.payload.cursor]
        return registry.dispatch(key) or Effect.NONE

    def _media_tab(self) -> MediaTab:
        tab = self.app.current_tab()
        if not isinstance(tab.payload, MediaTab):
            raise TypeError(f"tab {tab.name!r} has no media list")
        return tab.payload

    def _previous_tab(self) -> Effect:
        self.app.tabs.previous()
        return Effect.NONE

    def _next_tab(self) -> Effect:
        self.app.tabs.next()
        return Effect.NONE

    def _enter_tab_contents(self) -> Effect:
        self.app.cursor = AppCursor.TAB_CONTENTS
        payload = self.app.current_tab().payload
        if isinstance(payload, MediaTab):
            payload.cursor = MediaCursor.LIST_OUT
        return Effect.NONE

    def _bubble(self) -> Effect:
        return Effect.BUBBLE

    def _focus(self, cursor: MediaCursor) -> Callable[[], Effect]:
        def move() -> Effect:
            self._media_tab().cursor = cursor
            return Effect.NONE

        return move

    def _focus_subtitles(self) -> Effect:
        media_tab = self._media_tab()
        if media_tab.subs is not None:
            media_tab.cursor = MediaCursor.SUBS_LIST_OUT
        return Effect.NONE

    def _previous_media(self) -> Effect:
        self._media_tab().media.previous()
        return Effect.NONE

    def _next_media(self) -> Effect:
        self._media_tab().media.next()
        return Effect.NONE

    def _previous_subtitle(self) -> Effect:
        subs = self._media_tab().subs
        if subs is not None:
            subs.previous()
        return Effect.NONE

    def _next_subtitle(self) -> Effect:
        subs = self._media_tab().subs
        if subs is not None:
            subs.next()
        return Effect.NONE

    def _play(self) -> Effect:
        self._launch(self.app.current_tab(), self._media_tab())
        # The child owned the terminal; geometry and mode must be reacquired.
        return Effect.REFRESH


__all__ = ["LaunchCallback", "NavigationStateMachine", "PLAY_KEY", "QUIT_KEYS"]
