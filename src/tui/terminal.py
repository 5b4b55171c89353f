"""Curses-backed renderer and input source for the control loop."""

from __future__ import annotations

import curses
import logging
import os
from typing import Optional

from runtime.keys import (
    KEY_BACKSPACE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_PAGE_DOWN,
    KEY_PAGE_UP,
    KEY_RIGHT,
    KEY_TAB,
    KEY_UP,
    KeyEvent,
)
from runtime.state import AppState

from .screens import RENDERERS, render_minimized
from .themes import init_theme

_SPECIAL_KEYS = {
    curses.KEY_UP: KEY_UP,
    curses.KEY_DOWN: KEY_DOWN,
    curses.KEY_LEFT: KEY_LEFT,
    curses.KEY_RIGHT: KEY_RIGHT,
    curses.KEY_PPAGE: KEY_PAGE_UP,
    curses.KEY_NPAGE: KEY_PAGE_DOWN,
    curses.KEY_BACKSPACE: KEY_BACKSPACE,
    curses.KEY_ENTER: KEY_ENTER,
}

_CONTROL_CHARS = {
    "\n": KEY_ENTER,
    "\r": KEY_ENTER,
    "\x1b": KEY_ESCAPE,
    "\t": KEY_TAB,
    "\x7f": KEY_BACKSPACE,
    "\x08": KEY_BACKSPACE,
}

# Keep the Esc key responsive instead of waiting for escape sequences
os.environ.setdefault("ESCDELAY", "25")


def translate_key(raw: int | str) -> Optional[KeyEvent]:
    """Map a `get_wch` result to a `KeyEvent`; unmapped keys become None."""
    if isinstance(raw, int):
        code = _SPECIAL_KEYS.get(raw)
        return KeyEvent(code) if code is not None else None
    if raw == "\x03":
        return KeyEvent("c", ctrl=True)
    if raw in _CONTROL_CHARS:
        return KeyEvent(_CONTROL_CHARS[raw])
    if raw.isprintable():
        return KeyEvent(raw)
    return None


class CursesTerminal:
    def __init__(self, stdscr: "curses.window", *, logger: Optional[logging.Logger] = None):
        self._stdscr = stdscr
        self._logger = logger or logging.getLogger("tui")
        self._theme: Optional[str] = None
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        stdscr.keypad(True)

    def render(self, state: AppState) -> None:
        theme = state.config.theme
        if theme != self._theme:
            init_theme(theme)
            self._theme = theme
            self._logger.debug("Applied theme %s", theme)

        stdscr = self._stdscr
        stdscr.erase()
        navigator = state.navigator
        if navigator.minimized:
            render_minimized(stdscr, state)
        else:
            RENDERERS[navigator.current](stdscr, state)
        stdscr.refresh()

    def poll(self, timeout_seconds: float) -> Optional[KeyEvent]:
        self._stdscr.timeout(max(0, int(timeout_seconds * 1000)))
        try:
            raw = self._stdscr.get_wch()
        except curses.error:
            # No input before the timeout
            return None
        if raw == curses.KEY_RESIZE:
            return None
        return translate_key(raw)
