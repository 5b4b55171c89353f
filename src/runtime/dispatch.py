"""Routes key events to the sub-state-machine that currently owns input."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from pomodoro import NotesMode, Statistics
from pomodoro.constants import NOTES_SCROLL_STEP
from pomodoro.notes import TEXT_MODES
from storage import export_stats_csv

from .keys import (
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
from .state import AppState
from .views import View

Exporter = Callable[[Statistics, Path], Path]


class InputDispatcher:
    """Applies one key to the app state; `handle` returns True to quit.

    Text-entry modes (note add/edit, settings edit, delete confirmation) take
    priority over view-level navigation regardless of the active view.
    """
    def __init__(
        self,
        state: AppState,
        *,
        exporter: Exporter = export_stats_csv,
        logger: Optional[logging.Logger] = None,
    ):
        self._state = state
        self._exporter = exporter
        self._logger = logger or logging.getLogger("runtime.input")

    def handle(self, key: KeyEvent) -> bool:
        state = self._state
        notes = state.notes

        if notes.mode in TEXT_MODES:
            self._handle_note_text(key)
            return False
        if notes.mode is NotesMode.CONFIRMING_DELETE:
            self._handle_delete_confirmation(key)
            return False
        if state.navigator.current is View.NOTES:
            self._handle_notes_view(key)
            return False
        if state.settings.editing:
            self._handle_settings_text(key)
            return False
        if state.navigator.current is View.SETTINGS:
            self._handle_settings_view(key)
            return False
        return self._handle_global(key)

    def _handle_note_text(self, key: KeyEvent) -> None:
        notes = self._state.notes
        if key.code == KEY_ENTER:
            notes.commit()
        elif key.code == KEY_ESCAPE:
            notes.cancel()
        elif key.code == KEY_BACKSPACE:
            notes.backspace()
        elif key.char is not None:
            notes.input_char(key.char)

    def _handle_delete_confirmation(self, key: KeyEvent) -> None:
        notes = self._state.notes
        if key.is_char("y", "Y"):
            notes.confirm_delete()
        elif key.is_char("n", "N") or key.code == KEY_ESCAPE:
            notes.cancel()

    def _handle_notes_view(self, key: KeyEvent) -> None:
        state = self._state
        notes = state.notes
        if key.code == KEY_ESCAPE or key.is_char("q", "t"):
            state.navigator.back_to_timer()
        elif key.is_char("a", "n"):
            notes.start_add()
        elif key.is_char("e"):
            notes.start_edit()
        elif key.is_char("d"):
            notes.request_delete()
        elif key.code == KEY_DOWN or key.is_char("j"):
            notes.select_next()
        elif key.code == KEY_UP or key.is_char("k"):
            notes.select_prev()
        elif key.code == KEY_PAGE_UP:
            notes.scroll(-NOTES_SCROLL_STEP)
        elif key.code == KEY_PAGE_DOWN:
            notes.scroll(NOTES_SCROLL_STEP)

    def _handle_settings_text(self, key: KeyEvent) -> None:
        settings = self._state.settings
        if key.code == KEY_ENTER:
            settings.commit()
        elif key.code == KEY_ESCAPE:
            settings.cancel_editing()
        elif key.code == KEY_BACKSPACE:
            settings.backspace()
        elif key.char is not None:
            settings.input_char(key.char)

    def _handle_settings_view(self, key: KeyEvent) -> None:
        state = self._state
        settings = state.settings
        if key.code == KEY_ESCAPE or key.is_char("q", "c"):
            state.navigator.back_to_timer()
        elif key.code == KEY_DOWN or key.is_char("j"):
            settings.next_field()
        elif key.code == KEY_UP or key.is_char("k"):
            settings.prev_field()
        elif key.code == KEY_ENTER or key.is_char("e"):
            settings.start_editing()
        elif key.is_char(" "):
            settings.toggle_boolean()
        elif key.code == KEY_LEFT or key.is_char("h"):
            settings.cycle_theme(forward=False)
        elif key.code == KEY_RIGHT or key.is_char("l"):
            settings.cycle_theme(forward=True)

    def _handle_global(self, key: KeyEvent) -> bool:
        state = self._state
        navigator = state.navigator
        engine = state.engine

        if key.is_char("m", "M"):
            navigator.toggle_minimize()
            return False
        if navigator.minimized:
            return False

        if key.code == KEY_ESCAPE or key.is_char("q") or (key.ctrl and key.code == "c"):
            return True

        if key.is_char(" "):
            engine.toggle_pause()
        elif key.is_char("r"):
            engine.reset()
        elif key.is_char("n"):
            engine.skip()
        elif key.is_char("d"):
            navigator.open_settings()
        elif key.is_char("t"):
            navigator.open_notes()
        elif key.is_char("h", "?"):
            navigator.toggle_help()
        elif key.is_char("s"):
            navigator.toggle_stats()
        elif key.code == KEY_TAB:
            navigator.next_stats()
        elif key.is_char("e") and navigator.in_stats:
            self._export()
        return False

    def _export(self) -> None:
        state = self._state
        try:
            path = self._exporter(state.ledger.stats, state.export_path)
        except OSError as error:
            self._logger.warning("CSV export failed: %s", error)
            return
        self._logger.info("Exported statistics to %s", path)
