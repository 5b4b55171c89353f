"""Notes manager: add, edit, and confirm-to-delete over the statistics notes."""

from __future__ import annotations

import datetime as dt
import enum
import logging
from typing import Callable, Optional

from .constants import NOTES_PAGE_SIZE
from .models import Note, Phase, local_now
from .stats import StatisticsLedger


class NotesMode(enum.Enum):
    VIEWING = "viewing"
    ADDING = "adding"
    EDITING = "editing"
    CONFIRMING_DELETE = "confirming_delete"


TEXT_MODES = frozenset({NotesMode.ADDING, NotesMode.EDITING})


class NotesManager:
    """Strict mode machine; mode entry only happens from VIEWING."""

    def __init__(
        self,
        ledger: StatisticsLedger,
        current_phase: Callable[[], Phase],
        *,
        logger: Optional[logging.Logger] = None,
        now: Callable[[], dt.datetime] = local_now,
    ):
        self._ledger = ledger
        self._current_phase = current_phase
        self._logger = logger or logging.getLogger("pomodoro.notes")
        self._now = now
        self.mode = NotesMode.VIEWING
        self.buffer = ""
        self.scroll_offset = 0
        self.selected_index: Optional[int] = self._last_index()

    @property
    def notes(self) -> list[Note]:
        return self._ledger.stats.notes

    def open(self) -> None:
        """Enter the notes view with the newest note selected."""
        self.mode = NotesMode.VIEWING
        self.buffer = ""
        self.selected_index = self._last_index()

    def reset_mode(self) -> None:
        self.mode = NotesMode.VIEWING
        self.buffer = ""

    def start_add(self) -> None:
        if self.mode is not NotesMode.VIEWING:
            return
        self.mode = NotesMode.ADDING
        self.buffer = ""

    def start_edit(self) -> None:
        if self.mode is not NotesMode.VIEWING:
            return
        index = self.selected_index
        if index is None or index >= len(self.notes):
            return
        self.buffer = self.notes[index].content
        self.mode = NotesMode.EDITING

    def request_delete(self) -> None:
        if self.mode is not NotesMode.VIEWING or self.selected_index is None:
            return
        self.mode = NotesMode.CONFIRMING_DELETE

    def input_char(self, char: str) -> None:
        if self.mode in TEXT_MODES:
            self.buffer += char

    def backspace(self) -> None:
        if self.mode in TEXT_MODES:
            self.buffer = self.buffer[:-1]

    def commit(self) -> None:
        if self.mode is NotesMode.ADDING:
            self._save_new_note()
        elif self.mode is NotesMode.EDITING:
            self._save_edited_note()
        else:
            return
        self.reset_mode()

    def cancel(self) -> None:
        if self.mode in TEXT_MODES or self.mode is NotesMode.CONFIRMING_DELETE:
            self.reset_mode()

    def confirm_delete(self) -> None:
        if self.mode is not NotesMode.CONFIRMING_DELETE:
            return
        index = self.selected_index
        notes = self.notes
        if index is not None and index < len(notes):
            removed = notes.pop(index)
            self._ledger.mark_dirty()
            self._logger.info("Deleted note from %s", removed.timestamp)
            if not notes:
                self.selected_index = None
            elif index >= len(notes):
                self.selected_index = len(notes) - 1
        self.mode = NotesMode.VIEWING

    def select_next(self) -> None:
        if self.mode is not NotesMode.VIEWING or not self.notes:
            return
        if self.selected_index is None:
            self.selected_index = 0
        else:
            self.selected_index = min(self.selected_index + 1, len(self.notes) - 1)

    def select_prev(self) -> None:
        if self.mode is not NotesMode.VIEWING or not self.notes:
            return
        if self.selected_index is None:
            self.selected_index = len(self.notes) - 1
        else:
            self.selected_index = max(self.selected_index - 1, 0)

    def scroll(self, delta: int) -> None:
        total = len(self.notes)
        if total <= NOTES_PAGE_SIZE:
            return
        self.scroll_offset = max(0, min(self.scroll_offset + delta, total - NOTES_PAGE_SIZE))

    def _save_new_note(self) -> None:
        content = self.buffer.strip()
        if not content:
            return
        self.notes.append(
            Note(
                timestamp=self._now().isoformat(),
                content=content,
                phase=self._current_phase().value,
            )
        )
        self.selected_index = len(self.notes) - 1
        self._ledger.mark_dirty()
        self._logger.info("Added note (%d total)", len(self.notes))

    def _save_edited_note(self) -> None:
        content = self.buffer.strip()
        index = self.selected_index
        if not content or index is None or index >= len(self.notes):
            return
        self.notes[index].content = content
        self._ledger.mark_dirty()
        self._logger.info("Edited note %d", index)

    def _last_index(self) -> Optional[int]:
        notes = self._ledger.stats.notes
        return len(notes) - 1 if notes else None
