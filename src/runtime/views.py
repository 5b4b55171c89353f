"""View navigator for the seven screens and the minimized overlay."""

from __future__ import annotations

import enum

from pomodoro import NotesManager


class View(enum.Enum):
    TIMER = "timer"
    HELP = "help"
    STATS_SUMMARY = "stats_summary"
    STATS_DETAILED = "stats_detailed"
    STATS_HISTORY = "stats_history"
    SETTINGS = "settings"
    NOTES = "notes"


STATS_VIEWS: tuple[View, ...] = (View.STATS_SUMMARY, View.STATS_DETAILED, View.STATS_HISTORY)


class ViewNavigator:
    def __init__(self, notes: NotesManager):
        self._notes = notes
        self.current = View.TIMER
        self.minimized = False

    @property
    def in_stats(self) -> bool:
        return self.current in STATS_VIEWS

    def toggle_help(self) -> None:
        self.current = View.TIMER if self.current is View.HELP else View.HELP

    def toggle_stats(self) -> None:
        self.current = View.STATS_SUMMARY if self.current is View.TIMER else View.TIMER

    def next_stats(self) -> None:
        if not self.in_stats:
            return
        index = STATS_VIEWS.index(self.current)
        self.current = STATS_VIEWS[(index + 1) % len(STATS_VIEWS)]

    def toggle_minimize(self) -> None:
        self.minimized = not self.minimized

    def open_settings(self) -> None:
        self.current = View.SETTINGS

    def open_notes(self) -> None:
        self.current = View.NOTES
        self._notes.open()

    def back_to_timer(self) -> None:
        self.current = View.TIMER
        self._notes.reset_mode()
