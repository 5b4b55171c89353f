"""Per-view curses renderers. They read the app state and never mutate it."""

from __future__ import annotations

import curses
import datetime as dt

from pomodoro import NotesMode
from pomodoro.constants import NOTES_PAGE_SIZE
from pomodoro.settings import FIELD_ORDER
from runtime.state import AppState
from runtime.views import View

from .themes import (
    PAIR_ACCENT,
    PAIR_BORDER,
    PAIR_MUTED,
    PAIR_OK,
    PAIR_SELECTED,
    PAIR_WARN,
    phase_pair,
)

_SPINNER = "◐◓◑◒"
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_HELP_LINES = [
    ("Timer Controls", ""),
    ("Space", "Toggle pause/resume"),
    ("R", "Reset current timer"),
    ("N", "Skip to next phase"),
    ("M", "Minimize to compact view"),
    ("Navigation", ""),
    ("T", "Open notes view"),
    ("S", "Open statistics"),
    ("D", "Open settings"),
    ("H / ?", "Toggle help"),
    ("Tab", "Cycle through stat views"),
    ("E", "Export CSV (statistics views)"),
    ("Notes View", ""),
    ("A / N", "Add new note"),
    ("E", "Edit selected note"),
    ("D", "Delete selected note (with confirmation)"),
    ("Up/Down J/K", "Navigate between notes"),
    ("General", ""),
    ("Q / Esc", "Exit / Go back"),
    ("Ctrl+C", "Force quit"),
]


def _put(win: "curses.window", y: int, x: int, text: str, attr: int = 0) -> None:
    max_y, max_x = win.getmaxyx()
    if y < 0 or y >= max_y or x >= max_x:
        return
    try:
        win.addstr(y, max(0, x), text[: max(0, max_x - x - 1)], attr)
    except curses.error:
        # Writing to the very last cell can raise on some terminals
        pass


def _center(win: "curses.window", y: int, text: str, attr: int = 0) -> None:
    _, max_x = win.getmaxyx()
    _put(win, y, max(0, (max_x - len(text)) // 2), text, attr)


def _frame(win: "curses.window", title: str) -> None:
    max_y, max_x = win.getmaxyx()
    attr = curses.color_pair(PAIR_BORDER)
    _put(win, 0, 0, "╭" + "─" * (max_x - 3) + "╮", attr)
    for row in range(1, max_y - 2):
        _put(win, row, 0, "│", attr)
        _put(win, row, max_x - 2, "│", attr)
    _put(win, max_y - 2, 0, "╰" + "─" * (max_x - 3) + "╯", attr)
    _center(win, 0, f" {title} ", curses.color_pair(PAIR_ACCENT) | curses.A_BOLD)


def _footer(win: "curses.window", text: str) -> None:
    max_y, _ = win.getmaxyx()
    _center(win, max_y - 1, text, curses.color_pair(PAIR_MUTED) | curses.A_DIM)


def _progress_bar(ratio: float, width: int) -> str:
    filled = int(round(ratio * width))
    return "█" * filled + "░" * (width - filled)


def render_minimized(win: "curses.window", state: AppState) -> None:
    snapshot = state.engine.snapshot()
    max_y, _ = win.getmaxyx()
    top = max(0, max_y // 2 - 3)
    phase_attr = curses.color_pair(phase_pair(snapshot.phase)) | curses.A_BOLD
    _center(win, top, snapshot.phase.display_name, phase_attr)
    _center(win, top + 2, snapshot.display_remaining, phase_attr)
    if snapshot.paused:
        _center(win, top + 4, "⏸ PAUSED", curses.color_pair(PAIR_WARN))
    else:
        _center(win, top + 4, "▶ RUNNING", curses.color_pair(PAIR_OK))
    _center(win, top + 6, "Press M to restore", curses.color_pair(PAIR_MUTED) | curses.A_DIM)


def render_timer(win: "curses.window", state: AppState) -> None:
    snapshot = state.engine.snapshot()
    config = state.config
    _frame(win, "🍅 FOCUS TIMER")
    max_y, max_x = win.getmaxyx()
    top = max(2, max_y // 2 - 5)
    phase_attr = curses.color_pair(phase_pair(snapshot.phase)) | curses.A_BOLD

    _center(win, top, snapshot.phase.display_name, phase_attr)
    _center(win, top + 2, snapshot.display_remaining, phase_attr)
    bar_width = max(10, min(50, max_x - 10))
    _center(
        win,
        top + 4,
        f"{_progress_bar(snapshot.progress_ratio, bar_width)} {snapshot.progress_ratio:4.0%}",
        phase_attr,
    )

    if snapshot.paused:
        status = "⏸ PAUSED"
        status_attr = curses.color_pair(PAIR_WARN) | curses.A_BOLD
    else:
        status = f"{_SPINNER[state.animation_frame % len(_SPINNER)]} RUNNING"
        status_attr = curses.color_pair(PAIR_OK)
    _center(win, top + 6, status, status_attr)

    in_cycle = (snapshot.session_count - 1) % config.sessions_before_long_break + 1
    _center(
        win,
        top + 8,
        f"Session {snapshot.session_count}  ·  {in_cycle}/{config.sessions_before_long_break} "
        f"until long break  ·  Today: {state.ledger.stats.sessions_today}",
    )
    _footer(
        win,
        "Space pause · R reset · N skip · S stats · T notes · D settings · H help · M mini · Q quit",
    )


def render_help(win: "curses.window", state: AppState) -> None:
    _frame(win, "Help")
    row = 2
    for key, description in _HELP_LINES:
        if not description:
            row += 1
            _put(win, row, 4, key, curses.color_pair(PAIR_ACCENT) | curses.A_BOLD)
        else:
            _put(win, row, 6, f"{key:<12}", curses.color_pair(PAIR_BORDER) | curses.A_BOLD)
            _put(win, row, 19, description)
        row += 1
    _footer(win, "H / ? back to timer")


def render_stats_summary(win: "curses.window", state: AppState) -> None:
    stats = state.ledger.stats
    _frame(win, "Statistics · Summary")
    completed = sum(1 for record in stats.session_history if record.completed)
    rate = completed / len(stats.session_history) if stats.session_history else 0.0
    lines = [
        f"Total sessions:        {stats.total_sessions}",
        f"Sessions today:        {stats.sessions_today}",
        f"Total focus time:      {stats.total_work_time / 60.0:.1f} h",
        f"Total break time:      {stats.total_break_time / 60.0:.1f} h",
        f"Completion rate:       {rate:.0%} of last {len(stats.session_history)} phases",
        f"Notes:                 {len(stats.notes)}",
    ]
    for offset, line in enumerate(lines):
        _put(win, 3 + offset * 2, 6, line)
    _footer(win, "Tab next view · E export CSV · S back")


def render_stats_detailed(win: "curses.window", state: AppState) -> None:
    weekly = state.ledger.stats.weekly_sessions
    _frame(win, "Statistics · Weekly")
    peak = max(weekly) or 1
    _, max_x = win.getmaxyx()
    width = max(5, min(40, max_x - 24))
    for index, count in enumerate(weekly):
        bar = "█" * int(round(count / peak * width))
        _put(win, 3 + index * 2, 6, f"{_WEEKDAYS[index]}  {count:>3}  ")
        _put(win, 3 + index * 2, 17, bar, curses.color_pair(PAIR_ACCENT))
    _footer(win, "Tab next view · E export CSV · S back")


def render_stats_history(win: "curses.window", state: AppState) -> None:
    history = state.ledger.stats.session_history
    _frame(win, "Statistics · History")
    max_y, _ = win.getmaxyx()
    _put(win, 2, 4, f"{'When':<20}{'Phase':<14}{'Min':>5}  Done", curses.A_BOLD)
    for row, record in enumerate(reversed(history[-(max_y - 6):]), start=3):
        marker = "✓" if record.completed else "·"
        _put(
            win,
            row,
            4,
            f"{_short_time(record.timestamp):<20}{record.phase_type:<14}{record.duration:>5}  {marker}",
        )
    if not history:
        _center(win, 4, "No sessions recorded yet.", curses.color_pair(PAIR_MUTED))
    _footer(win, "Tab next view · E export CSV · S back")


def render_settings(win: "curses.window", state: AppState) -> None:
    settings = state.settings
    _frame(win, "Settings")
    for index, field in enumerate(FIELD_ORDER):
        row = 3 + index * 2
        selected = field is settings.selected
        value = settings.display_value(field)
        if selected and settings.editing:
            value = f"{settings.buffer}▏"
        line = f"{field.label:<32}{value}"
        attr = curses.color_pair(PAIR_SELECTED) | curses.A_BOLD if selected else 0
        _put(win, row, 6, f"{'›' if selected else ' '} {line}", attr)
    if settings.editing:
        hint = "Enter save · Esc cancel"
    else:
        hint = "↑↓ move · Enter edit · Space toggle · ←→ theme · Esc back"
    _footer(win, hint)


def render_notes(win: "curses.window", state: AppState) -> None:
    notes_manager = state.notes
    notes = notes_manager.notes
    _frame(win, f"Notes ({len(notes)})")
    max_y, _ = win.getmaxyx()

    visible = notes[notes_manager.scroll_offset:notes_manager.scroll_offset + NOTES_PAGE_SIZE]
    for row, note in enumerate(visible, start=2):
        index = notes_manager.scroll_offset + row - 2
        selected = index == notes_manager.selected_index
        attr = curses.color_pair(PAIR_SELECTED) if selected else 0
        _put(win, row, 4, f"{_short_time(note.timestamp)}  [{note.phase}] {note.content}", attr)
    if not notes:
        _center(win, 3, "No notes yet. Press A to add one.", curses.color_pair(PAIR_MUTED))

    mode = notes_manager.mode
    prompt_row = max_y - 4
    if mode is NotesMode.ADDING:
        _put(win, prompt_row, 4, f"New note: {notes_manager.buffer}▏", curses.A_BOLD)
        _footer(win, "Enter save · Esc cancel")
    elif mode is NotesMode.EDITING:
        _put(win, prompt_row, 4, f"Edit note: {notes_manager.buffer}▏", curses.A_BOLD)
        _footer(win, "Enter save · Esc cancel")
    elif mode is NotesMode.CONFIRMING_DELETE:
        _put(
            win,
            prompt_row,
            4,
            "Delete selected note? (y/n)",
            curses.color_pair(PAIR_WARN) | curses.A_BOLD,
        )
        _footer(win, "Y confirm · N / Esc cancel")
    else:
        _footer(win, "A add · E edit · D delete · ↑↓ select · PgUp/PgDn scroll · Esc back")


RENDERERS = {
    View.TIMER: render_timer,
    View.HELP: render_help,
    View.STATS_SUMMARY: render_stats_summary,
    View.STATS_DETAILED: render_stats_detailed,
    View.STATS_HISTORY: render_stats_history,
    View.SETTINGS: render_settings,
    View.NOTES: render_notes,
}


def _short_time(timestamp: str) -> str:
    try:
        return dt.datetime.fromisoformat(timestamp).strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return timestamp[:16]
