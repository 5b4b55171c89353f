"""Defaults, limits, and labels shared by the pomodoro state machines."""

from __future__ import annotations

DEFAULT_WORK_MINUTES = 25.0
DEFAULT_REST_MINUTES = 5.0
DEFAULT_LONG_BREAK_MINUTES = 15.0
DEFAULT_SESSIONS_BEFORE_LONG_BREAK = 4
DEFAULT_THEME = "default"
DEFAULT_EXTENDED_BREAK_REMINDER_HOURS = 2.0

WORK_MINUTES_MAX = 240.0
REST_MINUTES_MAX = 60.0
LONG_BREAK_MINUTES_MAX = 120.0
SESSIONS_BEFORE_LONG_BREAK_MIN = 1
SESSIONS_BEFORE_LONG_BREAK_MAX = 10
REMINDER_HOURS_MIN = 0.5
REMINDER_HOURS_MAX = 8.0

THEMES: tuple[str, ...] = ("default", "nord", "dracula", "gruvbox", "solarized")

SESSION_HISTORY_LIMIT = 100
WEEKDAY_COUNT = 7
COMPLETED_THRESHOLD_SECONDS = 5.0
EXTENDED_BREAK_CHECK_SECONDS = 60.0
FIRST_SESSION = 1

NOTES_PAGE_SIZE = 10
NOTES_SCROLL_STEP = 5

DATE_FORMAT = "%Y-%m-%d"

TITLE_LONG_BREAK = "Long Break Time! \U0001f334"
BODY_LONG_BREAK = "Great work! Take a longer break."
TITLE_SHORT_BREAK = "Break Time! ☕"
BODY_SHORT_BREAK = "Time for a short break."
TITLE_BACK_TO_WORK = "Back to Work! \U0001f3af"
BODY_BACK_TO_WORK = "Let's focus on your next session."
TITLE_EXTENDED_BREAK = "⚠️  Extended Break Recommended"
BODY_EXTENDED_BREAK = (
    "You've been working for {hours:.1f} hours. Consider taking a longer break!"
)
