"""Statistics ledger with dirty tracking, history capacity, and daily rollover."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from .constants import SESSION_HISTORY_LIMIT
from .models import SessionRecord, Statistics, local_now, today_string


class StatisticsLedger:
    """Owns the live `Statistics` and the flag telling autosave to write it."""

    def __init__(self, stats: Optional[Statistics] = None):
        self.stats = stats if stats is not None else Statistics()
        self.dirty = False

    def mark_dirty(self) -> None:
        self.dirty = True

    def mark_clean(self) -> None:
        self.dirty = False

    def append_session(self, record: SessionRecord) -> None:
        history = self.stats.session_history
        history.append(record)
        while len(history) > SESSION_HISTORY_LIMIT:
            history.pop(0)

    def add_work_session(self, minutes: int, now: Optional[dt.datetime] = None) -> None:
        stats = self.stats
        stats.total_work_time += minutes
        stats.total_sessions += 1
        stats.sessions_today += 1
        weekday = (now or local_now()).weekday()
        stats.weekly_sessions[weekday] += 1

    def add_break_time(self, minutes: int) -> None:
        self.stats.total_break_time += minutes


def reset_daily_stats_if_needed(
    stats: Statistics,
    now: Optional[dt.datetime] = None,
) -> bool:
    """Roll the daily counters over when the last activity was on another day.

    The weekly array rotates left by one and today's slot (the last one) starts
    at zero. Returns True when a rollover happened.
    """
    today = today_string(now)
    if stats.last_session_date == today:
        return False

    stats.sessions_today = 0
    stats.last_session_date = today
    weekly = stats.weekly_sessions
    weekly.append(weekly.pop(0))
    weekly[-1] = 0
    return True
