"""Data model for preferences, statistics, notes, and the resume snapshot."""

from __future__ import annotations

import datetime as dt
import enum
import math
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Mapping, Optional

from .constants import (
    DATE_FORMAT,
    DEFAULT_EXTENDED_BREAK_REMINDER_HOURS,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_REST_MINUTES,
    DEFAULT_SESSIONS_BEFORE_LONG_BREAK,
    DEFAULT_THEME,
    DEFAULT_WORK_MINUTES,
    FIRST_SESSION,
    SESSIONS_BEFORE_LONG_BREAK_MAX,
    SESSIONS_BEFORE_LONG_BREAK_MIN,
    SESSION_HISTORY_LIMIT,
    THEMES,
    WEEKDAY_COUNT,
)


class Phase(enum.Enum):
    """Purpose of the current countdown."""

    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def history_label(self) -> str:
        return _HISTORY_LABELS[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_label(cls, label: str) -> "Phase":
        """Resolve a persisted label; anything unknown resumes as work."""
        try:
            return cls(label)
        except ValueError:
            return cls.WORK


_HISTORY_LABELS = {
    Phase.WORK: "Work",
    Phase.SHORT_BREAK: "Short Break",
    Phase.LONG_BREAK: "Long Break",
}

_DISPLAY_NAMES = {
    Phase.WORK: "\U0001f3af FOCUS TIME",
    Phase.SHORT_BREAK: "☕ SHORT BREAK",
    Phase.LONG_BREAK: "\U0001f334 LONG BREAK",
}


def local_now() -> dt.datetime:
    return dt.datetime.now().astimezone()


def today_string(now: Optional[dt.datetime] = None) -> str:
    return (now or local_now()).strftime(DATE_FORMAT)


@dataclass
class Config:
    """Durable user preferences; durations are minutes."""

    work_duration: float = DEFAULT_WORK_MINUTES
    rest_duration: float = DEFAULT_REST_MINUTES
    long_break_duration: float = DEFAULT_LONG_BREAK_MINUTES
    sessions_before_long_break: int = DEFAULT_SESSIONS_BEFORE_LONG_BREAK
    sound_enabled: bool = True
    theme: str = DEFAULT_THEME
    auto_start_next: bool = True
    extended_break_reminder_hours: float = DEFAULT_EXTENDED_BREAK_REMINDER_HOURS

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Config":
        """Build a config from JSON data.

        Wrong types raise `TypeError`; values outside their valid range fall
        back to the default for that field only.
        """
        defaults = cls()
        values: dict[str, Any] = {}
        for name in ("work_duration", "rest_duration", "long_break_duration"):
            value = _number(raw.get(name, getattr(defaults, name)), name)
            values[name] = value if value > 0 and math.isfinite(value) else getattr(defaults, name)

        sessions = _integer(
            raw.get("sessions_before_long_break", defaults.sessions_before_long_break),
            "sessions_before_long_break",
        )
        if not SESSIONS_BEFORE_LONG_BREAK_MIN <= sessions <= SESSIONS_BEFORE_LONG_BREAK_MAX:
            sessions = defaults.sessions_before_long_break
        values["sessions_before_long_break"] = sessions

        reminder = _number(
            raw.get("extended_break_reminder_hours", defaults.extended_break_reminder_hours),
            "extended_break_reminder_hours",
        )
        if not (reminder > 0 and math.isfinite(reminder)):
            reminder = defaults.extended_break_reminder_hours
        values["extended_break_reminder_hours"] = reminder

        values["sound_enabled"] = _boolean(
            raw.get("sound_enabled", defaults.sound_enabled), "sound_enabled"
        )
        values["auto_start_next"] = _boolean(
            raw.get("auto_start_next", defaults.auto_start_next), "auto_start_next"
        )
        values["theme"] = _string(raw.get("theme", defaults.theme), "theme")
        return cls(**values)


@dataclass(frozen=True)
class SessionRecord:
    """One finished or skipped phase. Duration is whole minutes."""

    timestamp: str
    phase_type: str
    duration: int
    completed: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "SessionRecord":
        return cls(
            timestamp=_string(raw["timestamp"], "timestamp"),
            phase_type=_string(raw["phase_type"], "phase_type"),
            duration=_integer(raw["duration"], "duration"),
            completed=_boolean(raw["completed"], "completed"),
        )


@dataclass
class Note:
    timestamp: str
    content: str
    phase: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Note":
        return cls(
            timestamp=_string(raw["timestamp"], "timestamp"),
            content=_string(raw["content"], "content"),
            phase=_string(raw["phase"], "phase"),
        )


@dataclass
class Statistics:
    """Durable progress ledger; cumulative times are whole minutes."""

    total_sessions: int = 0
    total_work_time: int = 0
    total_break_time: int = 0
    sessions_today: int = 0
    last_session_date: str = field(default_factory=today_string)
    session_history: list[SessionRecord] = field(default_factory=list)
    weekly_sessions: list[int] = field(default_factory=lambda: [0] * WEEKDAY_COUNT)
    notes: list[Note] = field(default_factory=list)

    def __post_init__(self) -> None:
        weekly = list(self.weekly_sessions[:WEEKDAY_COUNT])
        weekly.extend([0] * (WEEKDAY_COUNT - len(weekly)))
        self.weekly_sessions = weekly

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_sessions": self.total_sessions,
            "total_work_time": self.total_work_time,
            "total_break_time": self.total_break_time,
            "sessions_today": self.sessions_today,
            "last_session_date": self.last_session_date,
            "session_history": [record.to_dict() for record in self.session_history],
            "weekly_sessions": list(self.weekly_sessions),
            "notes": [note.to_dict() for note in self.notes],
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Statistics":
        history_raw = _list(raw.get("session_history", []), "session_history")
        weekly_raw = _list(raw.get("weekly_sessions", [0] * WEEKDAY_COUNT), "weekly_sessions")
        notes_raw = _list(raw.get("notes", []), "notes")
        return cls(
            total_sessions=_integer(raw.get("total_sessions", 0), "total_sessions"),
            total_work_time=_integer(raw.get("total_work_time", 0), "total_work_time"),
            total_break_time=_integer(raw.get("total_break_time", 0), "total_break_time"),
            sessions_today=_integer(raw.get("sessions_today", 0), "sessions_today"),
            last_session_date=_string(
                raw.get("last_session_date", today_string()),
                "last_session_date",
            ),
            session_history=[
                SessionRecord.from_dict(_mapping(item))
                for item in history_raw[-SESSION_HISTORY_LIMIT:]
            ],
            weekly_sessions=[_integer(item, "weekly_sessions") for item in weekly_raw],
            notes=[Note.from_dict(_mapping(item)) for item in notes_raw],
        )


@dataclass(frozen=True)
class TimerState:
    """Resume snapshot written on clean shutdown."""

    time_remaining_secs: int
    phase: str
    session_count: int
    paused: bool

    @property
    def is_resumable(self) -> bool:
        return self.time_remaining_secs > 0 and self.session_count >= FIRST_SESSION

    def to_dict(self) -> dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "TimerState":
        return cls(
            time_remaining_secs=_seconds(raw["time_remaining_secs"], "time_remaining_secs"),
            phase=_string(raw["phase"], "phase"),
            session_count=_integer(raw["session_count"], "session_count"),
            paused=_boolean(raw["paused"], "paused"),
        )


def is_valid_theme(name: str) -> bool:
    return name in THEMES


def _mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    raise TypeError("expected a JSON object")


def _list(value: Any, name: str) -> list[Any]:
    if isinstance(value, list):
        return value
    raise TypeError(f"{name} must be a list")


def _string(value: Any, name: str) -> str:
    if isinstance(value, str):
        return value
    raise TypeError(f"{name} must be a string")


def _boolean(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    raise TypeError(f"{name} must be a boolean")


def _integer(value: Any, name: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise TypeError(f"{name} must be an integer")


def _number(value: Any, name: str) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise TypeError(f"{name} must be a number")
    try:
        return float(value)
    except OverflowError:
        raise TypeError(f"{name} is out of range") from None


def _seconds(value: Any, name: str) -> int:
    # Must survive float() when the countdown is restored.
    _number(value, name)
    return _integer(value, name)
