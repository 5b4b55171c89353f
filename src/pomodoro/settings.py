"""Settings editor: field cursor, edit buffer, and validated commits."""

from __future__ import annotations

import enum
import logging
import math
import re
from typing import Callable, Optional

from .constants import (
    LONG_BREAK_MINUTES_MAX,
    REMINDER_HOURS_MAX,
    REMINDER_HOURS_MIN,
    REST_MINUTES_MAX,
    SESSIONS_BEFORE_LONG_BREAK_MAX,
    SESSIONS_BEFORE_LONG_BREAK_MIN,
    THEMES,
    WORK_MINUTES_MAX,
)
from .models import Config

_INTEGER_PATTERN = re.compile(r"\+?\d+")


class SettingsField(enum.Enum):
    WORK_DURATION = "work_duration"
    REST_DURATION = "rest_duration"
    LONG_BREAK_DURATION = "long_break_duration"
    SESSIONS_BEFORE_LONG_BREAK = "sessions_before_long_break"
    THEME = "theme"
    SOUND_ENABLED = "sound_enabled"
    AUTO_START_NEXT = "auto_start_next"
    EXTENDED_BREAK_REMINDER = "extended_break_reminder_hours"

    @property
    def label(self) -> str:
        return _FIELD_LABELS[self]


_FIELD_LABELS = {
    SettingsField.WORK_DURATION: "Work Duration (min)",
    SettingsField.REST_DURATION: "Short Break (min)",
    SettingsField.LONG_BREAK_DURATION: "Long Break (min)",
    SettingsField.SESSIONS_BEFORE_LONG_BREAK: "Sessions Before Long Break",
    SettingsField.THEME: "Theme",
    SettingsField.SOUND_ENABLED: "Sound",
    SettingsField.AUTO_START_NEXT: "Auto-Start Next Phase",
    SettingsField.EXTENDED_BREAK_REMINDER: "Extended Break Reminder (h)",
}

FIELD_ORDER: tuple[SettingsField, ...] = tuple(SettingsField)

BOOLEAN_FIELDS = frozenset({SettingsField.SOUND_ENABLED, SettingsField.AUTO_START_NEXT})

# Fields edited through the buffer: (lower bound, upper bound, lower inclusive).
_NUMERIC_RANGES: dict[SettingsField, tuple[float, float, bool]] = {
    SettingsField.WORK_DURATION: (0.0, WORK_MINUTES_MAX, False),
    SettingsField.REST_DURATION: (0.0, REST_MINUTES_MAX, False),
    SettingsField.LONG_BREAK_DURATION: (0.0, LONG_BREAK_MINUTES_MAX, False),
    SettingsField.SESSIONS_BEFORE_LONG_BREAK: (
        float(SESSIONS_BEFORE_LONG_BREAK_MIN),
        float(SESSIONS_BEFORE_LONG_BREAK_MAX),
        True,
    ),
    SettingsField.EXTENDED_BREAK_REMINDER: (REMINDER_HOURS_MIN, REMINDER_HOURS_MAX, True),
}


def format_setting_value(value: float, decimals: int) -> str:
    """Whole numbers render without decimals, others with fixed precision."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.{decimals}f}"


class SettingsEditor:
    """Edits the live `Config` and persists it after every accepted change."""

    def __init__(
        self,
        config: Config,
        save_config: Callable[[Config], object],
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._save_config = save_config
        self._logger = logger or logging.getLogger("pomodoro.settings")
        self.selected = SettingsField.WORK_DURATION
        self.editing = False
        self.buffer = ""

    def next_field(self) -> None:
        index = FIELD_ORDER.index(self.selected)
        self.selected = FIELD_ORDER[(index + 1) % len(FIELD_ORDER)]

    def prev_field(self) -> None:
        index = FIELD_ORDER.index(self.selected)
        self.selected = FIELD_ORDER[(index - 1) % len(FIELD_ORDER)]

    def start_editing(self) -> None:
        field = self.selected
        if field not in _NUMERIC_RANGES:
            return
        if field is SettingsField.SESSIONS_BEFORE_LONG_BREAK:
            self.buffer = str(self._config.sessions_before_long_break)
        elif field is SettingsField.EXTENDED_BREAK_REMINDER:
            self.buffer = format_setting_value(self._config.extended_break_reminder_hours, 1)
        else:
            self.buffer = format_setting_value(getattr(self._config, field.value), 2)
        self.editing = True

    def input_char(self, char: str) -> None:
        self.buffer += char

    def backspace(self) -> None:
        self.buffer = self.buffer[:-1]

    def cancel_editing(self) -> None:
        self.editing = False
        self.buffer = ""

    def commit(self) -> bool:
        """Apply the buffer to the selected field; returns True if accepted."""
        field = self.selected
        text = self.buffer
        self.cancel_editing()

        bounds = _NUMERIC_RANGES.get(field)
        if bounds is None:
            return False

        integer = field is SettingsField.SESSIONS_BEFORE_LONG_BREAK
        value = _parse_integer(text) if integer else _parse_decimal(text)
        if value is None:
            self._logger.debug("Rejected %s input %r: not a number", field.value, text)
            return False

        low, high, low_inclusive = bounds
        above_low = value >= low if low_inclusive else value > low
        if not (above_low and value <= high):
            self._logger.debug("Rejected %s input %r: out of range", field.value, text)
            return False

        setattr(self._config, field.value, value)
        self._logger.info("Setting %s changed to %s", field.value, value)
        self._save_config(self._config)
        return True

    def toggle_boolean(self) -> bool:
        field = self.selected
        if field not in BOOLEAN_FIELDS:
            return False
        value = not getattr(self._config, field.value)
        setattr(self._config, field.value, value)
        self._logger.info("Setting %s toggled to %s", field.value, value)
        self._save_config(self._config)
        return True

    def cycle_theme(self, forward: bool) -> bool:
        if self.selected is not SettingsField.THEME:
            return False
        try:
            index = THEMES.index(self._config.theme)
        except ValueError:
            index = 0
        step = 1 if forward else -1
        self._config.theme = THEMES[(index + step) % len(THEMES)]
        self._logger.info("Theme changed to %s", self._config.theme)
        self._save_config(self._config)
        return True

    def display_value(self, field: SettingsField) -> str:
        config = self._config
        if field is SettingsField.THEME:
            return config.theme
        if field in BOOLEAN_FIELDS:
            return "ON" if getattr(config, field.value) else "OFF"
        if field is SettingsField.SESSIONS_BEFORE_LONG_BREAK:
            return str(config.sessions_before_long_break)
        if field is SettingsField.EXTENDED_BREAK_REMINDER:
            return format_setting_value(config.extended_break_reminder_hours, 1)
        return format_setting_value(getattr(config, field.value), 2)


def _parse_integer(text: str) -> Optional[int]:
    if not _INTEGER_PATTERN.fullmatch(text):
        return None
    return int(text)


def _parse_decimal(text: str) -> Optional[float]:
    # float() alone would also take padding and digit separators.
    if text != text.strip() or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None
