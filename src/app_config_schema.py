"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"
DEFAULT_DATA_DIR = "focus_timer"

DEFAULT_SOUND_CANDIDATES: tuple[tuple[str, str], ...] = (
    ("paplay", "/usr/share/sounds/freedesktop/stereo/complete.oga"),
    ("aplay", "/usr/share/sounds/sound-icons/guitar-11.wav"),
    ("aplay", "/usr/share/sounds/generic.wav"),
)


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class StorageSettings:
    """Persistence locations from `[storage]`."""
    data_dir: str = DEFAULT_DATA_DIR
    export_file: str = "stats_export.csv"


@dataclass(frozen=True)
class RuntimeSettings:
    """Control-loop timing from `[runtime]`."""
    tick_ms: int = 50
    autosave_seconds: float = 5.0
    extended_break_check_seconds: float = 60.0


@dataclass(frozen=True)
class NotificationSettings:
    """Desktop notification settings from `[notifications]`."""
    enabled: bool = True
    app_name: str = "focus-timer"
    icon: str = "alarm-clock"
    urgency: str = "critical"


@dataclass(frozen=True)
class SoundSettings:
    """Sound playback candidates and tone fallback from `[sound]`."""
    candidates: tuple[tuple[str, str], ...] = DEFAULT_SOUND_CANDIDATES
    tone_fallback: bool = True
    tone_frequency_hz: float = 880.0
    tone_seconds: float = 0.35


@dataclass(frozen=True)
class LoggingSettings:
    """Log level and destination from `[logging]`."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass(frozen=True)
class AppConfig:
    storage: StorageSettings = field(default_factory=StorageSettings)
    runtime: RuntimeSettings = field(default_factory=RuntimeSettings)
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    sound: SoundSettings = field(default_factory=SoundSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    source_file: str = ""
