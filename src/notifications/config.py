"""Configuration model for desktop notifications and sound playback."""

from __future__ import annotations

from dataclasses import dataclass


class NotificationConfigurationError(Exception):
    """Raised when notification configuration is invalid."""


@dataclass(frozen=True)
class NotificationConfig:
    """Resolved notification and sound settings."""
    enabled: bool = True
    app_name: str = "focus-timer"
    icon: str = "alarm-clock"
    urgency: str = "critical"
    sound_candidates: tuple[tuple[str, str], ...] = ()
    tone_fallback: bool = True
    tone_frequency_hz: float = 880.0
    tone_seconds: float = 0.35

    @classmethod
    def from_settings(cls, notifications, sound) -> "NotificationConfig":
        app_name = (notifications.app_name or "").strip()
        if not app_name:
            raise NotificationConfigurationError("Notification app_name cannot be empty")
        if sound.tone_frequency_hz <= 0:
            raise NotificationConfigurationError("Tone frequency must be greater than zero")

        return cls(
            enabled=notifications.enabled,
            app_name=app_name,
            icon=(notifications.icon or "").strip(),
            urgency=notifications.urgency,
            sound_candidates=tuple(sound.candidates),
            tone_fallback=sound.tone_fallback,
            tone_frequency_hz=sound.tone_frequency_hz,
            tone_seconds=sound.tone_seconds,
        )
