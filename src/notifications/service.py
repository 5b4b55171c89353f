"""Notification service combining desktop popups and sound playback."""

from __future__ import annotations

import logging
from typing import Optional

from .config import NotificationConfig
from .desktop import DesktopNotifier, NotificationError
from .output import SoundPlayer, ToneAudioOutput


class NotificationService:
    """Fire-and-forget notifier; delivery failures are logged, never raised."""
    def __init__(
        self,
        config: NotificationConfig,
        desktop: Optional[DesktopNotifier],
        sound_player: SoundPlayer,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._desktop = desktop
        self._sound_player = sound_player
        self._logger = logger or logging.getLogger("notifications")

    @classmethod
    def from_config(
        cls,
        config: NotificationConfig,
        logger: Optional[logging.Logger] = None,
    ) -> "NotificationService":
        logger = logger or logging.getLogger("notifications")
        desktop = (
            DesktopNotifier(app_name=config.app_name, icon=config.icon, urgency=config.urgency)
            if config.enabled
            else None
        )
        tone = (
            ToneAudioOutput(
                frequency_hz=config.tone_frequency_hz,
                duration_seconds=config.tone_seconds,
            )
            if config.tone_fallback
            else None
        )
        return cls(config, desktop, SoundPlayer(tone=tone, logger=logger), logger)

    def notify(self, title: str, body: str, *, sound: bool) -> None:
        self._logger.info("Notification: %s | %s", title, body)
        if self._desktop is not None:
            try:
                self._desktop.send(title, body)
            except NotificationError as error:
                self._logger.warning("Desktop notification failed: %s", error)
        if sound:
            self._sound_player.play_best_effort(self._config.sound_candidates)
