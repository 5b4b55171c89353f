"""Best-effort sound playback through external players or a synthesized tone."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Iterable, Optional

import numpy as np


class ToneAudioOutput:
    """Plays a short sine chime through sounddevice without blocking."""
    def __init__(
        self,
        *,
        frequency_hz: float = 880.0,
        duration_seconds: float = 0.35,
        sample_rate_hz: int = 22050,
        volume: float = 0.3,
    ):
        self._frequency_hz = frequency_hz
        self._duration_seconds = duration_seconds
        self._sample_rate_hz = sample_rate_hz
        self._volume = volume

    def build_wave(self) -> np.ndarray:
        samples = max(1, int(self._sample_rate_hz * self._duration_seconds))
        t = np.arange(samples, dtype=np.float32) / self._sample_rate_hz
        wave = np.sin(2.0 * np.pi * self._frequency_hz * t).astype(np.float32)
        # Linear fade-out avoids a click at the end of the buffer.
        wave *= np.linspace(1.0, 0.0, samples, dtype=np.float32)
        return wave * self._volume

    def play(self) -> None:
        # Imported lazily: loading sounddevice requires the PortAudio library.
        import sounddevice as sd

        sd.play(self.build_wave(), self._sample_rate_hz, blocking=False)


class SoundPlayer:
    """Launches the first available candidate player, detached from the caller."""
    def __init__(
        self,
        *,
        tone: Optional[ToneAudioOutput] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._tone = tone
        self._logger = logger or logging.getLogger(__name__)

    def play_best_effort(self, candidates: Iterable[tuple[str, str]]) -> None:
        for player, sound_file in candidates:
            if not Path(sound_file).exists():
                continue
            try:
                subprocess.Popen(
                    [player, sound_file],
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                    start_new_session=True,
                )
            except (OSError, subprocess.SubprocessError) as error:
                self._logger.debug("Sound player %s failed: %s", player, error)
            return

        if self._tone is None:
            self._logger.debug("No sound candidate available")
            return
        try:
            self._tone.play()
        except Exception as error:
            self._logger.debug("Tone playback failed: %s", error)
