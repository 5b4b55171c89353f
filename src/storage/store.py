"""JSON persistence for preferences, statistics, and the resume snapshot."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pomodoro import Config, Statistics, TimerState

CONFIG_FILE = "config.json"
STATS_FILE = "stats.json"
TIMER_STATE_FILE = "timer_state.json"


class StorageError(Exception):
    """Raised when a persisted document cannot be read or written."""


class PersistenceStore:
    """Reads and writes three independent documents under one data directory.

    Reads never fail: a missing, unreadable, or mismatched document is replaced
    by defaults. Writes are best effort and report success as a boolean.
    """

    def __init__(self, data_dir: str | Path, *, logger: Optional[logging.Logger] = None):
        self.data_dir = Path(data_dir)
        self._logger = logger or logging.getLogger("storage")

    @property
    def config_path(self) -> Path:
        return self.data_dir / CONFIG_FILE

    @property
    def stats_path(self) -> Path:
        return self.data_dir / STATS_FILE

    @property
    def timer_state_path(self) -> Path:
        return self.data_dir / TIMER_STATE_FILE

    def load_config(self) -> Config:
        """Load preferences, writing the defaults when no document exists yet."""
        if not self.config_path.exists():
            config = Config()
            self.save_config(config)
            return config
        try:
            return Config.from_dict(self._read_object(self.config_path))
        except (StorageError, TypeError) as error:
            self._logger.warning("Using default config: %s", error)
            return Config()

    def save_config(self, config: Config) -> bool:
        return self._write_quietly(self.config_path, config.to_dict())

    def load_stats(self) -> Statistics:
        if not self.stats_path.exists():
            return Statistics()
        try:
            return Statistics.from_dict(self._read_object(self.stats_path))
        except (StorageError, TypeError, KeyError) as error:
            self._logger.warning("Using empty statistics: %s", error)
            return Statistics()

    def save_stats(self, stats: Statistics) -> bool:
        return self._write_quietly(self.stats_path, stats.to_dict())

    def load_timer_state(self) -> Optional[TimerState]:
        if not self.timer_state_path.exists():
            return None
        try:
            return TimerState.from_dict(self._read_object(self.timer_state_path))
        except (StorageError, TypeError, KeyError) as error:
            self._logger.warning("Ignoring resume snapshot: %s", error)
            return None

    def save_timer_state(self, state: TimerState) -> bool:
        return self._write_quietly(self.timer_state_path, state.to_dict())

    def _read_object(self, path: Path) -> dict[str, Any]:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            raise StorageError(f"Failed to read {path}: {error}") from error
        if not isinstance(raw, dict):
            raise StorageError(f"{path} must contain a JSON object")
        return raw

    def _write_object(self, path: Path, payload: dict[str, Any]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as error:
            raise StorageError(f"Failed to write {path}: {error}") from error

    def _write_quietly(self, path: Path, payload: dict[str, Any]) -> bool:
        try:
            self._write_object(path, payload)
        except StorageError as error:
            self._logger.warning("%s", error)
            return False
        self._logger.debug("Saved %s", path)
        return True
