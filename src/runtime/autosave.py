"""Debounced statistics persistence driven by the ledger's dirty flag."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from pomodoro import StatisticsLedger
from storage import PersistenceStore


class StatsAutosave:
    """Writes statistics at most once per interval while they are dirty."""
    def __init__(
        self,
        ledger: StatisticsLedger,
        store: PersistenceStore,
        *,
        interval_seconds: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        self._ledger = ledger
        self._store = store
        self._interval_seconds = interval_seconds
        self._clock = clock
        self._logger = logger or logging.getLogger("runtime.autosave")
        self._last_save = clock()

    def maybe_save(self) -> bool:
        if not self._ledger.dirty:
            return False
        now = self._clock()
        if now - self._last_save < self._interval_seconds:
            return False
        saved = self.save_now()
        self._last_save = now
        return saved

    def save_now(self) -> bool:
        # A failed write keeps the dirty flag so the next cycle retries.
        if self._store.save_stats(self._ledger.stats):
            self._ledger.mark_clean()
            return True
        self._logger.warning("Statistics save failed; will retry")
        return False
