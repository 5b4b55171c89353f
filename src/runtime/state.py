"""The single owned application context and its startup bootstrap."""

from __future__ import annotations

import datetime as dt
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from pomodoro import (
    Config,
    NotesManager,
    Notifier,
    PhaseEngine,
    SettingsEditor,
    StatisticsLedger,
    reset_daily_stats_if_needed,
)
from pomodoro.constants import EXTENDED_BREAK_CHECK_SECONDS
from pomodoro.models import local_now
from storage import PersistenceStore

from .views import ViewNavigator

ANIMATION_FRAMES = 20


@dataclass(frozen=True)
class ConfigOverrides:
    """Command-line values applied to the live configuration only."""
    work_duration: Optional[float] = None
    rest_duration: Optional[float] = None
    long_break_duration: Optional[float] = None
    sessions_before_long_break: Optional[int] = None
    theme: Optional[str] = None
    no_sound: bool = False

    def apply(self, config: Config) -> None:
        if self.work_duration is not None:
            config.work_duration = self.work_duration
        if self.rest_duration is not None:
            config.rest_duration = self.rest_duration
        if self.long_break_duration is not None:
            config.long_break_duration = self.long_break_duration
        if self.sessions_before_long_break is not None:
            config.sessions_before_long_break = self.sessions_before_long_break
        if self.theme is not None:
            config.theme = self.theme
        if self.no_sound:
            config.sound_enabled = False


@dataclass
class AppState:
    """Everything the handlers mutate, passed explicitly instead of a global."""
    engine: PhaseEngine
    ledger: StatisticsLedger
    settings: SettingsEditor
    notes: NotesManager
    navigator: ViewNavigator
    store: PersistenceStore
    export_path: Path
    animation_frame: int = 0

    @property
    def config(self) -> Config:
        return self.engine.config

    def advance_animation(self) -> None:
        self.animation_frame = (self.animation_frame + 1) % ANIMATION_FRAMES


def build_app_state(
    store: PersistenceStore,
    notifier: Notifier,
    *,
    overrides: ConfigOverrides = ConfigOverrides(),
    resume: bool = False,
    export_path: Optional[Path] = None,
    extended_break_check_seconds: float = EXTENDED_BREAK_CHECK_SECONDS,
    clock: Callable[[], float] = time.monotonic,
    now: Callable[[], dt.datetime] = local_now,
    logger: Optional[logging.Logger] = None,
) -> AppState:
    logger = logger or logging.getLogger("runtime")

    stats = store.load_stats()
    ledger = StatisticsLedger(stats)
    if reset_daily_stats_if_needed(stats, now()):
        logger.info("New day: daily counters reset for %s", stats.last_session_date)
        ledger.mark_dirty()

    config = store.load_config()
    overrides.apply(config)

    engine = PhaseEngine(
        config,
        ledger,
        notifier,
        clock=clock,
        now=now,
        extended_break_check_seconds=extended_break_check_seconds,
    )
    if resume:
        saved = store.load_timer_state()
        if saved is not None and saved.is_resumable:
            engine.restore(saved)
        else:
            logger.info("No resumable timer state; starting fresh")

    notes = NotesManager(ledger, lambda: engine.phase, now=now)
    return AppState(
        engine=engine,
        ledger=ledger,
        settings=SettingsEditor(config, store.save_config),
        notes=notes,
        navigator=ViewNavigator(notes),
        store=store,
        export_path=export_path or store.data_dir / "stats_export.csv",
    )
