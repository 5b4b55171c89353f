"""Phase engine: countdown, work/break cycling, and session bookkeeping."""

from __future__ import annotations

import datetime as dt
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from .constants import (
    BODY_BACK_TO_WORK,
    BODY_EXTENDED_BREAK,
    BODY_LONG_BREAK,
    BODY_SHORT_BREAK,
    COMPLETED_THRESHOLD_SECONDS,
    EXTENDED_BREAK_CHECK_SECONDS,
    FIRST_SESSION,
    TITLE_BACK_TO_WORK,
    TITLE_EXTENDED_BREAK,
    TITLE_LONG_BREAK,
    TITLE_SHORT_BREAK,
)
from .models import Config, Phase, SessionRecord, TimerState, local_now
from .stats import StatisticsLedger


class Notifier(Protocol):
    def notify(self, title: str, body: str, *, sound: bool) -> None:
        ...


@dataclass(frozen=True)
class PhaseSnapshot:
    """Immutable engine snapshot consumed by renderers."""
    phase: Phase
    remaining_seconds: float
    total_seconds: float
    paused: bool
    session_count: int

    @property
    def progress_ratio(self) -> float:
        if self.total_seconds <= 0:
            return 1.0
        ratio = self.remaining_seconds / self.total_seconds
        return 1.0 - max(0.0, min(1.0, ratio))

    @property
    def display_remaining(self) -> str:
        minutes, seconds = divmod(int(self.remaining_seconds), 60)
        return f"{minutes:02d}:{seconds:02d}"


class PhaseEngine:
    """Single-threaded countdown state machine over work and break phases."""

    def __init__(
        self,
        config: Config,
        ledger: StatisticsLedger,
        notifier: Notifier,
        *,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], dt.datetime] = local_now,
        extended_break_check_seconds: float = EXTENDED_BREAK_CHECK_SECONDS,
    ):
        self.config = config
        self.ledger = ledger
        self._notifier = notifier
        self._logger = logger or logging.getLogger("pomodoro")
        self._clock = clock
        self._now = now
        self._extended_break_check_seconds = extended_break_check_seconds

        self.phase = Phase.WORK
        self.remaining = self.phase_duration_seconds(Phase.WORK)
        self.paused = False
        self.session_count = FIRST_SESSION
        self.work_time_since_break = 0.0
        self._last_extended_break_check = clock()

    def restore(self, saved: TimerState) -> None:
        """Seed the countdown from a resume snapshot."""
        self.phase = Phase.from_label(saved.phase)
        self.remaining = float(saved.time_remaining_secs)
        self.session_count = saved.session_count
        self.paused = saved.paused
        self._logger.info(
            "Resumed %s with %ss remaining (session %d, paused=%s)",
            self.phase.value,
            saved.time_remaining_secs,
            self.session_count,
            self.paused,
        )

    def to_timer_state(self) -> TimerState:
        return TimerState(
            time_remaining_secs=int(self.remaining),
            phase=self.phase.value,
            session_count=self.session_count,
            paused=self.paused,
        )

    def snapshot(self) -> PhaseSnapshot:
        return PhaseSnapshot(
            phase=self.phase,
            remaining_seconds=self.remaining,
            total_seconds=self.phase_duration_seconds(self.phase),
            paused=self.paused,
            session_count=self.session_count,
        )

    def phase_duration_minutes(self, phase: Phase) -> float:
        if phase is Phase.WORK:
            return self.config.work_duration
        if phase is Phase.SHORT_BREAK:
            return self.config.rest_duration
        return self.config.long_break_duration

    def phase_duration_seconds(self, phase: Phase) -> float:
        return self.phase_duration_minutes(phase) * 60.0

    def tick(self, elapsed: float) -> None:
        if self.paused or self.remaining <= 0:
            return

        counted = min(self.remaining, max(0.0, elapsed))
        self.remaining -= counted

        if self.phase is Phase.WORK:
            self.work_time_since_break += counted
            self._check_extended_break_reminder()

        if self.remaining <= 0:
            self.remaining = 0.0
            self.complete_phase()

    def skip(self) -> None:
        self._logger.info(
            "Skipping %s with %.0fs remaining",
            self.phase.value,
            self.remaining,
        )
        self.complete_phase()

    def reset(self) -> None:
        self.remaining = self.phase_duration_seconds(self.phase)
        self.paused = False
        self._logger.info("Reset %s to %.0fs", self.phase.value, self.remaining)

    def toggle_pause(self) -> None:
        self.paused = not self.paused
        self._logger.debug("Paused=%s", self.paused)

    def complete_phase(self) -> None:
        """Record the finished phase and move to the next one."""
        finished = self.phase
        minutes = int(self.phase_duration_minutes(finished))
        now = self._now()
        self.ledger.append_session(
            SessionRecord(
                timestamp=now.isoformat(),
                phase_type=finished.history_label,
                duration=minutes,
                completed=self.remaining < COMPLETED_THRESHOLD_SECONDS,
            )
        )

        if finished is Phase.WORK:
            self.ledger.add_work_session(minutes, now)
            # Decided by the finished session number, before it advances.
            long_break_due = self.session_count % self.config.sessions_before_long_break == 0
            self.session_count += 1
            if long_break_due:
                self._begin(Phase.LONG_BREAK, TITLE_LONG_BREAK, BODY_LONG_BREAK)
                self.work_time_since_break = 0.0
            else:
                self._begin(Phase.SHORT_BREAK, TITLE_SHORT_BREAK, BODY_SHORT_BREAK)
        else:
            self.ledger.add_break_time(minutes)
            self._begin(Phase.WORK, TITLE_BACK_TO_WORK, BODY_BACK_TO_WORK)

        self.paused = not self.config.auto_start_next
        self.ledger.mark_dirty()
        self._logger.info(
            "Phase %s finished; now %s (session %d, paused=%s)",
            finished.value,
            self.phase.value,
            self.session_count,
            self.paused,
        )

    def _begin(self, phase: Phase, title: str, body: str) -> None:
        self.phase = phase
        self.remaining = self.phase_duration_seconds(phase)
        self._notify(title, body)

    def _check_extended_break_reminder(self) -> None:
        now = self._clock()
        if now - self._last_extended_break_check < self._extended_break_check_seconds:
            return
        self._last_extended_break_check = now

        hours_worked = self.work_time_since_break / 3600.0
        if hours_worked >= self.config.extended_break_reminder_hours:
            self._logger.info("Extended break reminder after %.2fh of work", hours_worked)
            self._notify(TITLE_EXTENDED_BREAK, BODY_EXTENDED_BREAK.format(hours=hours_worked))
            self.work_time_since_break = 0.0

    def _notify(self, title: str, body: str) -> None:
        self._notifier.notify(title, body, sound=self.config.sound_enabled)
