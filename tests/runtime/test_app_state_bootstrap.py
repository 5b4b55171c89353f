import datetime as dt
import tempfile
import unittest
from pathlib import Path

from pomodoro import Config, Phase, Statistics, TimerState
from runtime import ConfigOverrides, View, build_app_state
from storage import PersistenceStore

_NOW = dt.datetime(2024, 1, 3, 10, 0)


class _SilentNotifier:
    def notify(self, title: str, body: str, *, sound: bool) -> None:
        pass


class AppStateBootstrapTests(unittest.TestCase):
    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self._temp_dir.cleanup)
        self.store = PersistenceStore(Path(self._temp_dir.name))

    def build(self, **kwargs):
        return build_app_state(self.store, _SilentNotifier(), now=lambda: _NOW, **kwargs)

    def test_fresh_start_uses_defaults(self) -> None:
        state = self.build()
        self.assertEqual(Config(), state.config)
        self.assertIs(Phase.WORK, state.engine.phase)
        self.assertEqual(1, state.engine.session_count)
        self.assertIs(View.TIMER, state.navigator.current)
        self.assertTrue(self.store.config_path.exists())
        self.assertEqual(Path(self._temp_dir.name) / "stats_export.csv", state.export_path)

    def test_resume_restores_saved_snapshot(self) -> None:
        self.store.save_timer_state(
            TimerState(time_remaining_secs=90, phase="short_break", session_count=3, paused=True)
        )
        state = self.build(resume=True)
        self.assertIs(Phase.SHORT_BREAK, state.engine.phase)
        self.assertEqual(90.0, state.engine.remaining)
        self.assertEqual(3, state.engine.session_count)
        self.assertTrue(state.engine.paused)

    def test_resume_is_ignored_without_flag(self) -> None:
        self.store.save_timer_state(
            TimerState(time_remaining_secs=90, phase="short_break", session_count=3, paused=True)
        )
        state = self.build()
        self.assertIs(Phase.WORK, state.engine.phase)
        self.assertEqual(25 * 60, state.engine.remaining)

    def test_invalid_snapshot_starts_fresh(self) -> None:
        self.store.save_timer_state(
            TimerState(time_remaining_secs=0, phase="long_break", session_count=4, paused=False)
        )
        with self.assertLogs("runtime", level="INFO"):
            state = self.build(resume=True)
        self.assertIs(Phase.WORK, state.engine.phase)
        self.assertEqual(1, state.engine.session_count)

    def test_overrides_apply_to_live_config(self) -> None:
        state = self.build(overrides=ConfigOverrides(rest_duration=10.0, theme="gruvbox"))
        self.assertEqual(10.0, state.config.rest_duration)
        self.assertEqual("gruvbox", state.config.theme)

    def test_stale_daily_counters_are_reset_and_marked_dirty(self) -> None:
        self.store.save_stats(
            Statistics(
                sessions_today=5,
                last_session_date="2024-01-02",
                weekly_sessions=[0, 0, 0, 0, 0, 0, 5],
            )
        )
        state = self.build()
        stats = state.ledger.stats
        self.assertEqual(0, stats.sessions_today)
        self.assertEqual("2024-01-03", stats.last_session_date)
        self.assertEqual([0, 0, 0, 0, 0, 5, 0], stats.weekly_sessions)
        self.assertTrue(state.ledger.dirty)

    def test_same_day_stats_are_clean(self) -> None:
        self.store.save_stats(Statistics(sessions_today=2, last_session_date="2024-01-03"))
        state = self.build()
        self.assertEqual(2, state.ledger.stats.sessions_today)
        self.assertFalse(state.ledger.dirty)

    def test_animation_frame_wraps(self) -> None:
        state = self.build()
        for _ in range(21):
            state.advance_animation()
        self.assertEqual(1, state.animation_frame)


if __name__ == "__main__":
    unittest.main()
