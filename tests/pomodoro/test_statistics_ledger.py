import datetime as dt
import unittest

from pomodoro import (
    Config,
    SessionRecord,
    Statistics,
    StatisticsLedger,
    TimerState,
    reset_daily_stats_if_needed,
)


def _record(index: int) -> SessionRecord:
    return SessionRecord(
        timestamp=f"2024-01-01T10:{index % 60:02d}:00",
        phase_type="Work",
        duration=25,
        completed=True,
    )


class StatisticsLedgerTests(unittest.TestCase):
    def test_history_keeps_newest_hundred_records(self) -> None:
        ledger = StatisticsLedger()
        for index in range(105):
            ledger.append_session(_record(index))

        history = ledger.stats.session_history
        self.assertEqual(100, len(history))
        self.assertEqual(_record(5), history[0])
        self.assertEqual(_record(104), history[-1])

    def test_work_session_updates_counters_for_weekday(self) -> None:
        ledger = StatisticsLedger()
        sunday = dt.datetime(2024, 1, 7, 9, 0)
        ledger.add_work_session(25, sunday)
        ledger.add_work_session(25, sunday)

        stats = ledger.stats
        self.assertEqual(2, stats.total_sessions)
        self.assertEqual(50, stats.total_work_time)
        self.assertEqual(2, stats.sessions_today)
        self.assertEqual(2, stats.weekly_sessions[6])

    def test_dirty_flag_round_trip(self) -> None:
        ledger = StatisticsLedger()
        self.assertFalse(ledger.dirty)
        ledger.mark_dirty()
        self.assertTrue(ledger.dirty)
        ledger.mark_clean()
        self.assertFalse(ledger.dirty)


class DailyResetTests(unittest.TestCase):
    def test_same_day_is_untouched(self) -> None:
        stats = Statistics(sessions_today=3, last_session_date="2024-01-03")
        changed = reset_daily_stats_if_needed(stats, dt.datetime(2024, 1, 3, 23, 59))
        self.assertFalse(changed)
        self.assertEqual(3, stats.sessions_today)

    def test_new_day_rotates_weekly_and_clears_today(self) -> None:
        stats = Statistics(
            sessions_today=3,
            last_session_date="2024-01-02",
            weekly_sessions=[1, 2, 3, 4, 5, 6, 7],
            total_sessions=28,
        )
        changed = reset_daily_stats_if_needed(stats, dt.datetime(2024, 1, 3, 8, 0))

        self.assertTrue(changed)
        self.assertEqual(0, stats.sessions_today)
        self.assertEqual("2024-01-03", stats.last_session_date)
        self.assertEqual([2, 3, 4, 5, 6, 7, 0], stats.weekly_sessions)
        self.assertEqual(28, stats.total_sessions)


class ModelSerializationTests(unittest.TestCase):
    def test_config_out_of_range_values_fall_back_per_field(self) -> None:
        config = Config.from_dict(
            {
                "work_duration": -5,
                "rest_duration": 10,
                "sessions_before_long_break": 42,
                "extended_break_reminder_hours": 0,
                "theme": "nord",
            }
        )
        self.assertEqual(25.0, config.work_duration)
        self.assertEqual(10.0, config.rest_duration)
        self.assertEqual(4, config.sessions_before_long_break)
        self.assertEqual(2.0, config.extended_break_reminder_hours)
        self.assertEqual("nord", config.theme)

    def test_config_wrong_type_raises(self) -> None:
        with self.assertRaises(TypeError):
            Config.from_dict({"sound_enabled": "yes"})

    def test_statistics_pads_short_weekly_array(self) -> None:
        stats = Statistics.from_dict({"weekly_sessions": [1, 2]})
        self.assertEqual([1, 2, 0, 0, 0, 0, 0], stats.weekly_sessions)

    def test_statistics_to_dict_uses_persisted_field_names(self) -> None:
        stats = Statistics(last_session_date="2024-01-03")
        stats.session_history.append(_record(1))
        payload = stats.to_dict()
        self.assertEqual(
            {
                "total_sessions",
                "total_work_time",
                "total_break_time",
                "sessions_today",
                "last_session_date",
                "session_history",
                "weekly_sessions",
                "notes",
            },
            set(payload),
        )
        self.assertEqual(
            {"timestamp", "phase_type", "duration", "completed"},
            set(payload["session_history"][0]),
        )

    def test_timer_state_resumability(self) -> None:
        self.assertTrue(TimerState(10, "work", 1, False).is_resumable)
        self.assertFalse(TimerState(0, "work", 1, False).is_resumable)
        self.assertFalse(TimerState(10, "work", 0, False).is_resumable)


if __name__ == "__main__":
    unittest.main()
