import json
import tempfile
import unittest
from pathlib import Path

from pomodoro import Config, Note, SessionRecord, Statistics, TimerState
from storage import PersistenceStore


class PersistenceStoreConfigTests(unittest.TestCase):
    def test_missing_config_writes_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = PersistenceStore(Path(temp_dir) / "data")
            config = store.load_config()

            self.assertEqual(Config(), config)
            saved = json.loads(store.config_path.read_text(encoding="utf-8"))
            self.assertEqual(25.0, saved["work_duration"])
            self.assertEqual("default", saved["theme"])

    def test_saved_config_is_loaded_back(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = PersistenceStore(temp_dir)
            self.assertTrue(store.save_config(Config(work_duration=50, theme="dracula")))

            config = store.load_config()
            self.assertEqual(50.0, config.work_duration)
            self.assertEqual("dracula", config.theme)

    def test_corrupt_config_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = PersistenceStore(temp_dir)
            store.config_path.write_text("{not json", encoding="utf-8")
            with self.assertLogs("storage", level="WARNING"):
                config = store.load_config()
            self.assertEqual(Config(), config)

    def test_config_with_wrong_types_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = PersistenceStore(temp_dir)
            store.config_path.write_text(json.dumps({"work_duration": "long"}), encoding="utf-8")
            with self.assertLogs("storage", level="WARNING"):
                self.assertEqual(Config(), store.load_config())

    def test_out_of_range_number_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = PersistenceStore(temp_dir)
            store.config_path.write_text(
                '{"work_duration": 1' + "0" * 400 + "}",
                encoding="utf-8",
            )
            with self.assertLogs("storage", level="WARNING"):
                self.assertEqual(Config(), store.load_config())


class PersistenceStoreStatsTests(unittest.TestCase):
    def test_missing_stats_are_empty(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            stats = PersistenceStore(temp_dir).load_stats()
            self.assertEqual(0, stats.total_sessions)
            self.assertEqual([0] * 7, stats.weekly_sessions)
            self.assertFalse(PersistenceStore(temp_dir).stats_path.exists())

    def test_stats_round_trip_preserves_history_and_notes(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = PersistenceStore(temp_dir)
            stats = Statistics(
                total_sessions=3,
                total_work_time=75,
                last_session_date="2024-01-03",
                session_history=[
                    SessionRecord("2024-01-03T10:00:00", "Work", 25, True),
                ],
                notes=[Note("2024-01-03T10:05:00", "ship it", "work")],
            )
            self.assertTrue(store.save_stats(stats))

            loaded = store.load_stats()
            self.assertEqual(stats, loaded)

    def test_loaded_history_keeps_newest_hundred(self) -> None:
        history = [
            SessionRecord(f"2024-01-03T{index // 60:02d}:{index % 60:02d}:00", "Work", 25, True).to_dict()
            for index in range(150)
        ]
        with tempfile.TemporaryDirectory() as temp_dir:
            store = PersistenceStore(temp_dir)
            store.stats_path.write_text(json.dumps({"session_history": history}), encoding="utf-8")
            stats = store.load_stats()

        self.assertEqual(100, len(stats.session_history))
        self.assertEqual(history[50]["timestamp"], stats.session_history[0].timestamp)
        self.assertEqual(history[-1]["timestamp"], stats.session_history[-1].timestamp)

    def test_stats_file_is_indented_json(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = PersistenceStore(temp_dir)
            store.save_stats(Statistics(last_session_date="2024-01-03"))
            text = store.stats_path.read_text(encoding="utf-8")
            self.assertIn('\n  "total_sessions": 0', text)

    def test_non_object_stats_fall_back_to_empty(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = PersistenceStore(temp_dir)
            store.stats_path.write_text("[1, 2, 3]", encoding="utf-8")
            with self.assertLogs("storage", level="WARNING"):
                stats = store.load_stats()
            self.assertEqual(0, stats.total_sessions)


class PersistenceStoreTimerStateTests(unittest.TestCase):
    def test_timer_state_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = PersistenceStore(temp_dir)
            state = TimerState(time_remaining_secs=321, phase="short_break", session_count=3, paused=True)
            self.assertTrue(store.save_timer_state(state))
            self.assertEqual(state, store.load_timer_state())

    def test_missing_or_invalid_timer_state_is_none(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = PersistenceStore(temp_dir)
            self.assertIsNone(store.load_timer_state())

            store.timer_state_path.write_text(json.dumps({"phase": "work"}), encoding="utf-8")
            with self.assertLogs("storage", level="WARNING"):
                self.assertIsNone(store.load_timer_state())

    def test_unrestorable_remaining_time_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = PersistenceStore(temp_dir)
            store.timer_state_path.write_text(
                '{"time_remaining_secs": 1' + "0" * 400
                + ', "phase": "work", "session_count": 1, "paused": false}',
                encoding="utf-8",
            )
            with self.assertLogs("storage", level="WARNING"):
                self.assertIsNone(store.load_timer_state())

    def test_write_failure_returns_false(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            blocker = Path(temp_dir) / "blocker"
            blocker.write_text("file, not a directory", encoding="utf-8")
            store = PersistenceStore(blocker / "data")
            with self.assertLogs("storage", level="WARNING"):
                self.assertFalse(store.save_stats(Statistics()))


if __name__ == "__main__":
    unittest.main()
