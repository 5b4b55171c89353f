import argparse
import contextlib
import io
import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import main


class CliParserTests(unittest.TestCase):
    def test_durations_use_duration_grammar(self) -> None:
        args = main.build_parser().parse_args(["-w", "1h30m", "-r", "90s", "-l", "0.5h"])
        self.assertEqual(90.0, args.work)
        self.assertAlmostEqual(1.5, args.rest)
        self.assertEqual(30.0, args.long_break)

    def test_invalid_duration_is_a_usage_error(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()) as stderr:
            with self.assertRaises(SystemExit) as raised:
                main.build_parser().parse_args(["--work", "later"])
        self.assertEqual(2, raised.exception.code)
        self.assertIn("Invalid duration format", stderr.getvalue())

    def test_sessions_must_be_in_range(self) -> None:
        parser = main.build_parser()
        self.assertEqual(6, parser.parse_args(["-s", "6"]).sessions)
        for value in ("0", "11", "four"):
            with self.subTest(value=value), contextlib.redirect_stderr(io.StringIO()):
                with self.assertRaises(SystemExit):
                    parser.parse_args(["-s", value])

    def test_theme_must_be_known(self) -> None:
        parser = main.build_parser()
        self.assertEqual("dracula", parser.parse_args(["-t", "dracula"]).theme)
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                parser.parse_args(["-t", "neon"])

    def test_flags_map_to_overrides(self) -> None:
        args = main.build_parser().parse_args(["--no-sound", "-s", "3", "--resume"])
        overrides = main._overrides_from_args(args)
        self.assertTrue(overrides.no_sound)
        self.assertEqual(3, overrides.sessions_before_long_break)
        self.assertIsNone(overrides.work_duration)
        self.assertTrue(args.resume)

    def test_duration_arg_wraps_parse_errors(self) -> None:
        with self.assertRaises(argparse.ArgumentTypeError):
            main._duration_arg("m")


class MainEntryTests(unittest.TestCase):
    def test_missing_explicit_config_exits_with_status_two(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = str(Path(temp_dir) / "nope.toml")
            with contextlib.redirect_stderr(io.StringIO()) as stderr:
                exit_code = main.main(["--config", missing])
        self.assertEqual(2, exit_code)
        self.assertIn("App configuration error", stderr.getvalue())

    def test_invalid_log_level_exits_with_status_two(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text("", encoding="utf-8")
            with contextlib.redirect_stderr(io.StringIO()):
                exit_code = main.main(["--config", str(config_path), "--log-level", "chatty"])
        self.assertEqual(2, exit_code)

    def test_main_builds_state_in_data_dir_and_runs_curses(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text("[notifications]\nenabled = false\n", encoding="utf-8")
            data_dir = Path(temp_dir) / "data"
            with patch.object(
                main, "setup_logging", return_value=logging.getLogger("focus_timer")
            ) as setup_logging, patch.object(
                main.curses, "wrapper", return_value=0
            ) as wrapper:
                exit_code = main.main(
                    ["--config", str(config_path), "--data-dir", str(data_dir), "-w", "50m"]
                )

            self.assertEqual(0, exit_code)
            wrapper.assert_called_once()
            self.assertEqual(
                ("INFO", data_dir.resolve() / "focus_timer.log"),
                setup_logging.call_args.args,
            )
            self.assertTrue((data_dir / "config.json").exists())


if __name__ == "__main__":
    unittest.main()
