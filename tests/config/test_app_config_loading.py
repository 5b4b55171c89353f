import os
import tempfile
import textwrap
import unittest
from pathlib import Path
from unittest.mock import patch

from app_config import (
    AppConfigurationError,
    load_app_config,
    resolve_config_path,
)
from app_config_schema import DEFAULT_SOUND_CANDIDATES


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class AppConfigLoadingTests(unittest.TestCase):
    def test_load_app_config_resolves_relative_paths(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            config_path = root / "config.toml"
            _write_text(
                config_path,
                textwrap.dedent(
                    """
                    [storage]
                    data_dir = "state"

                    [sound]
                    candidates = [["aplay", "sounds/chime.wav"]]

                    [logging]
                    file = "logs/timer.log"
                    """
                ).strip(),
            )

            app_config = load_app_config(str(config_path))

            self.assertEqual(str(config_path), app_config.source_file)
            self.assertEqual(str((root / "state").resolve()), app_config.storage.data_dir)
            self.assertEqual(
                (("aplay", str((root / "sounds/chime.wav").resolve())),),
                app_config.sound.candidates,
            )
            self.assertEqual(
                str((root / "logs/timer.log").resolve()),
                app_config.logging.file,
            )

    def test_missing_sections_use_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[runtime]\ntick_ms = 100\n")

            app_config = load_app_config(str(config_path))

            self.assertEqual(100, app_config.runtime.tick_ms)
            self.assertEqual(5.0, app_config.runtime.autosave_seconds)
            self.assertTrue(app_config.notifications.enabled)
            self.assertEqual("critical", app_config.notifications.urgency)
            self.assertEqual(DEFAULT_SOUND_CANDIDATES, app_config.sound.candidates)
            self.assertEqual("INFO", app_config.logging.level)
            self.assertIsNone(app_config.logging.file)

    def test_implicit_missing_config_returns_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with patch.dict(os.environ, {}, clear=True), patch(
                "app_config.Path.cwd", return_value=Path(temp_dir)
            ):
                app_config = load_app_config()

            self.assertEqual("", app_config.source_file)
            self.assertEqual(
                str((Path(temp_dir) / "focus_timer").resolve()),
                app_config.storage.data_dir,
            )

    def test_explicit_missing_config_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaisesRegex(AppConfigurationError, "not found"):
                load_app_config(str(Path(temp_dir) / "missing.toml"))

    def test_env_config_path_counts_as_explicit(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = str(Path(temp_dir) / "env.toml")
            with patch.dict(os.environ, {"APP_CONFIG_FILE": missing}, clear=True):
                path, explicit = resolve_config_path()
                self.assertEqual(Path(missing), path)
                self.assertTrue(explicit)
                with self.assertRaises(AppConfigurationError):
                    load_app_config()

    def test_invalid_toml_is_reported(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[runtime\n")
            with self.assertRaisesRegex(AppConfigurationError, "Failed to parse"):
                load_app_config(str(config_path))

    def test_field_type_errors_name_the_field(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, '[notifications]\nenabled = "sometimes"\n')
            with self.assertRaisesRegex(AppConfigurationError, "notifications.enabled"):
                load_app_config(str(config_path))

    def test_section_must_be_a_table(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, 'runtime = "fast"\n')
            with self.assertRaisesRegex(AppConfigurationError, r"\[runtime\]"):
                load_app_config(str(config_path))

    def test_range_validation(self) -> None:
        cases = {
            "[runtime]\ntick_ms = 5\n": "tick_ms",
            "[runtime]\nautosave_seconds = 0\n": "autosave_seconds",
            '[notifications]\nurgency = "urgent"\n': "urgency",
            '[logging]\nlevel = "LOUD"\n': "logging.level",
            "[sound]\ncandidates = [[\"aplay\"]]\n": "candidates",
        }
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            for content, message in cases.items():
                with self.subTest(message=message):
                    _write_text(config_path, content)
                    with self.assertRaisesRegex(AppConfigurationError, message):
                        load_app_config(str(config_path))


if __name__ == "__main__":
    unittest.main()
