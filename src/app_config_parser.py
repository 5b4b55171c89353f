"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from app_config_schema import (
    DEFAULT_SOUND_CANDIDATES,
    AppConfig,
    AppConfigurationError,
    LoggingSettings,
    NotificationSettings,
    RuntimeSettings,
    SoundSettings,
    StorageSettings,
)

_ALLOWED_URGENCIES = {"low", "normal", "critical"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    storage = _parse_storage_settings(_section(raw, "storage"), base_dir=base_dir)
    runtime = _parse_runtime_settings(_section(raw, "runtime"))
    notifications = _parse_notification_settings(_section(raw, "notifications"))
    sound = _parse_sound_settings(_section(raw, "sound"), base_dir=base_dir)
    logging_settings = _parse_logging_settings(_section(raw, "logging"), base_dir=base_dir)

    return AppConfig(
        storage=storage,
        runtime=runtime,
        notifications=notifications,
        sound=sound,
        logging=logging_settings,
        source_file=source_file,
    )


def _parse_storage_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> StorageSettings:
    defaults = StorageSettings()
    data_dir = _as_str(section.get("data_dir", defaults.data_dir), "storage.data_dir")
    if not data_dir:
        raise AppConfigurationError("storage.data_dir cannot be empty.")
    export_file = _as_str(
        section.get("export_file", defaults.export_file),
        "storage.export_file",
    )
    if not export_file:
        raise AppConfigurationError("storage.export_file cannot be empty.")
    return StorageSettings(
        data_dir=_resolve_path(base_dir, data_dir),
        export_file=export_file,
    )


def _parse_runtime_settings(section: Mapping[str, Any]) -> RuntimeSettings:
    defaults = RuntimeSettings()
    tick_ms = _as_int(section.get("tick_ms", defaults.tick_ms), "runtime.tick_ms")
    if not 10 <= tick_ms <= 1000:
        raise AppConfigurationError(
            f"runtime.tick_ms must be in [10, 1000], got: {tick_ms}"
        )
    autosave_seconds = _as_float(
        section.get("autosave_seconds", defaults.autosave_seconds),
        "runtime.autosave_seconds",
    )
    if autosave_seconds <= 0:
        raise AppConfigurationError("runtime.autosave_seconds must be greater than zero.")
    check_seconds = _as_float(
        section.get("extended_break_check_seconds", defaults.extended_break_check_seconds),
        "runtime.extended_break_check_seconds",
    )
    if check_seconds <= 0:
        raise AppConfigurationError(
            "runtime.extended_break_check_seconds must be greater than zero."
        )
    return RuntimeSettings(
        tick_ms=tick_ms,
        autosave_seconds=autosave_seconds,
        extended_break_check_seconds=check_seconds,
    )


def _parse_notification_settings(section: Mapping[str, Any]) -> NotificationSettings:
    defaults = NotificationSettings()
    urgency = _as_str(
        section.get("urgency", defaults.urgency),
        "notifications.urgency",
    ).lower()
    if urgency not in _ALLOWED_URGENCIES:
        allowed = ", ".join(sorted(_ALLOWED_URGENCIES))
        raise AppConfigurationError(f"notifications.urgency must be one of: {allowed}")
    return NotificationSettings(
        enabled=_as_bool(section.get("enabled", defaults.enabled), "notifications.enabled"),
        app_name=_as_str(
            section.get("app_name", defaults.app_name),
            "notifications.app_name",
        ) or defaults.app_name,
        icon=_as_str(section.get("icon", defaults.icon), "notifications.icon"),
        urgency=urgency,
    )


def _parse_sound_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> SoundSettings:
    defaults = SoundSettings()
    tone_seconds = _as_float(
        section.get("tone_seconds", defaults.tone_seconds),
        "sound.tone_seconds",
    )
    if tone_seconds <= 0:
        raise AppConfigurationError("sound.tone_seconds must be greater than zero.")
    return SoundSettings(
        candidates=_as_candidates(section.get("candidates"), base_dir=base_dir),
        tone_fallback=_as_bool(
            section.get("tone_fallback", defaults.tone_fallback),
            "sound.tone_fallback",
        ),
        tone_frequency_hz=_as_float(
            section.get("tone_frequency_hz", defaults.tone_frequency_hz),
            "sound.tone_frequency_hz",
        ),
        tone_seconds=tone_seconds,
    )


def _parse_logging_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> LoggingSettings:
    level = _as_str(section.get("level", "INFO"), "logging.level").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise AppConfigurationError(f"logging.level is not a valid level: {level}")
    log_file = _as_optional_str(section.get("file"), "logging.file")
    return LoggingSettings(
        level=level,
        file=_resolve_path(base_dir, log_file) if log_file else None,
    )


def _as_candidates(value: Any, *, base_dir: Path) -> tuple[tuple[str, str], ...]:
    if value is None:
        return DEFAULT_SOUND_CANDIDATES
    if not isinstance(value, list):
        raise AppConfigurationError("sound.candidates must be a list of [player, file] pairs.")
    candidates: list[tuple[str, str]] = []
    for index, item in enumerate(value):
        if not isinstance(item, list) or len(item) != 2:
            raise AppConfigurationError(
                f"sound.candidates[{index}] must be a [player, file] pair."
            )
        player = _as_str(item[0], f"sound.candidates[{index}].player")
        sound_file = _as_str(item[1], f"sound.candidates[{index}].file")
        if not player or not sound_file:
            raise AppConfigurationError(f"sound.candidates[{index}] cannot be empty.")
        candidates.append((player, _resolve_path(base_dir, sound_file)))
    return tuple(candidates)


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _resolve_path(base_dir: Path, value: str) -> str:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_optional_str(value: Any, field: str) -> Optional[str]:
    return _as_str(value, field) or None


def _as_bool(value: Any, field: str) -> bool:
    # TOML has native booleans; quoted values are rejected.
    if not isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be true or false.")
    return value


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise AppConfigurationError(f"{field} must be a number.")
