import argparse
import curses
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from app_config import AppConfig, AppConfigurationError, load_app_config
from duration import DurationParseError, parse_duration_minutes
from notifications import (
    NotificationConfig,
    NotificationConfigurationError,
    NotificationService,
)
from pomodoro.constants import (
    SESSIONS_BEFORE_LONG_BREAK_MAX,
    SESSIONS_BEFORE_LONG_BREAK_MIN,
    THEMES,
)
from runtime import ConfigOverrides, SessionOrchestrator, build_app_state
from storage import PersistenceStore
from tui import CursesTerminal

LOG_FILE_NAME = "focus_timer.log"


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """Configure logging for the application.

    curses owns the terminal while the app runs, so records go to a file.
    """
    handlers: list[logging.Handler] = []
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    else:
        handlers.append(logging.NullHandler())
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )
    return logging.getLogger("focus_timer")


def _duration_arg(value: str) -> float:
    try:
        return parse_duration_minutes(value)
    except DurationParseError as error:
        raise argparse.ArgumentTypeError(str(error)) from error


def _sessions_arg(value: str) -> int:
    try:
        sessions = int(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"invalid session count: {value!r}") from error
    if not SESSIONS_BEFORE_LONG_BREAK_MIN <= sessions <= SESSIONS_BEFORE_LONG_BREAK_MAX:
        raise argparse.ArgumentTypeError(
            f"sessions must be between {SESSIONS_BEFORE_LONG_BREAK_MIN} and {SESSIONS_BEFORE_LONG_BREAK_MAX}"
        )
    return sessions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="focus-timer",
        description="Terminal Pomodoro timer with statistics, notes, and themes.",
        epilog="Durations use h/m/s units: 25m, 1h30m, 90s, 1.5h.",
    )
    parser.add_argument("-w", "--work", type=_duration_arg, help="work duration")
    parser.add_argument("-r", "--rest", type=_duration_arg, help="short break duration")
    parser.add_argument(
        "-l", "--long-break", type=_duration_arg, help="long break duration"
    )
    parser.add_argument(
        "-s", "--sessions", type=_sessions_arg, help="work sessions before a long break"
    )
    parser.add_argument("-t", "--theme", choices=THEMES, help="color theme")
    parser.add_argument(
        "--no-sound", action="store_true", help="disable sound for this run"
    )
    parser.add_argument(
        "--resume", action="store_true", help="resume the timer saved on last exit"
    )
    parser.add_argument("--config", help="path to config.toml")
    parser.add_argument("--data-dir", help="directory for config, stats, and state files")
    parser.add_argument("--log-level", help="override [logging] level")
    return parser


def _overrides_from_args(args: argparse.Namespace) -> ConfigOverrides:
    return ConfigOverrides(
        work_duration=args.work,
        rest_duration=args.rest,
        long_break_duration=args.long_break,
        sessions_before_long_break=args.sessions,
        theme=args.theme,
        no_sound=args.no_sound,
    )


def _resolve_data_dir(app_config: AppConfig, data_dir_arg: Optional[str]) -> Path:
    if data_dir_arg:
        return Path(data_dir_arg).expanduser().resolve()
    return Path(app_config.storage.data_dir)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the focus timer."""
    args = build_parser().parse_args(argv)

    try:
        app_config = load_app_config(args.config)
    except AppConfigurationError as error:
        print(f"App configuration error: {error}", file=sys.stderr)
        return 2

    data_dir = _resolve_data_dir(app_config, args.data_dir)
    log_level = (args.log_level or app_config.logging.level).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        print(f"Invalid log level: {log_level}", file=sys.stderr)
        return 2
    log_file = Path(app_config.logging.file) if app_config.logging.file else data_dir / LOG_FILE_NAME
    logger = setup_logging(log_level, log_file)
    if app_config.source_file:
        logger.info("Loaded runtime config: %s", app_config.source_file)

    try:
        notification_config = NotificationConfig.from_settings(
            app_config.notifications,
            app_config.sound,
        )
    except NotificationConfigurationError as error:
        logger.error(f"Notification configuration error: {error}")
        print(f"Notification configuration error: {error}", file=sys.stderr)
        return 2

    store = PersistenceStore(data_dir, logger=logging.getLogger("storage"))
    notifier = NotificationService.from_config(
        notification_config,
        logger=logging.getLogger("notifications"),
    )
    state = build_app_state(
        store,
        notifier,
        overrides=_overrides_from_args(args),
        resume=args.resume,
        export_path=data_dir / app_config.storage.export_file,
        extended_break_check_seconds=app_config.runtime.extended_break_check_seconds,
        logger=logging.getLogger("runtime"),
    )
    logger.info("Data directory: %s", data_dir)

    def run(stdscr: "curses.window") -> int:
        terminal = CursesTerminal(stdscr, logger=logging.getLogger("tui"))
        orchestrator = SessionOrchestrator(
            state,
            renderer=terminal,
            input_source=terminal,
            tick_seconds=app_config.runtime.tick_ms / 1000.0,
            autosave_seconds=app_config.runtime.autosave_seconds,
            logger=logging.getLogger("runtime"),
        )
        return orchestrator.run()

    try:
        return curses.wrapper(run)
    except KeyboardInterrupt:
        print("\n👋 Shutting down...\n")
        return 0
    except curses.error as error:
        logger.error(f"Terminal error: {error}", exc_info=True)
        print(f"Terminal error: {error}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
