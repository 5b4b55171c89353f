from .models import Config, Note, Phase, SessionRecord, Statistics, TimerState
from .notes import NotesManager, NotesMode
from .service import Notifier, PhaseEngine, PhaseSnapshot
from .settings import SettingsEditor, SettingsField
from .stats import StatisticsLedger, reset_daily_stats_if_needed

__all__ = [
    "Config",
    "Note",
    "NotesManager",
    "NotesMode",
    "Notifier",
    "Phase",
    "PhaseEngine",
    "PhaseSnapshot",
    "SessionRecord",
    "SettingsEditor",
    "SettingsField",
    "Statistics",
    "StatisticsLedger",
    "TimerState",
    "reset_daily_stats_if_needed",
]
