from .autosave import StatsAutosave
from .dispatch import InputDispatcher
from .keys import KeyEvent
from .loop import SessionOrchestrator
from .state import AppState, ConfigOverrides, build_app_state
from .ticks import TickProcessor
from .views import View, ViewNavigator

__all__ = [
    "AppState",
    "ConfigOverrides",
    "InputDispatcher",
    "KeyEvent",
    "SessionOrchestrator",
    "StatsAutosave",
    "TickProcessor",
    "View",
    "ViewNavigator",
    "build_app_state",
]
