"""Public exports for notification components."""

from .config import NotificationConfig, NotificationConfigurationError
from .desktop import DesktopNotifier, NotificationError
from .output import SoundPlayer, ToneAudioOutput
from .service import NotificationService

__all__ = [
    "DesktopNotifier",
    "NotificationConfig",
    "NotificationConfigurationError",
    "NotificationError",
    "NotificationService",
    "SoundPlayer",
    "ToneAudioOutput",
]
