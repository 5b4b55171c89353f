"""Desktop notification delivery through the platform's notification command."""

from __future__ import annotations

import platform
import shutil
import subprocess


class NotificationError(Exception):
    """Raised when a desktop notification cannot be delivered."""


class DesktopNotifier:
    def __init__(self, *, app_name: str, icon: str = "", urgency: str = "critical"):
        self._app_name = app_name
        self._icon = icon
        self._urgency = urgency

    def send(self, title: str, body: str) -> None:
        command = self._build_command(title, body)
        if command is None:
            raise NotificationError(
                f"No notification command available on {platform.system() or 'this platform'}"
            )
        # Detached so the control loop never waits on the notification daemon.
        try:
            subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, subprocess.SubprocessError) as error:
            raise NotificationError(f"Notification command failed: {error}") from error

    def _build_command(self, title: str, body: str) -> list[str] | None:
        system_name = platform.system().lower()
        if system_name == "darwin" and shutil.which("osascript"):
            script = (
                "display notification "
                f"\"{self._escape(body)}\" with title \"{self._escape(title)}\""
            )
            return ["osascript", "-e", script]
        if system_name == "linux" and shutil.which("notify-send"):
            command = ["notify-send", "-a", self._app_name, "-u", self._urgency]
            if self._icon:
                command.extend(["-i", self._icon])
            command.extend([title, body])
            return command
        return None

    @staticmethod
    def _escape(text: str) -> str:
        return text.replace("\\", "\\\\").replace('"', '\\"')
