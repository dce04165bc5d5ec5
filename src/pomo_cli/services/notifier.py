"""Desktop notification and sound cue for finished intervals.

Commands are launched as detached child processes and never waited on, so a
slow or missing notification daemon cannot hold up the timer tick.
"""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess
from typing import Protocol

from pomo_cli.config import NotificationConfig
from pomo_cli.models.exceptions import NotifierError

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Anything that can show a notification."""

    def notify(self, title: str, message: str) -> None: ...


class NullNotifier:
    """Notifier that does nothing."""

    def notify(self, title: str, message: str) -> None:
        pass


class DesktopNotifier:
    """Best-effort desktop alert plus audible cue.

    Linux uses ``notify-send`` and ``paplay``; macOS uses ``osascript`` and
    ``afplay``. Failures are logged and otherwise ignored.
    """

    def __init__(
        self,
        config: NotificationConfig | None = None,
        system: str | None = None,
    ):
        self.config = config or NotificationConfig()
        self.system = system or platform.system()

    def notify(self, title: str, message: str) -> None:
        if not self.config.enabled:
            return

        commands = [self._alert_command(title, message)]
        if self.config.sound:
            commands.append(self._sound_command())

        for command in commands:
            try:
                self._spawn(command)
            except NotifierError as e:
                logger.warning("Notification command failed: %s", e)

    def _alert_command(self, title: str, message: str) -> list[str]:
        if self.system == "Darwin":
            script = f"display notification {_quote(message)} with title {_quote(title)}"
            return ["osascript", "-e", script]
        return [
            "notify-send",
            "-u",
            "normal",
            "-t",
            str(self.config.timeout_ms),
            title,
            message,
        ]

    def _sound_command(self) -> list[str]:
        if self.system == "Darwin":
            return ["afplay", self.config.mac_sound_file]
        return ["paplay", self.config.sound_file]

    def _spawn(self, command: list[str]) -> None:
        """Start *command* without waiting for it to finish."""
        if shutil.which(command[0]) is None:
            logger.debug("Skipping %s: not installed", command[0])
            return

        try:
            subprocess.Popen(
                command,
                start_new_session=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                stdin=subprocess.DEVNULL,
            )
        except OSError as e:
            raise NotifierError(f"{command[0]}: {e}") from e
        logger.debug("Dispatched %s", command[0])


def _quote(value: str) -> str:
    """Quote a string for an AppleScript literal."""
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def get_notifier(config: NotificationConfig) -> Notifier:
    """Return the notifier matching *config*."""
    if not config.enabled:
        return NullNotifier()
    return DesktopNotifier(config)
