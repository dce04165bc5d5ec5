"""Services module for pomo-cli - side effects outside the timer core."""

from .notifier import DesktopNotifier, Notifier, NullNotifier, get_notifier

__all__ = ["DesktopNotifier", "Notifier", "NullNotifier", "get_notifier"]
