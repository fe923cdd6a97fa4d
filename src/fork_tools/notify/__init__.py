"""Notification sinks for fork updates."""

from fork_tools.notify.base import Notifier
from fork_tools.notify.console import ConsoleNotifier
from fork_tools.notify.desktop import DesktopNotifier

__all__ = ["ConsoleNotifier", "DesktopNotifier", "Notifier"]
