"""Desktop notification sink backed by terminal-notifier or notify-send."""

import shutil
import subprocess

import structlog

from fork_tools.core.models.watch import ForkUpdate
from fork_tools.git.urls import normalize_remote_url

logger = structlog.get_logger(__name__)

TITLE = "🍴 Fork Update"
NOTIFY_TIMEOUT = 10.0


class DesktopNotifier:
    """Posts desktop notifications.

    Prefers ``terminal-notifier`` (macOS) and falls back to ``notify-send``
    (freedesktop). When neither is installed, notifications are dropped.
    """

    def __init__(self, sound: str = "default") -> None:
        self._sound = sound
        self._terminal_notifier = shutil.which("terminal-notifier")
        self._notify_send = shutil.which("notify-send")

    @property
    def available(self) -> bool:
        return bool(self._terminal_notifier or self._notify_send)

    def build_command(self, update: ForkUpdate) -> list[str] | None:
        message = f"{update.ahead_count} new commit(s) in upstream"
        if self._terminal_notifier:
            command = [
                self._terminal_notifier,
                "-title", TITLE,
                "-subtitle", update.repository_name,
                "-message", message,
                "-sound", self._sound,
                "-group", f"fork-watcher-{update.repository_name}",
            ]
            if update.upstream_url:
                command += ["-open", normalize_remote_url(update.upstream_url)]
            return command
        if self._notify_send:
            return [
                self._notify_send,
                "--app-name=fork-tools",
                f"{TITLE}: {update.repository_name}",
                message,
            ]
        return None

    def notify(self, update: ForkUpdate) -> None:
        command = self.build_command(update)
        if command is None:
            logger.debug("no desktop notifier available", repository=update.repository_name)
            return
        subprocess.run(
            command,
            capture_output=True,
            check=True,
            timeout=NOTIFY_TIMEOUT,
            stdin=subprocess.DEVNULL,
        )
