"""Notification sink interface."""

from typing import Protocol

from fork_tools.core.models.watch import ForkUpdate


class Notifier(Protocol):
    """Receives one event per detected upstream advance."""

    def notify(self, update: ForkUpdate) -> None: ...
