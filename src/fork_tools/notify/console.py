"""Terminal notification sink."""

from collections.abc import Callable

import click

from fork_tools.core.models.watch import ForkUpdate


class ConsoleNotifier:
    """Prints fork updates to the terminal."""

    def __init__(self, echo: Callable[[str], None] = click.echo) -> None:
        self._echo = echo

    def notify(self, update: ForkUpdate) -> None:
        self._echo(f"🍴 {update.repository_name}: {update.ahead_count} new commit(s) available")
        if update.upstream_url:
            self._echo(f"   {update.upstream_url}")
