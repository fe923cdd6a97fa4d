"""CLI for fork-tools."""

import sys
from pathlib import Path

import click
import structlog
from pydantic import ValidationError

from fork_tools import __version__
from fork_tools.config.logging import configure_logging
from fork_tools.config.settings import Settings, get_settings
from fork_tools.core.exceptions import ConfigurationError, InvalidRepositoryPathError
from fork_tools.git.discovery import DiscoveryWalker
from fork_tools.git.oracle import GitStatusOracle
from fork_tools.notify import ConsoleNotifier, DesktopNotifier, Notifier
from fork_tools.renderers import RENDERERS
from fork_tools.services.report import ReportService
from fork_tools.services.watcher import ForkWatcher

logger = structlog.get_logger(__name__)


def _build_oracle(settings: Settings) -> GitStatusOracle:
    return GitStatusOracle(timeout=settings.git_timeout, fetch=settings.fetch_remotes)


def _build_walker(settings: Settings, oracle: GitStatusOracle, depth: int | None = None) -> DiscoveryWalker:
    return DiscoveryWalker(
        roots=settings.search_roots,
        oracle=oracle,
        usernames=settings.usernames,
        max_depth=depth or settings.fork_search_depth,
    )


def _warn(settings: Settings, message: str) -> None:
    click.secho(message, fg="yellow", err=True, color=None if settings.color_enabled else False)


def _echo_config(settings: Settings, output_format: str) -> None:
    click.echo(f"fork-tools v{__version__} Configuration")
    click.echo("=" * 40)
    click.echo()
    click.echo(f"Output Format: {output_format}")
    click.echo(f"GitHub Usernames: {' '.join(sorted(settings.usernames)) or '(none set)'}")
    click.echo(f"Search Depth: {settings.fork_search_depth}")
    click.echo("Search Directories:")
    for root in settings.search_roots:
        click.echo(f"  - {root}")
    click.echo()
    click.echo("Environment:")
    click.echo(f"  GITHUB_USERNAMES={settings.github_usernames or '(empty)'}")
    click.echo(f"  FORK_SEARCH_DIRS={settings.fork_search_dirs or 'default'}")
    click.echo(f"  GIT_TIMEOUT={settings.git_timeout}")
    click.echo(f"  FETCH_REMOTES={str(settings.fetch_remotes).lower()}")
    click.echo(f"  NO_COLOR={'true' if not settings.color_enabled else 'false'}")


def _enable_debug(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if value:
        configure_logging(log_level="DEBUG", json_logs=get_settings().json_logs)


# Repeated on the subcommands so fork-report and fork-watcher accept -v too
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    expose_value=False,
    callback=_enable_debug,
    help="Enable verbose logging",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(__version__, prog_name="fork-tools")
def cli(verbose: bool) -> None:
    """fork-tools: report and watch the sync state of your forks."""
    try:
        settings = get_settings()
        log_level = "DEBUG" if verbose else settings.log_level
        configure_logging(log_level=log_level, json_logs=settings.json_logs)
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    except ConfigurationError as e:
        raise click.ClickException(e.message) from e


@cli.command()
@verbose_option
@click.argument("output_format", default="markdown", type=click.Choice(sorted(RENDERERS)))
@click.option("--config", "show_config", is_flag=True, help="Show the effective configuration and exit")
@click.option("--depth", "-d", type=click.IntRange(min=1), help="Override the search depth")
def report(output_format: str, show_config: bool, depth: int | None) -> None:
    """Report the sync state of every fork found in the search directories.

    Writes the report to stdout; progress and warnings go to stderr.
    """
    settings = get_settings()
    if show_config:
        _echo_config(settings, output_format)
        return

    if not settings.usernames:
        _warn(settings, "Warning: GITHUB_USERNAMES not set")
        click.echo('  Set it to detect your forks: GITHUB_USERNAMES="yourname" fork-tools report', err=True)
        click.echo("  Scanning ALL repos instead...", err=True)

    oracle = _build_oracle(settings)
    walker = _build_walker(settings, oracle, depth)
    service = ReportService(walker, oracle, max_workers=settings.max_workers)

    click.echo("🔍 Scanning for repos...", err=True)
    result = service.build_report()
    click.echo(
        f"✓ Scanned {result.summary.total_scanned} repos, found {result.summary.forks} forks",
        err=True,
    )

    if result.is_empty:
        _warn(settings, "⚠️  No forks found!")
        sys.exit(1)

    click.echo(RENDERERS[output_format](result), nl=False)


@cli.command()
@verbose_option
@click.argument("interval", type=click.IntRange(min=1), required=False)
@click.option(
    "--repo",
    "-r",
    "repos",
    multiple=True,
    type=click.Path(path_type=Path),
    help="Repository to watch (repeatable); defaults to REPOS or discovery",
)
@click.option("--list", "list_only", is_flag=True, help="List tracked forks and exit")
@click.option("--no-desktop", is_flag=True, help="Do not post desktop notifications")
def watch(interval: int | None, repos: tuple[Path, ...], list_only: bool, no_desktop: bool) -> None:
    """Check forks for new upstream commits.

    Without INTERVAL, checks once and exits non-zero if any fork could not
    be checked. With INTERVAL, checks every INTERVAL seconds until Ctrl+C.
    """
    settings = get_settings()
    interval = interval or settings.watch_interval
    oracle = _build_oracle(settings)

    notifiers: list[Notifier] = [ConsoleNotifier()]
    if not no_desktop:
        notifiers.append(DesktopNotifier(sound=settings.sound))

    explicit = list(repos) or settings.watch_repos
    if explicit:
        try:
            watcher = ForkWatcher.from_paths(explicit, oracle, notifiers)
        except InvalidRepositoryPathError as e:
            raise click.BadParameter(e.message, param_hint="--repo / REPOS") from e
    else:
        watcher = ForkWatcher.from_discovery(_build_walker(settings, oracle), oracle, notifiers)

    targets = watcher.targets
    if list_only:
        click.echo("📋 Tracked forks:")
        click.echo()
        for target in targets:
            found = target.path.is_dir()
            click.echo(f"  {'✓' if found else '✗'} {target.name}{'' if found else ' (not found)'}")
            click.echo(f"    → {target.upstream_url or '(no remote)'}")
        return

    if not targets:
        _warn(settings, "⚠️  No forks found! Pass --repo PATH or set REPOS.")
        sys.exit(1)

    click.echo(f"🍴 Fork Watcher - Checking {len(targets)} fork(s)...")
    if interval is None:
        result = watcher.run()
        if result.failed_count:
            _warn(settings, f"⚠️  {result.failed_count} of {len(targets)} fork(s) could not be checked")
        sys.exit(result.exit_code)

    click.echo(f"🔄 Watch mode: checking every {interval} seconds")
    click.echo("Press Ctrl+C to stop")
    click.echo()
    try:
        watcher.run(interval)
    except KeyboardInterrupt:
        watcher.stop()
        logger.info("watch interrupted", state=watcher.state.value)
        click.echo("Stopped.", err=True)


def report_main() -> None:
    """Entry point for the ``fork-report`` script."""
    cli.main(args=["report", *sys.argv[1:]], prog_name="fork-report")


def watch_main() -> None:
    """Entry point for the ``fork-watcher`` script."""
    cli.main(args=["watch", *sys.argv[1:]], prog_name="fork-watcher")


if __name__ == "__main__":
    cli()
