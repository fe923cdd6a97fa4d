"""Discovery of fork working copies under a set of search roots."""

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog

from fork_tools.core.exceptions import InvalidRepositoryPathError
from fork_tools.core.models.repository import DiscoveredRepository, RepositoryHandle
from fork_tools.git.classifier import is_fork
from fork_tools.git.oracle import GitStatusOracle

logger = structlog.get_logger(__name__)

GIT_MARKER = ".git"
DEFAULT_MAX_DEPTH = 3
EXCLUDED_DIRS = frozenset(
    {
        "node_modules",
        ".cursor",
        ".venv",
        "venv",
        "site-packages",
        ".nvm",
    }
)


def is_excluded(path: Path) -> bool:
    """Check whether any component of ``path`` is a denylisted directory."""
    return any(part in EXCLUDED_DIRS for part in path.parts)


class DiscoveryWalker:
    """Walks search roots for Git working copies and keeps the forks.

    ``max_depth`` bounds how deep below a root the ``.git`` directory may
    sit: with the default of 3, ``<root>/a/b/.git`` is found but
    ``<root>/a/b/c/.git`` is not. The walk stays on the root's filesystem,
    does not follow symlinks and skips denylisted directories entirely.
    When ``usernames`` is empty every working copy with an origin remote
    is accepted.
    """

    def __init__(
        self,
        roots: Iterable[Path | str],
        oracle: GitStatusOracle,
        usernames: Iterable[str] = (),
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._roots = [Path(root).expanduser().resolve() for root in roots]
        self._oracle = oracle
        self._usernames = frozenset(usernames)
        self._max_depth = max_depth
        self.scanned = 0

    @property
    def accept_all(self) -> bool:
        return not self._usernames

    def __iter__(self) -> Iterator[DiscoveredRepository]:
        return self.discover()

    def discover(self) -> Iterator[DiscoveredRepository]:
        """Lazily yield accepted forks in discovery order.

        ``scanned`` counts every working copy inspected so far.
        """
        self.scanned = 0
        for path in self.iter_working_copies():
            self.scanned += 1
            try:
                handle = RepositoryHandle.from_path(path)
            except InvalidRepositoryPathError:
                logger.debug("working copy vanished during discovery", path=str(path))
                continue

            remotes = self._oracle.get_remotes(handle.path)
            if not remotes.has_origin:
                logger.debug("skipping working copy without origin", path=str(handle.path))
                continue

            if self.accept_all or is_fork(remotes.origin_url, remotes.upstream_url, self._usernames):
                yield DiscoveredRepository(handle=handle, remotes=remotes)

    def iter_working_copies(self) -> Iterator[Path]:
        """Yield every directory holding a ``.git`` directory, once each."""
        seen: set[Path] = set()
        for root in self._roots:
            if not root.is_dir():
                logger.debug("search root does not exist", root=str(root))
                continue
            try:
                device = root.stat().st_dev
            except OSError:
                continue
            for path in self._walk(root, 1, device):
                if path in seen or is_excluded(path):
                    continue
                seen.add(path)
                yield path

    def _walk(self, directory: Path, depth: int, device: int) -> Iterator[Path]:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            logger.debug("cannot list directory", path=str(directory), error=str(e))
            return

        subdirs = []
        for entry in entries:
            try:
                if not entry.is_dir(follow_symlinks=False):
                    continue
                if entry.name == GIT_MARKER:
                    yield Path(directory)
                    continue
                if entry.name in EXCLUDED_DIRS or depth >= self._max_depth:
                    continue
                if entry.stat(follow_symlinks=False).st_dev != device:
                    continue
            except OSError:
                # Removed between listing and inspection
                continue
            subdirs.append(Path(entry.path))

        for subdir in subdirs:
            yield from self._walk(subdir, depth + 1, device)
