"""Git status oracle using subprocess."""

import os
import re
import subprocess
from pathlib import Path

import structlog

from fork_tools.core.exceptions import GitCommandError
from fork_tools.core.models.repository import ORIGIN, UPSTREAM, RemoteSet, RepositoryHandle
from fork_tools.core.models.status import StatusRecord

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 30.0
FALLBACK_BRANCHES = ("main", "master")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_line(text: str) -> str:
    """Drop control characters so the result is a single printable line."""
    return _CONTROL_CHARS.sub("", text).strip()


class GitStatusOracle:
    """Answers questions about local working copies by running git.

    Every query takes the repository path explicitly and runs git with that
    path as its working directory; nothing depends on the process cwd.
    Failures never escape: each query degrades to ``None`` (or ``False``
    for :meth:`fetch`) and the reason is logged at debug level.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, fetch: bool = True) -> None:
        self._timeout = timeout
        self._fetch = fetch

    @property
    def timeout(self) -> float:
        return self._timeout

    def _run_git(self, path: Path, *args: str) -> subprocess.CompletedProcess[str]:
        """Run a git command in ``path`` and return the completed process."""
        command = ["git", *args]
        try:
            return subprocess.run(
                command,
                cwd=path,
                capture_output=True,
                text=True,
                check=False,
                timeout=self._timeout,
                stdin=subprocess.DEVNULL,
                env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
            )
        except subprocess.TimeoutExpired as e:
            raise GitCommandError(command, None, f"timed out after {self._timeout}s") from e
        except OSError as e:
            raise GitCommandError(command, None, str(e)) from e

    def _git_output(self, path: Path, *args: str) -> str | None:
        """Run a git command and return stripped stdout, or None on failure."""
        try:
            result = self._run_git(path, *args)
        except GitCommandError as e:
            logger.debug("git invocation failed", path=str(path), command=e.command, **e.details)
            return None
        if result.returncode != 0:
            logger.debug(
                "git command failed",
                path=str(path),
                command=["git", *args],
                returncode=result.returncode,
                stderr=result.stderr.strip(),
            )
            return None
        return result.stdout.strip()

    def get_remote_url(self, path: Path, remote: str = ORIGIN) -> str | None:
        """Get the URL of a named remote, or None if it is not configured."""
        return self._git_output(path, "remote", "get-url", remote)

    def get_remotes(self, path: Path) -> RemoteSet:
        return RemoteSet(
            origin_url=self.get_remote_url(path, ORIGIN),
            upstream_url=self.get_remote_url(path, UPSTREAM),
        )

    def get_current_branch(self, path: Path) -> str | None:
        """Get the current branch name; ``"HEAD"`` when detached."""
        branch = self._git_output(path, "rev-parse", "--abbrev-ref", "HEAD")
        return sanitize_line(branch) if branch else None

    def get_head_id(self, path: Path) -> str | None:
        """Get the full HEAD commit hash."""
        return self._git_output(path, "rev-parse", "--verify", "HEAD") or None

    def get_head_commit(self, path: Path) -> str | None:
        """Get ``"<short hash> <subject>"`` for HEAD as a single clean line."""
        output = self._git_output(path, "log", "-1", "--format=%h %s")
        if not output:
            return None
        return sanitize_line(output)

    def is_dirty(self, path: Path) -> bool | None:
        """Check tracked files against HEAD. Untracked files do not count."""
        try:
            result = self._run_git(path, "diff-index", "--quiet", "HEAD", "--")
        except GitCommandError as e:
            logger.debug("git invocation failed", path=str(path), command=e.command, **e.details)
            return None
        if result.returncode == 0:
            return False
        if result.returncode == 1:
            return True
        return None

    def fetch(self, path: Path, remote: str) -> bool:
        """Refresh a remote's tracking refs. Failure is not fatal."""
        fetched = self._git_output(path, "fetch", "--quiet", remote) is not None
        if not fetched:
            logger.info("fetch failed, using local refs", path=str(path), remote=remote)
        return fetched

    def refresh(self, path: Path, remote: str) -> bool:
        """Fetch ``remote`` and record its HEAD if git has not yet."""
        if not self.fetch(path, remote):
            return False
        self._record_remote_head(path, remote)
        return True

    def get_default_branch(self, path: Path, remote: str) -> str | None:
        """Resolve ``<remote>/<default branch>`` from local tracking refs.

        Uses the remote's recorded HEAD when there is one, then the usual
        ``main``/``master`` names.
        """
        ref = self._remote_head(path, remote)
        if ref:
            return ref
        for candidate in FALLBACK_BRANCHES:
            if self.resolve_ref(path, f"refs/remotes/{remote}/{candidate}"):
                return f"{remote}/{candidate}"
        return None

    def _remote_head(self, path: Path, remote: str) -> str | None:
        return self._git_output(path, "symbolic-ref", "--short", f"refs/remotes/{remote}/HEAD") or None

    def _record_remote_head(self, path: Path, remote: str) -> None:
        # Remotes added after cloning have no refs/remotes/<remote>/HEAD yet
        if self._remote_head(path, remote) is None:
            self._git_output(path, "remote", "set-head", remote, "--auto")

    def resolve_ref(self, path: Path, ref: str) -> str | None:
        """Resolve a ref to a commit hash."""
        return self._git_output(path, "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}") or None

    def count_divergence(self, path: Path, ref: str) -> tuple[int | None, int | None]:
        """Count ``(ahead, behind)`` of HEAD relative to ``ref``.

        A single ``rev-list --left-right`` call counts both directions, so
        the two numbers are either both known or both unknown.
        """
        output = self._git_output(path, "rev-list", "--left-right", "--count", f"HEAD...{ref}")
        if not output:
            return None, None
        parts = output.split()
        if len(parts) != 2 or not all(part.isdigit() for part in parts):
            logger.debug("unexpected rev-list output", path=str(path), output=output)
            return None, None
        return int(parts[0]), int(parts[1])

    def count_commits(self, path: Path, revision_range: str) -> int | None:
        """Count commits in an ``A..B`` range."""
        output = self._git_output(path, "rev-list", "--count", revision_range)
        if output is None or not output.isdigit():
            return None
        return int(output)

    def resolve_reference(self, path: Path, remotes: RemoteSet, fetch: bool | None = None) -> str | None:
        """Pick the reference ref for ``remotes``, refreshing it first."""
        remote = remotes.reference_remote
        if remote is None:
            return None
        if fetch is None:
            fetch = self._fetch
        if fetch:
            self.refresh(path, remote)
        return self.get_default_branch(path, remote)

    def get_status(self, handle: RepositoryHandle, remotes: RemoteSet | None = None) -> StatusRecord:
        """Compute the full status record for a working copy."""
        path = handle.path
        if remotes is None:
            remotes = self.get_remotes(path)

        reference = self.resolve_reference(path, remotes)
        ahead, behind = (None, None)
        if reference is not None:
            ahead, behind = self.count_divergence(path, reference)

        record = StatusRecord(
            name=handle.name,
            path=path,
            branch=self.get_current_branch(path),
            head_commit=self.get_head_commit(path),
            dirty=self.is_dirty(path),
            ahead=ahead,
            behind=behind,
            origin_url=remotes.origin_url,
            upstream_url=remotes.upstream_url,
            reference_ref=reference,
        )
        logger.debug(
            "status computed",
            path=str(path),
            reference=reference,
            ahead=ahead,
            behind=behind,
            dirty=record.dirty,
        )
        return record
