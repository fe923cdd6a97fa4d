"""Pytest configuration and fixtures."""

import subprocess
from dataclasses import dataclass
from pathlib import Path

import pytest

from fork_tools.config.settings import get_settings


def git(cwd: Path, *args: str) -> str:
    """Run git in ``cwd`` and return stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


class GitSandbox:
    """Builds throwaway repositories under a temporary directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def init(self, name: str, branch: str = "main", bare: bool = False) -> Path:
        path = self.root / name
        path.mkdir(parents=True)
        git(path, "init", "-q", *(["--bare"] if bare else []))
        git(path, "symbolic-ref", "HEAD", f"refs/heads/{branch}")
        return path

    def clone(self, source: Path, name: str, bare: bool = False) -> Path:
        path = self.root / name
        git(self.root, "clone", "-q", *(["--bare"] if bare else []), str(source), str(path))
        return path

    def commit(self, repo: Path, message: str, filename: str | None = None) -> str:
        target = repo / (filename or "README.md")
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as f:
            f.write(f"{message}\n")
        git(repo, "add", str(target.relative_to(repo)))
        git(repo, "commit", "-q", "-m", message)
        return git(repo, "rev-parse", "HEAD")

    def push(self, repo: Path, remote: str = "origin", branch: str = "main") -> None:
        git(repo, "push", "-q", remote, branch)


@dataclass
class ForkLayout:
    """An upstream project, a seed clone publishing to it, and a fork of it."""

    sandbox: GitSandbox
    upstream: Path
    seed: Path
    origin: Path
    fork: Path

    def publish_upstream(self, count: int) -> None:
        for index in range(count):
            self.sandbox.commit(self.seed, f"Upstream change {index}")
        self.sandbox.push(self.seed)


@pytest.fixture(autouse=True)
def git_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give git an identity and keep user config out of the tests."""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", "/dev/null")


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sandbox(tmp_path: Path) -> GitSandbox:
    root = tmp_path / "sandbox"
    root.mkdir()
    return GitSandbox(root)


@pytest.fixture
def fork_layout(sandbox: GitSandbox) -> ForkLayout:
    """A fork whose ``upstream`` and ``origin`` remotes are local bare repos."""
    upstream = sandbox.init("upstream.git", bare=True)
    seed = sandbox.init("seed")
    git(seed, "remote", "add", "origin", str(upstream))
    sandbox.commit(seed, "Initial commit")
    sandbox.push(seed)

    origin = sandbox.clone(upstream, "origin.git", bare=True)
    fork = sandbox.clone(upstream, "fork")
    git(fork, "remote", "rename", "origin", "upstream")
    git(fork, "remote", "add", "origin", str(origin))
    git(fork, "fetch", "-q", "origin")
    return ForkLayout(sandbox=sandbox, upstream=upstream, seed=seed, origin=origin, fork=fork)
