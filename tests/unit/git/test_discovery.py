"""Tests for the discovery walker."""

import os
from pathlib import Path

import pytest

from fork_tools.git.discovery import DiscoveryWalker, is_excluded
from fork_tools.git.oracle import GitStatusOracle
from tests.conftest import git


def make_repo(path: Path, origin: str | None = None, upstream: str | None = None) -> Path:
    path.mkdir(parents=True)
    git(path, "init", "-q")
    if origin is not None:
        git(path, "remote", "add", "origin", origin)
    if upstream is not None:
        git(path, "remote", "add", "upstream", upstream)
    return path


@pytest.fixture
def oracle() -> GitStatusOracle:
    return GitStatusOracle(timeout=30, fetch=False)


@pytest.fixture
def search_root(tmp_path: Path) -> Path:
    """A search root holding forks, other repos and noise directories."""
    root = tmp_path / "code"
    make_repo(root / "alice-tool", origin="https://github.com/alice/tool.git")
    make_repo(
        root / "team" / "patched-lib",
        origin="https://github.com/bob/lib.git",
        upstream="https://github.com/orig/lib.git",
    )
    make_repo(root / "bob-app", origin="https://github.com/bob/app.git")
    make_repo(root / "no-origin", upstream="https://github.com/orig/x.git")
    make_repo(root / "web" / "node_modules" / "dep", origin="https://github.com/alice/dep.git")
    make_repo(root / "py" / ".venv" / "pkg", origin="https://github.com/alice/pkg.git")
    make_repo(root / "a" / "b" / "c" / "too-deep", origin="https://github.com/alice/deep.git")
    (root / "plain-dir").mkdir()
    return root


def names(walker: DiscoveryWalker) -> list[str]:
    return [found.handle.name for found in walker.discover()]


@pytest.mark.unit
class TestIsExcluded:
    """Tests for the exclusion predicate."""

    def test_component_match(self) -> None:
        assert is_excluded(Path("/home/me/web/node_modules/dep")) is True
        assert is_excluded(Path("/home/me/project/venv/lib")) is True

    def test_infix_of_a_component_is_not_excluded(self) -> None:
        assert is_excluded(Path("/home/me/my-venv-tools")) is False
        assert is_excluded(Path("/home/me/node_modules_backup")) is False


@pytest.mark.unit
class TestDiscoveryWalker:
    """Tests for DiscoveryWalker."""

    def test_finds_forks_by_username_or_upstream(
        self, search_root: Path, oracle: GitStatusOracle
    ) -> None:
        walker = DiscoveryWalker([search_root], oracle, usernames={"alice"})
        assert names(walker) == ["alice-tool", "patched-lib"]

    def test_accept_all_without_usernames(self, search_root: Path, oracle: GitStatusOracle) -> None:
        walker = DiscoveryWalker([search_root], oracle)
        assert walker.accept_all is True
        assert names(walker) == ["alice-tool", "bob-app", "patched-lib"]

    def test_repo_without_origin_is_excluded(
        self, search_root: Path, oracle: GitStatusOracle
    ) -> None:
        walker = DiscoveryWalker([search_root], oracle)
        assert "no-origin" not in names(walker)

    def test_denylisted_directories_are_skipped(
        self, search_root: Path, oracle: GitStatusOracle
    ) -> None:
        walker = DiscoveryWalker([search_root], oracle)
        paths = list(walker.iter_working_copies())
        assert all("node_modules" not in path.parts for path in paths)
        assert all(".venv" not in path.parts for path in paths)

    def test_depth_limit(self, search_root: Path, oracle: GitStatusOracle) -> None:
        shallow = DiscoveryWalker([search_root], oracle, max_depth=3)
        assert "too-deep" not in names(shallow)

        deep = DiscoveryWalker([search_root], oracle, max_depth=5)
        assert "too-deep" in names(deep)

    def test_depth_counts_the_marker(self, tmp_path: Path, oracle: GitStatusOracle) -> None:
        make_repo(tmp_path / "one", origin="https://github.com/alice/one.git")
        make_repo(tmp_path / "x" / "two", origin="https://github.com/alice/two.git")
        assert names(DiscoveryWalker([tmp_path], oracle, max_depth=1)) == []
        assert names(DiscoveryWalker([tmp_path], oracle, max_depth=2)) == ["one"]

    def test_root_that_is_a_repository(self, tmp_path: Path, oracle: GitStatusOracle) -> None:
        root = make_repo(tmp_path / "solo", origin="https://github.com/alice/solo.git")
        assert names(DiscoveryWalker([root], oracle)) == ["solo"]

    def test_missing_root_contributes_nothing(
        self, search_root: Path, tmp_path: Path, oracle: GitStatusOracle
    ) -> None:
        walker = DiscoveryWalker([tmp_path / "missing", search_root], oracle, usernames={"alice"})
        assert names(walker) == ["alice-tool", "patched-lib"]

    def test_only_missing_roots(self, tmp_path: Path, oracle: GitStatusOracle) -> None:
        walker = DiscoveryWalker([tmp_path / "missing"], oracle)
        assert names(walker) == []
        assert walker.scanned == 0

    def test_scanned_counts_inspected_working_copies(
        self, search_root: Path, oracle: GitStatusOracle
    ) -> None:
        walker = DiscoveryWalker([search_root], oracle, usernames={"alice"})
        list(walker.discover())
        # alice-tool, bob-app, no-origin, patched-lib
        assert walker.scanned == 4

    def test_overlapping_roots_report_once(
        self, search_root: Path, oracle: GitStatusOracle
    ) -> None:
        walker = DiscoveryWalker([search_root, search_root / "team"], oracle, usernames={"alice"})
        assert names(walker) == ["alice-tool", "patched-lib"]

    def test_discovery_is_repeatable(self, search_root: Path, oracle: GitStatusOracle) -> None:
        walker = DiscoveryWalker([search_root], oracle)
        first = [found.handle.path for found in walker.discover()]
        second = [found.handle.path for found in walker.discover()]
        assert first == second

    def test_symlinks_are_not_followed(self, tmp_path: Path, oracle: GitStatusOracle) -> None:
        elsewhere = tmp_path / "elsewhere"
        make_repo(elsewhere / "linked", origin="https://github.com/alice/linked.git")
        root = tmp_path / "root"
        root.mkdir()
        os.symlink(elsewhere, root / "link")
        assert names(DiscoveryWalker([root], oracle)) == []

    def test_remotes_are_carried_along(self, search_root: Path, oracle: GitStatusOracle) -> None:
        walker = DiscoveryWalker([search_root], oracle, usernames={"alice"})
        found = {item.handle.name: item for item in walker.discover()}
        assert found["patched-lib"].remotes.upstream_url == "https://github.com/orig/lib.git"
        assert found["alice-tool"].remotes.upstream_url is None

    def test_vanished_working_copy_is_skipped(
        self, search_root: Path, tmp_path: Path, oracle: GitStatusOracle,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        walker = DiscoveryWalker([search_root], oracle)
        existing = search_root / "alice-tool"
        monkeypatch.setattr(
            walker, "iter_working_copies", lambda: iter([tmp_path / "vanished", existing])
        )
        assert names(walker) == ["alice-tool"]
        assert walker.scanned == 2
