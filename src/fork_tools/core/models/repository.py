"""Repository identity and remote models."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from fork_tools.core.exceptions import InvalidRepositoryPathError

ORIGIN = "origin"
UPSTREAM = "upstream"


class RepositoryHandle(BaseModel):
    """A local working copy found on disk."""

    model_config = ConfigDict(frozen=True)

    path: Path
    name: str

    @classmethod
    def from_path(cls, path: Path | str) -> "RepositoryHandle":
        """Build a handle for an existing directory.

        Anything that is not a directory is a caller error and is rejected
        before any git command runs.
        """
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_dir():
            raise InvalidRepositoryPathError(
                f"Not a directory: {resolved}",
                details={"path": str(resolved)},
            )
        return cls(path=resolved, name=resolved.name)


class RemoteSet(BaseModel):
    """The origin and upstream remotes of a working copy.

    ``None`` means the remote is not configured, which is different from a
    remote configured with an empty URL.
    """

    model_config = ConfigDict(frozen=True)

    origin_url: str | None = None
    upstream_url: str | None = None

    @property
    def has_origin(self) -> bool:
        return self.origin_url is not None

    @property
    def has_upstream(self) -> bool:
        return bool(self.upstream_url)

    @property
    def reference_remote(self) -> str | None:
        """Remote whose default branch ahead/behind counts are taken against."""
        if self.has_upstream:
            return UPSTREAM
        if self.has_origin:
            return ORIGIN
        return None

    @property
    def tracked_url(self) -> str | None:
        """URL of the reference remote."""
        if self.has_upstream:
            return self.upstream_url
        return self.origin_url


class DiscoveredRepository(BaseModel):
    """A working copy accepted by discovery, with the remotes it was judged on."""

    model_config = ConfigDict(frozen=True)

    handle: RepositoryHandle
    remotes: RemoteSet
