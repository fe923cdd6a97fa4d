"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEARCH_DIRS = (
    "~",
    "~/dev",
    "~/projects",
    "~/src",
    "~/github",
    "~/work",
    "~/Development",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    log_level: str = "WARNING"
    json_logs: bool = False
    no_color: str | None = None

    # Discovery
    github_usernames: str = ""  # space-separated
    fork_search_dirs: str | None = None  # colon-separated
    fork_search_depth: int = Field(default=3, ge=1)

    # Status checks
    git_timeout: float = Field(default=30.0, gt=0)
    fetch_remotes: bool = True
    max_workers: int = Field(default=4, ge=1)

    # Watcher
    repos: str = ""  # space-separated
    watch_interval: int | None = Field(default=None, gt=0)
    sound: str = "default"

    @property
    def usernames(self) -> frozenset[str]:
        return frozenset(self.github_usernames.split())

    @property
    def search_roots(self) -> list[Path]:
        if self.fork_search_dirs:
            raw = [entry for entry in self.fork_search_dirs.split(":") if entry.strip()]
        else:
            raw = list(DEFAULT_SEARCH_DIRS)
        return [Path(entry.strip()).expanduser() for entry in raw]

    @property
    def watch_repos(self) -> list[Path]:
        return [Path(entry).expanduser() for entry in self.repos.split()]

    @property
    def color_enabled(self) -> bool:
        return self.no_color is None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
