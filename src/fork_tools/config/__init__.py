"""Configuration for fork-tools."""

from fork_tools.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
