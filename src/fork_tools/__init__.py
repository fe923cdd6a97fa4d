"""fork-tools: track the sync state of your forked Git working copies."""

__version__ = "1.0.0"
