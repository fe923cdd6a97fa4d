"""Git integration for fork-tools."""

from fork_tools.git.classifier import is_fork
from fork_tools.git.discovery import DiscoveryWalker
from fork_tools.git.oracle import GitStatusOracle

__all__ = ["DiscoveryWalker", "GitStatusOracle", "is_fork"]
