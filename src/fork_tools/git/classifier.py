"""Decides which working copies count as forks worth tracking."""

from collections.abc import Iterable


def is_fork(
    origin_url: str | None,
    upstream_url: str | None,
    usernames: Iterable[str],
) -> bool:
    """Return True if a working copy is one of the user's forks.

    Any configured upstream remote is enough. Without one, the origin URL
    must contain one of ``usernames`` as a plain substring, so a short name
    like ``"al"`` also matches ``https://github.com/alfred/x``.
    """
    if upstream_url:
        return True
    if origin_url is None:
        return False
    return any(username and username in origin_url for username in usernames)
