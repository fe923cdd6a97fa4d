"""Remote URL helpers."""

import re


def normalize_remote_url(url: str) -> str:
    """Normalize a git remote URL to an HTTPS base URL.

    Handles:
    - git@github.com:org/repo.git -> https://github.com/org/repo
    - ssh://git@github.com/org/repo.git -> https://github.com/org/repo
    - https://github.com/org/repo.git -> https://github.com/org/repo
    """
    url = re.sub(r"\.git/?$", "", url.strip())
    scp_match = re.match(r"^[\w.-]+@([^:/]+):(.+)$", url)
    if scp_match:
        host, path = scp_match.groups()
        return f"https://{host}/{path.lstrip('/')}"
    ssh_match = re.match(r"^ssh://(?:[^@/]+@)?([^:/]+)(?::\d+)?/(.+)$", url)
    if ssh_match:
        host, path = ssh_match.groups()
        return f"https://{host}/{path}"
    return url
