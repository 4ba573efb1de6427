"""Turn git remote URLs into web host locations."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from .exceptions import UnsupportedRemoteFormat
from .models import HostLocation

# Schemes whose port belongs to the web server rather than the transport.
_WEB_SCHEMES = {"http", "https"}

_SCHEME_URL_RE = re.compile(
    r"^(?P<scheme>https?|git|ssh|git\+ssh|ssh\+git)://"
    r"(?:[^@/]+@)?"
    r"(?P<host>[^/:@]+)"
    r"(?::(?P<port>\d*))?"
    r"(?P<path>/.*)$",
    re.IGNORECASE,
)

_SCP_LIKE_RE = re.compile(r"^(?:[^@/:]+@)?(?P<host>[^/:@]+):(?P<path>[^/].*)$")


def _scheme_host(match: re.Match[str]) -> tuple[str, str]:
    host = match.group("host")
    port = match.group("port")
    if port and match.group("scheme").lower() in _WEB_SCHEMES:
        host = f"{host}:{port}"
    return host, match.group("path")


def _scp_host(match: re.Match[str]) -> tuple[str, str]:
    return match.group("host"), match.group("path")


@dataclass(frozen=True)
class RemotePattern:
    """A recognised remote URL shape and how to pull host and path from it."""

    name: str
    regex: re.Pattern[str]
    extract: Callable[[re.Match[str]], tuple[str, str]]


# Tried in order; the first pattern that matches wins.
REMOTE_PATTERNS: tuple[RemotePattern, ...] = (
    RemotePattern("scheme", _SCHEME_URL_RE, _scheme_host),
    RemotePattern("scp", _SCP_LIKE_RE, _scp_host),
)


def parse_remote(raw_url: str, patterns: tuple[RemotePattern, ...] = REMOTE_PATTERNS) -> HostLocation:
    """Return the host, owner and repository encoded in ``raw_url``.

    The last two non-empty path segments are the owner and the repository,
    a trailing ``.git`` is dropped from the repository and the host keeps the
    case it was written in.
    """

    url = raw_url.strip()
    for pattern in patterns:
        match = pattern.regex.match(url)
        if not match:
            continue
        host, path = pattern.extract(match)
        parts = [part for part in path.split("/") if part]
        if not host or len(parts) < 2:
            break
        owner = parts[-2]
        repo = parts[-1]
        if repo.endswith(".git"):
            repo = repo[: -len(".git")]
        if not repo:
            break
        return HostLocation(host=host, owner=owner, repo=repo)
    raise UnsupportedRemoteFormat(raw_url)


__all__ = ["RemotePattern", "REMOTE_PATTERNS", "parse_remote"]
