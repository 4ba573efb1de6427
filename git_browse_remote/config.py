"""Environment and repository configuration helpers."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from .exceptions import UsageError
from .git import RepoQuery

logger = logging.getLogger(__name__)

CONFIG_SECTION = "browse-remote"
DEFAULT_REMOTE = "origin"
DEFAULT_SHORT_LENGTH = 7
FALLBACK_DEFAULT_BRANCHES = ("main", "master")


@dataclass(frozen=True)
class Settings:
    """Application configuration."""

    default_remote: str = DEFAULT_REMOTE
    default_branch: str | None = None
    short_length: int = DEFAULT_SHORT_LENGTH


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    remote = env.get("GIT_BROWSE_REMOTE_REMOTE") or DEFAULT_REMOTE
    branch = env.get("GIT_BROWSE_REMOTE_DEFAULT_BRANCH") or None
    raw_length = env.get("GIT_BROWSE_REMOTE_SHORT_LENGTH")
    length = DEFAULT_SHORT_LENGTH
    if raw_length:
        try:
            length = int(raw_length)
        except ValueError as exc:
            raise UsageError(f"GIT_BROWSE_REMOTE_SHORT_LENGTH must be an integer, got {raw_length!r}") from exc
        if not 4 <= length <= 40:
            raise UsageError("GIT_BROWSE_REMOTE_SHORT_LENGTH must be between 4 and 40.")
    return Settings(default_remote=remote, default_branch=branch, short_length=length)


def config_key(*parts: str) -> str:
    return ".".join((CONFIG_SECTION, *parts))


def detect_default_branch(repo: RepoQuery, remote: str, settings: Settings) -> str | None:
    """Name of the branch the host treats as primary, if it can be told."""

    configured = repo.config_get(config_key("defaultBranch"))
    if configured:
        return configured
    if settings.default_branch:
        return settings.default_branch
    branch = repo.remote_head_branch(remote)
    if branch:
        return branch
    for fallback in FALLBACK_DEFAULT_BRANCHES:
        if repo.branch_exists(fallback):
            return fallback
    logger.debug("No default branch detected for remote %s", remote)
    return None


__all__ = [
    "Settings",
    "load_settings",
    "config_key",
    "detect_default_branch",
]
