"""Thin wrappers around git CLI commands."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Sequence

from .exceptions import GitCommandError, UsageError

logger = logging.getLogger(__name__)


def run_git(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute a git command and optionally raise on failure."""

    command = ["git", *args]
    logger.debug("Running command: %s", " ".join(command))
    try:
        result = subprocess.run(
            command,
            cwd=str(cwd) if cwd else None,
            text=True,
            capture_output=True,
        )
    except FileNotFoundError as exc:
        raise GitCommandError(command, 127, stderr="git executable not found") from exc
    if check and result.returncode != 0:
        raise GitCommandError(command, result.returncode, stdout=result.stdout, stderr=result.stderr)
    return result


class RepoQuery(Protocol):
    """Everything the resolver needs to know about the local repository."""

    def remote_names(self) -> list[str]:
        ...

    def remote_url(self, name: str) -> str | None:
        ...

    def current_branch(self) -> str | None:
        """Short name of the checked out branch, ``None`` on a detached HEAD."""
        ...

    def head_commit(self) -> str:
        ...

    def resolve_commit(self, expression: str) -> str | None:
        """Full SHA of the commit ``expression`` points at, if any."""
        ...

    def branch_exists(self, name: str) -> bool:
        ...

    def tag_exists(self, name: str) -> bool:
        ...

    def tags_by_commit(self) -> dict[str, list[str]]:
        """Map each tagged commit SHA to its tag names, sorted."""
        ...

    def remote_head_branch(self, remote: str) -> str | None:
        ...

    def locate_path(self, token: str, *, must_exist: bool = True) -> tuple[str, bool] | None:
        """Repository-relative form of ``token`` and whether it is a directory.

        Returns ``None`` when ``must_exist`` is set and nothing lives at
        ``token``.
        """
        ...

    def config_get(self, key: str) -> str | None:
        ...

    def config_set(self, key: str, value: str) -> None:
        ...


@dataclass
class GitRepository:
    """``RepoQuery`` backed by the git executable, run from ``path``."""

    path: Path = field(default_factory=Path.cwd)

    def _git(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        return run_git(args, cwd=self.path, check=check)

    def remote_names(self) -> list[str]:
        proc = self._git("remote")
        return [line.strip() for line in proc.stdout.splitlines() if line.strip()]

    def remote_url(self, name: str) -> str | None:
        # Read the raw config value so insteadOf rewrites do not hide the host.
        url = self.config_get(f"remote.{name}.url")
        if url:
            return url
        proc = self._git("remote", "get-url", name, check=False)
        if proc.returncode != 0:
            return None
        return proc.stdout.strip() or None

    def current_branch(self) -> str | None:
        proc = self._git("symbolic-ref", "-q", "--short", "HEAD", check=False)
        if proc.returncode != 0:
            return None
        return proc.stdout.strip() or None

    def head_commit(self) -> str:
        return self._git("rev-parse", "HEAD").stdout.strip()

    def resolve_commit(self, expression: str) -> str | None:
        proc = self._git("rev-parse", "--verify", "--quiet", f"{expression}^{{commit}}", check=False)
        if proc.returncode != 0:
            return None
        return proc.stdout.strip() or None

    def branch_exists(self, name: str) -> bool:
        proc = self._git("show-ref", "--verify", "--quiet", f"refs/heads/{name}", check=False)
        return proc.returncode == 0

    def tag_exists(self, name: str) -> bool:
        proc = self._git("show-ref", "--verify", "--quiet", f"refs/tags/{name}", check=False)
        return proc.returncode == 0

    def tags_by_commit(self) -> dict[str, list[str]]:
        proc = self._git(
            "for-each-ref",
            "--sort=refname",
            "--format=%(objectname)%09%(*objectname)%09%(refname:short)",
            "refs/tags",
        )
        lookup: dict[str, list[str]] = {}
        for raw in proc.stdout.splitlines():
            if not raw.strip():
                continue
            target, peeled, name = raw.split("\t", 2)
            # Annotated tags point at a tag object; the peeled SHA is the commit.
            commit = peeled or target
            lookup.setdefault(commit, []).append(name)
        return lookup

    def remote_head_branch(self, remote: str) -> str | None:
        proc = self._git("symbolic-ref", "-q", f"refs/remotes/{remote}/HEAD", check=False)
        if proc.returncode != 0:
            return None
        ref = proc.stdout.strip()
        prefix = f"refs/remotes/{remote}/"
        if not ref.startswith(prefix):
            return None
        return ref[len(prefix):]

    def locate_path(self, token: str, *, must_exist: bool = True) -> tuple[str, bool] | None:
        candidate = self.path / token
        if must_exist and not os.path.lexists(candidate):
            return None
        toplevel = Path(self._git("rev-parse", "--show-toplevel").stdout.strip()).resolve()
        lexical = Path(os.path.normpath(self.path.resolve() / token))
        # Only the containing directory is resolved; a symlink keeps its own name.
        if lexical != lexical.parent:
            lexical = lexical.parent.resolve() / lexical.name
        try:
            relative = lexical.relative_to(toplevel)
        except ValueError as exc:
            raise UsageError(f"Path is outside the repository: {token}") from exc
        text = relative.as_posix()
        if text == ".":
            text = ""
        return text, candidate.is_dir() and not candidate.is_symlink()

    def config_get(self, key: str) -> str | None:
        proc = self._git("config", "--get", key, check=False)
        if proc.returncode != 0:
            return None
        return proc.stdout.strip()

    def config_set(self, key: str, value: str) -> None:
        self._git("config", key, value)


__all__ = ["run_git", "RepoQuery", "GitRepository"]
