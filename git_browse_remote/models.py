"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class RemoteSpec:
    """A configured remote as read from git config."""

    name: str
    raw_url: str


@dataclass(frozen=True)
class HostLocation:
    """Web location of a repository derived from its remote URL."""

    host: str
    owner: str
    repo: str

    @property
    def slug(self) -> str:
        return f"{self.host}/{self.owner}/{self.repo}"


@dataclass(frozen=True)
class Branch:
    """HEAD (or the explicit ref) is a named local branch."""

    name: str
    sha: str


@dataclass(frozen=True)
class Detached:
    """A bare commit with no branch or tag name to show."""

    sha: str


@dataclass(frozen=True)
class Tag:
    """A tag, either named explicitly or matching a detached HEAD."""

    name: str
    sha: str


RefState = Union[Branch, Detached, Tag]


@dataclass(frozen=True)
class ExplicitRef:
    """Ref expression typed by the user (branch, tag, SHA, `HEAD~1`...)."""

    text: str


@dataclass(frozen=True)
class PathSpec:
    """Repository-relative path with an optional line anchor."""

    path: str
    line: int | None = None
    end_line: int | None = None
    is_directory: bool = False


@dataclass(frozen=True)
class Top:
    """Repository root page."""


@dataclass(frozen=True)
class Commit:
    sha: str


@dataclass(frozen=True)
class Tree:
    ref_name: str


@dataclass(frozen=True)
class Blob:
    """File (or directory) at a ref or commit."""

    target: str
    path: str
    line: int | None = None
    end_line: int | None = None
    is_directory: bool = False


UrlMode = Union[Top, Commit, Tree, Blob]


@dataclass(frozen=True)
class Flags:
    init: bool = False
    top: bool = False
    rev: bool = False
    ref: bool = False
    remote: str | None = None


@dataclass(frozen=True)
class LineRange:
    start: int
    end: int | None = None


@dataclass(frozen=True)
class Invocation:
    """Everything the user asked for on the command line.

    ``tokens`` are the positionals given before ``--``; ``path_tokens`` are the
    ones after it and are always treated as paths.
    """

    flags: Flags = field(default_factory=Flags)
    tokens: tuple[str, ...] = ()
    path_tokens: tuple[str, ...] = ()
    lines: LineRange | None = None


@dataclass(frozen=True)
class ResolvedURL:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class InitResult:
    """Marker returned by ``--init`` listing the config entries written."""

    entries: tuple[tuple[str, str], ...]

    def __bool__(self) -> bool:
        return bool(self.entries)
