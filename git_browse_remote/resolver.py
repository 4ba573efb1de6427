"""Resolve an invocation against a repository into a single URL."""

from __future__ import annotations

import logging
import re
from typing import Sequence

from .config import Settings, detect_default_branch
from .exceptions import UnknownRemote, UsageError
from .git import RepoQuery
from .models import (
    ExplicitRef,
    InitResult,
    Invocation,
    LineRange,
    PathSpec,
    RemoteSpec,
    ResolvedURL,
)
from .modes import select_mode
from .refs import resolve_ref
from .remotes import parse_remote
from .urls import DEFAULT_RECIPE, build_url, install_recipe, load_templates

logger = logging.getLogger(__name__)

_LINE_RANGE_RE = re.compile(r"^(?P<start>\d+)(?:,(?P<end>\d+))?$")

DEFAULT_INIT_TARGETS = (("github.com", DEFAULT_RECIPE),)


def resolve(
    invocation: Invocation,
    repo: RepoQuery,
    settings: Settings | None = None,
) -> ResolvedURL | InitResult:
    """Turn the command line state into a URL, or run ``--init``.

    Raises a ``BrowseRemoteError`` subclass when the remote, the ref or the
    remote URL cannot be resolved; nothing should be opened in that case.
    """

    settings = settings or Settings()
    if invocation.flags.init:
        return run_init(repo, [*invocation.tokens, *invocation.path_tokens])

    ref_token, path_spec = classify_tokens(invocation, repo)
    remote, ref_token = select_remote(invocation, ref_token, repo, settings)

    spec = load_remote(repo, remote)
    location = parse_remote(spec.raw_url)
    logger.debug("Remote %s points at %s", spec.name, location.slug)

    explicit = ExplicitRef(ref_token) if ref_token else None
    ref_state = resolve_ref(repo, explicit)
    logger.debug("Ref state: %s", ref_state)

    default_branch = detect_default_branch(repo, remote, settings)
    mode = select_mode(
        invocation.flags,
        ref_state,
        path_spec,
        default_branch=default_branch,
        short_length=settings.short_length,
    )
    logger.debug("URL mode: %s", mode)
    return build_url(location, mode, load_templates(repo, location.host))


def load_remote(repo: RepoQuery, name: str) -> RemoteSpec:
    raw_url = repo.remote_url(name)
    if not raw_url:
        raise UnknownRemote(name)
    return RemoteSpec(name=name, raw_url=raw_url)


def classify_tokens(invocation: Invocation, repo: RepoQuery) -> tuple[str | None, PathSpec | None]:
    """Split positionals into an optional ref token and an optional path.

    Tokens after ``--`` are always paths. Otherwise the last positional is a
    path when something exists at that location.
    """

    tokens = list(invocation.tokens)
    located: tuple[str, bool] | None = None
    if invocation.path_tokens:
        if len(invocation.path_tokens) > 1:
            raise UsageError("Only one path can be browsed at a time.")
        located = repo.locate_path(invocation.path_tokens[0], must_exist=False)
    elif tokens:
        located = repo.locate_path(tokens[-1])
        if located is not None:
            tokens.pop()
    if len(tokens) > 1:
        raise UsageError(f"Unexpected arguments: {' '.join(tokens[1:])}")

    path_spec = None
    lines = invocation.lines
    if located is not None:
        path, is_directory = located
        path_spec = PathSpec(
            path=path,
            line=lines.start if lines else None,
            end_line=lines.end if lines else None,
            is_directory=is_directory,
        )
    elif lines is not None:
        raise UsageError("-L requires a path argument.")
    return (tokens[0] if tokens else None), path_spec


def select_remote(
    invocation: Invocation,
    ref_token: str | None,
    repo: RepoQuery,
    settings: Settings,
) -> tuple[str, str | None]:
    """Return the remote to use and what is left of the ref token.

    A lone positional naming a configured remote selects that remote, unless a
    branch or tag of the same name exists or ``--remote`` was given.
    """

    if invocation.flags.remote:
        return invocation.flags.remote, ref_token
    if (
        ref_token
        and ref_token in repo.remote_names()
        and not repo.branch_exists(ref_token)
        and not repo.tag_exists(ref_token)
    ):
        logger.debug("Treating '%s' as a remote name", ref_token)
        return ref_token, None
    return settings.default_remote, ref_token


def run_init(repo: RepoQuery, targets: Sequence[str]) -> InitResult:
    pairs = [_parse_init_target(target) for target in targets] or list(DEFAULT_INIT_TARGETS)
    entries: list[tuple[str, str]] = []
    for host, recipe in pairs:
        entries.extend(install_recipe(repo, host, recipe))
    return InitResult(entries=tuple(entries))


def _parse_init_target(target: str) -> tuple[str, str]:
    host, sep, recipe = target.partition("=")
    if not sep or not host or not recipe:
        raise UsageError(f"Expected HOST=RECIPE for --init, got '{target}'.")
    return host, recipe


def parse_line_range(text: str) -> LineRange:
    match = _LINE_RANGE_RE.match(text.strip())
    if not match:
        raise UsageError(f"Invalid line number '{text}'. Use -L<N> or -L<N>,<M>.")
    start = int(match.group("start"))
    end = int(match.group("end")) if match.group("end") else None
    if start < 1 or (end is not None and end < start):
        raise UsageError(f"Invalid line range '{text}'.")
    return LineRange(start=start, end=end)


__all__ = [
    "resolve",
    "load_remote",
    "classify_tokens",
    "select_remote",
    "run_init",
    "parse_line_range",
]
