"""Classify what the user is looking at: a branch, a tag or a bare commit."""

from __future__ import annotations

import logging

from .exceptions import UnresolvableRef
from .git import RepoQuery
from .models import Branch, Detached, ExplicitRef, RefState, Tag

logger = logging.getLogger(__name__)


def resolve_ref(repo: RepoQuery, explicit: ExplicitRef | None = None) -> RefState:
    """Return the ref state for ``explicit``, or for HEAD when it is omitted."""

    if explicit is not None:
        return _resolve_explicit(repo, explicit.text)
    return _resolve_head(repo)


def _resolve_explicit(repo: RepoQuery, text: str) -> RefState:
    is_branch = repo.branch_exists(text)
    is_tag = repo.tag_exists(text)
    if is_branch and is_tag:
        logger.debug("'%s' is both a branch and a tag; using the branch", text)
    if is_branch:
        sha = _require_commit(repo, f"refs/heads/{text}", text)
        return Branch(name=text, sha=sha)
    if is_tag:
        sha = _require_commit(repo, f"refs/tags/{text}", text)
        return Tag(name=text, sha=sha)
    return Detached(sha=_require_commit(repo, text, text))


def _resolve_head(repo: RepoQuery) -> RefState:
    head = repo.head_commit()
    branch = repo.current_branch()
    if branch:
        return Branch(name=branch, sha=head)
    tags = repo.tags_by_commit().get(head)
    if tags:
        return Tag(name=tags[0], sha=head)
    return Detached(sha=head)


def _require_commit(repo: RepoQuery, expression: str, shown: str) -> str:
    sha = repo.resolve_commit(expression)
    if not sha:
        raise UnresolvableRef(shown)
    return sha


__all__ = ["resolve_ref"]
