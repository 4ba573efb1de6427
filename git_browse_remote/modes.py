"""Pick which hosting page to open."""

from __future__ import annotations

from .config import DEFAULT_SHORT_LENGTH
from .models import Blob, Branch, Commit, Detached, Flags, PathSpec, RefState, Tag, Top, Tree, UrlMode


def select_mode(
    flags: Flags,
    ref_state: RefState,
    path_spec: PathSpec | None = None,
    default_branch: str | None = None,
    short_length: int = DEFAULT_SHORT_LENGTH,
) -> UrlMode:
    """Combine flags, ref state and path into a URL mode.

    Flags win over inferred defaults: ``--top`` beats everything, a path
    always means a file page, and ``--rev`` beats ``--ref``. Without flags the
    default branch opens the repository top page and any other branch or tag
    opens its tree.
    """

    if flags.top:
        return Top()
    if path_spec is not None:
        if flags.rev:
            target = ref_state.sha[:short_length]
        else:
            target = _ref_name(ref_state) or ref_state.sha
        if not path_spec.path:
            return Tree(ref_name=target)
        return Blob(
            target=target,
            path=path_spec.path,
            line=path_spec.line,
            end_line=path_spec.end_line,
            is_directory=path_spec.is_directory,
        )
    if flags.rev:
        return Commit(sha=ref_state.sha)
    if isinstance(ref_state, Branch):
        if flags.ref or default_branch is None or ref_state.name != default_branch:
            return Tree(ref_name=ref_state.name)
        return Top()
    if isinstance(ref_state, Tag):
        return Tree(ref_name=ref_state.name)
    return Commit(sha=ref_state.sha)


def _ref_name(ref_state: RefState) -> str | None:
    if isinstance(ref_state, Detached):
        return None
    return ref_state.name


__all__ = ["select_mode"]
