"""Render hosting URLs from per-host templates."""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass

from .config import config_key
from .exceptions import TemplateError, UsageError
from .git import RepoQuery
from .models import Blob, Commit, HostLocation, ResolvedURL, Top, Tree, UrlMode

logger = logging.getLogger(__name__)

TEMPLATE_KINDS = ("top", "ref", "rev", "file")
TEMPLATE_FIELDS = frozenset({"host", "owner", "repo", "ref", "rev", "path", "kind", "target", "anchor"})


@dataclass(frozen=True)
class Templates:
    """One URL template per mode, filled in with ``str.format`` fields.

    Available fields: host, owner, repo, ref, rev, path, kind, target, anchor.
    """

    top: str
    ref: str
    rev: str
    file: str

    def get(self, kind: str) -> str:
        return getattr(self, kind)


RECIPES: dict[str, Templates] = {
    "github": Templates(
        top="https://{host}/{owner}/{repo}",
        ref="https://{host}/{owner}/{repo}/tree/{ref}",
        rev="https://{host}/{owner}/{repo}/commit/{rev}",
        file="https://{host}/{owner}/{repo}/{kind}/{target}/{path}{anchor}",
    ),
    "gitlab": Templates(
        top="https://{host}/{owner}/{repo}",
        ref="https://{host}/{owner}/{repo}/-/tree/{ref}",
        rev="https://{host}/{owner}/{repo}/-/commit/{rev}",
        file="https://{host}/{owner}/{repo}/-/{kind}/{target}/{path}{anchor}",
    ),
}

DEFAULT_RECIPE = "github"
HOST_RECIPES = {"github.com": "github", "gitlab.com": "gitlab"}


def recipe_for_host(host: str) -> Templates:
    hostname = host.split(":", 1)[0].lower()
    return RECIPES[HOST_RECIPES.get(hostname, DEFAULT_RECIPE)]


def load_templates(repo: RepoQuery, host: str) -> Templates:
    """Built-in recipe for ``host`` with any git config overrides applied."""

    base = recipe_for_host(host)
    values = {}
    for kind in TEMPLATE_KINDS:
        override = repo.config_get(config_key(host, kind))
        if override:
            logger.debug("Using configured %s template for %s", kind, host)
            check_template(kind, override)
        values[kind] = override or base.get(kind)
    return Templates(**values)


def check_template(kind: str, template: str) -> None:
    """Reject templates that use anything but plain known fields."""

    try:
        parsed = list(string.Formatter().parse(template))
    except ValueError as exc:
        raise TemplateError(f"Malformed {kind} template {template!r}: {exc}") from exc
    for _, field_name, _, _ in parsed:
        if field_name is None:
            continue
        if field_name not in TEMPLATE_FIELDS:
            known = ", ".join(sorted(TEMPLATE_FIELDS))
            raise TemplateError(f"Unknown field {{{field_name}}} in {kind} template {template!r}. Known fields: {known}.")


def install_recipe(repo: RepoQuery, host: str, recipe: str) -> list[tuple[str, str]]:
    """Write every template of ``recipe`` into git config for ``host``."""

    try:
        templates = RECIPES[recipe]
    except KeyError as exc:
        known = ", ".join(sorted(RECIPES))
        raise UsageError(f"Unknown recipe '{recipe}'. Choose one of: {known}.") from exc
    written: list[tuple[str, str]] = []
    for kind in TEMPLATE_KINDS:
        key = config_key(host, kind)
        value = templates.get(kind)
        repo.config_set(key, value)
        written.append((key, value))
    return written


def line_anchor(line: int | None, end_line: int | None = None) -> str:
    if line is None:
        return ""
    if end_line is not None and end_line != line:
        return f"#L{line}-L{end_line}"
    return f"#L{line}"


def build_url(location: HostLocation, mode: UrlMode, templates: Templates | None = None) -> ResolvedURL:
    templates = templates or recipe_for_host(location.host)
    fields = {
        "host": location.host,
        "owner": location.owner,
        "repo": location.repo,
        "ref": "",
        "rev": "",
        "path": "",
        "kind": "",
        "target": "",
        "anchor": "",
    }
    if isinstance(mode, Top):
        kind = "top"
    elif isinstance(mode, Commit):
        kind = "rev"
        fields["rev"] = mode.sha
    elif isinstance(mode, Tree):
        kind = "ref"
        fields["ref"] = mode.ref_name
    elif isinstance(mode, Blob):
        kind = "file"
        fields.update(
            path=mode.path,
            kind="tree" if mode.is_directory else "blob",
            target=mode.target,
            anchor=line_anchor(mode.line, mode.end_line),
        )
    else:  # pragma: no cover
        raise TypeError(f"Unknown URL mode: {mode!r}")
    template = templates.get(kind)
    try:
        value = template.format(**fields)
    except (KeyError, IndexError, ValueError, AttributeError, TypeError) as exc:
        raise TemplateError(f"Cannot render {kind} template {template!r}: {exc}") from exc
    return ResolvedURL(value=value)


__all__ = [
    "Templates",
    "RECIPES",
    "recipe_for_host",
    "load_templates",
    "check_template",
    "install_recipe",
    "line_anchor",
    "build_url",
]
