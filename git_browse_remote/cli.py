"""Typer CLI entrypoint for git-browse-remote."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .browser import BrowserLauncher, StdoutLauncher, WebBrowserLauncher
from .config import load_settings
from .exceptions import BrowseRemoteError
from .git import GitRepository, RepoQuery
from .models import Flags, InitResult, Invocation
from .resolver import parse_line_range, resolve

app = typer.Typer(
    help="Open the hosting page for the current branch, tag, commit or file",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def parse_args_with_separator(args: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split arguments on the first '--' separator.

    Returns:
        Tuple of (args_before, args_after)
    """
    args = list(args)
    if "--" in args:
        sep_idx = args.index("--")
        return args[:sep_idx], args[sep_idx + 1 :]
    return args, []


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-browse-remote {__version__}")
        raise typer.Exit()


@app.command()
def main(
    ctx: typer.Context,
    tokens: Optional[List[str]] = typer.Argument(
        None,
        metavar="[REF|REMOTE] [PATH]",
        help="Branch, tag, commit expression or remote name, optionally followed by a path.",
        show_default=False,
    ),
    init: bool = typer.Option(
        False,
        "--init",
        help="Write URL templates to git config (arguments: HOST=RECIPE, default github.com=github).",
    ),
    top: bool = typer.Option(False, "--top", help="Open the repository top page."),
    rev: bool = typer.Option(False, "--rev", help="Use commit SHAs instead of branch or tag names."),
    ref: bool = typer.Option(False, "--ref", help="Use branch or tag names instead of commit SHAs."),
    remote: Optional[str] = typer.Option(None, "--remote", "-r", help="Remote to browse (default: origin)."),
    line: Optional[str] = typer.Option(None, "-L", metavar="N[,M]", help="Line (or range) to highlight in PATH."),
    stdout: bool = typer.Option(False, "--stdout", "-p", help="Print the URL instead of opening a browser."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the git-browse-remote version and exit.",
    ),
) -> None:
    """Open the hosting page for the current checkout.

    Arguments after -- are always treated as a path.

    Examples:

        git-browse-remote

        git-browse-remote --rev -- README.md

        git-browse-remote -L3 README.md

        git-browse-remote -r upstream v1.0
    """
    _ = version  # handled via callback
    configure_logging(verbose)
    state = ctx.obj if isinstance(ctx.obj, dict) else {}
    repo: RepoQuery = state.get("repo") or GitRepository()
    launcher: BrowserLauncher = state.get("launcher") or (StdoutLauncher() if stdout else WebBrowserLauncher())

    try:
        invocation = Invocation(
            flags=Flags(init=init, top=top, rev=rev, ref=ref, remote=remote),
            tokens=tuple(tokens or ()),
            path_tokens=tuple(state.get("path_tokens") or ()),
            lines=parse_line_range(line) if line is not None else None,
        )
        result = resolve(invocation, repo, load_settings())
        if isinstance(result, InitResult):
            for key, value in result.entries:
                typer.echo(f"{key} = {value}")
            return
        launcher.launch(result.value)
    except BrowseRemoteError as exc:
        _fail(str(exc))


def _fail(message: str, code: int = 1) -> None:
    err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise typer.Exit(code)


def run(argv: Sequence[str] | None = None) -> None:
    """Console script entrypoint; keeps what follows '--' out of option parsing."""

    args = sys.argv[1:] if argv is None else argv
    before, after = parse_args_with_separator(args)
    app(args=before, obj={"path_tokens": after}, prog_name="git-browse-remote")


if __name__ == "__main__":
    run()
