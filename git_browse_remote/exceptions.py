"""Custom error hierarchy for git-browse-remote."""

from __future__ import annotations


class BrowseRemoteError(RuntimeError):
    """Base error for the CLI."""


class GitCommandError(BrowseRemoteError):
    """Raised when an underlying git command fails."""

    def __init__(
        self,
        command: list[str],
        returncode: int,
        *,
        stdout: str | None = None,
        stderr: str | None = None,
    ):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        message = f"git command failed (exit {returncode}): {' '.join(command)}"
        details = "\n".join(
            section
            for section in (self.stdout.strip(), self.stderr.strip())
            if section
        )
        if details:
            message = f"{message}\n{details}"
        super().__init__(message)


class UnsupportedRemoteFormat(BrowseRemoteError):
    """Raised when a remote URL matches none of the known shapes."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(
            f"Unsupported remote URL: {url}. "
            "Supported formats include git@host:owner/repo.git and https URLs."
        )


class UnknownRemote(BrowseRemoteError):
    """Raised when the requested remote is not configured."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Remote '{name}' does not exist.")


class UnresolvableRef(BrowseRemoteError):
    """Raised when a ref expression names no branch, tag or commit."""

    def __init__(self, expression: str):
        self.expression = expression
        super().__init__(f"Cannot resolve '{expression}' to a commit.")


class TemplateError(BrowseRemoteError):
    """Raised when a URL template cannot be rendered."""


class UsageError(BrowseRemoteError):
    """Raised when the arguments do not make sense together."""


class BrowserLaunchError(BrowseRemoteError):
    """Raised when the browser cannot be opened."""


__all__ = [
    "BrowseRemoteError",
    "GitCommandError",
    "UnsupportedRemoteFormat",
    "UnknownRemote",
    "UnresolvableRef",
    "TemplateError",
    "UsageError",
    "BrowserLaunchError",
]
