"""Ways of handing the resolved URL to the user."""

from __future__ import annotations

import logging
import webbrowser
from typing import Callable, Protocol

import typer

from .exceptions import BrowserLaunchError

logger = logging.getLogger(__name__)


class BrowserLauncher(Protocol):
    """Opens a URL; implementations must not wait for the browser to exit."""

    def launch(self, url: str) -> None:
        ...


class WebBrowserLauncher:
    def __init__(self, opener: Callable[[str], bool] = webbrowser.open):
        self._opener = opener

    def launch(self, url: str) -> None:
        logger.debug("Opening %s", url)
        try:
            opened = self._opener(url)
        except webbrowser.Error as exc:
            raise BrowserLaunchError(f"Could not open URL '{url}' in browser: {exc}. Please open manually.") from exc
        if not opened:
            raise BrowserLaunchError(f"No browser available to open '{url}'. Please open manually.")


class StdoutLauncher:
    """Print the URL instead of opening it."""

    def launch(self, url: str) -> None:
        typer.echo(url)


__all__ = ["BrowserLauncher", "WebBrowserLauncher", "StdoutLauncher"]
