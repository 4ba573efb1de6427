"""Tests for the Typer command line interface."""

from __future__ import annotations

import unittest
from unittest import mock

from fakes import MASTER_SHA, FakeRepository, RecordingLauncher
from typer.testing import CliRunner

from git_browse_remote import cli
from git_browse_remote.browser import StdoutLauncher, WebBrowserLauncher
from git_browse_remote.exceptions import BrowserLaunchError

REPO = "https://github.com/user/repo"


class ParseArgsWithSeparatorTests(unittest.TestCase):
    def test_splits_on_first_separator(self) -> None:
        self.assertEqual(
            cli.parse_args_with_separator(["--rev", "--", "README.md", "--"]),
            (["--rev"], ["README.md", "--"]),
        )

    def test_without_separator(self) -> None:
        self.assertEqual(cli.parse_args_with_separator(["-L3", "x"]), (["-L3", "x"], []))


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        self.repo = FakeRepository()
        self.launcher = RecordingLauncher()

    def invoke(self, *args: str, path_tokens=()):
        obj = {"repo": self.repo, "launcher": self.launcher, "path_tokens": list(path_tokens)}
        return self.runner.invoke(cli.app, list(args), obj=obj)

    def test_opens_top_page(self) -> None:
        result = self.invoke()
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.launcher.urls, [REPO])

    def test_rev_with_separator_path(self) -> None:
        result = self.invoke("--rev", path_tokens=["README.md"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.launcher.urls, [f"{REPO}/blob/{MASTER_SHA[:7]}/README.md"])

    def test_attached_line_option(self) -> None:
        result = self.invoke("-L3", "README.md")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.launcher.urls, [f"{REPO}/blob/master/README.md#L3"])

    def test_short_remote_option(self) -> None:
        result = self.invoke("-r", "origin2", "--rev")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.launcher.urls, [f"https://github.com/user/repo2/commit/{MASTER_SHA}"])

    def test_errors_exit_without_launching(self) -> None:
        result = self.invoke("--remote", "nope")
        self.assertEqual(result.exit_code, 1)
        self.assertEqual(self.launcher.urls, [])

    def test_invalid_line_is_reported(self) -> None:
        result = self.invoke("-Lfoo", "README.md")
        self.assertEqual(result.exit_code, 1)
        self.assertEqual(self.launcher.urls, [])

    def test_init_prints_entries(self) -> None:
        result = self.invoke("--init")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("browse-remote.github.com.file", result.output)
        self.assertEqual(self.launcher.urls, [])

    def test_stdout_flag_prints_url(self) -> None:
        obj = {"repo": self.repo, "path_tokens": []}
        result = self.runner.invoke(cli.app, ["--stdout", "branch-1"], obj=obj)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), f"{REPO}/tree/branch-1")

    def test_run_routes_separator_to_paths(self) -> None:
        with mock.patch.object(cli, "app") as app:
            cli.run(["--rev", "--", "README.md"])
        app.assert_called_once_with(args=["--rev"], obj={"path_tokens": ["README.md"]}, prog_name="git-browse-remote")


class LauncherTests(unittest.TestCase):
    def test_web_browser_launcher(self) -> None:
        opener = mock.Mock(return_value=True)
        WebBrowserLauncher(opener).launch(REPO)
        opener.assert_called_once_with(REPO)

    def test_web_browser_launcher_failure(self) -> None:
        with self.assertRaises(BrowserLaunchError):
            WebBrowserLauncher(mock.Mock(return_value=False)).launch(REPO)

    def test_stdout_launcher(self) -> None:
        with mock.patch("git_browse_remote.browser.typer.echo") as echo:
            StdoutLauncher().launch(REPO)
        echo.assert_called_once_with(REPO)


if __name__ == "__main__":
    unittest.main()
