"""Tests for URL mode selection."""

from __future__ import annotations

import unittest

from fakes import BRANCH_SHA, MASTER_SHA, PARENT_SHA, TAG_SHA

from git_browse_remote.models import Blob, Branch, Commit, Detached, Flags, PathSpec, Tag, Top, Tree
from git_browse_remote.modes import select_mode

MASTER = Branch(name="master", sha=MASTER_SHA)
FEATURE = Branch(name="branch-1", sha=BRANCH_SHA)
DETACHED = Detached(sha=PARENT_SHA)
TAG = Tag(name="tag-a", sha=TAG_SHA)
README = PathSpec(path="README.md")


class SelectModeTests(unittest.TestCase):
    def select(self, state, path=None, **flags):
        return select_mode(Flags(**flags), state, path, default_branch="master")

    def test_default_branch_is_top(self) -> None:
        self.assertEqual(self.select(MASTER), Top())

    def test_other_branch_is_tree(self) -> None:
        self.assertEqual(self.select(FEATURE), Tree(ref_name="branch-1"))

    def test_top_flag_wins(self) -> None:
        for state in (MASTER, FEATURE, DETACHED, TAG):
            with self.subTest(state=state):
                self.assertEqual(self.select(state, top=True), Top())
        self.assertEqual(self.select(FEATURE, README, top=True, rev=True), Top())

    def test_rev_gives_commit(self) -> None:
        self.assertEqual(self.select(MASTER, rev=True), Commit(sha=MASTER_SHA))
        self.assertEqual(self.select(FEATURE, rev=True), Commit(sha=BRANCH_SHA))
        self.assertEqual(self.select(TAG, rev=True), Commit(sha=TAG_SHA))

    def test_rev_beats_ref(self) -> None:
        self.assertEqual(self.select(MASTER, rev=True, ref=True), Commit(sha=MASTER_SHA))

    def test_ref_on_default_branch_is_tree(self) -> None:
        self.assertEqual(self.select(MASTER, ref=True), Tree(ref_name="master"))

    def test_detached_is_commit(self) -> None:
        self.assertEqual(self.select(DETACHED), Commit(sha=PARENT_SHA))
        self.assertEqual(self.select(DETACHED, ref=True), Commit(sha=PARENT_SHA))

    def test_tag_is_tree(self) -> None:
        self.assertEqual(self.select(TAG), Tree(ref_name="tag-a"))

    def test_path_uses_ref_name(self) -> None:
        self.assertEqual(self.select(MASTER, README), Blob(target="master", path="README.md"))
        self.assertEqual(self.select(TAG, README), Blob(target="tag-a", path="README.md"))

    def test_path_on_detached_uses_full_sha(self) -> None:
        self.assertEqual(self.select(DETACHED, README), Blob(target=PARENT_SHA, path="README.md"))

    def test_path_with_rev_uses_short_sha(self) -> None:
        mode = self.select(MASTER, README, rev=True)
        self.assertEqual(mode, Blob(target=MASTER_SHA[:7], path="README.md"))

    def test_short_length_is_configurable(self) -> None:
        mode = select_mode(Flags(rev=True), MASTER, README, default_branch="master", short_length=12)
        self.assertEqual(mode.target, MASTER_SHA[:12])

    def test_line_and_directory_are_carried(self) -> None:
        spec = PathSpec(path="docs", line=3, end_line=5, is_directory=True)
        self.assertEqual(
            self.select(FEATURE, spec),
            Blob(target="branch-1", path="docs", line=3, end_line=5, is_directory=True),
        )

    def test_repository_root_path_is_tree(self) -> None:
        root = PathSpec(path="", is_directory=True)
        self.assertEqual(self.select(MASTER, root), Tree(ref_name="master"))
        self.assertEqual(self.select(MASTER, root, rev=True), Tree(ref_name=MASTER_SHA[:7]))
        self.assertEqual(self.select(DETACHED, root), Tree(ref_name=PARENT_SHA))

    def test_unknown_default_branch_never_collapses_to_top(self) -> None:
        self.assertEqual(select_mode(Flags(), MASTER, None, default_branch=None), Tree(ref_name="master"))


if __name__ == "__main__":
    unittest.main()
