"""Tests for recent_pkg.changes."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import os
import sys

import pytest
from helpers import commit_all, git, init_repo, requires_git, write

from recent_pkg.changes import find_repo_root, has_commits, list_changed_files
from recent_pkg.errors import GitCommandError, GitNotFoundError, NotARepositoryError
from recent_pkg.models import CommandResult

ROOT = Path("/ws")


def ok(stdout: str = "") -> CommandResult:
    return CommandResult(args=["git"], returncode=0, stdout=stdout)


def failed(stderr: str = "", returncode: int = 128) -> CommandResult:
    return CommandResult(args=["git"], returncode=returncode, stderr=stderr)


class TestFindRepoRoot:
    """Tests for find_repo_root()."""

    @patch("recent_pkg.changes.git")
    def test_returns_toplevel(self, mock_git: MagicMock, tmp_path: Path) -> None:
        mock_git.return_value = ok(f"{tmp_path}\n")

        assert find_repo_root(tmp_path / "sub") == tmp_path
        mock_git.assert_called_once_with(
            "rev-parse", "--show-toplevel", cwd=tmp_path / "sub"
        )

    @patch("recent_pkg.changes.git")
    def test_not_a_repository(self, mock_git: MagicMock) -> None:
        mock_git.return_value = failed("fatal: not a git repository")

        with pytest.raises(NotARepositoryError):
            find_repo_root(Path("/tmp/elsewhere"))

    @patch("recent_pkg.changes.git")
    def test_git_missing_propagates(self, mock_git: MagicMock) -> None:
        mock_git.side_effect = GitNotFoundError()

        with pytest.raises(GitNotFoundError):
            find_repo_root(Path("/tmp"))


class TestListChangedFiles:
    """Tests for list_changed_files()."""

    @patch("recent_pkg.changes.git")
    def test_diffs_against_head(self, mock_git: MagicMock) -> None:
        mock_git.side_effect = [ok("abc123\n"), ok("crate-a/src/main.rs\0Cargo.lock\0")]

        assert list_changed_files(ROOT) == ["crate-a/src/main.rs", "Cargo.lock"]
        mock_git.assert_called_with("diff", "--name-only", "-z", "HEAD", cwd=ROOT)

    @patch("recent_pkg.changes.git")
    def test_no_changes_is_empty(self, mock_git: MagicMock) -> None:
        mock_git.side_effect = [ok("abc123\n"), ok("")]

        assert list_changed_files(ROOT) == []

    @patch("recent_pkg.changes.git")
    def test_unborn_head_diffs_against_index(self, mock_git: MagicMock) -> None:
        mock_git.side_effect = [failed(returncode=1), ok("a.rs\0")]

        assert list_changed_files(ROOT) == ["a.rs"]
        mock_git.assert_called_with("diff", "--name-only", "-z", cwd=ROOT)

    @patch("recent_pkg.changes.git")
    def test_keeps_unusual_names(self, mock_git: MagicMock) -> None:
        mock_git.side_effect = [ok("abc\n"), ok("dir with space/ünïcode.rs\0")]

        assert list_changed_files(ROOT) == ["dir with space/ünïcode.rs"]

    @patch("recent_pkg.changes.git")
    def test_diff_failure_raises(self, mock_git: MagicMock) -> None:
        mock_git.side_effect = [ok("abc\n"), failed("fatal: bad object")]

        with pytest.raises(GitCommandError, match="bad object"):
            list_changed_files(ROOT)


@requires_git
class TestAgainstRealRepository:
    """End-to-end checks against git repositories in tmp_path."""

    def test_not_a_repository(self, tmp_path: Path) -> None:
        # A dangling .git file stops git from searching parent directories.
        outside = tmp_path / "plain"
        outside.mkdir()
        (outside / ".git").write_text("gitdir: /nonexistent\n")

        with pytest.raises(NotARepositoryError):
            find_repo_root(outside)

    def test_root_from_subdirectory(self, cargo_workspace: Path) -> None:
        assert find_repo_root(cargo_workspace / "crate-a" / "src") == cargo_workspace.resolve()

    def test_lists_sibling_changes_from_root(self, cargo_workspace: Path) -> None:
        write(cargo_workspace / "crate-b" / "src" / "main.rs", "fn main() {}\n")

        assert list_changed_files(cargo_workspace) == ["crate-b/src/main.rs"]

    def test_includes_staged_changes(self, cargo_workspace: Path) -> None:
        write(cargo_workspace / "crate-a" / "src" / "main.rs", "fn main() {}\n")
        git(cargo_workspace, "add", "crate-a/src/main.rs")

        assert list_changed_files(cargo_workspace) == ["crate-a/src/main.rs"]

    def test_empty_after_commit(self, cargo_workspace: Path) -> None:
        write(cargo_workspace / "crate-a" / "src" / "main.rs", "fn main() {}\n")
        commit_all(cargo_workspace)

        assert list_changed_files(cargo_workspace) == []

    def test_repository_without_commits(self, tmp_path: Path) -> None:
        write(tmp_path / "a.rs", "")
        init_repo(tmp_path)

        assert not has_commits(tmp_path)
        assert list_changed_files(tmp_path) == []

    def test_non_utf8_file_name(self, cargo_workspace: Path) -> None:
        if sys.getfilesystemencoding().lower() != "utf-8":
            pytest.skip("file system encoding is not UTF-8")
        name = os.fsdecode(b"caf\xe9.rs")
        try:
            write(cargo_workspace / "crate-b" / "src" / name, "// v1\n")
        except OSError:
            pytest.skip("file system rejects non-UTF-8 names")
        commit_all(cargo_workspace)
        write(cargo_workspace / "crate-b" / "src" / name, "// v2\n")

        changed = list_changed_files(cargo_workspace)

        assert changed == [f"crate-b/src/{name}"]
        assert (cargo_workspace / changed[0]).is_file()
