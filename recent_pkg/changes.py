"""Change listing: which files differ from the last commit.

The workspace root is resolved once from the start directory and every diff
query runs there, so paths are always root-relative and changes in sibling
packages stay visible when invoked from inside one package.
"""

from __future__ import annotations

from pathlib import Path

from .errors import GitCommandError, NotARepositoryError
from .shell import debug, git


def find_repo_root(start: Path) -> Path:
    """Return the top-level directory of the git work tree containing ``start``.

    Raises:
        NotARepositoryError: If ``start`` is not inside a git work tree.
    """
    result = git("rev-parse", "--show-toplevel", cwd=start)
    root = result.stdout.strip()
    if not result.ok or not root:
        debug(f"rev-parse failed: {result.stderr.strip()}")
        raise NotARepositoryError(start)
    return Path(root).resolve()


def has_commits(root: Path) -> bool:
    """True if HEAD resolves to a commit."""
    return git("rev-parse", "--verify", "-q", "HEAD", cwd=root).ok


def list_changed_files(root: Path) -> list[str]:
    """List files that differ between the working tree and the last commit.

    Covers staged and unstaged edits to tracked files. In a repository with
    no commits yet the index is the baseline instead. Untracked files are
    not reported.

    Args:
        root: Workspace root as returned by find_repo_root().

    Returns:
        Root-relative POSIX paths in git's order; empty when nothing changed.
        Names that are not valid UTF-8 come back in os.fsdecode() form, so
        ``root / path`` still names the file on disk.

    Raises:
        GitCommandError: If the diff query fails.
    """
    args = ["diff", "--name-only", "-z"]
    if has_commits(root):
        args.append("HEAD")

    result = git(*args, cwd=root)
    if not result.ok:
        raise GitCommandError(["git", *args], result.returncode, result.stderr)

    paths = [p for p in result.stdout.split("\0") if p]
    debug(f"{len(paths)} changed file(s): {paths}")
    return paths
