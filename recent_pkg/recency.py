"""Recency selection: collapse many changed files into one package.

Only the single newest file matters. Ties on modification time (coarse
filesystem clocks, files written in one batch) go to the lexicographically
smallest path, so repeated runs on the same filesystem state agree.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable
from pathlib import Path
from typing import TypeVar

from .models import ChangedFile
from .shell import debug

T = TypeVar("T")


def _matches(path: str, patterns: list[str]) -> bool:
    return any(fnmatch.fnmatchcase(path, pattern) for pattern in patterns)


def stat_changed_files(
    root: Path,
    paths: Iterable[str],
    include: list[str] | None = None,
    exclude: list[str] | None = None,
) -> list[ChangedFile]:
    """Read modification times for changed paths that still exist.

    Args:
        root: Workspace root the paths are relative to.
        paths: Root-relative changed paths.
        include: If non-empty, keep only paths matching one of these globs.
        exclude: Drop paths matching any of these globs.

    Returns:
        One ChangedFile per existing, non-filtered regular file. Deleted
        files are skipped.
    """
    files: list[ChangedFile] = []
    for rel in paths:
        if include and not _matches(rel, include):
            debug(f"not included: {rel}")
            continue
        if exclude and _matches(rel, exclude):
            debug(f"excluded: {rel}")
            continue
        full = root / rel
        if not full.is_file():
            debug(f"skipping missing file: {rel}")
            continue
        files.append(ChangedFile(path=rel, mtime_ns=full.stat().st_mtime_ns))
    return files


def select_recent(pairs: Iterable[tuple[ChangedFile, T]]) -> T | None:
    """Return the owner paired with the most recently modified file.

    Args:
        pairs: (ChangedFile, owner) pairs; files without an owner must
               already be dropped.

    Returns:
        The owner of the newest file, or None if ``pairs`` is empty.
    """
    best: tuple[ChangedFile, T] | None = None
    for changed, owner in pairs:
        if best is None or _newer(changed, best[0]):
            best = (changed, owner)

    if best is None:
        return None
    debug(f"most recent change: {best[0].path} ({best[0].mtime_ns})")
    return best[1]


def _newer(a: ChangedFile, b: ChangedFile) -> bool:
    """True if ``a`` ranks above ``b``: later mtime, then smaller path."""
    if a.mtime_ns != b.mtime_ns:
        return a.mtime_ns > b.mtime_ns
    return a.path < b.path
