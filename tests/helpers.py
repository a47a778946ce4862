"""Helpers for building git workspaces in tests."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

import pytest

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")

# Base timestamp for forced mtimes: 2024-01-01T00:00:00Z.
T0 = 1_704_067_200 * 1_000_000_000


def git(repo: Path, *args: str) -> str:
    """Run git in ``repo`` with a throwaway identity."""
    result = subprocess.run(
        [
            "git",
            "-c",
            "user.name=Test User",
            "-c",
            "user.email=test@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def init_repo(repo: Path) -> None:
    git(repo, "init", "-q")


def commit_all(repo: Path, message: str = "commit") -> None:
    git(repo, "add", "-A")
    git(repo, "commit", "-q", "-m", message)


def write(path: Path, content: str, mtime_ns: int | None = None) -> Path:
    """Write a file, creating parents, optionally forcing its mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    if mtime_ns is not None:
        os.utime(path, ns=(mtime_ns, mtime_ns))
    return path


def cargo_manifest(name: str) -> str:
    return f'[package]\nname = "{name}"\nversion = "0.1.0"\nedition = "2021"\n'


def pyproject_manifest(name: str) -> str:
    return f'[project]\nname = "{name}"\nversion = "0.1.0"\n'
