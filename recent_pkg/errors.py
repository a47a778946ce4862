"""Exception hierarchy for recent-pkg.

Library code raises these; the CLI turns them into a message on stderr and a
non-zero exit. An empty change set is never an error and has no exception.
"""

from __future__ import annotations

from pathlib import Path


class RecentError(Exception):
    """Base class for all recent-pkg errors."""


class NotARepositoryError(RecentError):
    """Raised when the start directory is not inside a git working tree."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class GitNotFoundError(RecentError):
    """Raised when the git executable cannot be found on PATH."""

    def __init__(self) -> None:
        super().__init__("git executable not found on PATH")


class GitCommandError(RecentError):
    """Raised when a git query exits non-zero."""

    def __init__(self, args: list[str], returncode: int, stderr: str) -> None:
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"`{' '.join(args)}` failed: {detail}")
        self.command = args
        self.returncode = returncode
        self.stderr = stderr


class MalformedManifestError(RecentError):
    """Raised when a selected package's manifest has no usable name."""

    def __init__(self, manifest: Path, reason: str) -> None:
        super().__init__(f"Malformed manifest {manifest}: {reason}")
        self.manifest = manifest
        self.reason = reason


class ConfigError(RecentError):
    """Raised when [tool.recent-pkg] in the root pyproject.toml is invalid."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid configuration in {path}: {reason}")
        self.path = path
        self.reason = reason
