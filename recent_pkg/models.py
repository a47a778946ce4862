"""Data models for recent-pkg.

These Pydantic models represent the values passed between the change
lister, the package locator, the recency selector and the CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from packaging.utils import canonicalize_name
from pydantic import BaseModel, ConfigDict, Field

ManifestKey = Literal["pyproject", "cargo"]


class ManifestKind(BaseModel):
    """Describes one manifest format that can declare a package.

    Attributes:
        key: Short identifier used in configuration.
        filename: Manifest filename looked up in each directory.
        tool: Build tool that understands ``--package <name>``.
        package_table: Dotted path of the table holding ``name``.
        workspace_table: Dotted path of the table marking a workspace root.
        strict: Whether a manifest with neither table still declares a
                (nameless) package. pyproject.toml files often hold only
                tool settings, so they are not strict.
    """

    model_config = ConfigDict(frozen=True)

    key: ManifestKey
    filename: str
    tool: str
    package_table: str
    workspace_table: str
    strict: bool


class ChangedFile(BaseModel):
    """A file reported as changed, with its modification time.

    Attributes:
        path: Path relative to the workspace root, POSIX separators.
        mtime_ns: Filesystem modification time in nanoseconds, read at
                  selection time rather than taken from git.
    """

    path: str
    mtime_ns: int


class Package(BaseModel):
    """A directory whose manifest declares a package name."""

    path: Path
    name: str
    manifest: Path
    kind: ManifestKey

    @property
    def canonical_name(self) -> str:
        """Name as the build tool expects it.

        Python project names are normalized per PEP 503; cargo names are
        used verbatim.
        """
        if self.kind == "pyproject":
            return canonicalize_name(self.name)
        return self.name


class CommandResult(BaseModel):
    """Outcome of an external process.

    ``stdout`` and ``stderr`` are empty when the child inherited the
    terminal instead of being captured.
    """

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class RecentConfig(BaseModel):
    """Settings from ``[tool.recent-pkg]`` in the root pyproject.toml.

    Attributes:
        include: Globs a changed path must match to count. Empty means all.
        exclude: Globs of changed paths to ignore.
        manifests: Manifest kinds to recognise, in per-directory precedence.
        tool: Build tool override for forwarded commands.
    """

    model_config = ConfigDict(extra="forbid")

    include: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    manifests: list[ManifestKey] = Field(
        default_factory=lambda: ["pyproject", "cargo"], min_length=1
    )
    tool: str | None = None
