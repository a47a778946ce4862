"""Resolution pipeline: root → diff → locate → select → read.

This module ties the stages together:
1. Resolve the git work tree root once from the start directory
2. Load [tool.recent-pkg] settings from the root pyproject.toml
3. List files changed since the last commit
4. Stat them and find each one's owning package manifest
5. Pick the package owning the most recently modified file
6. Read that package's declared name

Only the selected manifest's name is validated, so a broken manifest in a
package that wasn't touched last does not get in the way.
"""

from __future__ import annotations

from pathlib import Path

from .changes import find_repo_root, list_changed_files
from .config import load_config
from .locate import PackageLocator, read_package
from .manifest import MANIFEST_KINDS
from .models import ChangedFile, ManifestKind, Package, RecentConfig
from .recency import select_recent, stat_changed_files
from .shell import debug


def resolve_workspace(start: Path | None = None) -> tuple[Path, RecentConfig]:
    """Resolve the workspace root and its configuration.

    Raises:
        NotARepositoryError: If ``start`` is not inside a git work tree.
        ConfigError: If the root configuration is invalid.
    """
    root = find_repo_root((start or Path.cwd()).resolve())
    debug(f"workspace root: {root}")
    return root, load_config(root)


def find_recent_package(root: Path, config: RecentConfig) -> Package | None:
    """Find the package most recently touched by uncommitted edits.

    Args:
        root: Workspace root from resolve_workspace().
        config: Settings from resolve_workspace().

    Returns:
        The selected Package, or None when nothing relevant changed.

    Raises:
        GitCommandError: If the diff query fails.
        MalformedManifestError: If the selected package's manifest has no
            usable name.
    """
    changed = stat_changed_files(
        root, list_changed_files(root), config.include, config.exclude
    )
    if not changed:
        debug("no changes detected")
        return None

    locator = PackageLocator(root, config.manifests)
    pairs: list[tuple[ChangedFile, tuple[Path, ManifestKind]]] = []
    for f in changed:
        found = locator.find_manifest(Path(f.path))
        if found is not None:
            pairs.append((f, found))

    selected = select_recent(pairs)
    if selected is None:
        debug("no changed file belongs to a package")
        return None

    manifest, kind = selected
    package = read_package(manifest, kind)
    debug(f"selected {package.name} at {package.path}")
    return package


def build_command(
    package: Package, tool_args: list[str], tool: str | None = None
) -> list[str]:
    """Scope a build tool invocation to ``package``.

    ``--package <name>`` goes right after the tool's subcommand so that
    trailing arguments (including anything after ``--``) stay in place.

    Examples:
        cargo, ["test", "--", "--nocapture"] →
            cargo test --package foo -- --nocapture
        uv, ["run", "pytest"] → uv run --package foo pytest
    """
    program = tool or MANIFEST_KINDS[package.kind].tool
    subcommand, *rest = tool_args
    return [program, subcommand, "--package", package.canonical_name, *rest]
