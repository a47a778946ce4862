"""Manifest reading utilities.

Uses tomlkit to read pyproject.toml and Cargo.toml files. A manifest either
declares a package (``[project]`` / ``[package]``), only declares a workspace
(a virtual workspace root), or neither.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from packaging.requirements import InvalidRequirement, Requirement
from tomlkit.exceptions import TOMLKitError

from .errors import MalformedManifestError
from .models import ManifestKey, ManifestKind

MANIFEST_KINDS: dict[ManifestKey, ManifestKind] = {
    "pyproject": ManifestKind(
        key="pyproject",
        filename="pyproject.toml",
        tool="uv",
        package_table="project",
        workspace_table="tool.uv.workspace",
        strict=False,
    ),
    "cargo": ManifestKind(
        key="cargo",
        filename="Cargo.toml",
        tool="cargo",
        package_table="package",
        workspace_table="workspace",
        strict=True,
    ),
}


def load_manifest(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a manifest file.

    Raises:
        MalformedManifestError: If the file cannot be read or is not TOML.
    """
    try:
        return tomlkit.parse(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, TOMLKitError) as exc:
        raise MalformedManifestError(path, f"cannot parse: {exc}") from exc


def get_table(doc: tomlkit.TOMLDocument, dotted: str) -> dict[str, Any] | None:
    """Return the table at a dotted path like "tool.uv.workspace", or None."""
    node: Any = doc
    for part in dotted.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node if isinstance(node, dict) else None


def declares_package(doc: tomlkit.TOMLDocument, kind: ManifestKind) -> bool:
    """True if the manifest has a package declaration table."""
    return get_table(doc, kind.package_table) is not None


def declares_workspace(doc: tomlkit.TOMLDocument, kind: ManifestKind) -> bool:
    """True if the manifest marks a workspace root."""
    return get_table(doc, kind.workspace_table) is not None


def get_package_name(
    doc: tomlkit.TOMLDocument, kind: ManifestKind, manifest: Path
) -> str:
    """Extract the declared package name.

    There is no fallback to the directory name: the name is what `show`
    prints and what gets passed to ``--package``.

    Args:
        doc: Parsed manifest.
        kind: Manifest format the document was read as.
        manifest: Manifest path, for error messages.

    Raises:
        MalformedManifestError: If the declaration table or the name is
            missing, empty, padded with whitespace, not a string, or (for pyproject.toml) not a
            valid PEP 508 project name.
    """
    table = get_table(doc, kind.package_table)
    if table is None:
        raise MalformedManifestError(manifest, f"no [{kind.package_table}] table")

    name = table.get("name")
    if not isinstance(name, str):
        raise MalformedManifestError(
            manifest, f"[{kind.package_table}].name is missing or not a string"
        )
    name = str(name)
    if not name.strip():
        raise MalformedManifestError(manifest, f"[{kind.package_table}].name is empty")
    if name != name.strip():
        raise MalformedManifestError(
            manifest, f"[{kind.package_table}].name {name!r} has surrounding whitespace"
        )

    if kind.key == "pyproject" and not is_valid_project_name(name):
        raise MalformedManifestError(manifest, f"invalid project name {name!r}")
    return name


def is_valid_project_name(name: str) -> bool:
    """True if ``name`` parses as a bare PEP 508 requirement name."""
    try:
        return Requirement(name).name == name
    except InvalidRequirement:
        return False
