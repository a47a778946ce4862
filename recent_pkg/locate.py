"""Package location: map a changed file to the package that owns it.

A file belongs to the nearest ancestor directory holding a manifest that
declares a package. Virtual workspace manifests (workspace table, no package
table) are stepped over. The walk never leaves the workspace root.
"""

from __future__ import annotations

from pathlib import Path

import tomlkit

from .errors import MalformedManifestError
from .manifest import (
    MANIFEST_KINDS,
    declares_package,
    declares_workspace,
    get_package_name,
    load_manifest,
)
from .models import ManifestKey, ManifestKind, Package
from .shell import debug


class PackageLocator:
    """Resolves owning manifests for files under one workspace root.

    Parsed manifests are memoized for the lifetime of the locator, so a
    batch of changed files in the same package parses its manifest once.
    """

    def __init__(self, root: Path, kinds: list[ManifestKey] | None = None) -> None:
        self.root = root.resolve()
        self.kinds: list[ManifestKind] = [
            MANIFEST_KINDS[k] for k in (kinds or list(MANIFEST_KINDS))
        ]
        self._docs: dict[Path, tomlkit.TOMLDocument | None] = {}

    def _load(self, manifest: Path) -> tomlkit.TOMLDocument | None:
        """Parse a manifest, returning None when it is unparsable."""
        if manifest not in self._docs:
            try:
                self._docs[manifest] = load_manifest(manifest)
            except MalformedManifestError as exc:
                debug(str(exc))
                self._docs[manifest] = None
        return self._docs[manifest]

    def _owns(self, manifest: Path, kind: ManifestKind) -> bool:
        doc = self._load(manifest)
        if doc is None:
            # Can't tell whether it's a virtual workspace; treat it as the
            # owner so the failure surfaces if this package gets selected.
            return True
        if declares_package(doc, kind):
            return True
        if declares_workspace(doc, kind):
            debug(f"skipping virtual workspace manifest {manifest}")
            return False
        # Neither table: a nameless package for Cargo.toml, tool settings
        # for pyproject.toml.
        return kind.strict

    def find_manifest(self, file: Path) -> tuple[Path, ManifestKind] | None:
        """Find the manifest of the package owning ``file``.

        Args:
            file: Absolute path, or path relative to the workspace root.

        Returns:
            (manifest path, kind) for the nearest owning manifest, or None
            when no ancestor up to the workspace root declares a package.
        """
        path = file if file.is_absolute() else self.root / file
        current = path.parent

        while True:
            for kind in self.kinds:
                manifest = current / kind.filename
                if manifest.is_file() and self._owns(manifest, kind):
                    return manifest, kind
            if current == self.root or current.parent == current:
                break
            current = current.parent

        debug(f"no package manifest above {file}")
        return None


def read_package(manifest: Path, kind: ManifestKind) -> Package:
    """Build a Package from its manifest.

    Raises:
        MalformedManifestError: If the manifest is unparsable or has no
            usable name.
    """
    doc = load_manifest(manifest)
    name = get_package_name(doc, kind, manifest)
    return Package(path=manifest.parent, name=name, manifest=manifest, kind=kind.key)
