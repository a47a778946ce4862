"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers import cargo_manifest, commit_all, init_repo, pyproject_manifest, write


@pytest.fixture
def cargo_workspace(tmp_path: Path) -> Path:
    """Committed cargo workspace with crate-a and crate-b."""
    root = tmp_path / "ws"
    write(root / "Cargo.toml", '[workspace]\nmembers = ["crate-a", "crate-b"]\n')
    for name in ("crate-a", "crate-b"):
        write(root / name / "Cargo.toml", cargo_manifest(name))
        write(
            root / name / "src" / "main.rs",
            f'fn main() {{\n    println!("Hello from {name}!");\n}}\n',
        )
    init_repo(root)
    commit_all(root, "Initial commit")
    return root


@pytest.fixture
def uv_workspace(tmp_path: Path) -> Path:
    """Committed uv workspace with pkg-alpha and pkg-beta under packages/."""
    root = tmp_path / "ws"
    write(root / "pyproject.toml", '[tool.uv.workspace]\nmembers = ["packages/*"]\n')
    for name in ("pkg-alpha", "pkg-beta"):
        module = name.replace("-", "_")
        write(root / "packages" / name / "pyproject.toml", pyproject_manifest(name))
        write(
            root / "packages" / name / module / "__init__.py",
            f'"""Package {name}."""\n',
        )
    write(root / "README.md", "# workspace\n")
    init_repo(root)
    commit_all(root, "Initial commit")
    return root
