"""Configuration loading.

Settings live in an optional ``[tool.recent-pkg]`` table of the workspace
root pyproject.toml:

    [tool.recent-pkg]
    include = ["*.py", "*/pyproject.toml"]
    exclude = ["docs/*"]
    manifests = ["pyproject"]
    tool = "uv"
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from .errors import ConfigError, MalformedManifestError
from .manifest import get_table, load_manifest
from .models import RecentConfig
from .shell import debug

CONFIG_TABLE = "tool.recent-pkg"


def load_config(root: Path) -> RecentConfig:
    """Read ``[tool.recent-pkg]`` from ``root/pyproject.toml``.

    A missing or unreadable root pyproject.toml, or one without the table,
    yields the defaults.

    Raises:
        ConfigError: If the table exists but does not validate.
    """
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        return RecentConfig()

    try:
        doc = load_manifest(pyproject)
    except MalformedManifestError as exc:
        debug(f"ignoring configuration: {exc}")
        return RecentConfig()

    table = get_table(doc, CONFIG_TABLE)
    if table is None:
        return RecentConfig()

    try:
        config = RecentConfig.model_validate(table.unwrap())
    except ValidationError as exc:
        raise ConfigError(pyproject, str(exc)) from exc
    debug(f"loaded configuration from {pyproject}: {config.model_dump()}")
    return config
