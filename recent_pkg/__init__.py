"""recent-pkg - find the workspace package you touched last."""

__version__ = "0.1.0"
