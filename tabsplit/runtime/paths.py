"""Centralized path management for tabsplit.

This module provides a single source of truth for the user data directory
(rule overrides and the receipt store), independent of the current working
directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_data_root() -> Path:
    """Determine the data root: $TABSPLIT_HOME, else ~/.tabsplit."""
    env_root = os.environ.get("TABSPLIT_HOME", "").strip()
    if env_root:
        return Path(env_root).expanduser()
    return Path("~/.tabsplit").expanduser()


@dataclass
class ProjectPaths:
    """Container for all tabsplit data paths."""

    root: Path = field(default_factory=_get_data_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def parser_rules(self) -> Path:
        """Keyword table overrides for the receipt text parser."""
        return self.config / "parser_rules.toml"

    # --- Receipt paths ---
    @property
    def receipts_store(self) -> Path:
        """JSON file holding finalized receipts, newest first."""
        return self.root / "receipts.json"

    def ensure_directories(self) -> None:
        """Create the data and config directories if they don't exist."""
        self.root.mkdir(parents=True, exist_ok=True)
        self.config.mkdir(parents=True, exist_ok=True)


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached ProjectPaths so the environment is read again."""
    global _paths
    _paths = None
