"""Runtime infrastructure for tabsplit.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Parser keyword table loading via load_parser_rules()

Usage:
    from tabsplit.runtime import get_logger, get_paths

    logger = get_logger(__name__)
    paths = get_paths()
    print(paths.root, paths.receipts_store)
"""

from tabsplit.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from tabsplit.runtime.parser_rules import build_parser_rules, load_parser_rules
from tabsplit.runtime.paths import ProjectPaths, get_paths, reset_paths

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Rules
    "build_parser_rules",
    "load_parser_rules",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
]
