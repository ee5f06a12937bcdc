"""Centralized logging configuration for tabsplit.

Usage:
    from tabsplit.runtime import get_logger
    logger = get_logger(__name__)

    logger.debug("Skipped line")
    logger.info("Saved receipt")

Environment variables:
    TABSPLIT_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR. Default: INFO

Everything logs under the ``tabsplit`` logger, which writes to stderr and
does not propagate, so command output on stdout stays clean.
"""

import logging
import os
import sys

DEFAULT_LOG_LEVEL = logging.INFO

LOG_NAMESPACE = "tabsplit"

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

_LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

_logging_configured = False


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = os.environ.get("TABSPLIT_LOG_LEVEL", "")
    if isinstance(level, str):
        return _LEVEL_NAMES.get(level.strip().upper(), DEFAULT_LOG_LEVEL)
    return level


def _formatter_for(level: int) -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT_DEBUG if level <= logging.DEBUG else LOG_FORMAT)


def configure_logging(level: int | str | None = None) -> None:
    """Attach the stderr handler to the ``tabsplit`` logger once per process.

    ``level`` may be a logging constant or a level name; None reads
    TABSPLIT_LOG_LEVEL. Unknown names fall back to INFO.
    """
    global _logging_configured

    if _logging_configured:
        return

    resolved = _resolve_level(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter_for(resolved))

    package_logger = logging.getLogger(LOG_NAMESPACE)
    package_logger.setLevel(resolved)
    package_logger.addHandler(handler)
    package_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name.

    Module names already inside the package (``tabsplit.receipt...``) are used
    as-is; anything else is nested under the ``tabsplit`` namespace.
    """
    configure_logging()

    if name == LOG_NAMESPACE or name.startswith(f"{LOG_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOG_NAMESPACE}.{name}")


def set_log_level(level: int | str) -> None:
    """Change the level (and matching format) of the package logger at runtime."""
    configure_logging()
    resolved = _resolve_level(level)

    package_logger = logging.getLogger(LOG_NAMESPACE)
    package_logger.setLevel(resolved)
    for handler in package_logger.handlers:
        handler.setFormatter(_formatter_for(resolved))
