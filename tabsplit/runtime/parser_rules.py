"""Runtime loader for receipt text parser keyword tables.

Example ``parser_rules.toml``::

    [totals]
    tax = ["tax", "sales tax", "hst"]
    tip = ["tip", "propina"]

    [metadata]
    keywords = ["server", "table", "cashier"]

Tables missing from the file keep their built-in defaults.
"""

from __future__ import annotations

import dataclasses
from functools import lru_cache
from pathlib import Path
from typing import Any

from tabsplit.receipt.text_parser.common import DEFAULT_PARSER_RULES, ParserRules
from tabsplit.runtime.logging import get_logger
from tabsplit.runtime.paths import get_paths

logger = get_logger(__name__)

# [totals] keys -> ParserRules fields
_TOTALS_TABLES = ("subtotal", "fee", "tax", "tip", "total", "totals_line")


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


def _keyword_table(value: Any, name: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(k, str) and k.strip() for k in value):
        raise ValueError(f"Parser rule table '{name}' must be a list of non-empty strings")
    return tuple(k.strip().lower() for k in value)


def build_parser_rules(config: dict[str, Any]) -> ParserRules:
    """Overlay tables from a parsed TOML document onto the defaults."""
    overrides: dict[str, tuple[str, ...]] = {}

    totals = config.get("totals", {})
    if not isinstance(totals, dict):
        raise ValueError("[totals] must be a table")
    for key in _TOTALS_TABLES:
        if key in totals:
            overrides[key] = _keyword_table(totals[key], f"totals.{key}")

    metadata = config.get("metadata", {})
    if not isinstance(metadata, dict):
        raise ValueError("[metadata] must be a table")
    if "keywords" in metadata:
        overrides["metadata"] = _keyword_table(metadata["keywords"], "metadata.keywords")

    if not overrides:
        return DEFAULT_PARSER_RULES
    return dataclasses.replace(DEFAULT_PARSER_RULES, **overrides)


@lru_cache(maxsize=4)
def load_parser_rules(config_path: str | None = None) -> ParserRules:
    """
    Load parser keyword tables.

    Args:
        config_path: Optional TOML path override. If None, uses the data directory's
            config/parser_rules.toml.

    Returns:
        ParserRules; the built-in defaults when the file does not exist.
    """
    path = Path(config_path) if config_path is not None else get_paths().parser_rules
    config = _load_toml(path)
    if not config:
        return DEFAULT_PARSER_RULES
    logger.debug("Loaded parser rule overrides from %s", path)
    return build_parser_rules(config)
