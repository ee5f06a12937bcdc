"""Shared pytest fixtures for tabsplit tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from tabsplit.runtime.parser_rules import load_parser_rules
from tabsplit.runtime.paths import reset_paths
from tabsplit.runtime.receipt_storage import ReceiptStore


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the data directory at a temp dir so tests never touch ~/.tabsplit."""
    home = tmp_path / "tabsplit_home"
    monkeypatch.setenv("TABSPLIT_HOME", str(home))
    reset_paths()
    load_parser_rules.cache_clear()
    yield home
    reset_paths()
    load_parser_rules.cache_clear()


@pytest.fixture
def store(isolated_home: Path) -> ReceiptStore:
    return ReceiptStore(isolated_home / "receipts.json")
