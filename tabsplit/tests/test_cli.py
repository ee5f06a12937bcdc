"""Tests for the unified tabsplit CLI."""

from __future__ import annotations

from pathlib import Path

import pytest

from tabsplit.cli.main import main
from tabsplit.runtime.receipt_storage import get_receipt_store

RECEIPT_TEXT = "\n".join(
    [
        "Taqueria Sol",
        "2 Tacos 10.00",
        "Horchata 3.00",
        "Subtotal 13.00",
        "Tax 1.30",
        "Total 14.30",
    ]
)


@pytest.fixture
def receipt_file(tmp_path: Path) -> Path:
    path = tmp_path / "receipt.txt"
    path.write_text(RECEIPT_TEXT, encoding="utf-8")
    return path


def _scan(receipt_file: Path) -> str:
    assert main(["scan", str(receipt_file)]) == 0
    receipts = get_receipt_store().list()
    assert len(receipts) == 1
    return receipts[0].id


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "usage: tabsplit" in capsys.readouterr().out


def test_scan_prints_and_saves(receipt_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    receipt_id = _scan(receipt_file)

    out = capsys.readouterr().out
    assert "PARSED RECEIPT" in out
    assert "Merchant: Taqueria Sol" in out
    assert "Tacos x2" in out
    assert f"Saved receipt {receipt_id}" in out
    assert get_receipt_store().get(receipt_id).total is not None


def test_scan_no_save(receipt_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scan", str(receipt_file), "--no-save"]) == 0

    assert "Saved receipt" not in capsys.readouterr().out
    assert get_receipt_store().list() == []


def test_scan_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scan", str(tmp_path / "missing.txt")]) == 1
    assert "Error: Receipt text file not found" in capsys.readouterr().out


def test_scan_with_invalid_rules_file(
    receipt_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    rules = tmp_path / "rules.toml"
    rules.write_text('[totals]\ntip = "tip"\n', encoding="utf-8")

    assert main(["scan", str(receipt_file), "--rules", str(rules)]) == 1
    assert "Error: Invalid parser rules" in capsys.readouterr().out


def test_full_split_flow(receipt_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    receipt_id = _scan(receipt_file)
    prefix = receipt_id[:8]

    assert main(["participants", prefix, "--add", "Ana", "--add", "Ben"]) == 0
    assert "Participants: Ana, Ben" in capsys.readouterr().out

    assert main(["assign", prefix, "1", "Ana"]) == 0
    assert main(["assign", prefix, "2", "ben"]) == 0
    assert main(["assign", prefix, "3", "Ana", "Ben"]) == 0
    assert "Assigned to: Ana, Ben" in capsys.readouterr().out

    assert main(["split", prefix]) == 0
    out = capsys.readouterr().out
    assert "People Totals" in out
    assert "Horchata (split) - $1.50" in out
    assert out.count("$7.15") >= 2
    assert "Unallocated" not in out

    assert main(["split", prefix, "--beancount", "--payer", "Liabilities:Visa"]) == 0
    out = capsys.readouterr().out
    assert "Liabilities:Visa" in out
    assert "Assets:Receivables:Ana" in out
    assert "Assets:Receivables:Ben" in out

    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "Taqueria Sol" in out
    assert "(assigned)" in out


def test_assign_errors(receipt_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    receipt_id = _scan(receipt_file)
    capsys.readouterr()

    assert main(["assign", receipt_id, "9", "Ana"]) == 1
    assert "Item number must be between 1 and 3" in capsys.readouterr().out

    assert main(["assign", receipt_id, "1", "Zed"]) == 1
    assert "No participant named 'Zed'" in capsys.readouterr().out


def test_remove_unknown_participant(receipt_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    receipt_id = _scan(receipt_file)
    capsys.readouterr()

    assert main(["participants", receipt_id, "--remove", "Zed"]) == 1
    assert "Error: No participant named 'Zed'" in capsys.readouterr().out


def test_unknown_receipt_id(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["split", "nope"]) == 1
    assert "Error: Receipt not found: nope" in capsys.readouterr().out


def test_list_empty(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["list"]) == 0
    assert "No receipts stored yet." in capsys.readouterr().out


def test_scan_non_utf8_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "latin1.txt"
    path.write_bytes("Caf\xe9 Luna\nLatte 5.00\n".encode("latin-1"))

    assert main(["scan", str(path)]) == 1
    assert "Error: Receipt text file is not UTF-8 text" in capsys.readouterr().out
    assert get_receipt_store().list() == []


def test_rename_changes_listed_name(receipt_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    receipt_id = _scan(receipt_file)
    capsys.readouterr()

    assert main(["rename", receipt_id[:8], "  Friday tacos "]) == 0
    assert "to Friday tacos" in capsys.readouterr().out
    assert get_receipt_store().get(receipt_id).resolved_name == "Friday tacos"

    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "Friday tacos" in out
    assert "Taqueria Sol" not in out

    assert main(["rename", receipt_id]) == 0
    assert get_receipt_store().get(receipt_id).display_name is None
    assert main(["list"]) == 0
    assert "Taqueria Sol" in capsys.readouterr().out


def test_delete_receipt(receipt_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    receipt_id = _scan(receipt_file)
    capsys.readouterr()

    assert main(["delete", receipt_id[:8]]) == 0
    assert f"Deleted receipt {receipt_id[:8]} (Taqueria Sol)" in capsys.readouterr().out
    assert get_receipt_store().list() == []

    assert main(["delete", receipt_id]) == 1
    assert f"Error: Receipt not found: {receipt_id}" in capsys.readouterr().out
