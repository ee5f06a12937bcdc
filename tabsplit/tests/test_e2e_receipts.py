"""End-to-end tests for receipt text parsing.

Each test case consists of files in tests/receipts_e2e/:
  - Required recognized text: <name>.txt (one line per recognized line)
  - Required expected results: <name>.expected.json
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest

from tabsplit.domain.money import Money
from tabsplit.domain.receipt import ParsedReceipt
from tabsplit.receipt.formatter import format_parsed_receipt
from tabsplit.receipt.text_result_parser import parse_receipt

RECEIPTS_DIR = Path(__file__).parent / "receipts_e2e"


@dataclass(frozen=True)
class E2ECase:
    name: str
    text_path: Path
    expected_path: Path


def find_e2e_test_cases() -> list[E2ECase]:
    """Find test cases by <name>.expected.json with a matching <name>.txt."""
    test_cases: list[E2ECase] = []
    for expected_path in RECEIPTS_DIR.glob("*.expected.json"):
        name = expected_path.name.removesuffix(".expected.json")
        text_path = RECEIPTS_DIR / f"{name}.txt"
        if text_path.exists():
            test_cases.append(E2ECase(name=name, text_path=text_path, expected_path=expected_path))
    return sorted(test_cases, key=lambda c: c.name)


def load_expected(expected_path: Path) -> dict[str, Any]:
    with open(expected_path, encoding="utf-8") as f:
        return json.load(f)


def _dollars(value: Money | None) -> Decimal | None:
    return value.to_decimal() if value is not None else None


def _expected_dollars(value: str | None) -> Decimal | None:
    return Decimal(value) if value is not None else None


def _run_case(case: E2ECase) -> ParsedReceipt:
    text = case.text_path.read_text(encoding="utf-8")
    return parse_receipt(text.splitlines(), text)


@pytest.mark.parametrize("case", find_e2e_test_cases(), ids=lambda c: c.name)
def test_receipt_e2e(case: E2ECase) -> None:
    expected = load_expected(case.expected_path)
    parsed = _run_case(case)

    assert parsed.merchant_name == expected["merchant"]
    assert [(item.name, item.amount.to_decimal()) for item in parsed.items] == [
        (name, Decimal(amount)) for name, amount in expected["items"]
    ]
    assert _dollars(parsed.subtotal) == _expected_dollars(expected["subtotal"])
    assert _dollars(parsed.tax) == _expected_dollars(expected["tax"])
    assert _dollars(parsed.tip) == _expected_dollars(expected["tip"])
    assert _dollars(parsed.total) == _expected_dollars(expected["total"])
    assert len(parsed.warnings) == expected["warnings"]


def test_e2e_cases_are_present() -> None:
    assert find_e2e_test_cases(), f"no cases in {RECEIPTS_DIR}"


@pytest.mark.parametrize("case", find_e2e_test_cases(), ids=lambda c: c.name)
def test_receipt_e2e_formats_for_review(case: E2ECase) -> None:
    expected = load_expected(case.expected_path)
    output = format_parsed_receipt(_run_case(case))

    assert f"Merchant: {expected['merchant']}" in output
    assert ("Warnings:" in output) == bool(expected["warnings"])
