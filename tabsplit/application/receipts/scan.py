"""Receipt scan workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from tabsplit.domain.editing import draft_receipt_from_parsed
from tabsplit.domain.receipt import ParsedReceipt, Receipt
from tabsplit.receipt.text_parser.common import ParserRules
from tabsplit.receipt.text_result_parser import parse_receipt
from tabsplit.runtime.receipt_storage import ReceiptStore

ScanStatus = Literal[
    "file_not_found",
    "unreadable",
    "parsed",
    "saved",
]


@dataclass(frozen=True)
class ReceiptScanRequest:
    """Inputs for running the receipt scan workflow.

    ``text_path`` holds recognized text, one line per recognized line, in
    reading order.
    """

    text_path: Path
    rules: ParserRules
    store: ReceiptStore | None = None


@dataclass(frozen=True)
class ReceiptScanResult:
    """Outcome from receipt scan workflow."""

    status: ScanStatus
    parsed: ParsedReceipt | None = None
    receipt: Receipt | None = None
    error: str | None = None


def run_receipt_scan(request: ReceiptScanRequest) -> ReceiptScanResult:
    """Run scan flow: read text -> parse -> draft receipt -> optional save."""
    if not request.text_path.exists():
        return ReceiptScanResult(
            status="file_not_found",
            error=f"Receipt text file not found: {request.text_path}",
        )

    try:
        full_text = request.text_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        return ReceiptScanResult(
            status="unreadable",
            error=f"Receipt text file is not UTF-8 text: {request.text_path} ({exc.reason})",
        )

    parsed = parse_receipt(full_text.splitlines(), full_text, rules=request.rules)
    receipt = draft_receipt_from_parsed(parsed)

    if request.store is None:
        return ReceiptScanResult(status="parsed", parsed=parsed, receipt=receipt)

    request.store.add(receipt)
    return ReceiptScanResult(status="saved", parsed=parsed, receipt=receipt)
