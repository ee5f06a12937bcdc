"""Split workflow: load a stored receipt and compute per-person totals."""

from __future__ import annotations

from dataclasses import dataclass

from tabsplit.domain.allocation import AllocationResult, compute_allocation
from tabsplit.domain.receipt import Receipt
from tabsplit.runtime.receipt_storage import ReceiptStore


@dataclass(frozen=True)
class ReceiptSplitResult:
    receipt: Receipt
    allocation: AllocationResult


def run_receipt_split(store: ReceiptStore, receipt_id: str) -> ReceiptSplitResult:
    """Recompute the split from the current stored snapshot."""
    receipt = store.get(receipt_id)
    return ReceiptSplitResult(receipt=receipt, allocation=compute_allocation(receipt))
