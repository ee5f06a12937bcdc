"""Receipt listing workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from tabsplit.domain.money import Money
from tabsplit.runtime.receipt_storage import ReceiptStore


@dataclass(frozen=True)
class ReceiptSummary:
    """One stored receipt, summarized for CLI display."""

    id: str
    name: str
    created_at: datetime
    total: Money | None
    item_count: int
    fully_assigned: bool


def run_list_receipts(store: ReceiptStore) -> list[ReceiptSummary]:
    """Load stored receipt summaries, newest first."""
    return [
        ReceiptSummary(
            id=receipt.id,
            name=receipt.resolved_name,
            created_at=receipt.created_at,
            total=receipt.total,
            item_count=len(receipt.items),
            fully_assigned=receipt.is_fully_assigned,
        )
        for receipt in store.list()
    ]
