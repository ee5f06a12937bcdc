"""Rename and delete workflows for stored receipts."""

from __future__ import annotations

from dataclasses import dataclass

from tabsplit.domain.editing import rename_receipt
from tabsplit.domain.receipt import Receipt
from tabsplit.runtime.receipt_storage import ReceiptStore


@dataclass(frozen=True)
class ReceiptRenameRequest:
    """A blank ``name`` clears the display name."""

    receipt_id: str
    name: str | None


def run_rename_receipt(store: ReceiptStore, request: ReceiptRenameRequest) -> Receipt:
    receipt = store.get(request.receipt_id)
    rename_receipt(receipt, request.name)
    return store.update(receipt)


def run_delete_receipt(store: ReceiptStore, receipt_id: str) -> Receipt:
    """Remove a stored receipt and return what was deleted.

    Raises ReceiptNotFoundError for an unknown id.
    """
    receipt = store.get(receipt_id)
    store.delete(receipt_id)
    return receipt
