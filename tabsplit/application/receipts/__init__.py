"""Receipt workflows."""

from tabsplit.application.receipts.assign import (
    ItemAssignRequest,
    ParticipantsEditRequest,
    run_assign_item,
    run_edit_participants,
)
from tabsplit.application.receipts.listing import ReceiptSummary, run_list_receipts
from tabsplit.application.receipts.manage import ReceiptRenameRequest, run_delete_receipt, run_rename_receipt
from tabsplit.application.receipts.scan import ReceiptScanRequest, ReceiptScanResult, run_receipt_scan
from tabsplit.application.receipts.split import ReceiptSplitResult, run_receipt_split

__all__ = [
    "ReceiptScanRequest",
    "ReceiptScanResult",
    "run_receipt_scan",
    "ReceiptSummary",
    "run_list_receipts",
    "ParticipantsEditRequest",
    "run_edit_participants",
    "ItemAssignRequest",
    "run_assign_item",
    "ReceiptSplitResult",
    "run_receipt_split",
    "ReceiptRenameRequest",
    "run_rename_receipt",
    "run_delete_receipt",
]
