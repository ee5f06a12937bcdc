"""Core domain models for tabsplit.

This module provides the core data models used throughout the project:
- Money: integer-cents amounts
- ParsedReceipt, Receipt, ReceiptItem, Participant: receipt models
- compute_allocation, AllocationResult, PersonRow: per-person split

Usage:
    from tabsplit.domain import Money, Receipt, compute_allocation
"""

from tabsplit.domain.allocation import AllocationResult, PersonRow, compute_allocation
from tabsplit.domain.money import Money
from tabsplit.domain.receipt import ParsedReceipt, Participant, Receipt, ReceiptItem

__all__ = [
    "Money",
    "ParsedReceipt",
    "Participant",
    "Receipt",
    "ReceiptItem",
    "AllocationResult",
    "PersonRow",
    "compute_allocation",
]
