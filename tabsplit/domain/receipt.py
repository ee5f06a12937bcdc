"""Data models for scanned and finalized receipts."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from .money import Money, sum_money


def new_id() -> str:
    """Opaque unique identifier for items, participants and receipts."""
    return uuid.uuid4().hex


@dataclass
class ReceiptItem:
    """A single line item on a receipt."""

    name: str
    amount: Money
    original_line: str | None = None  # Source text the item was parsed from
    id: str = field(default_factory=new_id)


@dataclass
class ParsedReceipt:
    """Best-effort parser output. Every money field may be independently absent."""

    merchant_name: str | None = None
    items: list[ReceiptItem] = field(default_factory=list)
    subtotal: Money | None = None
    tax: Money | None = None  # Tax and fees combined
    tip: Money | None = None
    total: Money | None = None
    raw_text: str = ""
    warnings: list[str] = field(default_factory=list)


@dataclass
class Participant:
    """A person the receipt is split between."""

    name: str
    id: str = field(default_factory=new_id)


@dataclass
class Receipt:
    """Finalized receipt: confirmed items and totals plus who had what."""

    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=datetime.now)
    merchant_name: str | None = None
    display_name: str | None = None
    raw_text: str = ""
    items: list[ReceiptItem] = field(default_factory=list)
    subtotal: Money | None = None
    tax: Money | None = None
    tip: Money | None = None
    total: Money | None = None
    participants: list[Participant] = field(default_factory=list)
    # item id -> participant ids; order is irrelevant, ids are unique per item
    assignments: dict[str, list[str]] = field(default_factory=dict)

    @property
    def computed_items_sum(self) -> Money:
        return sum_money(item.amount for item in self.items)

    @property
    def is_fully_assigned(self) -> bool:
        """True when every item has at least one assignee."""
        return all(self.assignees_for(item.id) for item in self.items)

    @property
    def resolved_name(self) -> str:
        """Display name if set, else merchant name, else "Receipt"."""
        display = (self.display_name or "").strip()
        if display:
            return display
        merchant = (self.merchant_name or "").strip()
        if merchant:
            return merchant
        return "Receipt"

    def assignees_for(self, item_id: str) -> list[str]:
        return self.assignments.get(item_id) or []

    def unassigned_items(self) -> list[ReceiptItem]:
        return [item for item in self.items if not self.assignees_for(item.id)]

    def participant_by_id(self, participant_id: str) -> Participant | None:
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        return None

    def item_by_id(self, item_id: str) -> ReceiptItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None
