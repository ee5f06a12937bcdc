"""Pure edits applied to a receipt between parsing and splitting."""

from __future__ import annotations

from dataclasses import dataclass

from .money import Money, sum_money
from .receipt import ParsedReceipt, Participant, Receipt, ReceiptItem

MAX_PARTICIPANTS = 10


@dataclass(frozen=True)
class GroupedItem:
    """Consecutive identical items shown as one row with a quantity."""

    name: str
    unit_amount: Money
    quantity: int

    @property
    def line_total(self) -> Money:
        return self.unit_amount * self.quantity


def grouped_items(items: list[ReceiptItem]) -> list[GroupedItem]:
    """Collapse runs of items with the same name and amount."""
    groups: list[GroupedItem] = []
    for item in items:
        if groups and groups[-1].name == item.name and groups[-1].unit_amount == item.amount:
            last = groups[-1]
            groups[-1] = GroupedItem(last.name, last.unit_amount, last.quantity + 1)
        else:
            groups.append(GroupedItem(item.name, item.amount, 1))
    return groups


def draft_receipt_from_parsed(parsed: ParsedReceipt) -> Receipt:
    """Start a finalized receipt from parser output.

    The total is recomputed as items sum + tax + tip, as the confirmation
    step does; the parsed total is only used for the parser's own warnings.
    """
    items = [
        ReceiptItem(name=item.name, amount=item.amount, original_line=item.original_line)
        for item in parsed.items
    ]
    items_sum = sum_money(item.amount for item in items)
    total = items_sum + (parsed.tax or Money.zero()) + (parsed.tip or Money.zero())
    return Receipt(
        merchant_name=parsed.merchant_name,
        raw_text=parsed.raw_text,
        items=items,
        subtotal=parsed.subtotal,
        tax=parsed.tax,
        tip=parsed.tip,
        total=total,
    )


def rename_receipt(receipt: Receipt, name: str | None) -> None:
    """Set the display name; a blank name clears it so the merchant name shows again."""
    cleaned = (name or "").strip()
    receipt.display_name = cleaned or None


def add_participant(receipt: Receipt, name: str) -> Participant:
    """Add a participant, or return the existing one with the same name.

    Names are compared case-insensitively after trimming.
    """
    cleaned = name.strip()
    if not cleaned:
        raise ValueError("Participant name must not be empty")

    for existing in receipt.participants:
        if existing.name.lower() == cleaned.lower():
            return existing

    if len(receipt.participants) >= MAX_PARTICIPANTS:
        raise ValueError(f"A receipt can have at most {MAX_PARTICIPANTS} participants")

    participant = Participant(name=cleaned)
    receipt.participants.append(participant)
    return participant


def find_participant(receipt: Receipt, name: str) -> Participant | None:
    wanted = name.strip().lower()
    for participant in receipt.participants:
        if participant.name.lower() == wanted:
            return participant
    return None


def remove_participant(receipt: Receipt, participant_id: str) -> None:
    """Drop a participant and every assignment that references it."""
    receipt.participants = [p for p in receipt.participants if p.id != participant_id]
    for item_id, assignees in receipt.assignments.items():
        receipt.assignments[item_id] = [pid for pid in assignees if pid != participant_id]


def toggle_assignee(receipt: Receipt, item_id: str, participant_id: str) -> None:
    assignees = list(receipt.assignees_for(item_id))
    if participant_id in assignees:
        assignees.remove(participant_id)
    else:
        assignees.append(participant_id)
    receipt.assignments[item_id] = assignees


def assign_item(receipt: Receipt, item_id: str, participant_ids: list[str]) -> None:
    """Replace the assignees of one item. Duplicate ids are collapsed."""
    if receipt.item_by_id(item_id) is None:
        raise ValueError(f"Unknown item id: {item_id}")
    for participant_id in participant_ids:
        if receipt.participant_by_id(participant_id) is None:
            raise ValueError(f"Unknown participant id: {participant_id}")
    receipt.assignments[item_id] = list(dict.fromkeys(participant_ids))
