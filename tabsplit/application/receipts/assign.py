"""Participant and item assignment workflows for stored receipts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from tabsplit.domain.editing import add_participant, assign_item, find_participant, remove_participant
from tabsplit.domain.receipt import Receipt
from tabsplit.runtime.receipt_storage import ReceiptStore


@dataclass(frozen=True)
class ParticipantsEditRequest:
    receipt_id: str
    add: Sequence[str] = field(default_factory=tuple)
    remove: Sequence[str] = field(default_factory=tuple)


def run_edit_participants(store: ReceiptStore, request: ParticipantsEditRequest) -> Receipt:
    """Add then remove participants by name and persist the receipt.

    Raises ValueError for an unknown name to remove or an invalid name to add.
    """
    receipt = store.get(request.receipt_id)
    for name in request.add:
        add_participant(receipt, name)
    for name in request.remove:
        participant = find_participant(receipt, name)
        if participant is None:
            raise ValueError(f"No participant named {name!r}")
        remove_participant(receipt, participant.id)
    return store.update(receipt)


@dataclass(frozen=True)
class ItemAssignRequest:
    """Assign one item (1-based position on the receipt) to participants by name.

    An empty ``names`` list leaves the item unassigned.
    """

    receipt_id: str
    item_number: int
    names: Sequence[str] = field(default_factory=tuple)


def run_assign_item(store: ReceiptStore, request: ItemAssignRequest) -> Receipt:
    receipt = store.get(request.receipt_id)
    if not 1 <= request.item_number <= len(receipt.items):
        raise ValueError(f"Item number must be between 1 and {len(receipt.items)}, got {request.item_number}")
    item = receipt.items[request.item_number - 1]

    participant_ids: list[str] = []
    for name in request.names:
        participant = find_participant(receipt, name)
        if participant is None:
            raise ValueError(f"No participant named {name!r}; add it first")
        participant_ids.append(participant.id)

    assign_item(receipt, item.id, participant_ids)
    return store.update(receipt)
