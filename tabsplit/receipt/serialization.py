"""Plain-dict (JSON-ready) conversion of receipts and split results.

Money is stored as integer cents; missing amounts as None.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from tabsplit.domain.allocation import AllocationResult, PersonRow
from tabsplit.domain.money import Money
from tabsplit.domain.receipt import ParsedReceipt, Participant, Receipt, ReceiptItem


def _cents(value: Money | None) -> int | None:
    return value.cents if value is not None else None


def _money(data: dict[str, Any], key: str) -> Money | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer number of cents, got {value!r}")
    return Money.from_cents(value)


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"{key} must be a non-empty string")
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def item_to_dict(item: ReceiptItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "name": item.name,
        "amount_cents": item.amount.cents,
        "original_line": item.original_line,
    }


def item_from_dict(data: dict[str, Any]) -> ReceiptItem:
    if not isinstance(data, dict):
        raise ValueError("item must be an object")
    amount = _money(data, "amount_cents")
    if amount is None:
        raise ValueError("item amount_cents is required")
    name = data.get("name")
    if not isinstance(name, str):
        raise ValueError("item name must be a string")
    item = ReceiptItem(name=name, amount=amount, original_line=_optional_str(data, "original_line"))
    if data.get("id") is not None:
        item.id = _require_str(data, "id")
    return item


def parsed_receipt_to_dict(parsed: ParsedReceipt) -> dict[str, Any]:
    return {
        "merchant_name": parsed.merchant_name,
        "items": [item_to_dict(item) for item in parsed.items],
        "subtotal_cents": _cents(parsed.subtotal),
        "tax_cents": _cents(parsed.tax),
        "tip_cents": _cents(parsed.tip),
        "total_cents": _cents(parsed.total),
        "raw_text": parsed.raw_text,
        "warnings": list(parsed.warnings),
    }


def receipt_to_dict(receipt: Receipt) -> dict[str, Any]:
    return {
        "id": receipt.id,
        "created_at": receipt.created_at.isoformat(),
        "merchant_name": receipt.merchant_name,
        "display_name": receipt.display_name,
        "raw_text": receipt.raw_text,
        "items": [item_to_dict(item) for item in receipt.items],
        "subtotal_cents": _cents(receipt.subtotal),
        "tax_cents": _cents(receipt.tax),
        "tip_cents": _cents(receipt.tip),
        "total_cents": _cents(receipt.total),
        "participants": [{"id": p.id, "name": p.name} for p in receipt.participants],
        "assignments": {item_id: list(ids) for item_id, ids in receipt.assignments.items()},
    }


def receipt_from_dict(data: dict[str, Any]) -> Receipt:
    """Rebuild a Receipt; raises ValueError on malformed input."""
    if not isinstance(data, dict):
        raise ValueError("receipt must be an object")

    receipt = Receipt(
        merchant_name=_optional_str(data, "merchant_name"),
        display_name=_optional_str(data, "display_name"),
        raw_text=_optional_str(data, "raw_text") or "",
        subtotal=_money(data, "subtotal_cents"),
        tax=_money(data, "tax_cents"),
        tip=_money(data, "tip_cents"),
        total=_money(data, "total_cents"),
    )
    if data.get("id") is not None:
        receipt.id = _require_str(data, "id")

    created_at = data.get("created_at")
    if created_at is not None:
        try:
            receipt.created_at = datetime.fromisoformat(created_at)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"created_at is not an ISO timestamp: {created_at!r}") from exc

    items = data.get("items") or []
    if not isinstance(items, list):
        raise ValueError("items must be a list")
    receipt.items = [item_from_dict(item) for item in items]

    participants = data.get("participants") or []
    if not isinstance(participants, list):
        raise ValueError("participants must be a list")
    for entry in participants:
        if not isinstance(entry, dict):
            raise ValueError("participant must be an object")
        participant = Participant(name=_require_str(entry, "name"))
        if entry.get("id") is not None:
            participant.id = _require_str(entry, "id")
        receipt.participants.append(participant)

    assignments = data.get("assignments") or {}
    if not isinstance(assignments, dict):
        raise ValueError("assignments must be an object")
    for item_id, ids in assignments.items():
        if not isinstance(ids, list) or not all(isinstance(pid, str) for pid in ids):
            raise ValueError(f"assignments for {item_id} must be a list of ids")
        receipt.assignments[item_id] = list(dict.fromkeys(ids))

    return receipt


def _row_to_dict(row: PersonRow) -> dict[str, Any]:
    return {
        "participant_id": row.participant_id,
        "name": row.name,
        "items": list(row.items),
        "subtotal_cents": row.subtotal.cents,
        "tax_share_cents": row.tax_share.cents,
        "tip_share_cents": row.tip_share.cents,
        "total_cents": row.total.cents,
    }


def allocation_to_dict(result: AllocationResult) -> dict[str, Any]:
    return {
        "rows": [_row_to_dict(row) for row in result.rows],
        "sum_subtotals_cents": result.sum_subtotals.cents,
        "sum_tax_cents": result.sum_tax.cents,
        "sum_tip_cents": result.sum_tip.cents,
        "sum_totals_cents": result.sum_totals.cents,
        "unallocated_subtotal_cents": result.unallocated_subtotal.cents,
        "unallocated_tax_cents": result.unallocated_tax.cents,
        "unallocated_tip_cents": result.unallocated_tip.cents,
        "unallocated_total_cents": result.unallocated_total.cents,
    }
