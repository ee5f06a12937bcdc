"""Proportional split of a finalized receipt across its participants.

Item amounts are divided evenly among each item's assignees. Tax and tip
are shared in proportion to each participant's share of the items sum.
When every item has an assignee, rounding drift on tax and tip is pushed
onto the participant sorted last by name so the shares add up exactly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from .money import Money, sum_money
from .receipt import Receipt


@dataclass
class PersonRow:
    """One participant's portion of the receipt."""

    participant_id: str
    name: str
    items: list[str] = field(default_factory=list)
    subtotal: Money = field(default_factory=Money.zero)
    tax_share: Money = field(default_factory=Money.zero)
    tip_share: Money = field(default_factory=Money.zero)

    @property
    def total(self) -> Money:
        return self.subtotal + self.tax_share + self.tip_share


@dataclass(frozen=True)
class AllocationResult:
    rows: list[PersonRow]
    sum_subtotals: Money
    sum_tax: Money
    sum_tip: Money
    sum_totals: Money
    unallocated_subtotal: Money
    unallocated_tax: Money
    unallocated_tip: Money
    unallocated_total: Money


def _proportional_share(amount: Money, part: Money, whole: Money) -> Money:
    """Round amount * part / whole to whole cents, halves away from zero."""
    if whole.cents <= 0:
        return Money.zero()
    exact = Decimal(amount.cents) * Decimal(part.cents) / Decimal(whole.cents)
    return Money(int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP)))


def _item_label(name: str, each: Money, split: bool) -> str:
    if split:
        return f"{name} (split) - {each.format()}"
    return f"{name} - {each.format()}"


def _build_result(
    rows: list[PersonRow],
    receipt_subtotal: Money,
    receipt_tax: Money,
    receipt_tip: Money,
) -> AllocationResult:
    sum_sub = sum_money(row.subtotal for row in rows)
    sum_tax = sum_money(row.tax_share for row in rows)
    sum_tip = sum_money(row.tip_share for row in rows)
    sum_tot = sum_money(row.total for row in rows)

    unallocated_sub = receipt_subtotal - sum_sub
    unallocated_tax = receipt_tax - sum_tax
    unallocated_tip = receipt_tip - sum_tip
    return AllocationResult(
        rows=rows,
        sum_subtotals=sum_sub,
        sum_tax=sum_tax,
        sum_tip=sum_tip,
        sum_totals=sum_tot,
        unallocated_subtotal=unallocated_sub,
        unallocated_tax=unallocated_tax,
        unallocated_tip=unallocated_tip,
        unallocated_total=unallocated_sub + unallocated_tax + unallocated_tip,
    )


def compute_allocation(receipt: Receipt) -> AllocationResult:
    """Compute per-participant subtotal, tax share and tip share.

    The denominator is always the items sum, never the receipt's declared
    subtotal, so that row subtotals plus the unallocated subtotal equal the
    items sum exactly. `receipt.tax` already includes fees.
    """
    receipt_subtotal = receipt.computed_items_sum
    receipt_tax = receipt.tax or Money.zero()
    receipt_tip = receipt.tip or Money.zero()

    person_sub: dict[str, Money] = {}
    person_lines: dict[str, list[str]] = {}

    for item in receipt.items:
        assignees = receipt.assignees_for(item.id)
        if not assignees:
            continue

        # Truncating split; the remainder cent(s) stay unallocated.
        each = item.amount / len(assignees)
        label = _item_label(item.name, each, split=len(assignees) > 1)
        for participant_id in assignees:
            person_sub[participant_id] = person_sub.get(participant_id, Money.zero()) + each
            person_lines.setdefault(participant_id, []).append(label)

    rows: list[PersonRow] = []
    for participant in sorted(receipt.participants, key=lambda p: p.name.lower()):
        sub = person_sub.get(participant.id, Money.zero())
        rows.append(
            PersonRow(
                participant_id=participant.id,
                name=participant.name,
                items=person_lines.get(participant.id, []),
                subtotal=sub,
                tax_share=_proportional_share(receipt_tax, sub, receipt_subtotal),
                tip_share=_proportional_share(receipt_tip, sub, receipt_subtotal),
            )
        )

    result = _build_result(rows, receipt_subtotal, receipt_tax, receipt_tip)

    if receipt.is_fully_assigned and rows and result.unallocated_subtotal.cents == 0:
        last = rows[-1]
        last.tax_share = last.tax_share + result.unallocated_tax
        last.tip_share = last.tip_share + result.unallocated_tip
        result = _build_result(rows, receipt_subtotal, receipt_tax, receipt_tip)

    return result
