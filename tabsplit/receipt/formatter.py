"""Format receipts and splits as plain text and beancount transactions."""

import re
from datetime import date

from beancount.core import amount, data, flags
from beancount.parser import printer

from tabsplit.domain.allocation import AllocationResult
from tabsplit.domain.editing import grouped_items
from tabsplit.domain.money import Money
from tabsplit.domain.receipt import ParsedReceipt, Receipt


def _format_rows_aligned(rows: list[tuple[str, str]], indent: str = "  ") -> list[str]:
    """Left-align labels and right-align amounts in one block."""
    if not rows:
        return []
    max_label_len = max(len(label) for label, _ in rows)
    max_amount_len = max(len(value) for _, value in rows)
    return [f"{indent}{label.ljust(max_label_len)}  {value.rjust(max_amount_len)}" for label, value in rows]


def _optional(value: Money | None) -> str:
    return value.format() if value is not None else "-"


def format_parsed_receipt(parsed: ParsedReceipt) -> str:
    """Summarize parser output for review, warnings included."""
    lines = [f"Merchant: {parsed.merchant_name or 'UNKNOWN'}", "", f"Items ({len(parsed.items)}):"]

    item_rows: list[tuple[str, str]] = []
    for group in grouped_items(parsed.items):
        label = f"{group.name} x{group.quantity}" if group.quantity > 1 else group.name
        item_rows.append((label, group.line_total.format()))
    lines.extend(_format_rows_aligned(item_rows))

    lines.append("")
    lines.extend(
        _format_rows_aligned(
            [
                ("Subtotal", _optional(parsed.subtotal)),
                ("Tax + Fees", _optional(parsed.tax)),
                ("Tip", _optional(parsed.tip)),
                ("Total", _optional(parsed.total)),
            ]
        )
    )

    if parsed.warnings:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"  ! {warning}" for warning in parsed.warnings)

    return "\n".join(lines) + "\n"


def _assigned_names(receipt: Receipt, item_id: str) -> str:
    ids = receipt.assignees_for(item_id)
    if not ids:
        return "Unassigned"
    names = [p.name for pid in ids if (p := receipt.participant_by_id(pid)) is not None]
    return "Assigned to: " + ", ".join(names)


def format_receipt(receipt: Receipt) -> str:
    """Receipt detail: numbered items with their assignees, then totals."""
    lines = [receipt.resolved_name, receipt.created_at.strftime("%Y-%m-%d %H:%M"), ""]

    for index, item in enumerate(receipt.items, 1):
        lines.append(f"{index:>3}. {item.name}  {item.amount.format()}")
        lines.append(f"     {_assigned_names(receipt, item.id)}")

    subtotal = receipt.subtotal if receipt.subtotal is not None else receipt.computed_items_sum
    totals: list[tuple[str, str]] = [("Subtotal", subtotal.format())]
    if receipt.tax is not None:
        totals.append(("Tax", receipt.tax.format()))
    if receipt.tip is not None:
        totals.append(("Tip", receipt.tip.format()))
    if receipt.total is not None:
        totals.append(("Total", receipt.total.format()))

    lines.append("")
    lines.extend(_format_rows_aligned(totals))
    return "\n".join(lines) + "\n"


def format_people_totals(receipt: Receipt, result: AllocationResult) -> str:
    """Per-person breakdown with the reconciliation footer."""
    lines = ["People Totals", receipt.resolved_name, ""]

    for row in result.rows:
        lines.append(row.name)
        lines.extend(f"  - {label}" for label in row.items)
        lines.extend(
            _format_rows_aligned(
                [
                    ("Subtotal", row.subtotal.format()),
                    ("Tax", row.tax_share.format()),
                    ("Tip", row.tip_share.format()),
                    ("Total", row.total.format()),
                ],
                indent="    ",
            )
        )
        lines.append("")

    footer = [("Sum of assigned totals", result.sum_totals.format())]
    if receipt.total is not None:
        footer.append(("Receipt total", receipt.total.format()))
    lines.extend(_format_rows_aligned(footer, indent=""))
    if result.unallocated_total.cents != 0:
        lines.append(f"Unallocated (unassigned items / tax / tip): {result.unallocated_total.format()}")

    return "\n".join(lines) + "\n"


def account_component(name: str) -> str:
    """Turn a display name into a beancount account component, e.g. "Mary Ann" -> "Mary-Ann"."""
    words = re.findall(r"[A-Za-z0-9]+", name)
    if not words:
        return "Unknown"
    return "-".join(word[:1].upper() + word[1:] for word in words)


def build_split_transaction(
    receipt: Receipt,
    result: AllocationResult,
    payer_account: str = "Liabilities:CreditCard",
    receivable_prefix: str = "Assets:Receivables",
    unallocated_account: str = "Expenses:FIXME",
    currency: str = "USD",
) -> data.Transaction:
    """
    Build a balanced transaction recording who owes what for the receipt.

    Each participant row becomes a receivable posting; any unallocated
    remainder goes to ``unallocated_account``; the payer posting balances
    the rest.
    """
    txn = data.Transaction(
        meta={"receipt_id": receipt.id},
        date=receipt.created_at.date() if receipt.created_at else date.today(),
        flag=flags.FLAG_OKAY,
        payee=receipt.resolved_name,
        narration="Receipt split",
        tags=frozenset(),
        links=frozenset(),
        postings=list(),
    )

    total = Money.zero()
    for row in result.rows:
        account = f"{receivable_prefix}:{account_component(row.name)}"
        txn.postings.append(
            data.Posting(account, amount.Amount(row.total.to_decimal(), currency), None, None, None, None)
        )
        total = total + row.total

    if result.unallocated_total.cents != 0:
        txn.postings.append(
            data.Posting(
                unallocated_account,
                amount.Amount(result.unallocated_total.to_decimal(), currency),
                None,
                None,
                None,
                None,
            )
        )
        total = total + result.unallocated_total

    txn.postings.insert(
        0, data.Posting(payer_account, amount.Amount((-total).to_decimal(), currency), None, None, None, None)
    )
    return txn


def format_split_beancount(receipt: Receipt, result: AllocationResult, **kwargs: str) -> str:
    """Render build_split_transaction() as beancount text."""
    return printer.format_entry(build_split_transaction(receipt, result, **kwargs))
