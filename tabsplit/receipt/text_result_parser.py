"""Parse reading-order receipt text lines into a ParsedReceipt."""

from collections.abc import Sequence

from tabsplit.domain.money import Money, sum_money, within
from tabsplit.domain.receipt import ParsedReceipt, ReceiptItem
from tabsplit.runtime.logging import get_logger

from .text_parser.common import DEFAULT_PARSER_RULES, LineKind, ParserRules, classify_lines, normalize_lines
from .text_parser.fields_parser import extract_merchant, extract_summary_amounts
from .text_parser.items_text_parser import extract_items

logger = get_logger(__name__)

# Maximum cent gap before a sanity warning is emitted
SUBTOTAL_TOLERANCE_CENTS = 50
TOTAL_TOLERANCE_CENTS = 75


def check_receipt_sanity(
    items: list[ReceiptItem],
    subtotal: Money | None,
    tax: Money | None,
    tip: Money | None,
    total: Money | None,
) -> tuple[Money | None, list[str]]:
    """
    Cross-check extracted amounts and return (total, warnings).

    The detected total is never replaced; it is only backfilled from
    subtotal + tax/fees + tip when it was not detected at all.
    """
    warnings: list[str] = []

    if not items:
        warnings.append(
            "Could not confidently detect line items. Try rescanning with better lighting or edit manually."
        )

    if subtotal is not None:
        items_sum = sum_money(item.amount for item in items)
        if not within(items_sum, subtotal, SUBTOTAL_TOLERANCE_CENTS):
            warnings.append(
                f"Items sum {items_sum.format()} does not match subtotal {subtotal.format()}. "
                "You may need to edit items."
            )

    tax_or_zero = tax or Money.zero()
    tip_or_zero = tip or Money.zero()

    if subtotal is not None and total is not None:
        computed = subtotal + tax_or_zero + tip_or_zero
        if not within(computed, total, TOTAL_TOLERANCE_CENTS):
            warnings.append(
                f"Subtotal + tax/fees + tip {computed.format()} does not match total {total.format()}. "
                "Verify totals in confirmation."
            )

    if total is None and subtotal is not None:
        total = subtotal + tax_or_zero + tip_or_zero
        warnings.append(f"Total missing; using computed total {total.format()}. Verify in confirmation.")

    return total, warnings


def parse_receipt(
    lines: Sequence[str],
    full_text: str = "",
    rules: ParserRules = DEFAULT_PARSER_RULES,
) -> ParsedReceipt:
    """
    Parse recognized text lines into structured receipt data.

    Args:
        lines: Recognized lines, already sorted top-to-bottom then left-to-right
        full_text: Unsegmented recognized text, kept for audit only
        rules: Keyword tables for classification and totals extraction

    Returns:
        ParsedReceipt with best-effort fields and advisory warnings. Never raises
        for unreadable text.
    """
    cleaned = normalize_lines(lines)
    classified = classify_lines(cleaned, rules)

    merchant = extract_merchant(cleaned, rules)

    # Item candidates never carry a totals keyword, so the extractor only needs the rest.
    summary_lines = [line.text for line in classified if line.kind is not LineKind.ITEM_CANDIDATE]
    summary = extract_summary_amounts(summary_lines, rules)

    items = extract_items(classified, rules)

    total, warnings = check_receipt_sanity(
        items,
        subtotal=summary.subtotal,
        tax=summary.tax_plus_fees,
        tip=summary.tip,
        total=summary.total,
    )

    logger.debug(
        "Parsed %d lines: merchant=%r items=%d subtotal=%s total=%s",
        len(cleaned),
        merchant,
        len(items),
        summary.subtotal,
        total,
    )
    for warning in warnings:
        logger.info("Parser warning: %s", warning)

    return ParsedReceipt(
        merchant_name=merchant,
        items=items,
        subtotal=summary.subtotal,
        tax=summary.tax_plus_fees,
        tip=summary.tip,
        total=total,
        raw_text=full_text,
        warnings=warnings,
    )
