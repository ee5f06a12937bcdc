"""Line-item extraction from classified receipt lines."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from tabsplit.domain.money import Money
from tabsplit.domain.receipt import ReceiptItem
from tabsplit.runtime.logging import get_logger

from .common import (
    DEFAULT_PARSER_RULES,
    ClassifiedLine,
    LineKind,
    ParserRules,
    contains_letter,
    is_metadata_line,
    is_totals_line,
    trailing_money_token,
)

logger = get_logger(__name__)

MIN_QUANTITY = 1
MAX_QUANTITY = 99

# "5 Coquito", "5x Coquito", "5 X Coquito"
LEADING_QUANTITY_PATTERN = re.compile(r"^\s*(\d{1,2})\s*[xX]?\s+(.+)$")
LEADING_BULLETS_PATTERN = re.compile(r"^[\-\*•·]+")


@dataclass(frozen=True)
class ParsedItemLine:
    """One accepted item line before quantity expansion."""

    quantity: int
    name: str
    amount: Money  # Line total as printed
    line: str

    @property
    def unit_amount(self) -> Money:
        # Truncating; the remainder is dropped.
        return self.amount / self.quantity


def _normalize_name(name: str) -> str:
    cleaned = LEADING_BULLETS_PATTERN.sub("", name.strip())
    return cleaned.strip()


def parse_item_line(line: str, rules: ParserRules = DEFAULT_PARSER_RULES) -> ParsedItemLine | None:
    """
    Parse lines like "5 Coquito 80.00", "1 Añejo 18.00" or "2x Swizzle 32.00".

    Returns None if the line does not look like an item.
    """
    text = line.strip()

    money_token = trailing_money_token(text)
    if money_token is None:
        return None
    amount = Money.parse(money_token)
    if amount is None:
        return None

    # Only the trailing token is removed; the same digits may appear in the name.
    left = text[: text.rfind(money_token)].strip()
    if not contains_letter(left):
        return None

    quantity = 1
    name = left
    match = LEADING_QUANTITY_PATTERN.match(left)
    if match:
        candidate = int(match.group(1))
        if MIN_QUANTITY <= candidate <= MAX_QUANTITY:
            quantity = candidate
            name = match.group(2)

    name = _normalize_name(name)

    if not name or is_metadata_line(name, rules) or is_totals_line(name, rules):
        return None

    return ParsedItemLine(quantity=quantity, name=name, amount=amount, line=text)


def expand_item_line(parsed: ParsedItemLine) -> list[ReceiptItem]:
    """One ReceiptItem per unit, each carrying the unit amount and source line."""
    unit = parsed.unit_amount
    return [ReceiptItem(name=parsed.name, amount=unit, original_line=parsed.line) for _ in range(parsed.quantity)]


def dedupe_items(groups: Sequence[list[ReceiptItem]]) -> list[ReceiptItem]:
    """
    Flatten per-line item groups, dropping repeats of an earlier line.

    A (lowercased name, cents) key seen on a previous source line marks the
    whole item as a duplicate detection of the same physical line. Repeats
    within one line come from quantity expansion and are kept.
    """
    seen: set[tuple[str, int]] = set()
    items: list[ReceiptItem] = []
    for group in groups:
        line_keys: set[tuple[str, int]] = set()
        for item in group:
            key = (item.name.lower(), item.amount.cents)
            if key in seen:
                logger.debug("Dropping duplicate item detection: %s", item.original_line)
                continue
            line_keys.add(key)
            items.append(item)
        seen |= line_keys
    return items


def extract_items(
    lines: Sequence[ClassifiedLine],
    rules: ParserRules = DEFAULT_PARSER_RULES,
) -> list[ReceiptItem]:
    """Extract items from lines tagged as item candidates."""
    groups: list[list[ReceiptItem]] = []
    for classified in lines:
        if classified.kind is not LineKind.ITEM_CANDIDATE:
            logger.debug("Skipping %s line: %s", classified.kind.value, classified.text)
            continue

        parsed = parse_item_line(classified.text, rules)
        if parsed is None:
            logger.debug("Not an item line: %s", classified.text)
            continue

        groups.append(expand_item_line(parsed))

    return dedupe_items(groups)
