"""Merchant and summary amount (subtotal/tax/fees/tip/total) extraction."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from tabsplit.domain.money import Money

from .common import (
    DEFAULT_PARSER_RULES,
    ParserRules,
    contains_keyword,
    first_money_token,
    is_likely_merchant_line,
    trailing_money_token,
)


@dataclass(frozen=True)
class SummaryAmounts:
    """Amounts read from the totals block; each one may be missing."""

    subtotal: Money | None = None
    fee: Money | None = None
    tax_only: Money | None = None
    tip: Money | None = None
    total: Money | None = None

    @property
    def tax_plus_fees(self) -> Money | None:
        return combine_tax_and_fees(self.tax_only, self.fee)


def combine_tax_and_fees(tax: Money | None, fee: Money | None) -> Money | None:
    """Sum tax and fees; absent only when both are absent."""
    if tax is None:
        return fee
    if fee is None:
        return tax
    return tax + fee


def find_money(keywords: Sequence[str], lines: Sequence[str], prefer_last: bool = True) -> Money | None:
    """
    Read the amount from the first line mentioning one of the keywords.

    With ``prefer_last`` the lines are scanned bottom-up, so the last matching
    line on the receipt wins. A trailing amount is preferred over one embedded
    earlier in the line. Keyword lines with no readable amount are skipped.
    """
    keyword_tuple = tuple(keywords)
    ordered = reversed(lines) if prefer_last else iter(lines)
    for line in ordered:
        if not contains_keyword(line, keyword_tuple):
            continue
        trailing = trailing_money_token(line)
        if trailing is not None:
            amount = Money.parse(trailing)
            if amount is not None:
                return amount
        embedded = first_money_token(line)
        if embedded is not None:
            amount = Money.parse(embedded)
            if amount is not None:
                return amount
    return None


def extract_summary_amounts(lines: Sequence[str], rules: ParserRules = DEFAULT_PARSER_RULES) -> SummaryAmounts:
    """Extract subtotal, fees, tax, tip and total, all bottom-up."""
    return SummaryAmounts(
        subtotal=find_money(rules.subtotal, lines),
        fee=find_money(rules.fee, lines),
        tax_only=find_money(rules.tax, lines),
        tip=find_money(rules.tip, lines),
        total=find_money(rules.total, lines),
    )


def extract_merchant(lines: Sequence[str], rules: ParserRules = DEFAULT_PARSER_RULES) -> str | None:
    """First line that reads like a business name, skipping logos and boilerplate."""
    for line in lines:
        if is_likely_merchant_line(line, rules):
            return line
    return None
