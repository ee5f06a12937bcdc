"""Shared rule tables, normalization and line classification for receipt text."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache

# Anchor keywords for the totals block. Matched at the start of a word.
SUBTOTAL_KEYWORDS = ("subtotal", "sub total")
FEE_KEYWORDS = (
    "service fee",
    "service charge",
    "svc fee",
    "auto gratuity",
    "automatic gratuity",
    "gratuity",
    "added gratuity",
)
TAX_KEYWORDS = ("tax", "sales tax")
# Fees and gratuities are never tip keywords.
TIP_KEYWORDS = ("tip",)
TOTAL_KEYWORDS = ("amount due", "balance due", "grand total", "total")

TOTALS_LINE_KEYWORDS = (
    "subtotal",
    "sub total",
    "tax",
    "sales tax",
    "tip",
    "service fee",
    "service charge",
    "svc fee",
    "auto gratuity",
    "automatic gratuity",
    "gratuity",
    "total",
    "grand total",
    "amount due",
    "balance due",
)

# Boilerplate that never names an item. Matched as whole words.
METADATA_KEYWORDS = (
    "server",
    "check",
    "guest",
    "table",
    "ordered",
    "order",
    "date",
    "time",
    "powered by",
    "toast",
    "address",
    "ave",
    "st",
    "street",
    "road",
    "rd",
    "blvd",
    "suite",
    "chicago",
    "il",
)

POSTAL_CODE_PATTERN = re.compile(r"\b\d{5}(?:-\d{4})?\b")
CHECK_NUMBER_PATTERN = re.compile(r"\bcheck\s*#?\s*\d+\b")
TABLE_NUMBER_PATTERN = re.compile(r"\btable\s*\d+\b")
GUEST_COUNT_PATTERN = re.compile(r"\bguest\s*count\s*:\s*\d+\b")
DATE_PATTERN = re.compile(r"\b\d{1,2}/\d{1,2}/\d{2,4}\b")
CLOCK_PATTERN = re.compile(r"\b\d{1,2}:\d{2}\b")
MERIDIEM_PATTERN = re.compile(r"(?:\d|\b)(?:am|pm)\b")

_MONEY_BODY = r"\$?(?:\d{1,3}(?:,\d{3})+|\d{1,6})(?:\.\d{1,2})?"
# A money token must not start in the middle of a longer number.
TRAILING_MONEY_PATTERN = re.compile(r"(?<![\d.,])(" + _MONEY_BODY + r")\s*$")
EMBEDDED_MONEY_PATTERN = re.compile(r"(?<![\d.,])" + _MONEY_BODY)

_WHITESPACE = re.compile(r"\s+")
_LETTER = re.compile(r"[^\W\d_]")


@dataclass(frozen=True)
class ParserRules:
    """Immutable keyword tables used by the classifier and the totals extractor."""

    subtotal: tuple[str, ...] = SUBTOTAL_KEYWORDS
    fee: tuple[str, ...] = FEE_KEYWORDS
    tax: tuple[str, ...] = TAX_KEYWORDS
    tip: tuple[str, ...] = TIP_KEYWORDS
    total: tuple[str, ...] = TOTAL_KEYWORDS
    totals_line: tuple[str, ...] = TOTALS_LINE_KEYWORDS
    metadata: tuple[str, ...] = METADATA_KEYWORDS
    # Derived; every extractor keyword also marks a totals line.
    all_totals_keywords: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        merged = dict.fromkeys(
            (*self.totals_line, *self.subtotal, *self.fee, *self.tax, *self.tip, *self.total)
        )
        object.__setattr__(self, "all_totals_keywords", tuple(merged))


DEFAULT_PARSER_RULES = ParserRules()


class LineKind(str, Enum):
    """Closed set of categories a normalized line is tagged with."""

    METADATA = "metadata"
    TOTALS = "totals"
    ITEM_CANDIDATE = "item_candidate"


@dataclass(frozen=True)
class ClassifiedLine:
    text: str
    kind: LineKind


@lru_cache(maxsize=64)
def _keyword_pattern(keywords: tuple[str, ...], whole_word: bool) -> re.Pattern[str] | None:
    if not keywords:
        return None
    alternation = "|".join(re.escape(k.lower()) for k in sorted(keywords, key=len, reverse=True))
    # Not a plain substring test: "total" does not match inside "Subtotal",
    # nor "tip" inside "Multiple".
    if whole_word:
        return re.compile(rf"\b(?:{alternation})\b")
    return re.compile(rf"(?<![a-z0-9])(?:{alternation})")


def contains_keyword(line: str, keywords: tuple[str, ...], *, whole_word: bool = False) -> bool:
    """Return True if the lowercased line contains one of the keywords.

    Keywords always start at a word boundary; with ``whole_word`` they must end at one too.
    """
    pattern = _keyword_pattern(tuple(keywords), whole_word)
    if pattern is None:
        return False
    return pattern.search(line.lower()) is not None


def normalize_lines(lines: Iterable[str]) -> list[str]:
    """Collapse whitespace (tabs included), trim, and drop empty lines. Order is kept."""
    normalized: list[str] = []
    for line in lines:
        cleaned = _WHITESPACE.sub(" ", line.replace("\t", " ")).strip()
        if cleaned:
            normalized.append(cleaned)
    return normalized


def trailing_money_token(line: str) -> str | None:
    """Return the money-looking token at the end of the line, e.g. "$80.00"."""
    match = TRAILING_MONEY_PATTERN.search(line)
    if not match:
        return None
    return match.group(1).strip()


def first_money_token(line: str) -> str | None:
    match = EMBEDDED_MONEY_PATTERN.search(line)
    if not match:
        return None
    return match.group(0)


def contains_letter(text: str) -> bool:
    return _LETTER.search(text) is not None


def digit_count(text: str) -> int:
    return sum(1 for ch in text if ch.isdigit())


def is_totals_line(line: str, rules: ParserRules = DEFAULT_PARSER_RULES) -> bool:
    return contains_keyword(line, rules.all_totals_keywords)


def is_metadata_line(line: str, rules: ParserRules = DEFAULT_PARSER_RULES) -> bool:
    """Return True for server/table/date/address style lines that are never items."""
    lower = line.lower()

    if contains_keyword(lower, rules.metadata, whole_word=True):
        return True

    if POSTAL_CODE_PATTERN.search(lower):
        return True

    if CHECK_NUMBER_PATTERN.search(lower) or TABLE_NUMBER_PATTERN.search(lower):
        return True
    if GUEST_COUNT_PATTERN.search(lower):
        return True

    # e.g. "1/31/26 9:10 PM"
    if DATE_PATTERN.search(lower):
        return True
    if CLOCK_PATTERN.search(lower) and MERIDIEM_PATTERN.search(lower):
        return True

    return False


def is_likely_merchant_line(line: str, rules: ParserRules = DEFAULT_PARSER_RULES) -> bool:
    if len(line) < 3:
        return False
    if is_metadata_line(line, rules) or is_totals_line(line, rules):
        return False
    # Item lines usually end with an amount.
    if trailing_money_token(line) is not None:
        return False
    return contains_letter(line) and digit_count(line) <= 2


def classify_line(line: str, rules: ParserRules = DEFAULT_PARSER_RULES) -> LineKind:
    """Tag a normalized line; metadata wins over totals."""
    if is_metadata_line(line, rules):
        return LineKind.METADATA
    if is_totals_line(line, rules):
        return LineKind.TOTALS
    return LineKind.ITEM_CANDIDATE


def classify_lines(lines: Sequence[str], rules: ParserRules = DEFAULT_PARSER_RULES) -> list[ClassifiedLine]:
    return [ClassifiedLine(text=line, kind=classify_line(line, rules)) for line in lines]
