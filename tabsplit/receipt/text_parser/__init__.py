"""Composable receipt text parser components."""

from .common import (
    DEFAULT_PARSER_RULES,
    ClassifiedLine,
    LineKind,
    ParserRules,
    classify_line,
    classify_lines,
    is_likely_merchant_line,
    is_metadata_line,
    is_totals_line,
    normalize_lines,
)
from .fields_parser import SummaryAmounts, extract_merchant, extract_summary_amounts, find_money
from .items_text_parser import ParsedItemLine, extract_items, parse_item_line

__all__ = [
    "DEFAULT_PARSER_RULES",
    "ClassifiedLine",
    "LineKind",
    "ParserRules",
    "ParsedItemLine",
    "SummaryAmounts",
    "classify_line",
    "classify_lines",
    "extract_items",
    "extract_merchant",
    "extract_summary_amounts",
    "find_money",
    "is_likely_merchant_line",
    "is_metadata_line",
    "is_totals_line",
    "normalize_lines",
    "parse_item_line",
]
