"""Group positioned text regions into reading-order lines.

Text recognizers return one region per detected text run, often splitting
an item name and its price into separate regions. This stage rebuilds
whole lines before parsing. Coordinates are normalized to the page
(0..1) with the origin at the top-left corner.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

LINE_Y_THRESHOLD = 0.015  # Max center distance for regions on the same line

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class RecognizedRegion:
    """One recognized text run and its position on the page."""

    text: str
    center_y: float
    min_x: float


@dataclass(frozen=True)
class RecognizedText:
    """Merged lines for all pages plus the unsegmented text."""

    lines: list[str]
    full_text: str


def _line_center_y(line: list[RecognizedRegion]) -> float:
    return sum(region.center_y for region in line) / len(line)


def merge_regions_into_lines(
    regions: Iterable[RecognizedRegion],
    y_threshold: float = LINE_Y_THRESHOLD,
) -> list[str]:
    """Merge one page's regions into lines sorted top-to-bottom, left-to-right."""
    ordered = sorted(
        (r for r in regions if r.text.strip()),
        key=lambda r: (r.center_y, r.min_x),
    )

    grouped: list[list[RecognizedRegion]] = []
    for region in ordered:
        if grouped and abs(region.center_y - _line_center_y(grouped[-1])) < y_threshold:
            grouped[-1].append(region)
        else:
            grouped.append([region])

    lines: list[str] = []
    for line in grouped:
        joined = " ".join(r.text.strip() for r in sorted(line, key=lambda r: r.min_x))
        collapsed = _WHITESPACE.sub(" ", joined).strip()
        if collapsed:
            lines.append(collapsed)
    return lines


def merge_pages(
    pages: Sequence[Iterable[RecognizedRegion]],
    y_threshold: float = LINE_Y_THRESHOLD,
) -> RecognizedText:
    """Merge several pages in order into one line sequence.

    ``full_text`` joins lines with a newline and pages with a blank line.
    """
    all_lines: list[str] = []
    page_texts: list[str] = []
    for page in pages:
        page_lines = merge_regions_into_lines(page, y_threshold=y_threshold)
        all_lines.extend(page_lines)
        page_texts.append("\n".join(page_lines))
    return RecognizedText(lines=all_lines, full_text="\n\n".join(page_texts))
