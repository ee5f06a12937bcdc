"""Integer-cents money value used for every receipt amount."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

_NON_DIGITS = re.compile(r"[^0-9]")
_SIGN_AND_SYMBOL = re.compile(r"^(-?)\s*\$?\s*(-?)")


@dataclass(frozen=True, order=True)
class Money:
    """Signed whole number of cents.

    Floats are rejected with TypeError: amounts come either from parsed
    text or from other Money values.
    """

    cents: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise TypeError(f"Money needs an integer number of cents, got {self.cents!r}")

    @classmethod
    def from_cents(cls, cents: int) -> Money:
        return cls(cents)

    @classmethod
    def zero(cls) -> Money:
        return cls(0)

    @classmethod
    def parse(cls, text: str) -> Money | None:
        """
        Parse a free-form amount like "$12.34", "12.34", "12", "12.3" or "-$1.05".

        Thousands separators and one currency symbol are removed. One fractional
        digit means tenths; more than two fractional digits are truncated, not
        rounded. Returns None when no digits are left.
        """
        cleaned = text.strip().replace(",", "")
        sign_match = _SIGN_AND_SYMBOL.match(cleaned)
        negative = False
        if sign_match:
            negative = bool(sign_match.group(1) or sign_match.group(2))
            cleaned = cleaned[sign_match.end() :]

        if not cleaned:
            return None

        if "." in cleaned:
            whole_raw, frac_raw = cleaned.split(".", 1)
            whole_digits = _NON_DIGITS.sub("", whole_raw)
            frac_digits = _NON_DIGITS.sub("", frac_raw)
            if not whole_digits and not frac_digits:
                return None
            whole = int(whole_digits) if whole_digits else 0
            if not frac_digits:
                frac = 0
            elif len(frac_digits) == 1:
                frac = int(frac_digits) * 10
            else:
                frac = int(frac_digits[:2])
            cents = whole * 100 + frac
        else:
            whole_digits = _NON_DIGITS.sub("", cleaned)
            if not whole_digits:
                return None
            cents = int(whole_digits) * 100

        return cls(-cents if negative else cents)

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.cents + other.cents)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.cents - other.cents)

    def __mul__(self, count: int) -> Money:
        if not isinstance(count, int):
            return NotImplemented
        return Money(self.cents * count)

    __rmul__ = __mul__

    def __truediv__(self, count: int) -> Money:
        """Split into `count` parts, truncating toward zero.

        The divisor is floored to 1. The dropped remainder is not redistributed.
        """
        if not isinstance(count, int):
            return NotImplemented
        divisor = max(count, 1)
        quotient = abs(self.cents) // divisor
        return Money(-quotient if self.cents < 0 else quotient)

    def __neg__(self) -> Money:
        return Money(-self.cents)

    def __abs__(self) -> Money:
        return Money(abs(self.cents))

    def to_decimal(self) -> Decimal:
        """Exact dollar amount, e.g. Decimal("12.34")."""
        return Decimal(self.cents).scaleb(-2)

    def format(self) -> str:
        """Fixed two-decimal dollar string, e.g. "$12.34" or "-$0.05"."""
        sign = "-" if self.cents < 0 else ""
        dollars, rem = divmod(abs(self.cents), 100)
        return f"{sign}${dollars}.{rem:02d}"

    def __str__(self) -> str:
        return self.format()


def within(a: Money, b: Money, tolerance_cents: int) -> bool:
    """Return True when a and b differ by at most tolerance_cents."""
    return abs(a.cents - b.cents) <= tolerance_cents


def sum_money(values: Iterable[Money]) -> Money:
    total = Money.zero()
    for value in values:
        total = total + value
    return total

