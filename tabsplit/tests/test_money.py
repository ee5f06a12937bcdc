from decimal import Decimal

import pytest

from tabsplit.domain.money import Money, sum_money, within


@pytest.mark.parametrize(
    ("text", "cents"),
    [
        ("$12.34", 1234),
        ("12.34", 1234),
        ("12", 1200),
        ("$12.3", 1230),
        ("1,234.567", 123456),
        (".5", 50),
        ("  $ 7.00 ", 700),
        ("-$1.05", -105),
        ("$-1.05", -105),
    ],
)
def test_parse_accepts_receipt_amounts(text: str, cents: int) -> None:
    assert Money.parse(text) == Money(cents)


@pytest.mark.parametrize("text", ["", "abc", "$", "-", "$."])
def test_parse_returns_none_without_digits(text: str) -> None:
    assert Money.parse(text) is None


@pytest.mark.parametrize("cents", [0, 5, 100, 1234, 123456, -105])
def test_format_output_parses_back(cents: int) -> None:
    assert Money.parse(Money(cents).format()) == Money(cents)


def test_format() -> None:
    assert Money(1234).format() == "$12.34"
    assert Money(5).format() == "$0.05"
    assert Money(-5).format() == "-$0.05"
    assert str(Money(100000)) == "$1000.00"


def test_division_truncates_toward_zero() -> None:
    assert Money(1000) / 3 == Money(333)
    assert Money(-1000) / 3 == Money(-333)
    assert Money(1600) / 5 == Money(320)


def test_division_by_zero_or_negative_count_keeps_amount() -> None:
    assert Money(1000) / 0 == Money(1000)
    assert Money(1000) / -4 == Money(1000)


def test_arithmetic_and_ordering() -> None:
    assert Money(100) + Money(250) == Money(350)
    assert Money(100) - Money(250) == Money(-150)
    assert Money(120) * 3 == Money(360)
    assert 3 * Money(120) == Money(360)
    assert -Money(5) == Money(-5)
    assert abs(Money(-5)) == Money(5)
    assert Money(1) < Money(2)
    assert max(Money(3), Money(10)) == Money(10)


def test_zero_is_not_none() -> None:
    zero = Money.zero()
    assert zero.cents == 0
    assert zero is not None
    assert (zero or Money(7)) == zero


def test_to_decimal_is_exact() -> None:
    assert Money(1234).to_decimal() == Decimal("12.34")
    assert Money(-5).to_decimal() == Decimal("-0.05")


def test_within_and_sum_money() -> None:
    assert within(Money(1000), Money(1050), 50)
    assert not within(Money(1000), Money(1051), 50)
    assert sum_money([Money(1), Money(2), Money(3)]) == Money(6)
    assert sum_money([]) == Money.zero()


@pytest.mark.parametrize("value", [12.7, "1270", Decimal("12.70"), True, None])
def test_non_integer_cents_are_rejected(value: object) -> None:
    with pytest.raises(TypeError):
        Money.from_cents(value)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        Money(value)  # type: ignore[arg-type]
