from __future__ import annotations

from decimal import Decimal

import pytest

from reportsuite.finance.money import (
    amount_in_words,
    format_currency,
    format_date,
    format_percent,
    round_currency,
    to_decimal,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (1234.5, "Rs. 1,234.50"),
        (1234567.891, "Rs. 12,34,567.89"),
        (100000, "Rs. 1,00,000.00"),
        (999, "Rs. 999.00"),
        (0, "Rs. 0.00"),
        (None, "Rs. 0.00"),
        (-1500, "Rs. -1,500.00"),
        (0.005, "Rs. 0.01"),
        ("2500.456", "Rs. 2,500.46"),
        (float("nan"), "Rs. 0.00"),
    ],
)
def test_format_currency(value, expected) -> None:
    assert format_currency(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-03-15", "15-03-2024"),
        ("", "--"),
        (None, "--"),
        ("not-a-date", "not-a-date"),
        ("15/03/2024", "15/03/2024"),
    ],
)
def test_format_date(value, expected) -> None:
    assert format_date(value) == expected


def test_format_percent_drops_trailing_zeros() -> None:
    assert format_percent(12.50) == "12.5%"
    assert format_percent(10) == "10%"
    assert format_percent(None) == "0%"


def test_round_currency_is_half_up() -> None:
    assert round_currency("2.345") == Decimal("2.35")
    assert round_currency("-2.345") == Decimal("-2.35")
    assert to_decimal("abc") == Decimal(0)


@pytest.mark.parametrize(
    "value, expected",
    [
        (100000, "Rupees One Lakh Only"),
        (150000, "Rupees One Lakh Fifty Thousand Only"),
        (25000000, "Rupees Two Crore Fifty Lakh Only"),
        (1011.75, "Rupees One Thousand Eleven Only"),
        (0, ""),
        (None, ""),
    ],
)
def test_amount_in_words(value, expected) -> None:
    assert amount_in_words(value) == expected
