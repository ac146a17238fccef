"""Currency, date and amount-in-words formatting for printed reports.

Everything here is locale independent: grouping and rounding are done by hand
on ``Decimal`` values so the same number always prints the same way.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List, Optional, Union

Number = Union[Decimal, int, float, str]

CURRENCY_PREFIX = "Rs. "
ROUNDING_DP = 2
MISSING_DATE = "--"

_CENTS = Decimal("0.01")

_ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine", "Ten",
    "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen", "Seventeen",
    "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]


def to_decimal(value: Optional[Number]) -> Decimal:
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal(0)
    if value is None:
        return Decimal(0)
    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal(0)
    if not parsed.is_finite():
        return Decimal(0)
    return parsed


def round_currency(value: Optional[Number]) -> Decimal:
    return to_decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: List[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(value: Optional[Number]) -> str:
    amount = round_currency(value)
    sign = "-" if amount < 0 else ""
    whole, fraction = f"{abs(amount):.{ROUNDING_DP}f}".split(".")
    return f"{CURRENCY_PREFIX}{sign}{_group_indian(whole)}.{fraction}"


def format_date(iso_date: Optional[str]) -> str:
    """``YYYY-MM-DD`` -> ``DD-MM-YYYY``; empty -> ``--``; anything else unchanged."""
    if not iso_date:
        return MISSING_DATE
    text = str(iso_date)
    parts = text.split("-")
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return text
    return f"{parts[2]}-{parts[1]}-{parts[0]}"


def format_percent(rate: Optional[Number]) -> str:
    value = to_decimal(rate).normalize()
    text = format(value, "f")
    return f"{text}%"


def _words_below_thousand(n: int) -> List[str]:
    words: List[str] = []
    if n >= 100:
        words += [_ONES[n // 100], "Hundred"]
        n %= 100
    if n >= 20:
        words.append(_TENS[n // 10])
        n %= 10
    if n:
        words.append(_ONES[n])
    return words


def _words(n: int) -> List[str]:
    if n < 1000:
        return _words_below_thousand(n)
    if n < 100000:
        return _words(n // 1000) + ["Thousand"] + _words(n % 1000)
    if n < 10000000:
        return _words(n // 100000) + ["Lakh"] + _words(n % 100000)
    return _words(n // 10000000) + ["Crore"] + _words(n % 10000000)


def amount_in_words(value: Optional[Number]) -> str:
    """Whole rupees in the Indian numbering system, e.g. ``Rupees One Lakh Only``."""
    whole = int(abs(to_decimal(value)))
    if whole == 0:
        return ""
    return "Rupees " + " ".join(_words(whole)) + " Only"
