from __future__ import annotations

import math
from datetime import date, datetime

from tripbill.constants import MONTHS_EN, RUPEE_SYMBOL


def _group_indian(digits: str) -> str:
    """Indian digit grouping: last three digits, then pairs. '150000' -> '1,50,000'"""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_inr(amount: int | float | None, symbol: str = RUPEE_SYMBOL) -> str:
    """Format whole rupees with Indian grouping: 150000 -> '₹1,50,000'"""
    value = int(round(amount or 0))
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{_group_indian(str(abs(value)))}"


def parse_inr(text: str) -> int | None:
    """Parse a rupee amount into whole rupees. Returns None on invalid input.

    Accepts formats like '1500', '1,50,000', '150,000', '₹1,500', 'Rs. 1500', '99.6'.
    """
    text = text.strip()
    for prefix in (RUPEE_SYMBOL, "Rs.", "Rs", "INR"):
        if text.startswith(prefix):
            text = text[len(prefix):]
            break
    text = text.replace(",", "").replace(" ", "")
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(round(value))


def format_date(value: date | datetime | str | None) -> str:
    """Format a date as 'DD Mon YYYY'. Absent dates format to an empty string."""
    if not value:
        return ""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return f"{value.day:02d} {MONTHS_EN[value.month]} {value.year}"


def parse_date(text: str) -> date | None:
    """Parse 'YYYY-MM-DD' or 'DD/MM/YYYY'. Returns None on blank or invalid input."""
    text = (text or "").strip()
    if not text:
        return None
    for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None
