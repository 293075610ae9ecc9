# bizbooks/domain/services/currency.py
"""INR amounts with Indian digit grouping (₹1,23,45,678) and en-IN dates."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

RUPEE = "₹"


def _group_indian(digits: str) -> str:
    """1234567 -> 12,34,567 (last three digits, then pairs)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs) + "," + tail


def format_inr(amount, decimals: int = 0) -> str:
    """
    Format an amount as Indian rupees.

    ``decimals=0`` shows whole rupees and keeps up to two fraction digits only
    when they are non-zero (``₹16,002`` / ``₹16,002.5``). ``decimals=2`` always
    shows paise (``₹16,002.00``).
    """
    text = format_amount(amount, decimals)
    if text.startswith("-"):
        return "-" + RUPEE + text[1:]
    return RUPEE + text


def format_amount(amount, decimals: int = 2) -> str:
    """Indian-grouped number without a currency symbol: ``2,09,804.00``."""
    try:
        value = Decimal(str(amount if amount is not None else 0))
    except InvalidOperation:
        value = Decimal("0")
    if not value.is_finite():
        value = Decimal("0")

    places = max(decimals, 2)
    value = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, _, frac = f"{abs(value):f}".partition(".")

    if decimals == 0:
        frac = frac.rstrip("0")
    else:
        frac = frac[:decimals]

    text = _group_indian(whole)
    if frac:
        text += "." + frac
    return sign + text


def format_date_in(value) -> str:
    """``2025-01-02`` -> ``02 Jan 2025``. Unparseable input is returned as-is."""
    if value is None:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    if isinstance(value, (date, datetime)):
        return value.strftime("%d %b %Y")
    return str(value)
