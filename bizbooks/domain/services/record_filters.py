# bizbooks/domain/services/record_filters.py
"""Search and filter predicates behind the firm / client / invoice / expense lists."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

UNKNOWN_FIRM = "Unknown Firm"
UNKNOWN_CLIENT = "Unknown Client"

ALL = "all"
DATE_WINDOWS = (ALL, "today", "week", "month", "year")


def _contains(haystack: Any, needle: str) -> bool:
    return needle in (haystack or "").lower()


def _term(term: str | None) -> str:
    return (term or "").strip().lower()


def firm_matches(firm, term: str | None) -> bool:
    t = _term(term)
    if not t:
        return True
    return _contains(firm.name, t) or _contains(firm.description, t)


def client_matches(client, term: str | None) -> bool:
    t = _term(term)
    if not t:
        return True
    # phone is matched as typed
    return (
        _contains(client.name, t)
        or _contains(client.email, t)
        or (term or "").strip() in (client.phone or "")
    )


def invoice_matches(invoice, term: str | None, firm_name: str = "", client_name: str = "") -> bool:
    t = _term(term)
    if not t:
        return True
    return (
        _contains(invoice.invoice_number, t)
        or _contains(firm_name, t)
        or _contains(client_name, t)
    )


def status_matches(invoice, status: str | None) -> bool:
    if not status or status == ALL:
        return True
    return invoice.payment_status == status


def expense_matches(expense, term: str | None) -> bool:
    t = _term(term)
    if not t:
        return True
    return _contains(expense.description, t) or _contains(expense.category, t)


def expense_in_window(expense_date: date | datetime | None, window: str | None, today: date) -> bool:
    """
    Date window filter for expenses.

    ``week`` is the trailing seven days, ``month`` the current calendar month
    and ``year`` the current calendar year.
    """
    if not window or window == ALL:
        return True
    if expense_date is None:
        return False
    if isinstance(expense_date, datetime):
        expense_date = expense_date.date()

    if window == "today":
        return expense_date == today
    if window == "week":
        return expense_date >= today - timedelta(days=7)
    if window == "month":
        return expense_date.month == today.month and expense_date.year == today.year
    if window == "year":
        return expense_date.year == today.year
    return True


def name_lookup(records, unknown: str) -> "NameLookup":
    return NameLookup({str(r.id): r.name for r in records}, unknown)


class NameLookup(dict):
    """id -> display name, with a fixed label for missing ids."""

    def __init__(self, names: dict[str, str], unknown: str):
        super().__init__(names)
        self.unknown = unknown

    def __missing__(self, key):
        return self.unknown
