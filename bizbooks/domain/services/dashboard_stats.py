# bizbooks/domain/services/dashboard_stats.py
"""
Dashboard aggregation.

Totals are computed over the records the user can access: revenue, money
still outstanding, this month's billing and spend, plus the latest invoices
and expenses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Sequence

from bizbooks.domain.services.access_control import UserContext, visible

logger = logging.getLogger("dashboard_stats")

ZERO = Decimal("0")
RECENT_LIMIT = 5


@dataclass
class DashboardStats:
    total_firms: int = 0
    total_clients: int = 0
    total_invoices: int = 0
    total_revenue: Decimal = ZERO
    pending_amount: Decimal = ZERO
    this_month_revenue: Decimal = ZERO
    total_expenses: Decimal = ZERO
    recent_invoices: list[Any] = field(default_factory=list)
    recent_expenses: list[Any] = field(default_factory=list)


def _dec(value) -> Decimal:
    if value is None:
        return ZERO
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _in_month(value: date | datetime | None, today: date) -> bool:
    if value is None:
        return False
    return value.month == today.month and value.year == today.year


def _newest_first(records: Sequence[Any], limit: int) -> list[Any]:
    def _key(r):
        ts = r.created_at
        # sqlite hands back naive datetimes; compare them as UTC
        return ts.replace(tzinfo=None) if ts is not None else datetime.min

    return sorted(records, key=_key, reverse=True)[:limit]


def compute_dashboard(
    user: UserContext | None,
    firms: Sequence[Any],
    clients: Sequence[Any],
    invoices: Sequence[Any],
    expenses: Sequence[Any],
    today: date,
) -> DashboardStats:
    """
    Build the dashboard figures for *user*.

    Firms, invoices and expenses are filtered by firm access; clients are
    shared and always counted in full.
    """
    my_firms = visible(user, firms, attr="id")
    my_invoices = visible(user, invoices)
    my_expenses = visible(user, expenses)

    stats = DashboardStats(
        total_firms=len(my_firms),
        total_clients=len(clients),
        total_invoices=len(my_invoices),
    )

    for inv in my_invoices:
        grand = _dec(inv.grand_total)
        stats.total_revenue += grand
        if inv.payment_status != "paid":
            stats.pending_amount += _dec(inv.pending_amount)
        if _in_month(inv.invoice_date, today):
            stats.this_month_revenue += grand

    for exp in my_expenses:
        stats.total_expenses += _dec(exp.amount)

    stats.recent_invoices = _newest_first(my_invoices, RECENT_LIMIT)
    stats.recent_expenses = _newest_first(my_expenses, RECENT_LIMIT)

    logger.debug(
        "dashboard user=%s firms=%d invoices=%d revenue=%s",
        user.id if user else None, stats.total_firms, stats.total_invoices, stats.total_revenue,
    )
    return stats
