# bizbooks/api/v1/routes/dashboard.py
"""Dashboard summary endpoint."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bizbooks.api.deps import accessible_firm_ids, get_current_user
from bizbooks.api.v1.envelope import ok
from bizbooks.api.v1.schemas.dashboard import DashboardSummary
from bizbooks.core.db import get_db
from bizbooks.domain.services.access_control import UserContext
from bizbooks.domain.services.currency import format_date_in, format_inr
from bizbooks.domain.services.dashboard_stats import compute_dashboard
from bizbooks.domain.services.record_filters import UNKNOWN_CLIENT, UNKNOWN_FIRM, name_lookup
from bizbooks.domain.services.reference_data import payment_status_label
from bizbooks.infrastructure.db.repositories import (
    ClientRepository,
    ExpenseRepository,
    FirmRepository,
    InvoiceRepository,
)

logger = logging.getLogger("api.v1.dashboard")

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=dict)
async def get_dashboard(
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Headline figures and the latest activity across the user's firms."""
    firm_ids = accessible_firm_ids(user)
    all_firms = await FirmRepository(db).list_all()
    clients = await ClientRepository(db).list_all()
    invoices = await InvoiceRepository(db).list_for_firms(firm_ids)
    expenses = await ExpenseRepository(db).list_for_firms(firm_ids)

    stats = compute_dashboard(user, all_firms, clients, invoices, expenses, today=date.today())

    firm_names = name_lookup(all_firms, UNKNOWN_FIRM)
    client_names = name_lookup(clients, UNKNOWN_CLIENT)

    summary = DashboardSummary(
        total_firms=stats.total_firms,
        total_clients=stats.total_clients,
        total_invoices=stats.total_invoices,
        total_revenue=stats.total_revenue,
        pending_amount=stats.pending_amount,
        this_month_revenue=stats.this_month_revenue,
        total_expenses=stats.total_expenses,
        display={
            "total_revenue": format_inr(stats.total_revenue),
            "pending_amount": format_inr(stats.pending_amount),
            "this_month_revenue": format_inr(stats.this_month_revenue),
            "total_expenses": format_inr(stats.total_expenses),
        },
        recent_invoices=[
            {
                "id": inv.id,
                "invoice_number": inv.invoice_number,
                "client_name": client_names[inv.client_id],
                "firm_name": firm_names[inv.firm_id],
                "invoice_date": format_date_in(inv.invoice_date),
                "grand_total": inv.grand_total,
                "grand_total_display": format_inr(inv.grand_total),
                "payment_status": inv.payment_status,
                "payment_status_label": payment_status_label(inv.payment_status),
            }
            for inv in stats.recent_invoices
        ],
        recent_expenses=[
            {
                "id": exp.id,
                "description": exp.description,
                "category": exp.category,
                "firm_name": firm_names[exp.firm_id],
                "date": format_date_in(exp.date),
                "amount": exp.amount,
                "amount_display": format_inr(exp.amount),
            }
            for exp in stats.recent_expenses
        ],
    )
    return ok(data=summary.model_dump())
