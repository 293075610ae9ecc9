# bizbooks/api/v1/schemas/dashboard.py
"""Response schema for the dashboard summary."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


class DashboardSummary(BaseModel):
    total_firms: int
    total_clients: int
    total_invoices: int
    total_revenue: Decimal
    pending_amount: Decimal
    this_month_revenue: Decimal
    total_expenses: Decimal
    display: dict[str, str] = Field(default_factory=dict, description="INR-formatted amounts")
    recent_invoices: list[dict[str, Any]] = Field(default_factory=list)
    recent_expenses: list[dict[str, Any]] = Field(default_factory=list)
