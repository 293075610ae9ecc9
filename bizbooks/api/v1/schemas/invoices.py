# bizbooks/api/v1/schemas/invoices.py
"""Request and response schemas for invoice endpoints."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator

from bizbooks.domain.services.reference_data import GST_RATES, INVOICE_UNITS, is_allowed_gst_rate

_GST_CHOICES = ", ".join(str(r["value"]) for r in GST_RATES)


def _not_null(value):
    if value is None:
        raise ValueError("may not be null")
    return value


def _check_gst_rate(value):
    if value is not None and not is_allowed_gst_rate(value):
        raise ValueError(f"gst_rate must be one of {_GST_CHOICES}")
    return value


def _check_unit(value):
    if value is not None and value not in INVOICE_UNITS:
        raise ValueError(f"unit must be one of {', '.join(INVOICE_UNITS)}")
    return value


class CalculateRequest(BaseModel):
    """
    Raw line-item inputs as typed into the invoice form.

    Values are deliberately untyped: blanks, text and negatives are read as
    zero by the calculator instead of being rejected.
    """

    rate: Any = None
    quantity: Any = None
    gst_rate: Any = None
    extra_charges: Any = None
    extra_deductions: Any = None


class InvoiceTotalsOut(BaseModel):
    taxable_amount: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    igst_amount: Decimal
    tax_amount: Decimal
    grand_total: Decimal
    display: dict[str, str] = Field(default_factory=dict, description="INR-formatted amounts")


class InvoiceCreate(BaseModel):
    """Create an invoice; totals are computed server-side."""

    invoice_number: str = Field(min_length=1, max_length=50)
    firm_id: str = Field(min_length=1)
    client_id: str = Field(min_length=1)
    invoice_date: date
    description: str = Field(min_length=1)
    sac_code: str | None = Field(default=None, max_length=10)
    unit: str = "Hours"

    rate: Decimal = Field(ge=0)
    quantity: Decimal = Field(ge=0)
    gst_rate: Decimal = Decimal("18")
    extra_charges: Decimal = Field(default=Decimal("0"), ge=0)
    extra_deductions: Decimal = Field(default=Decimal("0"), ge=0)

    check_gst_rate = field_validator("gst_rate")(_check_gst_rate)
    check_unit = field_validator("unit")(_check_unit)


class InvoiceUpdate(BaseModel):
    """Partial update; changing any line input recomputes the totals."""

    invoice_number: str | None = Field(default=None, min_length=1, max_length=50)
    client_id: str | None = Field(default=None, min_length=1)
    invoice_date: date | None = None
    description: str | None = Field(default=None, min_length=1)
    sac_code: str | None = Field(default=None, max_length=10)
    unit: str | None = None

    rate: Decimal | None = Field(default=None, ge=0)
    quantity: Decimal | None = Field(default=None, ge=0)
    gst_rate: Decimal | None = None
    extra_charges: Decimal | None = Field(default=None, ge=0)
    extra_deductions: Decimal | None = Field(default=None, ge=0)

    check_gst_rate = field_validator("gst_rate")(_check_gst_rate)
    check_unit = field_validator("unit")(_check_unit)
    check_not_null = field_validator(
        "invoice_number", "client_id", "invoice_date", "description", "unit",
        "rate", "quantity", "gst_rate", "extra_charges", "extra_deductions",
    )(_not_null)


class PaymentCreate(BaseModel):
    """A payment received against an invoice."""

    amount: Decimal = Field(gt=0)


class InvoiceDetail(BaseModel):
    """Full invoice detail returned in responses."""

    id: str
    invoice_number: str
    firm_id: str | None
    client_id: str | None
    firm_name: str | None = None
    client_name: str | None = None
    invoice_date: date | None
    description: str | None
    sac_code: str | None
    unit: str | None

    rate: Decimal
    quantity: Decimal
    gst_rate: Decimal
    extra_charges: Decimal
    extra_deductions: Decimal

    total_amount: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    igst_amount: Decimal
    grand_total: Decimal

    payment_status: str
    payment_status_label: str | None = None
    paid_amount: Decimal
    pending_amount: Decimal

    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
