# bizbooks/domain/services/reference_data.py
"""
Fixed option lists shared by the forms and validators: GST slabs, Indian
states / UTs, invoice payment statuses and expense categories.
"""

from __future__ import annotations

from decimal import Decimal

GST_RATES: list[dict] = [
    {"value": 0, "label": "0% (Exempt)"},
    {"value": 5, "label": "5%"},
    {"value": 12, "label": "12%"},
    {"value": 18, "label": "18%"},
    {"value": 28, "label": "28%"},
]

ALLOWED_GST_RATES: frozenset[Decimal] = frozenset(Decimal(r["value"]) for r in GST_RATES)

INDIAN_STATES: list[str] = [
    "Andhra Pradesh", "Arunachal Pradesh", "Assam", "Bihar", "Chhattisgarh",
    "Goa", "Gujarat", "Haryana", "Himachal Pradesh", "Jharkhand", "Karnataka",
    "Kerala", "Madhya Pradesh", "Maharashtra", "Manipur", "Meghalaya", "Mizoram",
    "Nagaland", "Odisha", "Punjab", "Rajasthan", "Sikkim", "Tamil Nadu",
    "Telangana", "Tripura", "Uttar Pradesh", "Uttarakhand", "West Bengal",
    "Delhi", "Jammu and Kashmir", "Ladakh", "Puducherry", "Chandigarh",
    "Dadra and Nagar Haveli and Daman and Diu", "Lakshadweep",
    "Andaman and Nicobar Islands",
]

PAYMENT_STATUSES: list[dict] = [
    {"value": "pending", "label": "Pending"},
    {"value": "partial", "label": "Partially Paid"},
    {"value": "paid", "label": "Fully Paid"},
]

EXPENSE_CATEGORIES: list[str] = [
    "Fuel", "Maintenance", "Equipment", "Materials", "Labor", "Transport",
    "Office Supplies", "Professional Services", "Utilities", "Other",
]

INVOICE_UNITS: list[str] = ["Hours", "Days", "Pieces", "Kg", "Meters", "Job"]

# images plus PDF and Word documents
ATTACHMENT_TYPES: list[str] = [
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
]


def payment_status_label(status: str) -> str:
    for item in PAYMENT_STATUSES:
        if item["value"] == status:
            return item["label"]
    return status


def is_allowed_attachment_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    return content_type.startswith("image/") or content_type in ATTACHMENT_TYPES


def is_allowed_gst_rate(rate) -> bool:
    try:
        return Decimal(str(rate)) in ALLOWED_GST_RATES
    except ArithmeticError:
        return False


def as_dict() -> dict:
    """All reference lists, as served to the client."""
    return {
        "gst_rates": GST_RATES,
        "indian_states": INDIAN_STATES,
        "payment_statuses": PAYMENT_STATUSES,
        "expense_categories": EXPENSE_CATEGORIES,
        "invoice_units": INVOICE_UNITS,
    }
