# bizbooks/api/v1/schemas/expenses.py
"""Request and response schemas for expense endpoints."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from bizbooks.domain.services.reference_data import EXPENSE_CATEGORIES


def _not_null(value):
    if value is None:
        raise ValueError("may not be null")
    return value


def _check_category(value):
    if value is not None and value not in EXPENSE_CATEGORIES:
        raise ValueError(f"category must be one of {', '.join(EXPENSE_CATEGORIES)}")
    return value


class ExpenseCreate(BaseModel):
    """Files are added afterwards through the attachments endpoint."""

    firm_id: str = Field(min_length=1)
    description: str = Field(min_length=1)
    amount: Decimal = Field(ge=0)
    category: str = "Other"
    date: dt.date

    check_category = field_validator("category")(_check_category)


class ExpenseUpdate(BaseModel):
    firm_id: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    amount: Decimal | None = Field(default=None, ge=0)
    category: str | None = None
    date: dt.date | None = None

    check_category = field_validator("category")(_check_category)
    check_not_null = field_validator("firm_id", "description", "amount", "category", "date")(_not_null)


class AttachmentInfo(BaseModel):
    """A stored file, without its content."""

    id: str
    name: str
    size: int
    type: str


class ExpenseDetail(BaseModel):
    id: str
    firm_id: str | None
    firm_name: str | None = None
    description: str
    amount: Decimal
    category: str
    date: dt.date | None
    attachments: list[AttachmentInfo]

    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True
