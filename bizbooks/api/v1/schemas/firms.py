# bizbooks/api/v1/schemas/firms.py
"""Request and response schemas for firm endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LetterheadType = Literal["template", "custom"]


def _not_null(value):
    if value is None:
        raise ValueError("may not be null")
    return value


class FirmCreate(BaseModel):
    """A business the user bills from."""

    name: str = Field(min_length=1, max_length=200)
    proprietor: str = Field(min_length=1, max_length=120)
    description: str = Field(min_length=1, max_length=255)
    phone: str = Field(min_length=1, max_length=60)
    permanent_address: str = Field(min_length=1)
    present_address: str | None = None
    gst_number: str | None = Field(default=None, max_length=20)
    account_number: str | None = Field(default=None, max_length=30)
    ifsc_code: str | None = Field(default=None, max_length=15)
    letterhead_type: LetterheadType = "template"
    letterhead_url: str | None = Field(default=None, max_length=500)


class FirmUpdate(BaseModel):
    """Partial update; omitted fields are left alone."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    proprietor: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, min_length=1, max_length=60)
    permanent_address: str | None = Field(default=None, min_length=1)
    present_address: str | None = None
    gst_number: str | None = Field(default=None, max_length=20)
    account_number: str | None = Field(default=None, max_length=30)
    ifsc_code: str | None = Field(default=None, max_length=15)
    letterhead_type: LetterheadType | None = None
    letterhead_url: str | None = Field(default=None, max_length=500)

    check_not_null = field_validator(
        "name", "proprietor", "description", "phone", "permanent_address", "letterhead_type",
    )(_not_null)


class FirmDetail(BaseModel):
    id: str
    name: str
    description: str | None
    proprietor: str | None
    gst_number: str | None
    permanent_address: str | None
    present_address: str | None
    phone: str | None
    account_number: str | None
    ifsc_code: str | None
    letterhead_type: str
    letterhead_url: str | None
    gst_registered: bool = False

    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
