# bizbooks/api/v1/schemas/clients.py
"""Request and response schemas for client endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from bizbooks.domain.services.reference_data import INDIAN_STATES


def _not_null(value):
    if value is None:
        raise ValueError("may not be null")
    return value


def _check_state(value: str | None) -> str | None:
    if value in (None, ""):
        return value
    if value not in INDIAN_STATES:
        raise ValueError("state must be an Indian state or union territory")
    return value


class ClientCreate(BaseModel):
    """A customer that invoices are raised against."""

    name: str = Field(min_length=1, max_length=200)
    phone: str = Field(min_length=1, max_length=60)
    email: EmailStr
    address: str = Field(min_length=1)
    pincode: str = Field(min_length=6, max_length=6, pattern=r"^\d{6}$")
    state: str | None = None
    gst_number: str | None = Field(default=None, max_length=20)

    check_state = field_validator("state")(_check_state)


class ClientUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    phone: str | None = Field(default=None, min_length=1, max_length=60)
    email: EmailStr | None = None
    address: str | None = Field(default=None, min_length=1)
    pincode: str | None = Field(default=None, pattern=r"^\d{6}$")
    state: str | None = None
    gst_number: str | None = Field(default=None, max_length=20)

    check_state = field_validator("state")(_check_state)
    check_not_null = field_validator("name", "phone", "email", "address", "pincode")(_not_null)


class ClientDetail(BaseModel):
    id: str
    name: str
    email: str | None
    phone: str | None
    address: str | None
    state: str | None
    pincode: str | None
    gst_number: str | None

    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
