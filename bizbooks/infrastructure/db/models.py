import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, Date, DateTime, Numeric, String, Text

from bizbooks.infrastructure.db.base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    id = Column(String(36), primary_key=True, default=_new_id)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)


class User(TimestampMixin, Base):
    __tablename__ = "users"
    name = Column(String(120), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(10), nullable=False, default="user")
    firm_access = Column(JSON, nullable=False, default=list)


class Firm(TimestampMixin, Base):
    __tablename__ = "firms"
    name = Column(String(200), nullable=False)
    description = Column(String(255), default="")
    proprietor = Column(String(120))
    gst_number = Column(String(20))
    permanent_address = Column(Text)
    present_address = Column(Text)
    phone = Column(String(60))
    account_number = Column(String(30))
    ifsc_code = Column(String(15))
    letterhead_type = Column(String(10), nullable=False, default="template")
    letterhead_url = Column(String(500))


class Client(TimestampMixin, Base):
    __tablename__ = "clients"
    name = Column(String(200), nullable=False)
    email = Column(String(255), default="")
    phone = Column(String(60), default="")
    address = Column(Text)
    state = Column(String(60))
    pincode = Column(String(10))
    gst_number = Column(String(20))


class Invoice(TimestampMixin, Base):
    __tablename__ = "invoices"
    invoice_number = Column(String(50), nullable=False, index=True)
    firm_id = Column(String(36), index=True)
    client_id = Column(String(36), index=True)
    invoice_date = Column(Date)
    description = Column(Text)
    sac_code = Column(String(10))
    unit = Column(String(20), default="Hours")

    # Line item inputs
    rate = Column(Numeric(14, 2), nullable=False, default=0)
    quantity = Column(Numeric(12, 3), nullable=False, default=0)
    gst_rate = Column(Numeric(5, 2), nullable=False, default=0)
    extra_charges = Column(Numeric(14, 2), nullable=False, default=0)
    extra_deductions = Column(Numeric(14, 2), nullable=False, default=0)

    # Totals snapshot (see domain.services.invoice_calculator)
    total_amount = Column(Numeric(14, 2), nullable=False, default=0)
    cgst_amount = Column(Numeric(14, 2), nullable=False, default=0)
    sgst_amount = Column(Numeric(14, 2), nullable=False, default=0)
    igst_amount = Column(Numeric(14, 2), nullable=False, default=0)
    grand_total = Column(Numeric(14, 2), nullable=False, default=0)

    payment_status = Column(String(10), nullable=False, default="pending")
    paid_amount = Column(Numeric(14, 2), nullable=False, default=0)
    pending_amount = Column(Numeric(14, 2), nullable=False, default=0)


class Expense(TimestampMixin, Base):
    __tablename__ = "expenses"
    firm_id = Column(String(36), index=True)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False, default=0)
    category = Column(String(40), nullable=False, default="Other")
    date = Column(Date)
    attachments = Column(JSON, nullable=False, default=list)
