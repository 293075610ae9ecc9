"""create users, firms, clients, invoices and expenses

Revision ID: 3f1a9c2e7b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f1a9c2e7b10"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _money(name: str) -> sa.Column:
    return sa.Column(name, sa.Numeric(14, 2), nullable=False, server_default="0")


def upgrade() -> None:
    op.create_table(
        "users",
        *_timestamps(),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=10), nullable=False, server_default="user"),
        sa.Column("firm_access", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "firms",
        *_timestamps(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("proprietor", sa.String(length=120), nullable=True),
        sa.Column("gst_number", sa.String(length=20), nullable=True),
        sa.Column("permanent_address", sa.Text(), nullable=True),
        sa.Column("present_address", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(length=60), nullable=True),
        sa.Column("account_number", sa.String(length=30), nullable=True),
        sa.Column("ifsc_code", sa.String(length=15), nullable=True),
        sa.Column("letterhead_type", sa.String(length=10), nullable=False, server_default="template"),
        sa.Column("letterhead_url", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "clients",
        *_timestamps(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=60), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("state", sa.String(length=60), nullable=True),
        sa.Column("pincode", sa.String(length=10), nullable=True),
        sa.Column("gst_number", sa.String(length=20), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "invoices",
        *_timestamps(),
        sa.Column("invoice_number", sa.String(length=50), nullable=False),
        sa.Column("firm_id", sa.String(length=36), nullable=True),
        sa.Column("client_id", sa.String(length=36), nullable=True),
        sa.Column("invoice_date", sa.Date(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sac_code", sa.String(length=10), nullable=True),
        sa.Column("unit", sa.String(length=20), nullable=True),
        _money("rate"),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False, server_default="0"),
        sa.Column("gst_rate", sa.Numeric(5, 2), nullable=False, server_default="0"),
        _money("extra_charges"),
        _money("extra_deductions"),
        _money("total_amount"),
        _money("cgst_amount"),
        _money("sgst_amount"),
        _money("igst_amount"),
        _money("grand_total"),
        sa.Column("payment_status", sa.String(length=10), nullable=False, server_default="pending"),
        _money("paid_amount"),
        _money("pending_amount"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_invoices_invoice_number"), "invoices", ["invoice_number"], unique=False)
    op.create_index(op.f("ix_invoices_firm_id"), "invoices", ["firm_id"], unique=False)
    op.create_index(op.f("ix_invoices_client_id"), "invoices", ["client_id"], unique=False)

    op.create_table(
        "expenses",
        *_timestamps(),
        sa.Column("firm_id", sa.String(length=36), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        _money("amount"),
        sa.Column("category", sa.String(length=40), nullable=False, server_default="Other"),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("attachments", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_expenses_firm_id"), "expenses", ["firm_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_expenses_firm_id"), table_name="expenses")
    op.drop_table("expenses")
    op.drop_index(op.f("ix_invoices_client_id"), table_name="invoices")
    op.drop_index(op.f("ix_invoices_firm_id"), table_name="invoices")
    op.drop_index(op.f("ix_invoices_invoice_number"), table_name="invoices")
    op.drop_table("invoices")
    op.drop_table("clients")
    op.drop_table("firms")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
