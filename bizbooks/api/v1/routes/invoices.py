# bizbooks/api/v1/routes/invoices.py
"""
Invoice calculation, CRUD, and PDF download endpoints.
"""

from __future__ import annotations

import io
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from bizbooks.api.deps import accessible_firm_ids, get_current_user, require_firm_access
from bizbooks.api.v1.envelope import ok, paginate
from bizbooks.api.v1.schemas.invoices import (
    CalculateRequest,
    InvoiceCreate,
    InvoiceDetail,
    InvoiceTotalsOut,
    InvoiceUpdate,
    PaymentCreate,
)
from bizbooks.core.db import get_db
from bizbooks.domain.services.access_control import UserContext, has_access_to_firm
from bizbooks.domain.services.currency import format_inr
from bizbooks.domain.services.invoice_calculator import compute_totals
from bizbooks.domain.services.invoice_pdf import generate_invoice_pdf
from bizbooks.domain.services.record_filters import (
    UNKNOWN_CLIENT,
    UNKNOWN_FIRM,
    invoice_matches,
    name_lookup,
    status_matches,
)
from bizbooks.domain.services.reference_data import PAYMENT_STATUSES, payment_status_label
from bizbooks.infrastructure.audit import log_record_action
from bizbooks.infrastructure.db.models import Client, Firm, Invoice
from bizbooks.infrastructure.db.repositories import (
    ClientRepository,
    FirmRepository,
    InvoiceRepository,
)

logger = logging.getLogger("api.v1.invoices")

router = APIRouter(prefix="/invoices", tags=["Invoices"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _invoice_to_detail(inv: Invoice, firm_name: str, client_name: str) -> dict:
    """Convert an Invoice ORM object to an InvoiceDetail dict."""
    detail = InvoiceDetail.model_validate(inv)
    detail.firm_name = firm_name
    detail.client_name = client_name
    detail.payment_status_label = payment_status_label(inv.payment_status)
    return detail.model_dump()


def _row_to_dict(row) -> dict:
    if row is None:
        return {}
    return {col.name: getattr(row, col.name) for col in row.__table__.columns}


async def _get_accessible_invoice(invoice_id: str, user: UserContext, db: AsyncSession) -> Invoice:
    inv = await InvoiceRepository(db).get_by_id(invoice_id)
    if inv is None or not has_access_to_firm(user, inv.firm_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return inv


async def _require_client(client_id: str, db: AsyncSession) -> Client:
    client = await ClientRepository(db).get_by_id(client_id)
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return client


async def _names_for(inv: Invoice, db: AsyncSession) -> tuple[Firm | None, Client | None]:
    firm = await FirmRepository(db).get_by_id(inv.firm_id) if inv.firm_id else None
    client = await ClientRepository(db).get_by_id(inv.client_id) if inv.client_id else None
    return firm, client


def _detail_with_names(inv: Invoice, firm: Firm | None, client: Client | None) -> dict:
    return _invoice_to_detail(
        inv,
        firm.name if firm else UNKNOWN_FIRM,
        client.name if client else UNKNOWN_CLIENT,
    )


# ---------------------------------------------------------------------------
# Calculate
# ---------------------------------------------------------------------------

@router.post("/calculate", response_model=dict)
async def calculate_invoice(
    body: CalculateRequest,
    user: UserContext = Depends(get_current_user),
):
    """
    Preview the totals for a line item without saving anything.

    Blank, non-numeric or negative inputs count as zero.
    """
    totals = compute_totals(
        body.rate,
        body.quantity,
        body.gst_rate,
        body.extra_charges,
        body.extra_deductions,
    )
    out = InvoiceTotalsOut(
        taxable_amount=totals.taxable_amount,
        cgst_amount=totals.cgst_amount,
        sgst_amount=totals.sgst_amount,
        igst_amount=totals.igst_amount,
        tax_amount=totals.tax_amount,
        grand_total=totals.grand_total,
        display={
            "taxable_amount": format_inr(totals.taxable_amount),
            "cgst_amount": format_inr(totals.cgst_amount),
            "sgst_amount": format_inr(totals.sgst_amount),
            "igst_amount": format_inr(totals.igst_amount),
            "grand_total": format_inr(totals.grand_total),
        },
    )
    return ok(data=out.model_dump())


# ---------------------------------------------------------------------------
# List / get
# ---------------------------------------------------------------------------

@router.get("", response_model=dict)
async def list_invoices(
    search: str | None = Query(default=None, description="Match on invoice number, firm or client name"),
    payment_status: str | None = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List invoices for the user's firms, newest first."""
    known = [s["value"] for s in PAYMENT_STATUSES]
    if payment_status not in (None, "all", *known):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"status must be one of all, {', '.join(known)}",
        )

    invoices = await InvoiceRepository(db).list_for_firms(accessible_firm_ids(user))
    firm_names = name_lookup(await FirmRepository(db).list_all(), UNKNOWN_FIRM)
    client_names = name_lookup(await ClientRepository(db).list_all(), UNKNOWN_CLIENT)

    items = []
    for inv in invoices:
        firm_name = firm_names[inv.firm_id]
        client_name = client_names[inv.client_id]
        if not invoice_matches(inv, search, firm_name, client_name):
            continue
        if not status_matches(inv, payment_status):
            continue
        items.append(_invoice_to_detail(inv, firm_name, client_name))

    return paginate(items, limit=limit, offset=offset)


@router.get("/{invoice_id}", response_model=dict)
async def get_invoice(
    invoice_id: str,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    inv = await _get_accessible_invoice(invoice_id, user, db)
    firm, client = await _names_for(inv, db)
    return ok(data=_detail_with_names(inv, firm, client))


# ---------------------------------------------------------------------------
# Create / update / delete
# ---------------------------------------------------------------------------

@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    body: InvoiceCreate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create an invoice; totals are computed from the line inputs."""
    firm = await require_firm_access(body.firm_id, user, db)
    client = await _require_client(body.client_id, db)

    inv = await InvoiceRepository(db).create_from_inputs(**body.model_dump())
    log_record_action(
        "create", "invoice", inv.id, user_id=user.id, user_email=user.email,
        details={"invoice_number": inv.invoice_number, "grand_total": str(inv.grand_total)},
    )
    return ok(data=_detail_with_names(inv, firm, client), message="Invoice created")


@router.put("/{invoice_id}", response_model=dict)
async def update_invoice(
    invoice_id: str,
    body: InvoiceUpdate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    inv = await _get_accessible_invoice(invoice_id, user, db)
    changes = body.model_dump(exclude_unset=True)
    if changes.get("client_id"):
        await _require_client(changes["client_id"], db)

    inv = await InvoiceRepository(db).update_inputs(inv, **changes)
    log_record_action(
        "update", "invoice", inv.id, user_id=user.id, user_email=user.email,
        details={"fields": sorted(changes), "grand_total": str(inv.grand_total)},
    )
    firm, client = await _names_for(inv, db)
    return ok(data=_detail_with_names(inv, firm, client), message="Invoice updated")


@router.delete("/{invoice_id}", response_model=dict)
async def delete_invoice(
    invoice_id: str,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    inv = await _get_accessible_invoice(invoice_id, user, db)
    await InvoiceRepository(db).delete(inv)
    log_record_action("delete", "invoice", invoice_id, user_id=user.id, user_email=user.email)
    return ok(message="Invoice deleted")


@router.post("/{invoice_id}/payments", response_model=dict)
async def record_payment(
    invoice_id: str,
    body: PaymentCreate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Record a payment received against an invoice."""
    inv = await _get_accessible_invoice(invoice_id, user, db)
    inv = await InvoiceRepository(db).record_payment(inv, body.amount)
    log_record_action(
        "payment", "invoice", inv.id, user_id=user.id, user_email=user.email,
        details={"amount": str(body.amount), "status": inv.payment_status},
    )
    firm, client = await _names_for(inv, db)
    return ok(data=_detail_with_names(inv, firm, client), message="Payment recorded")

# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------

@router.get("/{invoice_id}/pdf")
async def download_invoice_pdf(
    invoice_id: str,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Download the invoice as a TAX INVOICE PDF."""
    inv = await _get_accessible_invoice(invoice_id, user, db)
    firm, client = await _names_for(inv, db)

    pdf_bytes = generate_invoice_pdf({
        "invoice": _row_to_dict(inv),
        "firm": _row_to_dict(firm),
        "client": _row_to_dict(client),
    })

    safe_number = (inv.invoice_number or inv.id).replace("/", "-")
    filename = f"invoice_{safe_number}.pdf"
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
