# bizbooks/api/v1/routes/expenses.py
"""
Expense CRUD and attachment endpoints.

The list endpoint filters by text, category, firm and date window, and
reports the total of everything that matched (not just the current page).
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizbooks.api.deps import accessible_firm_ids, get_current_user, require_firm_access
from bizbooks.api.v1.envelope import ok, paginate
from bizbooks.api.v1.schemas.expenses import (
    AttachmentInfo,
    ExpenseCreate,
    ExpenseDetail,
    ExpenseUpdate,
)
from bizbooks.core.config import settings
from bizbooks.core.db import get_db
from bizbooks.domain.services.access_control import UserContext, has_access_to_firm
from bizbooks.domain.services.currency import format_inr
from bizbooks.domain.services.record_filters import (
    ALL,
    DATE_WINDOWS,
    UNKNOWN_FIRM,
    expense_in_window,
    expense_matches,
    name_lookup,
)
from bizbooks.domain.services.reference_data import is_allowed_attachment_type
from bizbooks.infrastructure.audit import log_record_action
from bizbooks.infrastructure.db.models import Expense
from bizbooks.infrastructure.db.repositories import ExpenseRepository, FirmRepository

logger = logging.getLogger("api.v1.expenses")

router = APIRouter(prefix="/expenses", tags=["Expenses"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _expense_to_detail(exp: Expense, firm_name: str) -> dict:
    detail = ExpenseDetail.model_validate(exp)
    detail.firm_name = firm_name
    return detail.model_dump()


async def _get_accessible_expense(expense_id: str, user: UserContext, db: AsyncSession) -> Expense:
    exp = await ExpenseRepository(db).get_by_id(expense_id)
    if exp is None or not has_access_to_firm(user, exp.firm_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")
    return exp


async def _firm_name(firm_id: str | None, db: AsyncSession) -> str:
    firm = await FirmRepository(db).get_by_id(firm_id) if firm_id else None
    return firm.name if firm else UNKNOWN_FIRM


# ---------------------------------------------------------------------------
# List / get
# ---------------------------------------------------------------------------

@router.get("", response_model=dict)
async def list_expenses(
    search: str | None = Query(default=None, description="Match on description or category"),
    category: str | None = Query(default=None),
    firm_id: str | None = Query(default=None),
    window: str = Query(default=ALL, description="all | today | week | month | year"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List expenses for the user's firms, newest first."""
    if window not in DATE_WINDOWS:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"window must be one of {', '.join(DATE_WINDOWS)}",
        )

    expenses = await ExpenseRepository(db).list_for_firms(accessible_firm_ids(user))
    firm_names = name_lookup(await FirmRepository(db).list_all(), UNKNOWN_FIRM)
    today = date.today()

    items = []
    total = Decimal("0")
    for exp in expenses:
        if not expense_matches(exp, search):
            continue
        if category and category != ALL and exp.category != category:
            continue
        if firm_id and firm_id != ALL and exp.firm_id != firm_id:
            continue
        if not expense_in_window(exp.date, window, today):
            continue
        total += exp.amount or Decimal("0")
        items.append(_expense_to_detail(exp, firm_names[exp.firm_id]))

    summary = {"total_amount": total, "total_amount_display": format_inr(total)}
    return paginate(items, limit=limit, offset=offset, summary=summary)


@router.get("/{expense_id}", response_model=dict)
async def get_expense(
    expense_id: str,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exp = await _get_accessible_expense(expense_id, user, db)
    return ok(data=_expense_to_detail(exp, await _firm_name(exp.firm_id, db)))


# ---------------------------------------------------------------------------
# Create / update / delete
# ---------------------------------------------------------------------------

@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_expense(
    body: ExpenseCreate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    firm = await require_firm_access(body.firm_id, user, db)
    exp = await ExpenseRepository(db).create(**body.model_dump())
    log_record_action(
        "create", "expense", exp.id, user_id=user.id, user_email=user.email,
        details={"amount": str(exp.amount), "category": exp.category},
    )
    return ok(data=_expense_to_detail(exp, firm.name), message="Expense created")


@router.put("/{expense_id}", response_model=dict)
async def update_expense(
    expense_id: str,
    body: ExpenseUpdate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exp = await _get_accessible_expense(expense_id, user, db)
    changes = body.model_dump(exclude_unset=True)
    if changes.get("firm_id"):
        # moving an expense needs access to the target firm too
        await require_firm_access(changes["firm_id"], user, db)

    exp = await ExpenseRepository(db).update(exp, **changes)
    log_record_action(
        "update", "expense", exp.id, user_id=user.id, user_email=user.email,
        details={"fields": sorted(changes)},
    )
    return ok(data=_expense_to_detail(exp, await _firm_name(exp.firm_id, db)), message="Expense updated")


@router.delete("/{expense_id}", response_model=dict)
async def delete_expense(
    expense_id: str,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exp = await _get_accessible_expense(expense_id, user, db)
    await ExpenseRepository(db).delete(exp)
    log_record_action("delete", "expense", expense_id, user_id=user.id, user_email=user.email)
    return ok(message="Expense deleted")


# ---------------------------------------------------------------------------
# Attachments
# ---------------------------------------------------------------------------

@router.post("/{expense_id}/attachments", response_model=dict, status_code=status.HTTP_201_CREATED)
async def upload_attachment(
    expense_id: str,
    file: UploadFile = File(...),
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Attach a receipt (image, PDF or Word document) to an expense."""
    exp = await _get_accessible_expense(expense_id, user, db)

    content_type = file.content_type or ""
    if not is_allowed_attachment_type(content_type):
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Attachments must be images, PDF, DOC or DOCX files",
        )

    raw = await file.read()
    if len(raw) > settings.MAX_ATTACHMENT_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Attachments are limited to {settings.MAX_ATTACHMENT_BYTES // (1024 * 1024)}MB each",
        )

    attachment = await ExpenseRepository(db).add_attachment(
        exp, file.filename or "attachment", content_type, raw
    )
    log_record_action(
        "attach", "expense", exp.id, user_id=user.id, user_email=user.email,
        details={"attachment_id": attachment["id"], "name": attachment["name"], "size": attachment["size"]},
    )
    return ok(data=AttachmentInfo(**attachment).model_dump(), message="Attachment added")


@router.get("/{expense_id}/attachments/{attachment_id}")
async def download_attachment(
    expense_id: str,
    attachment_id: str,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exp = await _get_accessible_expense(expense_id, user, db)
    repo = ExpenseRepository(db)
    attachment = repo.find_attachment(exp, attachment_id)
    if attachment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attachment not found")

    filename = attachment["name"].replace('"', "").encode("ascii", "ignore").decode() or "attachment"
    return Response(
        content=repo.attachment_content(attachment),
        media_type=attachment["type"],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.delete("/{expense_id}/attachments/{attachment_id}", response_model=dict)
async def delete_attachment(
    expense_id: str,
    attachment_id: str,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exp = await _get_accessible_expense(expense_id, user, db)
    if not await ExpenseRepository(db).remove_attachment(exp, attachment_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attachment not found")
    log_record_action(
        "detach", "expense", exp.id, user_id=user.id, user_email=user.email,
        details={"attachment_id": attachment_id},
    )
    return ok(message="Attachment removed")
