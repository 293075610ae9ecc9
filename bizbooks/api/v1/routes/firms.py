# bizbooks/api/v1/routes/firms.py
"""
Firm CRUD endpoints.

Users only ever see the firms in their access list; a firm outside it is
reported as not found. Only admins can register new firms.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizbooks.api.deps import accessible_firm_ids, get_current_user
from bizbooks.api.v1.envelope import ok, paginate
from bizbooks.api.v1.schemas.firms import FirmCreate, FirmDetail, FirmUpdate
from bizbooks.core.db import get_db
from bizbooks.domain.services.access_control import UserContext, has_access_to_firm
from bizbooks.domain.services.record_filters import firm_matches
from bizbooks.infrastructure.audit import log_record_action
from bizbooks.infrastructure.db.models import Firm
from bizbooks.infrastructure.db.repositories import FirmRepository

logger = logging.getLogger("api.v1.firms")

router = APIRouter(prefix="/firms", tags=["Firms"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _firm_to_detail(firm: Firm) -> dict:
    detail = FirmDetail.model_validate(firm)
    detail.gst_registered = bool(firm.gst_number)
    return detail.model_dump()


async def _get_accessible_firm(firm_id: str, user: UserContext, db: AsyncSession) -> Firm:
    firm = await FirmRepository(db).get_by_id(firm_id)
    if firm is None or not has_access_to_firm(user, firm.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Firm not found")
    return firm


# ---------------------------------------------------------------------------
# List / get
# ---------------------------------------------------------------------------

@router.get("", response_model=dict)
async def list_firms(
    search: str | None = Query(default=None, description="Match on name or description"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the firms the user has access to."""
    firms = await FirmRepository(db).list_all(ids=accessible_firm_ids(user))
    matching = [_firm_to_detail(f) for f in firms if firm_matches(f, search)]
    return paginate(matching, limit=limit, offset=offset)


@router.get("/{firm_id}", response_model=dict)
async def get_firm(
    firm_id: str,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    firm = await _get_accessible_firm(firm_id, user, db)
    return ok(data=_firm_to_detail(firm))


# ---------------------------------------------------------------------------
# Create / update / delete
# ---------------------------------------------------------------------------

@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_firm(
    body: FirmCreate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Register a new firm (admins only)."""
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only admins can add firms")

    firm = await FirmRepository(db).create(**body.model_dump())
    log_record_action("create", "firm", firm.id, user_id=user.id, user_email=user.email)
    return ok(data=_firm_to_detail(firm), message="Firm created")


@router.put("/{firm_id}", response_model=dict)
async def update_firm(
    firm_id: str,
    body: FirmUpdate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    firm = await _get_accessible_firm(firm_id, user, db)
    changes = body.model_dump(exclude_unset=True)
    firm = await FirmRepository(db).update(firm, **changes)
    log_record_action(
        "update", "firm", firm.id, user_id=user.id, user_email=user.email,
        details={"fields": sorted(changes)},
    )
    return ok(data=_firm_to_detail(firm), message="Firm updated")


@router.delete("/{firm_id}", response_model=dict)
async def delete_firm(
    firm_id: str,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a firm. Its invoices and expenses are kept and show as 'Unknown Firm'."""
    firm = await _get_accessible_firm(firm_id, user, db)
    await FirmRepository(db).delete(firm)
    log_record_action("delete", "firm", firm_id, user_id=user.id, user_email=user.email)
    return ok(message="Firm deleted")
