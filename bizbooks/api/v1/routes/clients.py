# bizbooks/api/v1/routes/clients.py
"""
Client CRUD endpoints.

Clients are shared by every firm, so any signed-in user sees all of them.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizbooks.api.deps import get_current_user
from bizbooks.api.v1.envelope import ok, paginate
from bizbooks.api.v1.schemas.clients import ClientCreate, ClientDetail, ClientUpdate
from bizbooks.core.db import get_db
from bizbooks.domain.services.access_control import UserContext
from bizbooks.domain.services.record_filters import client_matches
from bizbooks.infrastructure.audit import log_record_action
from bizbooks.infrastructure.db.models import Client
from bizbooks.infrastructure.db.repositories import ClientRepository

logger = logging.getLogger("api.v1.clients")

router = APIRouter(prefix="/clients", tags=["Clients"])


def _client_to_detail(client: Client) -> dict:
    return ClientDetail.model_validate(client).model_dump()


async def _get_client(client_id: str, db: AsyncSession) -> Client:
    client = await ClientRepository(db).get_by_id(client_id)
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return client


@router.get("", response_model=dict)
async def list_clients(
    search: str | None = Query(default=None, description="Match on name, email or phone"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    clients = await ClientRepository(db).list_all()
    matching = [_client_to_detail(c) for c in clients if client_matches(c, search)]
    return paginate(matching, limit=limit, offset=offset)


@router.get("/{client_id}", response_model=dict)
async def get_client(
    client_id: str,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    client = await _get_client(client_id, db)
    return ok(data=_client_to_detail(client))


@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_client(
    body: ClientCreate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    client = await ClientRepository(db).create(**body.model_dump())
    log_record_action("create", "client", client.id, user_id=user.id, user_email=user.email)
    return ok(data=_client_to_detail(client), message="Client created")


@router.put("/{client_id}", response_model=dict)
async def update_client(
    client_id: str,
    body: ClientUpdate,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    client = await _get_client(client_id, db)
    changes = body.model_dump(exclude_unset=True)
    client = await ClientRepository(db).update(client, **changes)
    log_record_action(
        "update", "client", client.id, user_id=user.id, user_email=user.email,
        details={"fields": sorted(changes)},
    )
    return ok(data=_client_to_detail(client), message="Client updated")


@router.delete("/{client_id}", response_model=dict)
async def delete_client(
    client_id: str,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a client. Invoices raised against it show 'Unknown Client'."""
    client = await _get_client(client_id, db)
    await ClientRepository(db).delete(client)
    log_record_action("delete", "client", client_id, user_id=user.id, user_email=user.email)
    return ok(message="Client deleted")
