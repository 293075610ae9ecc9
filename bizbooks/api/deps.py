# bizbooks/api/deps.py
"""
FastAPI dependencies shared by the v1 routes.

Primary dependency: ``get_current_user``. It extracts and validates a Bearer JWT
from the Authorization header and returns the caller as a
:class:`UserContext`. Handlers receive it explicitly; there is no global
"current user".
"""

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Header, status
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from bizbooks.core.db import get_db
from bizbooks.domain.services.access_control import UserContext, has_access_to_firm
from bizbooks.domain.services.demo_auth import decode_access_token
from bizbooks.infrastructure.db.repositories import FirmRepository, UserRepository

logger = logging.getLogger("api.deps")


async def get_current_user(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> UserContext:
    """
    Validate the ``Authorization: Bearer <jwt>`` header and return the caller.

    Raises HTTP 401 if the token is missing, invalid, expired, or the user
    does not exist.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header. Expected: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[7:]  # strip "Bearer "

    try:
        user_id = decode_access_token(token)
    except JWTError as exc:
        logger.debug("JWT decode failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return UserContext.from_user(user)


def accessible_firm_ids(user: UserContext) -> list[str] | None:
    """Firm ids the user may see, or ``None`` meaning every firm."""
    return None if user.is_admin else list(user.firm_access)


async def require_firm_access(firm_id: str, user: UserContext, db: AsyncSession):
    """
    Load a firm the user is about to attach a record to.

    404 if the firm does not exist, 403 if it exists but is out of reach.
    """
    firm = await FirmRepository(db).get_by_id(firm_id)
    if firm is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Firm not found")
    if not has_access_to_firm(user, firm.id):
        logger.warning("user %s denied access to firm %s", user.id, firm_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No access to this firm")
    return firm
