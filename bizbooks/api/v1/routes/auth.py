# bizbooks/api/v1/routes/auth.py
"""
Demo login and profile endpoints.

Any seeded user can sign in with the shared demo password; the response
carries a bearer JWT (python-jose). Logging out is just dropping the token.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizbooks.api.deps import get_current_user
from bizbooks.api.v1.envelope import ok
from bizbooks.api.v1.schemas.auth import LoginRequest, TokenResponse, UserProfile
from bizbooks.core.db import get_db
from bizbooks.domain.services.access_control import UserContext
from bizbooks.domain.services.demo_auth import create_access_token, verify_demo_password
from bizbooks.infrastructure.audit import log_auth_event
from bizbooks.infrastructure.db.repositories import UserRepository

logger = logging.getLogger("api.v1.auth")

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=dict)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Exchange demo credentials for an access token."""
    user = await UserRepository(db).get_by_email(body.email)
    if user is None or not verify_demo_password(body.password):
        log_auth_event("login", email=body.email, ok=False)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    token, expires_in = create_access_token(user.id)
    log_auth_event("login", email=user.email)

    return ok(
        data=TokenResponse(
            access_token=token,
            expires_in=expires_in,
            user=UserProfile.model_validate(user),
        ).model_dump(),
        message="Logged in",
    )


@router.get("/me", response_model=dict)
async def me(
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Return the signed-in user's profile."""
    row = await UserRepository(db).get_by_id(user.id)
    return ok(data=UserProfile.model_validate(row).model_dump())
