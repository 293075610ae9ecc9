# bizbooks/domain/services/demo_auth.py
"""
Demo authentication: JWT-based sessions for the seeded users.

There are no stored passwords. A login succeeds when the email belongs to a
known user and the password equals the shared DEMO_PASSWORD. On success we
issue a signed JWT that the client sends back as ``Authorization: Bearer``.
"""

from __future__ import annotations

import hmac
import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from bizbooks.core.config import settings

logger = logging.getLogger("demo_auth")

TOKEN_TYPE = "user_access"


# ---------------------------------------------------------------------------
# Credential check
# ---------------------------------------------------------------------------

def verify_demo_password(password: str) -> bool:
    """Timing-safe comparison of the provided password against DEMO_PASSWORD."""
    if not settings.DEMO_PASSWORD or not password:
        return False
    return hmac.compare_digest(password.encode(), settings.DEMO_PASSWORD.encode())


# ---------------------------------------------------------------------------
# JWT creation / decoding
# ---------------------------------------------------------------------------

def create_access_token(user_id: str) -> tuple[str, int]:
    """Return (encoded_jwt, expires_in_seconds) for an authenticated user."""
    expire_minutes = settings.JWT_ACCESS_EXPIRE_MINUTES
    expire = datetime.now(timezone.utc) + timedelta(minutes=expire_minutes)
    payload = {
        "sub": str(user_id),
        "type": TOKEN_TYPE,
        "exp": expire,
    }
    token = jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return token, expire_minutes * 60


def decode_access_token(token: str) -> str:
    """
    Decode and validate a user JWT.

    Returns the user id on success.
    Raises ``JWTError`` on invalid / expired tokens.
    """
    payload = jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
    )
    if payload.get("type") != TOKEN_TYPE:
        raise JWTError("Invalid token type")
    user_id = payload.get("sub")
    if not user_id:
        raise JWTError("Token missing subject")
    return user_id
