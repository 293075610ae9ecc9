# bizbooks/infrastructure/audit.py
"""
Audit logger for record changes.

Logs who changed which record, when. Nothing is persisted; the lines go
through the normal logging pipeline and can be shipped from there.
"""

import logging
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger("audit")


def log_record_action(
    action: str,
    record_type: str,
    record_id: str | None,
    *,
    user_id: str | None = None,
    user_email: str = "",
    details: dict[str, Any] | None = None,
) -> None:
    """Log a create / update / delete on a firm, client, invoice or expense."""
    logger.info(
        "RECORD_ACTION action=%s type=%s id=%s user=%s email=%s time=%s details=%s",
        action,
        record_type,
        record_id,
        user_id,
        user_email,
        datetime.now(timezone.utc).isoformat(),
        details or {},
    )


def log_auth_event(event: str, *, email: str = "", ok: bool = True) -> None:
    """Log a login attempt."""
    log = logger.info if ok else logger.warning
    log(
        "AUTH event=%s email=%s ok=%s time=%s",
        event,
        email,
        ok,
        datetime.now(timezone.utc).isoformat(),
    )
