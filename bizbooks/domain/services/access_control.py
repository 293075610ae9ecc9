# bizbooks/domain/services/access_control.py
"""
Per-request user context and firm-level access checks.

Admins see every firm. Other users see only the firms listed in their
``firm_access``. Without a user nothing is visible.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, TypeVar

ROLE_ADMIN = "admin"
ROLE_USER = "user"

T = TypeVar("T")


@dataclass(frozen=True)
class UserContext:
    id: str
    name: str
    email: str
    role: str = ROLE_USER
    firm_access: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_user(cls, user) -> "UserContext":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            role=user.role,
            firm_access=tuple(str(f) for f in (user.firm_access or [])),
        )

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def has_access_to_firm(user: UserContext | None, firm_id: str | None) -> bool:
    """Return True if *user* may see and edit records of *firm_id*."""
    if user is None:
        return False
    if user.is_admin:
        return True
    if firm_id is None:
        return False
    return str(firm_id) in user.firm_access


def visible(user: UserContext | None, records: Iterable[T], attr: str = "firm_id") -> list[T]:
    """Keep only the records whose firm (``record.<attr>``) the user can access."""
    return [r for r in records if has_access_to_firm(user, getattr(r, attr))]
