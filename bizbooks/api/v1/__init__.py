# bizbooks/api/v1/__init__.py
"""
Versioned API v1: aggregates all sub-routers under ``/api/v1``.

Usage in ``main.py``::

    from bizbooks.api.v1 import v1_router
    app.include_router(v1_router)
"""

from fastapi import APIRouter

from bizbooks.api.v1.routes.auth import router as auth_router
from bizbooks.api.v1.routes.clients import router as clients_router
from bizbooks.api.v1.routes.dashboard import router as dashboard_router
from bizbooks.api.v1.routes.expenses import router as expenses_router
from bizbooks.api.v1.routes.firms import router as firms_router
from bizbooks.api.v1.routes.invoices import router as invoices_router
from bizbooks.api.v1.routes.reference import router as reference_router

v1_router = APIRouter(prefix="/api/v1")

v1_router.include_router(auth_router)
v1_router.include_router(dashboard_router)

# Records
v1_router.include_router(firms_router)
v1_router.include_router(clients_router)
v1_router.include_router(invoices_router)
v1_router.include_router(expenses_router)

# Dropdown lists
v1_router.include_router(reference_router)

__all__ = ["v1_router"]
