# bizbooks/api/v1/envelope.py
"""
Standardized API response envelope used by all v1 endpoints.

Every response wraps data in:
    {
        "status": "ok" | "error",
        "data": <payload>,
        "message": <optional string>,
        "errors": <optional list of detail dicts>
    }
"""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard envelope for all v1 API responses."""

    status: str = "ok"
    data: T | None = None
    message: str | None = None
    errors: list[dict[str, Any]] | None = None


class PaginatedData(BaseModel, Generic[T]):
    """One page of a filtered list, plus optional aggregates over the whole list."""

    items: list[T]
    total: int
    limit: int
    offset: int
    has_more: bool
    summary: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Helpers for building responses
# ---------------------------------------------------------------------------

def ok(data: Any = None, message: str | None = None) -> dict:
    """Build a success response dict."""
    return ApiResponse(status="ok", data=data, message=message).model_dump()


def error(message: str, errors: list[dict[str, Any]] | None = None, status: str = "error") -> dict:
    """Build an error response dict."""
    return ApiResponse(status=status, message=message, errors=errors).model_dump()


def paginate(
    items: Sequence[Any],
    limit: int,
    offset: int,
    summary: dict[str, Any] | None = None,
) -> dict:
    """Slice an already-filtered list into a paginated success response dict."""
    total = len(items)
    page = PaginatedData(
        items=list(items[offset:offset + limit]),
        total=total,
        limit=limit,
        offset=offset,
        has_more=(offset + limit) < total,
        summary=summary,
    )
    return ApiResponse(status="ok", data=page).model_dump()
