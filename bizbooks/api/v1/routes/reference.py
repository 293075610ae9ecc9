# bizbooks/api/v1/routes/reference.py
"""Static option lists for the forms (GST slabs, states, statuses, categories)."""

from fastapi import APIRouter

from bizbooks.api.v1.envelope import ok
from bizbooks.domain.services import reference_data

router = APIRouter(prefix="/reference", tags=["Reference"])


@router.get("", response_model=dict)
async def get_reference_data():
    return ok(data=reference_data.as_dict())
