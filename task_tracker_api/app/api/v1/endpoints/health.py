"""
Liveness endpoint.
"""

from fastapi import APIRouter

from task_tracker_api.app.schemas.common import HealthRead

router = APIRouter()


@router.get("", response_model=HealthRead)
async def get_health() -> HealthRead:
    """Return ``{"status": "ok"}`` while the process is serving requests."""
    return HealthRead()
