from fastapi import APIRouter

from app.schemas.garden import Zone
from app.schemas.planning import ZoneStatusUpdate, ZoneTaskUpdate
from app.services.lifecycle import apply_status_change, complete_task, reopen_task

router = APIRouter(prefix="/zones", tags=["zones"])


@router.post("/status", response_model=Zone)
async def update_zone_status(body: ZoneStatusUpdate):
    """Apply a status change and return the zone for the caller to persist."""
    return apply_status_change(body.zone, body.status)


@router.post("/tasks/complete", response_model=Zone)
async def complete_zone_task(body: ZoneTaskUpdate):
    return complete_task(body.zone, body.task_id)


@router.post("/tasks/reopen", response_model=Zone)
async def reopen_zone_task(body: ZoneTaskUpdate):
    return reopen_task(body.zone, body.task_id)
