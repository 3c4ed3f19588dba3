from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query

from app.core.config import settings
from app.core.deps import Reference
from app.schemas.plant import PlantCalendarEntry
from app.schemas.planning import (
    HistoryEntry,
    MonthlyTask,
    PlanningOverview,
    PlanningRequest,
    PositionQuery,
    RotationWarning,
    StatusHint,
    WeeklyTask,
)
from app.schemas.region import UserSettings
from app.services.calendar import get_monthly_tasks, get_plant_calendar, get_status_hints, get_weekly_tasks
from app.services.planning import build_planning_overview
from app.services.rotation import get_all_rotation_warnings, get_position_history

router = APIRouter(prefix="/planning", tags=["planning"])


def _today(body: PlanningRequest) -> date:
    return body.today or datetime.now(timezone.utc).date()


@router.post("/overview", response_model=PlanningOverview)
async def planning_overview(
    body: PlanningRequest,
    reference: Reference,
    week: Optional[int] = Query(None, ge=1, le=53),
    year: Optional[int] = Query(None),
):
    """Everything the planning view shows for one garden and week."""
    return build_planning_overview(
        body.garden,
        reference,
        today=_today(body),
        week=week,
        year=year,
        settings=body.settings,
        archives=body.archives,
        weather=body.weather,
        rotation_tolerance_cm=settings.ROTATION_TOLERANCE_CM,
        rain_skip_mm=settings.WATERING_RAIN_SKIP_MM,
        heat_threshold_c=settings.WATERING_HEAT_C,
    )


@router.post("/tasks/monthly", response_model=list[MonthlyTask])
async def monthly_tasks(
    body: PlanningRequest,
    reference: Reference,
    month: Optional[int] = Query(None, ge=1, le=12),
):
    today = _today(body)
    return get_monthly_tasks(body.garden, month or today.month, reference, body.settings, year=today.year)


@router.post("/tasks/weekly", response_model=list[WeeklyTask])
async def weekly_tasks(
    body: PlanningRequest,
    reference: Reference,
    week: Optional[int] = Query(None, ge=1, le=53),
    year: Optional[int] = Query(None),
):
    iso_year, iso_wk, _ = _today(body).isocalendar()
    return get_weekly_tasks(body.garden, week or iso_wk, year or iso_year, reference, body.settings)


@router.post("/status-hints", response_model=list[StatusHint])
async def status_hints(body: PlanningRequest, reference: Reference):
    return get_status_hints(body.garden, reference, _today(body), body.settings)


@router.post("/rotation-warnings", response_model=list[RotationWarning])
async def rotation_warnings(
    body: PlanningRequest,
    reference: Reference,
    year: Optional[int] = Query(None),
):
    return get_all_rotation_warnings(
        body.garden.zones,
        body.archives,
        reference,
        year or _today(body).year,
        settings.ROTATION_TOLERANCE_CM,
    )


@router.post("/position-history", response_model=list[HistoryEntry])
async def position_history(body: PositionQuery):
    return get_position_history(
        body.x, body.y, body.width_cm, body.height_cm, body.archives, settings.ROTATION_TOLERANCE_CM
    )


@router.get("/calendar", response_model=list[PlantCalendarEntry])
async def plant_calendar(
    reference: Reference,
    station: Optional[str] = Query(None, description="KNMI station code"),
    postcode: Optional[str] = Query(None),
    frost_offset_days: Optional[int] = Query(None),
):
    user_settings = UserSettings(
        knmi_station_code=station,
        postcode=postcode,
        frost_offset_days=frost_offset_days,
    )
    return get_plant_calendar(reference, user_settings)
