"""
Planning orchestrator.

Composes tasks, status hints, rotation warnings and watering advice for one
(garden, week, year, settings, archives) snapshot into a single view-model.
Pure: loading settings/archives and persisting changes is the caller's job.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from app.schemas.garden import Garden
from app.schemas.planning import PlanningOverview, SeasonArchive
from app.schemas.region import UserSettings
from app.schemas.weather import WeatherData
from app.services.calendar import get_monthly_tasks, get_status_hints, get_weekly_tasks
from app.services.frost import get_region_description
from app.services.reference_data import ReferenceData
from app.services.rotation import OVERLAP_TOLERANCE_CM, get_all_rotation_warnings
from app.services.watering import HEAT_THRESHOLD_C, RAIN_SKIP_MM, get_watering_advice
from app.services.weeks import format_week_label, week_date_range

logger = logging.getLogger(__name__)


def next_month(month: int) -> int:
    return 1 if month == 12 else month + 1


def build_planning_overview(
    garden: Garden,
    reference: ReferenceData,
    today: Optional[date] = None,
    week: Optional[int] = None,
    year: Optional[int] = None,
    settings: Optional[UserSettings] = None,
    archives: Sequence[SeasonArchive] = (),
    weather: Optional[WeatherData] = None,
    now: Optional[datetime] = None,
    rotation_tolerance_cm: float = OVERLAP_TOLERANCE_CM,
    rain_skip_mm: float = RAIN_SKIP_MM,
    heat_threshold_c: float = HEAT_THRESHOLD_C,
) -> PlanningOverview:
    today = today or date.today()
    iso_year, iso_wk, _ = today.isocalendar()
    year = year or iso_year
    if week is None:
        week = iso_wk
    else:
        # An explicit week moves the whole overview to that week's Thursday
        today = week_date_range(week, year)[0] + timedelta(days=3)
    month = today.month

    overview = PlanningOverview(
        week=week,
        year=year,
        week_label=format_week_label(week, year),
        month=month,
        region=get_region_description(settings, reference.stations),
        current_tasks=get_monthly_tasks(garden, month, reference, settings, now, year),
        upcoming_tasks=get_monthly_tasks(garden, next_month(month), reference, settings, now, year),
        weekly_tasks=get_weekly_tasks(garden, week, year, reference, settings, now),
        status_hints=get_status_hints(garden, reference, today, settings),
        rotation_warnings=get_all_rotation_warnings(
            garden.zones, archives, reference, year, rotation_tolerance_cm
        ),
        watering=get_watering_advice(garden, reference, weather, rain_skip_mm, heat_threshold_c),
    )
    logger.debug(
        "garden %s week %d/%d: %d weekly tasks, %d hints, %d rotation warnings",
        garden.id, week, year, len(overview.weekly_tasks),
        len(overview.status_hints), len(overview.rotation_warnings),
    )
    return overview
