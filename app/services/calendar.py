"""
Task and status-hint generation for a garden snapshot.

Everything is derived from the snapshot on each call: sow, harvest,
maintenance and pest-warning tasks for a month or an ISO week, plus at most
one lifecycle suggestion per zone. Zones whose species is missing from the
catalog are skipped, never treated as an error.

Sowing windows are shifted for the user's region (see app.services.frost).
Harvest windows are not.
"""
import logging
from datetime import date, datetime, timezone
from typing import NamedTuple, Optional, Union

from app.schemas.garden import Garden, Zone, ZoneEventType, ZoneStatus
from app.schemas.plant import MonthRange, PlantCalendarEntry, PlantData, WeekRange
from app.schemas.planning import (
    MaintenanceTask,
    MonthlyTask,
    PestWarning,
    StatusHint,
    TaskFrequency,
    TaskType,
    WeeklyTask,
)
from app.schemas.region import UserSettings
from app.services.frost import StationRegistry, adjust_sowing_month, adjust_sowing_week, get_frost_week
from app.services.lifecycle import as_utc, latest_event
from app.services.reference_data import ReferenceData
from app.services.weeks import (
    is_in_month_range,
    is_in_week_range,
    iso_week,
    month_range_to_week_range,
    week_month,
)

logger = logging.getLogger(__name__)

# Days after which a repeating task shows up again
REPEAT_INTERVAL_DAYS: dict[TaskFrequency, int] = {
    TaskFrequency.daily: 1,
    TaskFrequency.weekly: 7,
    TaskFrequency.biweekly: 14,
    TaskFrequency.monthly: 30,
}

ESTABLISH_DAYS = 14

# Past this week an indoor sowing is for the next spring, not for planting out now
TRANSPLANT_LAST_WEEK = 35


class TaskRelevance(NamedTuple):
    sow: bool
    maintenance: bool
    harvest: bool
    warnings: bool


# Which task categories a zone still needs at each lifecycle stage (weekly view)
RELEVANCE: dict[ZoneStatus, TaskRelevance] = {
    ZoneStatus.planned: TaskRelevance(sow=True, maintenance=False, harvest=False, warnings=False),
    ZoneStatus.sown_indoor: TaskRelevance(sow=False, maintenance=False, harvest=False, warnings=True),
    ZoneStatus.sown_outdoor: TaskRelevance(sow=False, maintenance=False, harvest=False, warnings=True),
    ZoneStatus.transplanted: TaskRelevance(sow=False, maintenance=True, harvest=False, warnings=True),
    ZoneStatus.growing: TaskRelevance(sow=False, maintenance=True, harvest=True, warnings=True),
    ZoneStatus.harvesting: TaskRelevance(sow=False, maintenance=False, harvest=True, warnings=True),
    ZoneStatus.done: TaskRelevance(sow=False, maintenance=False, harvest=False, warnings=False),
}

_ALL_RELEVANT = TaskRelevance(sow=True, maintenance=True, harvest=True, warnings=True)


# ── Helpers ───────────────────────────────────────────────────────────────────


def is_task_completed(
    completed_tasks: dict[str, datetime],
    task: MaintenanceTask,
    now: Optional[datetime] = None,
) -> bool:
    """
    A completion of a once/yearly task is permanent. Repeating tasks re-open
    as soon as their interval has passed since the last completion.
    """
    completed_at = completed_tasks.get(task.id)
    if completed_at is None:
        return False

    interval = REPEAT_INTERVAL_DAYS.get(task.frequency)
    if interval is None:
        return True

    now = now or datetime.now(timezone.utc)
    days_since = (as_utc(now) - as_utc(completed_at)).days
    return days_since < interval


def adjust_month_range(
    month_range: Optional[MonthRange],
    settings: Optional[UserSettings],
    stations: StationRegistry,
    year: Optional[int] = None,
) -> Optional[MonthRange]:
    if month_range is None:
        return None
    return MonthRange(
        start=adjust_sowing_month(month_range.start, settings, stations, year),
        end=adjust_sowing_month(month_range.end, settings, stations, year),
    )


def adjust_week_range(
    month_range: Optional[MonthRange],
    settings: Optional[UserSettings],
    stations: StationRegistry,
    year: Optional[int] = None,
) -> Optional[WeekRange]:
    if month_range is None:
        return None
    weeks = month_range_to_week_range(month_range)
    return WeekRange(
        start_week=adjust_sowing_week(weeks.start_week, settings, stations, year),
        end_week=adjust_sowing_week(weeks.end_week, settings, stations, year),
    )


def _is_sown(zone: Zone) -> bool:
    return zone.status != ZoneStatus.planned


def _sow_template(plant: PlantData, task_type: TaskType) -> MaintenanceTask:
    if task_type == TaskType.sow_indoor:
        return MaintenanceTask(
            id=f"sow-indoor-{plant.id}",
            name=f"Sow {plant.name.lower()} indoors",
            frequency=TaskFrequency.once,
            phase="sowing",
            description=f"Sow {plant.name.lower()} indoors or under glass",
        )
    return MaintenanceTask(
        id=f"sow-outdoor-{plant.id}",
        name=f"Sow {plant.name.lower()} outdoors",
        frequency=TaskFrequency.once,
        phase="sowing",
        description=f"Sow {plant.name.lower()} directly outdoors",
    )


def _harvest_template(plant: PlantData) -> MaintenanceTask:
    return MaintenanceTask(
        id=f"harvest-{plant.id}",
        name=f"Harvest {plant.name.lower()}",
        frequency=TaskFrequency.once,
        phase="harvesting",
        description=f"{plant.name} is ready to harvest",
    )


class _Window(NamedTuple):
    sow_indoor: bool
    sow_outdoor: bool
    harvest: bool
    month: int


def _build_tasks(
    zone: Zone,
    plant: PlantData,
    window: _Window,
    reference: ReferenceData,
    relevance: TaskRelevance,
    now: datetime,
) -> list[tuple[TaskType, Union[MaintenanceTask, PestWarning], Optional[bool]]]:
    items = []

    if relevance.sow:
        if window.sow_indoor:
            items.append((TaskType.sow_indoor, _sow_template(plant, TaskType.sow_indoor), _is_sown(zone)))
        if window.sow_outdoor:
            items.append((TaskType.sow_outdoor, _sow_template(plant, TaskType.sow_outdoor), _is_sown(zone)))

    if relevance.harvest and window.harvest:
        items.append((TaskType.harvest, _harvest_template(plant), zone.status == ZoneStatus.done))

    if relevance.maintenance:
        for task in reference.maintenance.get_tasks_for_month(zone.plant_id, window.month):
            items.append((TaskType.maintenance, task, is_task_completed(zone.completed_tasks, task, now)))

    if relevance.warnings:
        for warning in reference.maintenance.get_warnings(zone.plant_id, window.month):
            items.append((TaskType.warning, warning, None))

    return items


def _month_window(
    plant: PlantData,
    month: int,
    reference: ReferenceData,
    settings: Optional[UserSettings],
    year: Optional[int],
) -> _Window:
    return _Window(
        sow_indoor=is_in_month_range(month, adjust_month_range(plant.sow_indoor, settings, reference.stations, year)),
        sow_outdoor=is_in_month_range(month, adjust_month_range(plant.sow_outdoor, settings, reference.stations, year)),
        harvest=is_in_month_range(month, plant.harvest),
        month=month,
    )


def _resolve(zone: Zone, reference: ReferenceData) -> Optional[PlantData]:
    plant = reference.catalog.get(zone.plant_id)
    if plant is None:
        logger.debug("zone %s: species %s not in catalog, skipping", zone.id, zone.plant_id)
    return plant


# ── Task generation ───────────────────────────────────────────────────────────


def get_zone_tasks(
    zone: Zone,
    plant: PlantData,
    today: date,
    reference: ReferenceData,
    settings: Optional[UserSettings] = None,
    now: Optional[datetime] = None,
) -> list[MonthlyTask]:
    """Tasks of one zone for the month of ``today``, without the status filter."""
    now = now or datetime.now(timezone.utc)
    window = _month_window(plant, today.month, reference, settings, today.year)
    return [
        MonthlyTask(
            zone_id=zone.id,
            plant_id=plant.id,
            plant_name=plant.name,
            plant_icon=plant.icon,
            type=task_type,
            task=template,
            completed=completed,
        )
        for task_type, template, completed in _build_tasks(zone, plant, window, reference, _ALL_RELEVANT, now)
    ]


def get_monthly_tasks(
    garden: Garden,
    month: int,
    reference: ReferenceData,
    settings: Optional[UserSettings] = None,
    now: Optional[datetime] = None,
    year: Optional[int] = None,
) -> list[MonthlyTask]:
    now = now or datetime.now(timezone.utc)
    tasks: list[MonthlyTask] = []

    for zone in garden.zones:
        plant = _resolve(zone, reference)
        if plant is None:
            continue

        window = _month_window(plant, month, reference, settings, year)
        for task_type, template, completed in _build_tasks(zone, plant, window, reference, _ALL_RELEVANT, now):
            tasks.append(MonthlyTask(
                zone_id=zone.id,
                plant_id=plant.id,
                plant_name=plant.name,
                plant_icon=plant.icon,
                type=task_type,
                task=template,
                completed=completed,
            ))

    return tasks


def get_weekly_tasks(
    garden: Garden,
    week: int,
    year: int,
    reference: ReferenceData,
    settings: Optional[UserSettings] = None,
    now: Optional[datetime] = None,
) -> list[WeeklyTask]:
    """
    Tasks for one ISO week. Sowing windows are converted to (frost-adjusted)
    week ranges; month-scoped templates use the month of the week's Thursday.
    Only categories relevant to each zone's status are emitted.
    """
    now = now or datetime.now(timezone.utc)
    month = week_month(week, year)
    tasks: list[WeeklyTask] = []

    for zone in garden.zones:
        plant = _resolve(zone, reference)
        if plant is None:
            continue

        window = _Window(
            sow_indoor=is_in_week_range(week, adjust_week_range(plant.sow_indoor, settings, reference.stations, year)),
            sow_outdoor=is_in_week_range(week, adjust_week_range(plant.sow_outdoor, settings, reference.stations, year)),
            harvest=plant.harvest is not None and is_in_week_range(week, month_range_to_week_range(plant.harvest)),
            month=month,
        )
        relevance = RELEVANCE.get(zone.status, _ALL_RELEVANT)
        for task_type, template, completed in _build_tasks(zone, plant, window, reference, relevance, now):
            tasks.append(WeeklyTask(
                zone_id=zone.id,
                plant_id=plant.id,
                plant_name=plant.name,
                plant_icon=plant.icon,
                type=task_type,
                task=template,
                completed=completed,
                week=week,
            ))

    return tasks


# ── Status hints ──────────────────────────────────────────────────────────────


def _days_since_event(zone: Zone, event_type: ZoneEventType, today: date) -> Optional[int]:
    event = latest_event(zone, event_type)
    if event is None:
        return None
    return (today - as_utc(event.date).date()).days


def _suggest(
    zone: Zone,
    plant: PlantData,
    today: date,
    week: int,
    frost_week: int,
    reference: ReferenceData,
    settings: Optional[UserSettings],
) -> Optional[tuple[ZoneStatus, str]]:
    name = plant.name.lower()
    status = zone.status

    if status == ZoneStatus.planned:
        indoor = adjust_week_range(plant.sow_indoor, settings, reference.stations, today.year)
        if is_in_week_range(week, indoor):
            return ZoneStatus.sown_indoor, f"Time to sow {name} indoors. Sown already? Update the status."
        outdoor = adjust_week_range(plant.sow_outdoor, settings, reference.stations, today.year)
        if is_in_week_range(week, outdoor):
            return ZoneStatus.sown_outdoor, f"Time to sow {name} outdoors. Sown already? Update the status."
        return None

    if status == ZoneStatus.sown_indoor:
        if frost_week + 1 <= week <= TRANSPLANT_LAST_WEEK:
            return ZoneStatus.transplanted, f"The last frost has passed; {name} can be planted out."
        return None

    if status == ZoneStatus.sown_outdoor:
        days = _days_since_event(zone, ZoneEventType.sown, today)
        if days is not None and days >= ESTABLISH_DAYS:
            return ZoneStatus.growing, f"{plant.name} was sown {days} days ago and should be up by now."
        return None

    if status == ZoneStatus.transplanted:
        days = _days_since_event(zone, ZoneEventType.transplanted, today)
        if days is not None and days >= ESTABLISH_DAYS:
            return ZoneStatus.growing, f"{plant.name} was planted out {days} days ago and has settled in."
        return None

    if status == ZoneStatus.growing:
        if is_in_month_range(today.month, plant.harvest):
            return ZoneStatus.harvesting, f"The harvest window for {name} has started."
        return None

    return None


def get_status_hints(
    garden: Garden,
    reference: ReferenceData,
    today: Optional[date] = None,
    settings: Optional[UserSettings] = None,
) -> list[StatusHint]:
    """At most one advisory next-status suggestion per zone. Never applied here."""
    today = today or date.today()
    week = iso_week(today)
    frost_week = get_frost_week(settings, reference.stations, today.year)
    hints: list[StatusHint] = []

    for zone in garden.zones:
        plant = _resolve(zone, reference)
        if plant is None:
            continue

        suggestion = _suggest(zone, plant, today, week, frost_week, reference, settings)
        if suggestion is None:
            continue

        suggested, message = suggestion
        hints.append(StatusHint(
            zone_id=zone.id,
            plant_id=plant.id,
            plant_name=plant.name,
            current_status=zone.status,
            suggested_status=suggested,
            message=message,
        ))

    return hints


# ── Calendar overview ─────────────────────────────────────────────────────────


def get_plant_calendar(
    reference: ReferenceData,
    settings: Optional[UserSettings] = None,
    year: Optional[int] = None,
) -> list[PlantCalendarEntry]:
    return [
        PlantCalendarEntry(
            plant=plant,
            sow_indoor=plant.sow_indoor,
            sow_outdoor=plant.sow_outdoor,
            harvest=plant.harvest,
            adjusted_sow_indoor=adjust_month_range(plant.sow_indoor, settings, reference.stations, year),
            adjusted_sow_outdoor=adjust_month_range(plant.sow_outdoor, settings, reference.stations, year),
        )
        for plant in reference.catalog.all()
    ]
