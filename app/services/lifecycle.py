"""
Zone lifecycle: status changes, task completion toggles, and the event log.

Transitions are never enforced. Any status may follow any other; the planning
services only suggest the next one. Every function returns a new Zone and
leaves the input untouched. The event log is append-only.
"""
import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from app.schemas.garden import Zone, ZoneEvent, ZoneEventType, ZoneStatus

logger = logging.getLogger(__name__)

STATUS_EVENT_TYPES: dict[ZoneStatus, ZoneEventType] = {
    ZoneStatus.sown_indoor: ZoneEventType.sown,
    ZoneStatus.sown_outdoor: ZoneEventType.sown,
    ZoneStatus.transplanted: ZoneEventType.transplanted,
    ZoneStatus.harvesting: ZoneEventType.harvested,
    ZoneStatus.done: ZoneEventType.harvested,
}


def as_utc(dt: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def event_type_for_status(status: ZoneStatus) -> ZoneEventType:
    return STATUS_EVENT_TYPES.get(status, ZoneEventType.note)


def _new_event(
    event_type: ZoneEventType,
    now: datetime,
    task_id: Optional[str] = None,
    note: Optional[str] = None,
) -> ZoneEvent:
    return ZoneEvent(id=uuid4().hex, type=event_type, date=now, task_id=task_id, note=note)


def apply_status_change(zone: Zone, status: ZoneStatus, now: Optional[datetime] = None) -> Zone:
    """Set the status, stamp the season year and append exactly one event."""
    now = now or datetime.now(timezone.utc)
    event = _new_event(event_type_for_status(status), now)
    logger.debug("zone %s: %s → %s", zone.id, zone.status.value, status.value)
    return zone.model_copy(update={
        "status": status,
        "season": now.year,
        "events": [*zone.events, event],
    })


def complete_task(zone: Zone, task_id: str, now: Optional[datetime] = None) -> Zone:
    """Record a completion for a maintenance template and log a task-done event."""
    now = now or datetime.now(timezone.utc)
    return zone.model_copy(update={
        "completed_tasks": {**zone.completed_tasks, task_id: now},
        "events": [*zone.events, _new_event(ZoneEventType.task_done, now, task_id=task_id)],
    })


def reopen_task(zone: Zone, task_id: str) -> Zone:
    """Drop a completion record. The event log keeps the history."""
    if task_id not in zone.completed_tasks:
        return zone
    remaining = {k: v for k, v in zone.completed_tasks.items() if k != task_id}
    return zone.model_copy(update={"completed_tasks": remaining})


def latest_event(zone: Zone, event_type: ZoneEventType) -> Optional[ZoneEvent]:
    """Most recent event of the given type; on equal timestamps the later log entry wins."""
    latest: Optional[ZoneEvent] = None
    for event in zone.events:
        if event.type != event_type:
            continue
        if latest is None or as_utc(event.date) >= as_utc(latest.date):
            latest = event
    return latest
