from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ZoneStatus(str, Enum):
    planned = "planned"
    sown_indoor = "sown-indoor"
    sown_outdoor = "sown-outdoor"
    transplanted = "transplanted"
    growing = "growing"
    harvesting = "harvesting"
    done = "done"


class ZoneEventType(str, Enum):
    sown = "sown"
    transplanted = "transplanted"
    harvested = "harvested"
    task_done = "task-done"
    note = "note"


class ZoneEvent(BaseModel):
    id: str
    type: ZoneEventType
    date: datetime
    task_id: Optional[str] = None
    note: Optional[str] = None


class Zone(BaseModel):
    """A rectangular planted area of one species. Positions are in centimeters."""

    id: str
    plant_id: str
    x: float
    y: float
    width_cm: float
    height_cm: float
    status: ZoneStatus = ZoneStatus.planned
    season: Optional[int] = None
    completed_tasks: dict[str, datetime] = {}
    events: list[ZoneEvent] = []


class Garden(BaseModel):
    id: str
    name: str = ""
    zones: list[Zone] = []
