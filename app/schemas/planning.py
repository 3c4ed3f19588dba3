from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

from app.schemas.garden import Garden, Zone, ZoneStatus
from app.schemas.region import UserSettings
from app.schemas.weather import WateringAdvice, WeatherData


class TaskFrequency(str, Enum):
    once = "once"
    daily = "daily"
    weekly = "weekly"
    biweekly = "biweekly"
    monthly = "monthly"
    yearly = "yearly"


class TaskType(str, Enum):
    sow_indoor = "sow-indoor"
    sow_outdoor = "sow-outdoor"
    harvest = "harvest"
    maintenance = "maintenance"
    warning = "warning"


# ── Reference templates ───────────────────────────────────────────────────────


class MaintenanceTask(BaseModel):
    id: str
    name: str
    frequency: TaskFrequency
    phase: Optional[str] = None
    description: Optional[str] = None
    months: Optional[list[int]] = None

    model_config = {"frozen": True}


class PestWarning(BaseModel):
    id: str
    name: str
    months: list[int]
    description: str

    model_config = {"frozen": True}


class PlantTypeData(BaseModel):
    plants: list[str]
    tasks: list[MaintenanceTask] = []
    warnings: list[PestWarning] = []


class PlantFamily(BaseModel):
    id: str
    name: str
    rotation_years: int
    plants: list[str]

    model_config = {"frozen": True}


# ── Season archives ───────────────────────────────────────────────────────────


class ArchivedZone(BaseModel):
    zone_id: str
    plant_id: str
    plant_name: str
    family_id: Optional[str] = None
    x: float
    y: float
    width_cm: float
    height_cm: float


class SeasonArchive(BaseModel):
    id: str
    garden_id: str
    season_year: int
    zones: list[ArchivedZone] = []
    created_at: datetime


# ── Generated view-models ─────────────────────────────────────────────────────


class MonthlyTask(BaseModel):
    zone_id: str
    plant_id: str
    plant_name: str
    plant_icon: str
    type: TaskType
    task: Union[MaintenanceTask, PestWarning]
    # None for warnings: they have no completion state
    completed: Optional[bool] = None


class WeeklyTask(MonthlyTask):
    week: int


class RotationWarning(BaseModel):
    zone_id: str
    plant_id: str
    plant_name: str
    family_id: str
    family_name: str
    conflict_year: int
    conflict_plant: str
    rotation_years: int


class HistoryEntry(BaseModel):
    year: int
    plant_id: str
    plant_name: str
    family_id: Optional[str] = None


class StatusHint(BaseModel):
    zone_id: str
    plant_id: str
    plant_name: str
    current_status: ZoneStatus
    suggested_status: ZoneStatus
    message: str


class PlanningOverview(BaseModel):
    week: int
    year: int
    week_label: str
    month: int
    region: str
    current_tasks: list[MonthlyTask]
    upcoming_tasks: list[MonthlyTask]
    weekly_tasks: list[WeeklyTask]
    status_hints: list[StatusHint]
    rotation_warnings: list[RotationWarning]
    watering: list[WateringAdvice]


# ── Request bodies ────────────────────────────────────────────────────────────


class PlanningRequest(BaseModel):
    garden: Garden
    settings: Optional[UserSettings] = None
    archives: list[SeasonArchive] = []
    weather: Optional[WeatherData] = None
    today: Optional[date] = None


class PositionQuery(BaseModel):
    x: float
    y: float
    width_cm: float = Field(gt=0)
    height_cm: float = Field(gt=0)
    archives: list[SeasonArchive] = []


class ZoneStatusUpdate(BaseModel):
    zone: Zone
    status: ZoneStatus


class ZoneTaskUpdate(BaseModel):
    zone: Zone
    task_id: str


class ArchiveCreate(BaseModel):
    garden: Garden
    season_year: int
    archives: list[SeasonArchive] = []


class ArchiveDelete(BaseModel):
    garden_id: str
    season_year: int
    archives: list[SeasonArchive] = []
