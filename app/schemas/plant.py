from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class WaterNeed(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class MonthRange(BaseModel):
    start: int = Field(ge=1, le=12)
    end: int = Field(ge=1, le=12)


class WeekRange(BaseModel):
    start_week: int = Field(ge=1, le=53)
    end_week: int = Field(ge=1, le=53)


class PlantData(BaseModel):
    """Species calendar entry as supplied by the species catalog."""

    id: str
    name: str
    icon: str = ""
    color: Optional[str] = None
    category: Optional[str] = None
    sow_indoor: Optional[MonthRange] = None
    sow_outdoor: Optional[MonthRange] = None
    harvest: Optional[MonthRange] = None
    spacing_cm: Optional[float] = None
    row_spacing_cm: Optional[float] = None
    sun_need: Optional[str] = None
    water_need: WaterNeed = WaterNeed.medium

    model_config = {"frozen": True}


class PlantCalendarEntry(BaseModel):
    plant: PlantData
    sow_indoor: Optional[MonthRange] = None
    sow_outdoor: Optional[MonthRange] = None
    harvest: Optional[MonthRange] = None
    adjusted_sow_indoor: Optional[MonthRange] = None
    adjusted_sow_outdoor: Optional[MonthRange] = None
