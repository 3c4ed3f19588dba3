from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class WeatherData(BaseModel):
    precipitation_last_7_days: float  # mm total
    max_temp_today: float             # °C
    fetched_at: Optional[datetime] = None


class WateringInfo(BaseModel):
    frequency_days: int
    description: str


class WateringAdvice(BaseModel):
    zone_id: str
    plant_id: str
    plant_name: str
    frequency_days: int
    description: str
    skip: bool
    urgent: bool
    reason: Optional[str] = None
    weather_available: bool
