from typing import Optional

from pydantic import BaseModel, Field


class KnmiStation(BaseModel):
    code: str
    name: str
    lat: float
    lon: float
    # "MM-DD", year independent
    avg_last_frost_date: str
    avg_first_frost_date: str

    model_config = {"frozen": True}


class UserSettings(BaseModel):
    knmi_station_code: Optional[str] = None
    postcode: Optional[str] = None
    frost_offset_days: Optional[int] = None


class StationRead(BaseModel):
    station: KnmiStation
    is_reference: bool
    frost_diff_days: int = Field(description="Last-frost difference to the reference station, in days")


class RegionRead(BaseModel):
    postcode: str
    station: Optional[KnmiStation] = None
    is_reference: bool
