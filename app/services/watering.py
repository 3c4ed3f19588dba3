"""
Watering advice from injected weather data.

The weather itself is fetched elsewhere and handed in as WeatherData;
without it the advice is the plain schedule for each species' water need.
Only zones with plants in the ground (transplanted, growing, harvesting) get
advice.
"""
import logging
from typing import Optional

from app.schemas.garden import Garden, ZoneStatus
from app.schemas.weather import WateringAdvice, WeatherData
from app.services.reference_data import ReferenceData

logger = logging.getLogger(__name__)

RAIN_SKIP_MM = 20.0
HEAT_THRESHOLD_C = 25.0

WATERED_STATUSES = {ZoneStatus.transplanted, ZoneStatus.growing, ZoneStatus.harvesting}


def get_watering_advice(
    garden: Garden,
    reference: ReferenceData,
    weather: Optional[WeatherData] = None,
    rain_skip_mm: float = RAIN_SKIP_MM,
    heat_threshold_c: float = HEAT_THRESHOLD_C,
) -> list[WateringAdvice]:
    weather_available = weather is not None
    skip = bool(weather_available and weather.precipitation_last_7_days >= rain_skip_mm)
    hot = bool(weather_available and not skip and weather.max_temp_today >= heat_threshold_c)

    reason = None
    if skip:
        reason = f"{weather.precipitation_last_7_days:.0f} mm rain in the last 7 days"
    elif hot:
        reason = f"{weather.max_temp_today:.0f} °C expected today"

    advice = []
    for zone in garden.zones:
        if zone.status not in WATERED_STATUSES:
            continue
        plant = reference.catalog.get(zone.plant_id)
        if plant is None:
            logger.debug("zone %s: species %s not in catalog, no watering advice", zone.id, zone.plant_id)
            continue
        schedule = reference.maintenance.get_watering_schedule(plant.water_need.value)
        if schedule is None:
            continue

        advice.append(WateringAdvice(
            zone_id=zone.id,
            plant_id=plant.id,
            plant_name=plant.name,
            frequency_days=schedule.frequency_days,
            description=schedule.description,
            skip=skip,
            urgent=hot,
            reason=reason,
            weather_available=weather_available,
        ))

    return advice
