import re
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException

from app.core.deps import Reference
from app.schemas.planning import PlantFamily
from app.schemas.region import KnmiStation, RegionRead, StationRead, UserSettings
from app.services.frost import frost_diff_days

router = APIRouter(prefix="/regions", tags=["regions"])


@router.get("/stations", response_model=list[KnmiStation])
async def list_stations(reference: Reference):
    return reference.stations.get_all_stations()


@router.get("/stations/{code}", response_model=StationRead)
async def get_station(code: str, reference: Reference):
    station = reference.stations.get_station_by_code(code)
    if station is None:
        raise HTTPException(status_code=404, detail=f"Unknown KNMI station {code}")

    year = datetime.now(timezone.utc).year
    diff = frost_diff_days(UserSettings(knmi_station_code=code), reference.stations, year)
    return StationRead(
        station=station,
        is_reference=code == reference.stations.reference_code,
        frost_diff_days=diff or 0,
    )


@router.get("/postcode/{postcode}", response_model=RegionRead)
async def station_for_postcode(postcode: str, reference: Reference):
    """Resolve the KNMI station for a Dutch postcode (first four digits)."""
    if len(re.sub(r"\D", "", postcode)) < 4:
        raise HTTPException(
            status_code=422,
            detail="Postcode needs at least four digits, e.g. 3584 CS",
        )

    station = reference.stations.get_station_by_postcode(postcode)
    return RegionRead(
        postcode=postcode,
        station=station,
        is_reference=station is not None and station.code == reference.stations.reference_code,
    )


@router.get("/families", response_model=list[PlantFamily])
async def list_families(reference: Reference):
    return reference.families.get_all_families()
