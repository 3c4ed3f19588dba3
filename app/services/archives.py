"""
Season archives: end-of-season snapshots of a garden's zone layout.

Archives are built only on an explicit archive action and are unique per
(garden_id, season_year). Storage belongs to the caller; these helpers work
on the list the caller loaded and return the list to write back.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from app.schemas.garden import Garden
from app.schemas.planning import ArchivedZone, SeasonArchive
from app.services.reference_data import ReferenceData

logger = logging.getLogger(__name__)


def archive_id(garden_id: str, season_year: int) -> str:
    return f"{garden_id}-{season_year}"


def build_season_archive(
    garden: Garden,
    season_year: int,
    reference: ReferenceData,
    now: Optional[datetime] = None,
) -> SeasonArchive:
    zones = []
    for zone in garden.zones:
        plant = reference.catalog.get(zone.plant_id)
        family = reference.families.get_plant_family(zone.plant_id)
        zones.append(ArchivedZone(
            zone_id=zone.id,
            plant_id=zone.plant_id,
            plant_name=plant.name if plant else zone.plant_id,
            family_id=family.id if family else None,
            x=zone.x,
            y=zone.y,
            width_cm=zone.width_cm,
            height_cm=zone.height_cm,
        ))

    return SeasonArchive(
        id=archive_id(garden.id, season_year),
        garden_id=garden.id,
        season_year=season_year,
        zones=zones,
        created_at=now or datetime.now(timezone.utc),
    )


def upsert_archive(archives: Sequence[SeasonArchive], archive: SeasonArchive) -> list[SeasonArchive]:
    """Replace the archive of the same garden and season in place, or append it."""
    result = list(archives)
    for i, existing in enumerate(result):
        if existing.garden_id == archive.garden_id and existing.season_year == archive.season_year:
            logger.info("upsert_archive: replacing %s", archive.id)
            result[i] = archive
            return result
    result.append(archive)
    return result


def delete_archive(archives: Sequence[SeasonArchive], garden_id: str, season_year: int) -> list[SeasonArchive]:
    return [
        a for a in archives
        if not (a.garden_id == garden_id and a.season_year == season_year)
    ]
