"""
Crop-rotation conflict detection across season archives.

A zone conflicts when a plant of the same family grew on an overlapping spot
fewer than ``family.rotation_years`` seasons ago. Overlap is an axis-aligned
bounding-box test with a small tolerance, so a bed shifted by a few
centimeters still counts as the same spot.

Archives are searched nearest season first and the first match wins, so a
zone gets at most one warning and it cites the most recent conflicting year.
"""
import logging
from typing import Iterable, Optional, Sequence

from app.schemas.garden import Zone
from app.schemas.planning import HistoryEntry, RotationWarning, SeasonArchive
from app.services.reference_data import ReferenceData

logger = logging.getLogger(__name__)

OVERLAP_TOLERANCE_CM = 10.0


def zones_overlap(
    ax: float, ay: float, aw: float, ah: float,
    bx: float, by: float, bw: float, bh: float,
    tolerance: float = OVERLAP_TOLERANCE_CM,
) -> bool:
    return (
        ax < bx + bw + tolerance
        and ax + aw + tolerance > bx
        and ay < by + bh + tolerance
        and ay + ah + tolerance > by
    )


def _nearest_first(archives: Iterable[SeasonArchive]) -> list[SeasonArchive]:
    # sorted() is stable: archives of the same year keep their list order
    return sorted(archives, key=lambda a: a.season_year, reverse=True)


def check_rotation(
    zone: Zone,
    archives: Sequence[SeasonArchive],
    reference: ReferenceData,
    current_year: int,
    tolerance: float = OVERLAP_TOLERANCE_CM,
) -> Optional[RotationWarning]:
    family = reference.families.get_plant_family(zone.plant_id)
    if family is None:
        return None

    for archive in _nearest_first(archives):
        years_ago = current_year - archive.season_year
        if years_ago <= 0 or years_ago > family.rotation_years:
            continue

        for archived in archive.zones:
            if not zones_overlap(
                zone.x, zone.y, zone.width_cm, zone.height_cm,
                archived.x, archived.y, archived.width_cm, archived.height_cm,
                tolerance,
            ):
                continue

            archived_family_id = archived.family_id
            if archived_family_id is None:
                archived_family = reference.families.get_plant_family(archived.plant_id)
                archived_family_id = archived_family.id if archived_family else None

            if archived_family_id != family.id:
                continue

            plant = reference.catalog.get(zone.plant_id)
            logger.debug(
                "zone %s: %s conflicts with %s from %d",
                zone.id, zone.plant_id, archived.plant_id, archive.season_year,
            )
            return RotationWarning(
                zone_id=zone.id,
                plant_id=zone.plant_id,
                plant_name=plant.name if plant else zone.plant_id,
                family_id=family.id,
                family_name=family.name,
                conflict_year=archive.season_year,
                conflict_plant=archived.plant_name,
                rotation_years=family.rotation_years,
            )

    return None


def get_position_history(
    x: float,
    y: float,
    w: float,
    h: float,
    archives: Sequence[SeasonArchive],
    tolerance: float = OVERLAP_TOLERANCE_CM,
) -> list[HistoryEntry]:
    """Every archived planting overlapping the position, newest season first."""
    history = [
        HistoryEntry(
            year=archive.season_year,
            plant_id=archived.plant_id,
            plant_name=archived.plant_name,
            family_id=archived.family_id,
        )
        for archive in archives
        for archived in archive.zones
        if zones_overlap(x, y, w, h, archived.x, archived.y, archived.width_cm, archived.height_cm, tolerance)
    ]
    return sorted(history, key=lambda entry: entry.year, reverse=True)


def get_all_rotation_warnings(
    zones: Iterable[Zone],
    archives: Sequence[SeasonArchive],
    reference: ReferenceData,
    current_year: int,
    tolerance: float = OVERLAP_TOLERANCE_CM,
) -> list[RotationWarning]:
    warnings = []
    for zone in zones:
        warning = check_rotation(zone, archives, reference, current_year, tolerance)
        if warning:
            warnings.append(warning)
    return warnings
