"""
Static reference data: species catalog, plant families, maintenance templates
and KNMI stations.

Loaded once at application startup from the JSON files in DATA_DIR and passed
to the planning services explicitly. Every registry is read-only after
construction, so one instance can be shared between concurrent requests.
Invalid files fail fast with a pydantic ValidationError.
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from app.core.config import settings
from app.services.catalog import SpeciesCatalog
from app.services.families import FamilyRegistry
from app.services.frost import StationRegistry
from app.services.maintenance import MaintenanceRegistry

logger = logging.getLogger(__name__)

PLANTS_FILE = "plants.json"
FAMILIES_FILE = "plant_families.json"
MAINTENANCE_FILE = "maintenance_tasks.json"
STATIONS_FILE = "knmi_stations.json"


@dataclass(frozen=True)
class ReferenceData:
    catalog: SpeciesCatalog
    families: FamilyRegistry
    maintenance: MaintenanceRegistry
    stations: StationRegistry


def _read_json(path: Path):
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def load_reference_data(
    data_dir: Optional[Path] = None,
    reference_station_code: Optional[str] = None,
) -> ReferenceData:
    data_dir = Path(data_dir or settings.DATA_DIR)
    reference_station_code = reference_station_code or settings.REFERENCE_STATION_CODE

    catalog = SpeciesCatalog.from_definitions(_read_json(data_dir / PLANTS_FILE))
    families = FamilyRegistry.from_definitions(_read_json(data_dir / FAMILIES_FILE))
    maintenance = MaintenanceRegistry.from_definitions(_read_json(data_dir / MAINTENANCE_FILE))
    stations = StationRegistry.from_definitions(
        _read_json(data_dir / STATIONS_FILE), reference_station_code
    )

    if stations.reference_station is None:
        logger.warning(
            "load_reference_data: reference station %s not in %s, frost adjustment disabled",
            reference_station_code, STATIONS_FILE,
        )

    logger.info(
        "load_reference_data: %d species, %d families, %d stations from %s",
        len(catalog), len(families.get_all_families()), len(stations.get_all_stations()), data_dir,
    )
    return ReferenceData(catalog=catalog, families=families, maintenance=maintenance, stations=stations)
