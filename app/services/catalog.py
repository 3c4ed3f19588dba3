"""Species catalog lookup. Missing species are reported as None, never raised."""
from typing import Iterable, Optional

from app.schemas.plant import PlantData


class SpeciesCatalog:
    def __init__(self, plants: Iterable[PlantData]):
        self._plants = {p.id: p for p in plants}

    @classmethod
    def from_definitions(cls, data: list[dict]) -> "SpeciesCatalog":
        return cls(PlantData(**p) for p in data)

    def get(self, plant_id: str) -> Optional[PlantData]:
        return self._plants.get(plant_id)

    def all(self) -> list[PlantData]:
        return list(self._plants.values())

    def __contains__(self, plant_id: str) -> bool:
        return plant_id in self._plants

    def __len__(self) -> int:
        return len(self._plants)
