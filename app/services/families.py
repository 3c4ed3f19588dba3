"""Plant family registry used by the rotation checks."""
from typing import Iterable, Optional

from app.schemas.planning import PlantFamily


class FamilyRegistry:
    """Immutable plant_id → family and family_id → family lookup."""

    def __init__(self, families: Iterable[PlantFamily]):
        self._families: dict[str, PlantFamily] = {}
        self._by_plant: dict[str, PlantFamily] = {}
        for family in families:
            self._families[family.id] = family
            for plant_id in family.plants:
                self._by_plant[plant_id] = family

    @classmethod
    def from_definitions(cls, data: dict) -> "FamilyRegistry":
        return cls(PlantFamily(id=family_id, **fields) for family_id, fields in data.items())

    def get_plant_family(self, plant_id: str) -> Optional[PlantFamily]:
        return self._by_plant.get(plant_id)

    def get_family_by_id(self, family_id: str) -> Optional[PlantFamily]:
        return self._families.get(family_id)

    def are_same_family(self, plant_id_a: str, plant_id_b: str) -> bool:
        a = self._by_plant.get(plant_id_a)
        b = self._by_plant.get(plant_id_b)
        if a is None or b is None:
            return False
        return a.id == b.id

    def get_all_families(self) -> list[PlantFamily]:
        return list(self._families.values())
