"""
Per-species maintenance task and pest-warning templates.

Templates are grouped by plant type ("fruit-vegetables", "brassicas", ...);
each species maps to at most one type. Unknown species have no templates.
"""
from typing import Optional

from app.schemas.planning import MaintenanceTask, PestWarning, PlantTypeData
from app.schemas.weather import WateringInfo

DEFAULT_WATER_NEED = "medium"


class MaintenanceRegistry:
    def __init__(self, plant_types: dict[str, PlantTypeData], watering_defaults: dict[str, WateringInfo]):
        self._types = dict(plant_types)
        self._plant_type: dict[str, str] = {}
        for type_id, type_data in self._types.items():
            for plant_id in type_data.plants:
                self._plant_type[plant_id] = type_id
        self._watering = dict(watering_defaults)

    @classmethod
    def from_definitions(cls, data: dict) -> "MaintenanceRegistry":
        plant_types = {
            type_id: PlantTypeData(**fields)
            for type_id, fields in data.get("plant_types", {}).items()
        }
        watering = {
            need: WateringInfo(**fields)
            for need, fields in data.get("watering_defaults", {}).items()
        }
        return cls(plant_types, watering)

    def get_plant_type(self, plant_id: str) -> Optional[str]:
        return self._plant_type.get(plant_id)

    def _type_data(self, plant_id: str) -> Optional[PlantTypeData]:
        type_id = self._plant_type.get(plant_id)
        if type_id is None:
            return None
        return self._types.get(type_id)

    def get_maintenance_tasks(self, plant_id: str) -> list[MaintenanceTask]:
        data = self._type_data(plant_id)
        return list(data.tasks) if data else []

    def get_tasks_for_month(self, plant_id: str, month: int) -> list[MaintenanceTask]:
        """Templates without a month restriction plus those listing ``month``."""
        return [
            task for task in self.get_maintenance_tasks(plant_id)
            if not task.months or month in task.months
        ]

    def get_warnings(self, plant_id: str, month: Optional[int] = None) -> list[PestWarning]:
        data = self._type_data(plant_id)
        if data is None:
            return []
        if month is None:
            return list(data.warnings)
        return [w for w in data.warnings if month in w.months]

    def get_watering_schedule(self, water_need: str) -> Optional[WateringInfo]:
        return self._watering.get(water_need) or self._watering.get(DEFAULT_WATER_NEED)
