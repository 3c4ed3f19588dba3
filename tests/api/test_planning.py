from httpx import AsyncClient

from app.core.deps import get_reference_data
from app.main import app
from app.services.catalog import SpeciesCatalog
from app.services.families import FamilyRegistry
from app.services.frost import StationRegistry
from app.services.maintenance import MaintenanceRegistry
from app.services.reference_data import ReferenceData
from tests.factories import FAMILIES, MAINTENANCE, PLANTS, STATIONS

GARDEN = {
    "id": "g1",
    "name": "Allotment",
    "zones": [
        {"id": "z1", "plant_id": "tomato", "x": 0, "y": 0, "width_cm": 100, "height_cm": 100},
        {"id": "z2", "plant_id": "bean", "x": 300, "y": 0, "width_cm": 100, "height_cm": 100,
         "status": "growing"},
    ],
}

ARCHIVE_2025 = {
    "id": "g1-2025",
    "garden_id": "g1",
    "season_year": 2025,
    "created_at": "2025-11-01T10:00:00Z",
    "zones": [
        {"zone_id": "old", "plant_id": "pepper", "plant_name": "Pepper", "family_id": "solanaceae",
         "x": 5, "y": 5, "width_cm": 100, "height_cm": 100},
    ],
}


async def test_health(client: AsyncClient):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


async def test_planning_overview(client: AsyncClient):
    res = await client.post("/api/v1/planning/overview", json={
        "garden": GARDEN,
        "archives": [ARCHIVE_2025],
        "weather": {"precipitation_last_7_days": 2, "max_temp_today": 27},
        "today": "2026-04-15",
    })
    assert res.status_code == 200
    data = res.json()
    assert data["week"] == 16
    assert data["week_label"] == "Week 16 (13-19 Apr)"
    assert data["region"] == "Default (De Bilt)"
    assert [t["type"] for t in data["weekly_tasks"]] == ["sow-indoor"]
    assert data["status_hints"][0]["suggested_status"] == "sown-indoor"
    assert data["rotation_warnings"][0]["conflict_plant"] == "Pepper"
    assert data["watering"][0]["urgent"] is True


async def test_planning_overview_explicit_week(client: AsyncClient):
    res = await client.post("/api/v1/planning/overview?week=30&year=2026", json={
        "garden": GARDEN,
        "today": "2026-04-15",
    })
    assert res.status_code == 200
    data = res.json()
    assert data["week_label"] == "Week 30 (20-26 Jul)"
    assert {t["type"] for t in data["weekly_tasks"] if t["zone_id"] == "z2"} == {"maintenance", "harvest"}


async def test_planning_overview_rejects_invalid_week(client: AsyncClient):
    res = await client.post("/api/v1/planning/overview?week=54", json={"garden": GARDEN})
    assert res.status_code == 422


async def test_monthly_tasks(client: AsyncClient):
    res = await client.post("/api/v1/planning/tasks/monthly?month=8", json={
        "garden": GARDEN,
        "today": "2026-04-15",
    })
    assert res.status_code == 200
    harvest = [t for t in res.json() if t["type"] == "harvest"]
    assert [t["zone_id"] for t in harvest] == ["z1", "z2"]
    assert harvest[0]["completed"] is False


async def test_weekly_tasks_with_region(client: AsyncClient):
    res = await client.post("/api/v1/planning/tasks/weekly?week=11&year=2026", json={
        "garden": GARDEN,
        "settings": {"knmi_station_code": "280"},
    })
    assert res.status_code == 200
    assert res.json() == []


async def test_status_hints(client: AsyncClient):
    res = await client.post("/api/v1/planning/status-hints", json={
        "garden": GARDEN,
        "today": "2026-08-10",
    })
    assert res.status_code == 200
    assert [(h["zone_id"], h["suggested_status"]) for h in res.json()] == [("z2", "harvesting")]


async def test_rotation_warnings(client: AsyncClient):
    res = await client.post("/api/v1/planning/rotation-warnings?year=2026", json={
        "garden": GARDEN,
        "archives": [ARCHIVE_2025],
    })
    assert res.status_code == 200
    warnings = res.json()
    assert len(warnings) == 1
    assert warnings[0]["zone_id"] == "z1"
    assert warnings[0]["conflict_year"] == 2025


async def test_position_history(client: AsyncClient):
    res = await client.post("/api/v1/planning/position-history", json={
        "x": 0, "y": 0, "width_cm": 50, "height_cm": 50,
        "archives": [ARCHIVE_2025],
    })
    assert res.status_code == 200
    assert res.json() == [
        {"year": 2025, "plant_id": "pepper", "plant_name": "Pepper", "family_id": "solanaceae"},
    ]


async def test_plant_calendar(client: AsyncClient):
    res = await client.get("/api/v1/planning/calendar?station=280")
    assert res.status_code == 200
    tomato = next(e for e in res.json() if e["plant"]["id"] == "tomato")
    assert tomato["sow_indoor"] == {"start": 3, "end": 5}
    assert tomato["adjusted_sow_indoor"] == {"start": 4, "end": 6}


async def test_planning_overview_default_week_at_new_year(client: AsyncClient):
    res = await client.post("/api/v1/planning/overview", json={"garden": GARDEN, "today": "2027-01-01"})
    assert res.status_code == 200
    assert (res.json()["week"], res.json()["year"]) == (53, 2026)
    assert res.json()["week_label"] == "Week 53 (28 Dec - 3 Jan)"

    res = await client.post("/api/v1/planning/overview", json={"garden": GARDEN, "today": "2024-12-30"})
    assert (res.json()["week"], res.json()["year"]) == (1, 2025)
    assert res.json()["week_label"] == "Week 1 (30 Dec - 5 Jan)"


async def test_weekly_tasks_default_week_at_new_year(client: AsyncClient):
    maintenance = {
        **MAINTENANCE,
        "plant_types": {
            **MAINTENANCE["plant_types"],
            "winter-brassicas": {
                "plants": ["kale"],
                "tasks": [{"id": "mulch", "name": "Mulch the bed", "frequency": "weekly", "months": [12]}],
            },
        },
    }
    reference = ReferenceData(
        catalog=SpeciesCatalog.from_definitions(PLANTS),
        families=FamilyRegistry.from_definitions(FAMILIES),
        maintenance=MaintenanceRegistry.from_definitions(maintenance),
        stations=StationRegistry.from_definitions(STATIONS),
    )
    app.dependency_overrides[get_reference_data] = lambda: reference

    garden = {"id": "g1", "zones": [
        {"id": "z1", "plant_id": "kale", "x": 0, "y": 0, "width_cm": 100, "height_cm": 100, "status": "growing"},
    ]}
    # 2027-01-01 lies in ISO week 53 of 2026, whose Thursday is 31 December
    res = await client.post("/api/v1/planning/tasks/weekly", json={"garden": garden, "today": "2027-01-01"})
    assert res.status_code == 200
    tasks = res.json()
    assert {t["week"] for t in tasks} == {53}
    assert {t["task"]["id"] for t in tasks} == {"mulch", "harvest-kale"}
