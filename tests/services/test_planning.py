from datetime import date, datetime, timezone

from app.schemas.garden import ZoneStatus
from app.schemas.planning import ArchivedZone, SeasonArchive, TaskType
from app.schemas.region import UserSettings
from app.schemas.weather import WeatherData
from app.services.planning import build_planning_overview, next_month
from tests.factories import NOW, make_garden, make_zone


def test_next_month_wraps():
    assert next_month(4) == 5
    assert next_month(12) == 1


def test_overview_for_april(reference):
    garden = make_garden(
        make_zone("z1", "tomato"),
        make_zone("z2", "bean", x=300, status=ZoneStatus.growing),
    )
    overview = build_planning_overview(garden, reference, today=date(2026, 4, 15), now=NOW)

    assert overview.week == 16
    assert overview.year == 2026
    assert overview.month == 4
    assert overview.week_label == "Week 16 (13-19 Apr)"
    assert overview.region == "Default (De Bilt)"

    assert TaskType.sow_indoor in {t.type for t in overview.current_tasks}
    # beans: aphid warnings start in May
    assert {t.task.id for t in overview.upcoming_tasks if t.zone_id == "z2"} >= {"sow-outdoor-bean", "aphid"}
    assert [t.type for t in overview.weekly_tasks] == [TaskType.sow_indoor]
    assert [h.zone_id for h in overview.status_hints] == ["z1"]
    assert overview.rotation_warnings == []
    assert [w.zone_id for w in overview.watering] == ["z2"]


def test_overview_uses_region_and_explicit_week(reference):
    garden = make_garden(make_zone())
    overview = build_planning_overview(
        garden, reference,
        today=date(2026, 4, 15), week=11, year=2026,
        settings=UserSettings(knmi_station_code="280"), now=NOW,
    )
    assert overview.week == 11
    assert overview.month == 3
    assert overview.region == "Eelde"
    # shifted window starts in week 12
    assert overview.weekly_tasks == []
    assert overview.status_hints == []
    assert TaskType.sow_indoor not in {t.type for t in overview.current_tasks}


def test_explicit_week_moves_whole_overview(reference):
    garden = make_garden(make_zone(status=ZoneStatus.growing))
    overview = build_planning_overview(garden, reference, today=date(2026, 4, 15), week=30, year=2026, now=NOW)

    assert overview.month == 7
    assert TaskType.sow_indoor not in {t.type for t in overview.current_tasks}
    assert TaskType.harvest in {t.type for t in overview.current_tasks}
    assert {t.task.id for t in overview.upcoming_tasks} >= {"side-shoots", "late-blight"}
    assert [h.suggested_status for h in overview.status_hints] == [ZoneStatus.harvesting]


def test_default_week_near_new_year_uses_iso_year(reference):
    overview = build_planning_overview(make_garden(), reference, today=date(2027, 1, 1), now=NOW)
    assert (overview.week, overview.year) == (53, 2026)
    assert overview.week_label == "Week 53 (28 Dec - 3 Jan)"

    overview = build_planning_overview(make_garden(), reference, today=date(2024, 12, 30), now=NOW)
    assert (overview.week, overview.year) == (1, 2025)
    assert overview.week_label == "Week 1 (30 Dec - 5 Jan)"


def test_overview_includes_rotation_and_weather(reference):
    archive = SeasonArchive(
        id="g1-2025", garden_id="g1", season_year=2025,
        zones=[ArchivedZone(zone_id="old", plant_id="pepper", plant_name="Pepper",
                            x=0, y=0, width_cm=100, height_cm=100)],
        created_at=datetime(2025, 11, 1, tzinfo=timezone.utc),
    )
    garden = make_garden(make_zone(status=ZoneStatus.growing))
    weather = WeatherData(precipitation_last_7_days=25, max_temp_today=12)

    overview = build_planning_overview(
        garden, reference, today=date(2026, 7, 1), archives=[archive], weather=weather, now=NOW,
    )

    assert [w.conflict_year for w in overview.rotation_warnings] == [2025]
    assert overview.watering[0].skip is True
