"""Substitute reference data and builders shared by the tests."""
from datetime import datetime, timezone

from app.schemas.garden import Garden, Zone

NOW = datetime(2026, 4, 15, 12, 0, tzinfo=timezone.utc)

PLANTS = [
    {"id": "tomato", "name": "Tomato", "icon": "🍅", "sow_indoor": {"start": 3, "end": 5},
     "sow_outdoor": None, "harvest": {"start": 7, "end": 9}, "water_need": "high"},
    {"id": "pepper", "name": "Pepper", "icon": "🫑", "sow_indoor": {"start": 2, "end": 4},
     "harvest": {"start": 7, "end": 10}},
    {"id": "lettuce", "name": "Lettuce", "icon": "🥬", "sow_indoor": {"start": 3, "end": 4},
     "sow_outdoor": {"start": 3, "end": 8}, "harvest": {"start": 5, "end": 10}},
    {"id": "kale", "name": "Kale", "icon": "🥬", "sow_outdoor": {"start": 5, "end": 7},
     "harvest": {"start": 10, "end": 2}},
    {"id": "bean", "name": "Green bean", "icon": "🫘", "sow_outdoor": {"start": 5, "end": 7},
     "harvest": {"start": 7, "end": 9}, "water_need": "low"},
    {"id": "basil", "name": "Basil", "icon": "🌿", "sow_indoor": {"start": 3, "end": 5}},
]

FAMILIES = {
    "solanaceae": {"name": "Nightshades", "rotation_years": 3, "plants": ["tomato", "pepper", "potato"]},
    "brassicaceae": {"name": "Cabbages", "rotation_years": 4, "plants": ["kale"]},
    "fabaceae": {"name": "Legumes", "rotation_years": 2, "plants": ["bean"]},
    "asteraceae": {"name": "Daisies", "rotation_years": 2, "plants": ["lettuce"]},
}

MAINTENANCE = {
    "plant_types": {
        "fruit-vegetables": {
            "plants": ["tomato", "pepper"],
            "tasks": [
                {"id": "side-shoots", "name": "Remove side shoots", "frequency": "weekly", "months": [6, 7, 8]},
                {"id": "stake", "name": "Stake plants", "frequency": "once", "months": [5]},
                {"id": "check-water", "name": "Check soil moisture", "frequency": "daily"},
            ],
            "warnings": [
                {"id": "late-blight", "name": "Late blight", "months": [7, 8, 9], "description": "Brown patches"},
            ],
        },
        "legumes": {
            "plants": ["bean"],
            "tasks": [{"id": "pick", "name": "Pick pods", "frequency": "weekly", "months": [7, 8]}],
            "warnings": [{"id": "aphid", "name": "Black bean aphid", "months": [5, 6], "description": "Aphids"}],
        },
    },
    "watering_defaults": {
        "low": {"frequency_days": 7, "description": "Once a week"},
        "medium": {"frequency_days": 3, "description": "Every few days"},
        "high": {"frequency_days": 1, "description": "Daily"},
    },
}

STATIONS = {
    "stations": [
        {"code": "260", "name": "De Bilt", "lat": 52.1, "lon": 5.18,
         "avg_last_frost_date": "04-20", "avg_first_frost_date": "10-25"},
        {"code": "280", "name": "Eelde", "lat": 53.13, "lon": 6.59,
         "avg_last_frost_date": "05-05", "avg_first_frost_date": "10-12"},
        {"code": "310", "name": "Vlissingen", "lat": 51.44, "lon": 3.6,
         "avg_last_frost_date": "04-02", "avg_first_frost_date": "11-10"},
        {"code": "235", "name": "De Kooy", "lat": 52.92, "lon": 4.79,
         "avg_last_frost_date": "04-10", "avg_first_frost_date": "11-05"},
        {"code": "290", "name": "Twenthe", "lat": 52.27, "lon": 6.89,
         "avg_last_frost_date": "05-02", "avg_first_frost_date": "10-15"},
    ],
    "postcode_ranges": {
        "3400-4299": "260",
        "4300-4799": "310",
        "7500-7799": "290",
        "9300-9999": "280",
    },
}


def make_zone(zone_id="z1", plant_id="tomato", x=0, y=0, w=100, h=100, **kwargs) -> Zone:
    return Zone(id=zone_id, plant_id=plant_id, x=x, y=y, width_cm=w, height_cm=h, **kwargs)


def make_garden(*zones: Zone) -> Garden:
    return Garden(id="g1", name="Allotment", zones=list(zones))


