#!/usr/bin/env python3
"""
Print the planning overview for a garden snapshot.

Usage:
    python scripts/run_planning.py garden.json
    python scripts/run_planning.py garden.json --archives archives.json --station 280 --date 2026-04-14
"""
import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
    stream=sys.stdout,
)

from app.schemas.garden import Garden
from app.schemas.planning import SeasonArchive
from app.schemas.region import UserSettings
from app.services.planning import build_planning_overview
from app.services.reference_data import load_reference_data


def main() -> None:
    parser = argparse.ArgumentParser(description="Show tasks, hints and rotation warnings for a garden")
    parser.add_argument("garden", type=Path, help="garden snapshot (JSON)")
    parser.add_argument("--archives", type=Path, help="season archives (JSON list)")
    parser.add_argument("--station", help="KNMI station code")
    parser.add_argument("--postcode", help="Dutch postcode")
    parser.add_argument("--offset", type=int, help="manual frost offset in days")
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="planning date (YYYY-MM-DD)")
    args = parser.parse_args()

    garden = Garden(**json.loads(args.garden.read_text(encoding="utf-8")))
    archives = []
    if args.archives:
        archives = [SeasonArchive(**a) for a in json.loads(args.archives.read_text(encoding="utf-8"))]
    settings = UserSettings(knmi_station_code=args.station, postcode=args.postcode, frost_offset_days=args.offset)

    overview = build_planning_overview(
        garden,
        load_reference_data(),
        today=args.date,
        settings=settings,
        archives=archives,
    )

    print(f"\n{overview.week_label} | region: {overview.region}\n")
    for task in overview.weekly_tasks:
        mark = "x" if task.completed else " "
        print(f"  [{mark}] {task.plant_icon} {task.plant_name}: {task.task.name} ({task.type.value})")
    for hint in overview.status_hints:
        print(f"  → {hint.plant_name}: {hint.message}")
    for warning in overview.rotation_warnings:
        print(
            f"  ! {warning.plant_name}: {warning.family_name} grew here in {warning.conflict_year} "
            f"({warning.conflict_plant}); wait {warning.rotation_years} years"
        )


if __name__ == "__main__":
    main()
