"""
Regional frost-date adjustment.

Species sowing windows are written for the reference station (De Bilt, 260).
A user's KNMI station, resolved from an explicit code or from their postcode,
shifts those windows by the difference in average last-frost date.

Month-level windows get a coarse ±1 month nudge once the difference exceeds
two weeks; week-level windows shift linearly by round(days / 7).
Never raises on missing settings or stations; the adjustment is a no-op then.
"""
import logging
import re
from datetime import date, timedelta
from typing import Iterable, Optional

from app.schemas.region import KnmiStation, UserSettings
from app.services.weeks import MAX_WEEK, iso_week, parse_frost_date

logger = logging.getLogger(__name__)

REFERENCE_STATION_CODE = "260"
DEFAULT_LAST_FROST = "04-20"
DEFAULT_FIRST_FROST = "10-25"

# Below this many days the regions are considered equivalent
MIN_SHIFT_DAYS = 10
# Beyond this many days a month-level window moves by one month
MONTH_SHIFT_DAYS = 14


class StationRegistry:
    """Read-only lookup over KNMI stations and postcode ranges."""

    def __init__(
        self,
        stations: Iterable[KnmiStation],
        postcode_ranges: dict[str, str],
        reference_code: str = REFERENCE_STATION_CODE,
    ):
        self._stations = tuple(stations)
        self._by_code = {s.code: s for s in self._stations}
        self._ranges = tuple(
            (int(bounds.split("-")[0]), int(bounds.split("-")[1]), code)
            for bounds, code in postcode_ranges.items()
        )
        self.reference_code = reference_code

    @classmethod
    def from_definitions(cls, data: dict, reference_code: str = REFERENCE_STATION_CODE) -> "StationRegistry":
        stations = [KnmiStation(**s) for s in data.get("stations", [])]
        return cls(stations, data.get("postcode_ranges", {}), reference_code)

    @property
    def reference_station(self) -> Optional[KnmiStation]:
        return self._by_code.get(self.reference_code)

    def get_all_stations(self) -> list[KnmiStation]:
        return list(self._stations)

    def get_station_by_code(self, code: str) -> Optional[KnmiStation]:
        return self._by_code.get(code)

    def get_station_by_postcode(self, postcode: str) -> Optional[KnmiStation]:
        """
        Map a Dutch postcode to its KNMI station.

        Only the first four digits count. Fewer than four digits → None.
        A number outside every configured range falls back to the reference station.
        """
        digits = re.sub(r"\D", "", postcode)[:4]
        if len(digits) < 4:
            return None

        number = int(digits)
        for start, end, code in self._ranges:
            if start <= number <= end:
                return self.get_station_by_code(code)

        return self.reference_station


# ── Station resolution ────────────────────────────────────────────────────────


def resolve_station_code(settings: Optional[UserSettings], stations: StationRegistry) -> Optional[str]:
    """Explicit station code first, then the postcode's station, else None."""
    if settings is None:
        return None
    if settings.knmi_station_code:
        return settings.knmi_station_code
    if settings.postcode:
        station = stations.get_station_by_postcode(settings.postcode)
        return station.code if station else stations.reference_code
    return None


def get_last_frost_date(stations: StationRegistry, code: str, year: Optional[int] = None) -> date:
    year = year or date.today().year
    station = stations.get_station_by_code(code)
    if station is None:
        return parse_frost_date(DEFAULT_LAST_FROST, year)
    return parse_frost_date(station.avg_last_frost_date, year)


def get_first_frost_date(stations: StationRegistry, code: str, year: Optional[int] = None) -> date:
    year = year or date.today().year
    station = stations.get_station_by_code(code)
    if station is None:
        return parse_frost_date(DEFAULT_FIRST_FROST, year)
    return parse_frost_date(station.avg_first_frost_date, year)


def frost_diff_days(
    settings: Optional[UserSettings],
    stations: StationRegistry,
    year: Optional[int] = None,
) -> Optional[int]:
    """
    Days between the user's and the reference station's last frost, plus the
    manual offset. Positive means frost ends later than at the reference.
    None when no station is configured or either station is unknown.
    """
    code = resolve_station_code(settings, stations)
    if code is None:
        return None

    reference = stations.reference_station
    user_station = stations.get_station_by_code(code)
    if reference is None or user_station is None:
        logger.debug("frost_diff_days: unknown station %s, no adjustment", code)
        return None

    year = year or date.today().year
    ref_frost = parse_frost_date(reference.avg_last_frost_date, year)
    user_frost = parse_frost_date(user_station.avg_last_frost_date, year)
    diff = (user_frost - ref_frost).days

    if settings.frost_offset_days:
        diff += settings.frost_offset_days
    return diff


# ── Adjustment ────────────────────────────────────────────────────────────────


def adjust_sowing_month(
    month: int,
    settings: Optional[UserSettings],
    stations: StationRegistry,
    year: Optional[int] = None,
) -> int:
    diff = frost_diff_days(settings, stations, year)
    if diff is None or abs(diff) < MIN_SHIFT_DAYS:
        return month

    if diff > MONTH_SHIFT_DAYS:
        shift = 1
    elif diff < -MONTH_SHIFT_DAYS:
        shift = -1
    else:
        shift = 0
    return max(1, min(12, month + shift))


def adjust_sowing_week(
    week: int,
    settings: Optional[UserSettings],
    stations: StationRegistry,
    year: Optional[int] = None,
) -> int:
    diff = frost_diff_days(settings, stations, year)
    if diff is None:
        return week
    return max(1, min(MAX_WEEK, week + round(diff / 7)))


def get_frost_week(
    settings: Optional[UserSettings],
    stations: StationRegistry,
    year: Optional[int] = None,
) -> int:
    """ISO week of the user's average last frost, manual offset included."""
    year = year or date.today().year
    code = resolve_station_code(settings, stations) or stations.reference_code
    last_frost = get_last_frost_date(stations, code, year)
    if settings is not None and settings.frost_offset_days:
        last_frost += timedelta(days=settings.frost_offset_days)
    return iso_week(last_frost)


def get_region_description(settings: Optional[UserSettings], stations: StationRegistry) -> str:
    code = resolve_station_code(settings, stations)
    if code is None:
        return "Default (De Bilt)"
    station = stations.get_station_by_code(code)
    if station is None:
        return "Unknown station"
    return station.name
