"""
ISO week arithmetic for the planning calendar.

Species data is expressed in months; weekly planning works on ISO-8601 week
numbers. The month→week conversion is a fixed-ratio approximation meant for
display and scheduling, not an authoritative calendar mapping.
"""
from datetime import date, timedelta
from typing import Optional

from app.schemas.plant import MonthRange, WeekRange

WEEKS_PER_MONTH = 4.33
MAX_WEEK = 53

MONTH_NAMES_SHORT = [
    "", "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def iso_week(d: date) -> int:
    """ISO-8601 week number (1–53): the week holding the date's Thursday."""
    return d.isocalendar()[1]


def week_date_range(week: int, year: int) -> tuple[date, date]:
    """Monday and Sunday of ISO week ``week`` in ``year``."""
    # January 4th always falls in ISO week 1
    jan4 = date(year, 1, 4)
    week1_monday = jan4 - timedelta(days=jan4.isoweekday() - 1)
    start = week1_monday + timedelta(weeks=week - 1)
    return start, start + timedelta(days=6)


def week_month(week: int, year: int) -> int:
    """Month the week's Thursday falls in."""
    start, _ = week_date_range(week, year)
    return (start + timedelta(days=3)).month


def month_range_to_week_range(month_range: MonthRange) -> WeekRange:
    # Month X starts around week (X-1)*4.33 + 1 and ends around week X*4.33
    start_week = _clamp(round((month_range.start - 1) * WEEKS_PER_MONTH) + 1, 1, MAX_WEEK)
    end_week = _clamp(round(month_range.end * WEEKS_PER_MONTH), 1, MAX_WEEK)
    return WeekRange(start_week=start_week, end_week=end_week)


def is_in_month_range(month: int, month_range: Optional[MonthRange]) -> bool:
    if month_range is None:
        return False
    if month_range.start <= month_range.end:
        return month_range.start <= month <= month_range.end
    # Wrap-around, e.g. October through March
    return month >= month_range.start or month <= month_range.end


def is_in_week_range(week: int, week_range: Optional[WeekRange]) -> bool:
    if week_range is None:
        return False
    if week_range.start_week <= week_range.end_week:
        return week_range.start_week <= week <= week_range.end_week
    return week >= week_range.start_week or week <= week_range.end_week


def parse_frost_date(mmdd: str, year: int) -> date:
    """Parse a year-independent ``MM-DD`` string into a date in ``year``."""
    month, day = (int(part) for part in mmdd.split("-"))
    return date(year, month, day)


def frost_date_to_week(mmdd: str, year: int) -> int:
    return iso_week(parse_frost_date(mmdd, year))


def format_week_label(week: int, year: int) -> str:
    """Format as ``Week 12 (16-22 Mar)`` or ``Week 14 (30 Mar - 5 Apr)``."""
    start, end = week_date_range(week, year)
    start_month = MONTH_NAMES_SHORT[start.month]
    end_month = MONTH_NAMES_SHORT[end.month]
    if start_month == end_month:
        return f"Week {week} ({start.day}-{end.day} {start_month})"
    return f"Week {week} ({start.day} {start_month} - {end.day} {end_month})"
