"""Seven-day calendar window anchored on a fixed weekday."""

from __future__ import annotations

from datetime import date, timedelta

from meal_calendar.models import DateWindow

DAY_NAMES = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

DAY_ABBREVIATIONS = [d[:3] for d in DAY_NAMES]

WINDOW_DAYS = 7
DEFAULT_ANCHOR = "saturday"


def get_day_index(day: str | int) -> int:
    """Convert a day name or abbreviation to a weekday index (Monday=0).

    Integers are accepted as-is when in range.
    """
    if isinstance(day, int):
        if 0 <= day < 7:
            return day
        raise ValueError(f"Weekday index out of range: {day}")

    key = day.strip().lower()
    for i, name in enumerate(DAY_NAMES):
        if key in (name.lower(), name[:3].lower()):
            return i
    raise ValueError(f"Unknown weekday '{day}'. Use a day name like 'saturday' or 'sat'.")


def anchor_date(reference_date: date, anchor_weekday: str | int) -> date:
    """Most recent date on or before reference_date that falls on the anchor weekday."""
    target = get_day_index(anchor_weekday)
    current = reference_date
    while current.weekday() != target:
        current -= timedelta(days=1)
    return current


def compute_window(reference_date: date, anchor_weekday: str | int = DEFAULT_ANCHOR) -> DateWindow:
    start = anchor_date(reference_date, anchor_weekday)
    return DateWindow(tuple(start + timedelta(days=i) for i in range(WINDOW_DAYS)))


def today() -> date:
    return date.today()
