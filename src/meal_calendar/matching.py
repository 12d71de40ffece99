"""Decide which calendar dates a meal plan covers.

Upstream dates arrive as plain dates ("2025-12-06") or full timestamps
("2025-12-01T22:24:35.522000+01:00"). Only the date part is significant.
Nothing here raises on malformed input: unparseable values fall back to
comparing the normalized strings, which for well-formed ``YYYY-MM-DD``
values orders the same way as the dates themselves.
"""

from __future__ import annotations

import logging
from datetime import date

from meal_calendar.models import MealPlan

logger = logging.getLogger(__name__)

ISO_DATE_LENGTH = 10


def normalize_date(raw: str) -> str:
    """Return the YYYY-MM-DD prefix of a date or timestamp string."""
    if len(raw) >= ISO_DATE_LENGTH:
        return raw[:ISO_DATE_LENGTH]
    logger.warning("Date string too short: '%s'", raw)
    return raw


def parse_date(raw: str) -> date | None:
    """Parse the normalized date, or None if it is not a valid calendar date."""
    try:
        return date.fromisoformat(normalize_date(raw))
    except ValueError:
        return None


def plan_dates(plan: MealPlan) -> tuple[str, str | None]:
    """Normalized (from_date, to_date) for a plan."""
    start = normalize_date(plan.from_date)
    end = normalize_date(plan.to_date) if plan.to_date is not None else None
    return start, end


def is_multi_day(plan: MealPlan) -> bool:
    start, end = plan_dates(plan)
    return end is not None and end != start


def is_inverted(plan: MealPlan) -> bool:
    """True when to_date precedes from_date. Such plans match no date."""
    start, end = plan_dates(plan)
    if end is None:
        return False
    start_d, end_d = parse_date(start), parse_date(end)
    if start_d is not None and end_d is not None:
        return end_d < start_d
    return end < start


def applies_to_date(plan: MealPlan, day: date | str) -> bool:
    """Whether plan covers the given calendar date (inclusive of both ends)."""
    day_str = day.isoformat() if isinstance(day, date) else normalize_date(day)
    start, end = plan_dates(plan)

    if end is None:
        return start == day_str

    start_d, end_d, day_d = parse_date(start), parse_date(end), parse_date(day_str)
    if start_d is not None and end_d is not None and day_d is not None:
        return start_d <= day_d <= end_d

    logger.debug(
        "Falling back to string comparison for plan %s (%s..%s)", plan.id, start, end
    )
    return start <= day_str <= end
