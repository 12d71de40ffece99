"""Group meal plans into the days of a calendar window."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from meal_calendar.display import display_name, log_safe_name
from meal_calendar.matching import applies_to_date, is_inverted, is_multi_day, plan_dates
from meal_calendar.models import DateWindow, GroupedDay, MealPlan
from meal_calendar.window import DAY_ABBREVIATIONS

logger = logging.getLogger(__name__)

# Lower sorts first; anything not listed shares the last rank.
MEAL_TYPE_PRIORITY = {
    "lunch": 0,
    "dinner": 1,
}
OTHER_PRIORITY = 2


def meal_type_priority(plan: MealPlan) -> int:
    return MEAL_TYPE_PRIORITY.get(plan.meal_type_name.lower(), OTHER_PRIORITY)


def sort_by_meal_type(plans: Iterable[MealPlan]) -> list[MealPlan]:
    """Lunch first, then dinner, then the rest in their original order."""
    # sorted() is stable, so equal priorities keep input order
    return sorted(plans, key=meal_type_priority)


def format_day_label(day: date) -> str:
    """Format a date as 'Sat 06/12' independent of the process locale."""
    return f"{DAY_ABBREVIATIONS[day.weekday()]} {day.day:02d}/{day.month:02d}"


def _log_label(plan: MealPlan) -> str:
    name = log_safe_name(display_name(plan.recipe, plan.title), 30)
    return f"[{name}]" if is_multi_day(plan) else name


def empty_days(window: DateWindow) -> tuple[GroupedDay, ...]:
    """Dated rows with no meals, used before data loads or after a failed fetch."""
    return tuple(GroupedDay(date=d, label=format_day_label(d)) for d in window)


def aggregate(
    plans: Iterable[MealPlan],
    window: DateWindow,
    log: logging.Logger | None = None,
) -> tuple[GroupedDay, ...]:
    """Assign each plan to every window date it covers.

    Returns exactly one GroupedDay per window date, in window order. Multi-day
    plans appear on each date of their range that falls inside the window.
    """
    log = log or logger
    plans = list(plans)

    for plan in plans:
        if is_inverted(plan):
            start, end = plan_dates(plan)
            log.warning(
                "Meal plan %s ends before it starts (%s..%s); it matches no date",
                plan.id, start, end,
            )

    groups: list[GroupedDay] = []
    for day in window:
        matched = [p for p in plans if applies_to_date(p, day)]
        if matched:
            names = ", ".join(_log_label(p) for p in matched)
            log.debug("Matched %s to %d meal(s): %s", day.isoformat(), len(matched), names)
        else:
            log.debug("No match for %s", day.isoformat())

        groups.append(
            GroupedDay(
                date=day,
                label=format_day_label(day),
                plans=tuple(sort_by_meal_type(matched)),
            )
        )

    log.info(
        "Grouped %d meal plan(s) into %s..%s, %d day(s) with meals",
        len(plans), window.start.isoformat(), window.end.isoformat(),
        sum(1 for g in groups if not g.is_empty),
    )
    return tuple(groups)
