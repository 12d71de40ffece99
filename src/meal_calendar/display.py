"""Display text, recipe links and per-day rows for the calendar."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from meal_calendar.matching import is_multi_day, parse_date, plan_dates
from meal_calendar.models import GroupedDay, MealPlan, Recipe
from meal_calendar.window import DAY_ABBREVIATIONS

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"
ELLIPSIS = "..."
MAX_NAME_LENGTH = 15
MAX_ENTRIES_PER_DAY = 5


@dataclass(frozen=True)
class MealEntry:
    """One meal as shown inside a day row."""
    text: str
    display_name: str
    meal_plan_id: int
    meal_type_name: str
    from_date: str
    to_date: str | None
    recipe_url: str | None


@dataclass(frozen=True)
class DayRow:
    date: date
    label: str
    entries: tuple[MealEntry, ...] = ()


def display_name(recipe: Recipe | None, title: str | None) -> str:
    """Recipe name, else the plan title, else 'Untitled'."""
    if recipe is not None and recipe.name.strip():
        return recipe.name
    if recipe is None:
        logger.debug("Placeholder entry (no recipe), using title '%s'", title)
    if title and title.strip():
        return title
    return UNTITLED


def recipe_reference(recipe: Recipe | None) -> int | None:
    """Recipe id usable in a link, or None for placeholders and invalid ids."""
    if recipe is not None and recipe.id > 0:
        return recipe.id
    return None


def build_recipe_url(base_url: str, recipe: Recipe | None) -> str:
    recipe_id = recipe_reference(recipe)
    if recipe_id is None:
        return base_url
    return f"{base_url.rstrip('/')}/recipe/{recipe_id}/"


def truncate(text: str, max_length: int = MAX_NAME_LENGTH) -> str:
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text


def log_safe_name(text: str, max_length: int = 50) -> str:
    """Single-line, length-capped copy of a name for log messages."""
    return text.replace("\n", " ")[:max_length]


def format_date_range_span(from_date: str, to_date: str) -> str:
    """'Sat-Mon' style span for a multi-day plan, or '' if a date is unparseable."""
    start = parse_date(from_date)
    end = parse_date(to_date)
    if start is None or end is None:
        return ""
    return f"{DAY_ABBREVIATIONS[start.weekday()]}-{DAY_ABBREVIATIONS[end.weekday()]}"


def render_entry(plan: MealPlan, base_url: str, max_name_length: int = MAX_NAME_LENGTH) -> MealEntry:
    name = display_name(plan.recipe, plan.title)
    start, end = plan_dates(plan)

    # Truncate the name first so the span suffix is always visible
    suffix = ""
    if is_multi_day(plan) and end is not None:
        span = format_date_range_span(start, end)
        if span:
            suffix = f" ({span})"

    recipe_url = None
    if recipe_reference(plan.recipe) is not None:
        recipe_url = build_recipe_url(base_url, plan.recipe)

    return MealEntry(
        text=truncate(name, max_name_length) + suffix,
        display_name=name,
        meal_plan_id=plan.id,
        meal_type_name=plan.meal_type_name,
        from_date=start,
        to_date=end,
        recipe_url=recipe_url,
    )


def render_day(
    group: GroupedDay,
    base_url: str,
    max_name_length: int = MAX_NAME_LENGTH,
    max_entries: int = MAX_ENTRIES_PER_DAY,
) -> DayRow:
    """Build the row for one day, keeping at most max_entries meals."""
    if len(group.plans) > max_entries:
        logger.debug(
            "%s has %d meals, showing the first %d",
            group.date.isoformat(), len(group.plans), max_entries,
        )
    entries = tuple(
        render_entry(plan, base_url, max_name_length)
        for plan in group.plans[:max_entries]
    )
    return DayRow(date=group.date, label=group.label, entries=entries)


def render_week(groups: tuple[GroupedDay, ...], settings) -> list[DayRow]:
    """Render every grouped day with the display limits from settings."""
    return [
        render_day(
            g,
            settings.base_url,
            max_name_length=settings.max_name_length,
            max_entries=settings.max_entries_per_day,
        )
        for g in groups
    ]
