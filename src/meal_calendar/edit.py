"""Move a meal plan to another day or stretch it over several days."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from meal_calendar.client import TandoorClient
from meal_calendar.config import CalendarSettings, apply_cli_overrides, load_config
from meal_calendar.errors import check_configuration, classify
from meal_calendar.matching import normalize_date, parse_date
from meal_calendar.models import MealPlan, MealPlanUpdate

logger = logging.getLogger(__name__)


def build_update(from_date: str, to_date: str | None = None) -> MealPlanUpdate:
    """Validate new dates and build the update payload.

    Both dates must be YYYY-MM-DD. An end date equal to the start date is
    sent as-is; an end date before the start date is rejected.
    """
    start = parse_date(from_date)
    if start is None:
        raise ValueError(f"Invalid start date '{from_date}'. Expected YYYY-MM-DD")
    if to_date is None:
        return MealPlanUpdate(from_date=start.isoformat())

    end = parse_date(to_date)
    if end is None:
        raise ValueError(f"Invalid end date '{to_date}'. Expected YYYY-MM-DD")
    if end < start:
        raise ValueError("End date cannot be before start date")
    return MealPlanUpdate(from_date=start.isoformat(), to_date=end.isoformat())


def move_meal_plan(settings: CalendarSettings, plan_id: int, update: MealPlanUpdate) -> MealPlan:
    check_configuration(settings.base_url, settings.api_key)
    with TandoorClient(settings.base_url, settings.api_key, timeout=settings.timeout) as client:
        return client.update_meal_plan(plan_id, update)


def run_move(
    plan_id: int,
    from_date: str,
    to_date: str | None = None,
    config_path: Path | None = None,
    url: str | None = None,
    api_key: str | None = None,
) -> None:
    """CLI entry point for move command."""
    config = load_config(config_path)
    config = apply_cli_overrides(config, url=url, api_key=api_key)
    settings = CalendarSettings.from_config(config)

    try:
        update = build_update(from_date, to_date)
    except ValueError as exc:
        logger.error("%s", exc)
        sys.exit(2)

    try:
        plan = move_meal_plan(settings, plan_id, update)
    except Exception as exc:
        from meal_calendar.log import print_error_banner

        print_error_banner(classify(exc))
        sys.exit(1)

    span = normalize_date(plan.from_date)
    if plan.to_date is not None:
        span += f" to {normalize_date(plan.to_date)}"
    print(f"Meal plan {plan.id} updated: {span}")
