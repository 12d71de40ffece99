"""Print the current week as a table or JSON."""

from __future__ import annotations

import json
import logging
import sys
from datetime import date
from pathlib import Path

from meal_calendar.config import CalendarSettings, apply_cli_overrides, load_config
from meal_calendar.display import DayRow
from meal_calendar.refresh import CalendarSnapshot, refresh_calendar
from meal_calendar.window import today

logger = logging.getLogger(__name__)


def format_week_table(rows: list[DayRow]) -> str:
    """Format day rows as a readable table, one line per meal."""
    lines = []
    header = f"{'Day':<10} {'Meal':<10} {'Recipe'}"
    lines.append(header)
    lines.append("-" * len(header))

    for row in rows:
        if not row.entries:
            lines.append(row.label)
            continue
        for i, entry in enumerate(row.entries):
            label = row.label if i == 0 else ""
            lines.append(f"{label:<10} {entry.meal_type_name:<10} {entry.text}")

    return "\n".join(lines)


def format_week_json(snapshot: CalendarSnapshot, rows: list[DayRow]) -> str:
    data = {
        "start_date": snapshot.window.start.isoformat(),
        "end_date": snapshot.window.end.isoformat(),
        "error": None,
        "days": [
            {
                "date": row.date.isoformat(),
                "label": row.label,
                "meals": [
                    {
                        "id": e.meal_plan_id,
                        "name": e.display_name,
                        "text": e.text,
                        "meal_type": e.meal_type_name,
                        "from_date": e.from_date,
                        "to_date": e.to_date,
                        "recipe_url": e.recipe_url,
                    }
                    for e in row.entries
                ],
            }
            for row in rows
        ],
    }
    if snapshot.error is not None:
        data["error"] = {
            "category": snapshot.error.category.value,
            "message": snapshot.error.message,
            "status_code": snapshot.error.status_code,
        }
    return json.dumps(data, indent=2)


def parse_reference_date(value: str | None) -> date:
    if value is None:
        return today()
    return date.fromisoformat(value)


def run_week(
    config_path: Path | None = None,
    url: str | None = None,
    api_key: str | None = None,
    anchor: str | None = None,
    reference_date: str | None = None,
    output_format: str = "table",
) -> None:
    """CLI entry point for week command."""
    config = load_config(config_path)
    config = apply_cli_overrides(config, url=url, api_key=api_key, anchor=anchor)

    try:
        settings = CalendarSettings.from_config(config)
        day = parse_reference_date(reference_date)
    except ValueError as exc:
        logger.error("%s", exc)
        sys.exit(2)

    snapshot = refresh_calendar(settings, day)
    rows = snapshot.rows(settings)

    if output_format == "json":
        print(format_week_json(snapshot, rows))
    else:
        print(format_week_table(rows))

    if snapshot.error is not None:
        from meal_calendar.log import print_error_banner

        print_error_banner(snapshot.error)
        sys.exit(1)
