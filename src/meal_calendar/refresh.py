"""Fetch, group and publish one week of meal plans.

A refresh builds a complete CalendarSnapshot before anything can see it.
CalendarStore swaps the published snapshot in a single assignment, so
readers get either the previous week or the new one, never a mix.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from meal_calendar.aggregate import aggregate, empty_days
from meal_calendar.client import TandoorClient
from meal_calendar.config import CalendarSettings
from meal_calendar.display import DayRow, render_week
from meal_calendar.errors import ClassifiedError, check_configuration, classify
from meal_calendar.models import DateWindow, GroupedDay, MealPlan
from meal_calendar.window import compute_window

logger = logging.getLogger(__name__)

FetchFn = Callable[[date, date], list[MealPlan]]


@dataclass(frozen=True)
class CalendarSnapshot:
    window: DateWindow
    days: tuple[GroupedDay, ...]
    error: ClassifiedError | None = None
    fetched_count: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def rows(self, settings: CalendarSettings) -> list[DayRow]:
        return render_week(self.days, settings)


def empty_snapshot(reference_date: date, settings: CalendarSettings) -> CalendarSnapshot:
    window = compute_window(reference_date, settings.anchor_weekday)
    return CalendarSnapshot(window=window, days=empty_days(window))


def _client_fetch(settings: CalendarSettings) -> FetchFn:
    def fetch(from_date: date, to_date: date) -> list[MealPlan]:
        with TandoorClient(settings.base_url, settings.api_key, timeout=settings.timeout) as client:
            return client.fetch_meal_plans(from_date, to_date)
    return fetch


def refresh_calendar(
    settings: CalendarSettings,
    reference_date: date,
    fetch: FetchFn | None = None,
    log: logging.Logger | None = None,
) -> CalendarSnapshot:
    """Compute the week around reference_date and fill it from the server.

    Fetch and aggregation failures do not raise: the snapshot keeps all
    seven dated days, empty, and carries the classified error.
    """
    log = log or logger
    window = compute_window(reference_date, settings.anchor_weekday)
    log.info(
        "Refreshing %s..%s (reference %s)",
        window.start.isoformat(), window.end.isoformat(), reference_date.isoformat(),
    )

    try:
        check_configuration(settings.base_url, settings.api_key)
        fetch = fetch or _client_fetch(settings)
        plans = fetch(window.start, window.end)
        days = aggregate(plans, window, log)
    except Exception as exc:
        error = classify(exc, log)
        return CalendarSnapshot(window=window, days=empty_days(window), error=error)

    return CalendarSnapshot(window=window, days=days, fetched_count=len(plans))


class CalendarStore:
    """Holds the most recently completed snapshot."""

    def __init__(self, settings: CalendarSettings, reference_date: date) -> None:
        self._settings = settings
        self._lock = threading.Lock()
        self._snapshot = empty_snapshot(reference_date, settings)

    @property
    def current(self) -> CalendarSnapshot:
        return self._snapshot

    def refresh(
        self,
        reference_date: date,
        fetch: FetchFn | None = None,
        log: logging.Logger | None = None,
    ) -> CalendarSnapshot:
        snapshot = refresh_calendar(self._settings, reference_date, fetch, log)
        with self._lock:
            self._snapshot = snapshot
        return snapshot
