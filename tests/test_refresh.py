import threading
from datetime import date

import httpx
import respx
from httpx import Response
from meal_calendar.config import CalendarSettings
from meal_calendar.errors import ApiError, ErrorCategory, ParseError
from meal_calendar.models import MealPlan
from meal_calendar.refresh import CalendarStore, refresh_calendar

SETTINGS = CalendarSettings(base_url="https://tandoor.example.com", api_key="k")
TUESDAY = date(2025, 12, 9)


def fetch_returning(plans):
    calls = []

    def fetch(from_date, to_date):
        calls.append((from_date, to_date))
        return plans

    fetch.calls = calls
    return fetch


def fetch_raising(exc):
    def fetch(from_date, to_date):
        raise exc
    return fetch


def assert_empty_week(snapshot):
    assert len(snapshot.days) == 7
    assert snapshot.days[0].date == date(2025, 12, 6)
    assert all(day.is_empty for day in snapshot.days)


class TestRefreshCalendar:
    def test_success(self, week_plans):
        fetch = fetch_returning(week_plans)
        snapshot = refresh_calendar(SETTINGS, TUESDAY, fetch)

        assert snapshot.ok
        assert fetch.calls == [(date(2025, 12, 6), date(2025, 12, 12))]
        assert snapshot.fetched_count == 5
        assert [len(d.plans) for d in snapshot.days] == [3, 1, 0, 0, 0, 0, 1]

    def test_missing_configuration_skips_fetch(self):
        fetch = fetch_returning([])
        snapshot = refresh_calendar(CalendarSettings(base_url="", api_key="k"), TUESDAY, fetch)
        assert snapshot.error.category is ErrorCategory.MISSING_CONFIGURATION
        assert fetch.calls == []
        assert_empty_week(snapshot)

    def test_api_error_keeps_dated_rows(self):
        snapshot = refresh_calendar(SETTINGS, TUESDAY, fetch_raising(ApiError(500, "oops")))
        assert snapshot.error.category is ErrorCategory.API_ERROR
        assert snapshot.error.status_code == 500
        assert_empty_week(snapshot)

    def test_network_error(self):
        snapshot = refresh_calendar(
            SETTINGS, TUESDAY, fetch_raising(httpx.ConnectError("unreachable"))
        )
        assert snapshot.error.category is ErrorCategory.NETWORK_ERROR
        assert_empty_week(snapshot)

    def test_parse_error(self):
        snapshot = refresh_calendar(SETTINGS, TUESDAY, fetch_raising(ParseError("bad")))
        assert snapshot.error.category is ErrorCategory.PARSE_ERROR

    def test_unknown_error(self):
        snapshot = refresh_calendar(SETTINGS, TUESDAY, fetch_raising(RuntimeError("?")))
        assert snapshot.error.category is ErrorCategory.UNKNOWN_ERROR
        assert_empty_week(snapshot)

    def test_anchor_from_settings(self):
        settings = CalendarSettings(base_url="https://h", api_key="k", anchor_weekday=0)
        snapshot = refresh_calendar(settings, TUESDAY, fetch_returning([]))
        assert snapshot.window.start == date(2025, 12, 8)

    @respx.mock
    def test_default_fetch_uses_client(self, api_meal_plans):
        respx.get("https://tandoor.example.com/api/meal-plan/").mock(
            return_value=Response(200, json={"results": api_meal_plans})
        )
        snapshot = refresh_calendar(SETTINGS, TUESDAY)
        assert snapshot.ok
        rows = snapshot.rows(SETTINGS)
        assert rows[0].entries[0].text == "Spaghetti Bolog..."
        assert rows[0].entries[0].recipe_url == "https://tandoor.example.com/recipe/456/"
        assert [e.text for e in rows[1].entries] == ["Leftovers (Sun-Tue)"]
        assert [e.text for e in rows[3].entries] == ["Leftovers (Sun-Tue)"]
        assert rows[4].entries == ()

    @respx.mock
    def test_malformed_text_field_is_parse_error(self):
        respx.get("https://tandoor.example.com/api/meal-plan/").mock(
            return_value=Response(
                200, json={"results": [{"id": 1, "from_date": "2025-12-06", "meal_type_name": 5}]}
            )
        )
        snapshot = refresh_calendar(SETTINGS, TUESDAY)
        assert snapshot.error.category is ErrorCategory.PARSE_ERROR
        assert_empty_week(snapshot)

    def test_aggregation_failure_is_classified(self):
        plans = [
            MealPlan(id=1, title="Soup", from_date="2025-12-06", meal_type_name=5),
            MealPlan(id=2, title="Stew", from_date="2025-12-06", meal_type_name="Dinner"),
        ]
        snapshot = refresh_calendar(SETTINGS, TUESDAY, fetch_returning(plans))
        assert snapshot.error.category is ErrorCategory.UNKNOWN_ERROR
        assert_empty_week(snapshot)


class TestCalendarStore:
    def test_initial_snapshot_is_empty_week(self):
        store = CalendarStore(SETTINGS, TUESDAY)
        assert store.current.ok
        assert_empty_week(store.current)

    def test_refresh_replaces_snapshot(self, week_plans):
        store = CalendarStore(SETTINGS, TUESDAY)
        before = store.current
        after = store.refresh(TUESDAY, fetch_returning(week_plans))
        assert store.current is after
        assert before is not after
        # the earlier snapshot is untouched
        assert all(day.is_empty for day in before.days)

    def test_failed_refresh_still_publishes(self, week_plans):
        store = CalendarStore(SETTINGS, TUESDAY)
        store.refresh(TUESDAY, fetch_returning(week_plans))
        failed = store.refresh(TUESDAY, fetch_raising(httpx.ConnectError("down")))
        assert store.current is failed
        assert_empty_week(store.current)

    def test_reader_sees_only_complete_snapshots(self, week_plans):
        store = CalendarStore(SETTINGS, TUESDAY)
        seen = []
        stop = threading.Event()

        def reader():
            while not stop.is_set():
                snap = store.current
                seen.append((len(snap.days), sum(len(d.plans) for d in snap.days)))

        thread = threading.Thread(target=reader)
        thread.start()
        for _ in range(50):
            store.refresh(TUESDAY, fetch_returning(week_plans))
            store.refresh(TUESDAY, fetch_raising(RuntimeError("x")))
        stop.set()
        thread.join()

        assert seen
        assert {count for count, _ in seen} == {7}
        assert {total for _, total in seen} <= {0, 5}
