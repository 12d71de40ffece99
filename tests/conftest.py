from datetime import date

import pytest
from meal_calendar.models import MealPlan, Recipe
from meal_calendar.window import compute_window


def make_plan(
    id: int,
    from_date: str,
    to_date: str | None = None,
    meal_type: str = "Lunch",
    title: str = "Test Meal",
    recipe: Recipe | None = None,
) -> MealPlan:
    return MealPlan(
        id=id,
        title=title,
        from_date=from_date,
        to_date=to_date,
        meal_type_name=meal_type,
        recipe=recipe,
    )


@pytest.fixture
def saturday_window():
    """Week of 2025-12-06 (Saturday) to 2025-12-12 (Friday)."""
    return compute_window(date(2025, 12, 9), "saturday")


@pytest.fixture
def week_plans() -> list[MealPlan]:
    """Plans around the week of 2025-12-06, including ones that cross its edges."""
    return [
        make_plan(1, "2025-12-06", None, "Lunch"),
        make_plan(2, "2025-12-06", None, "Dinner"),
        make_plan(3, "2025-12-06", "2025-12-07", "Breakfast"),
        make_plan(4, "2025-12-01", None, "Lunch"),
        make_plan(5, "2025-12-12", "2025-12-14", "Dinner"),
    ]


@pytest.fixture
def api_meal_plans() -> list[dict]:
    """Meal plan records as the server returns them."""
    return [
        {
            "id": 11,
            "title": "",
            "recipe": {"id": 456, "name": "Spaghetti Bolognese", "image": None},
            "from_date": "2025-12-06T00:00:00+01:00",
            "to_date": "2025-12-06T00:00:00+01:00",
            "meal_type": {"id": 2, "name": "Dinner"},
            "meal_type_name": "Dinner",
        },
        {
            "id": 12,
            "title": "Leftovers",
            "recipe": None,
            "from_date": "2025-12-07",
            "to_date": "2025-12-09",
            "meal_type": {"id": 1, "name": "Lunch"},
        },
    ]
