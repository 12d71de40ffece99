"""Shared data models for the meal calendar."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta


def _optional_str(data: dict, key: str) -> str | None:
    """String value of key, None when absent or null. Other types raise TypeError."""
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Recipe:
    id: int
    name: str
    image: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Recipe:
        return cls(
            id=int(data["id"]),
            name=_optional_str(data, "name") or "",
            image=data.get("image"),
        )


@dataclass(frozen=True)
class MealPlan:
    id: int
    title: str
    from_date: str  # ISO date or date-time, as sent by the server
    meal_type_name: str = ""
    recipe: Recipe | None = None  # None for placeholder entries
    to_date: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> MealPlan:
        """Build a meal plan from the server's JSON representation.

        The meal type label is read from ``meal_type_name`` when present,
        otherwise from the nested ``meal_type.name``. Text fields of the
        wrong type raise TypeError.
        """
        recipe_data = data.get("recipe")
        meal_type_name = _optional_str(data, "meal_type_name")
        if meal_type_name is None:
            meal_type = data.get("meal_type") or {}
            meal_type_name = _optional_str(meal_type, "name") or ""

        from_date = _optional_str(data, "from_date")
        if from_date is None:
            raise KeyError("from_date")

        return cls(
            id=int(data["id"]),
            title=_optional_str(data, "title") or "",
            from_date=from_date,
            to_date=_optional_str(data, "to_date"),
            meal_type_name=meal_type_name,
            recipe=Recipe.from_dict(recipe_data) if recipe_data else None,
        )


@dataclass(frozen=True)
class MealPlanUpdate:
    """Partial update of a meal plan's dates."""
    from_date: str
    to_date: str | None = None

    def to_dict(self) -> dict:
        return {"from_date": self.from_date, "to_date": self.to_date}


@dataclass(frozen=True)
class DateWindow:
    dates: tuple[date, ...]

    def __post_init__(self) -> None:
        if len(self.dates) != 7:
            raise ValueError(f"A window holds 7 dates, got {len(self.dates)}")
        for prev, cur in zip(self.dates, self.dates[1:]):
            if cur - prev != timedelta(days=1):
                raise ValueError(f"Window dates are not consecutive: {prev} -> {cur}")

    @property
    def start(self) -> date:
        return self.dates[0]

    @property
    def end(self) -> date:
        return self.dates[-1]

    def __iter__(self):
        return iter(self.dates)

    def __len__(self) -> int:
        return len(self.dates)


@dataclass(frozen=True)
class GroupedDay:
    date: date
    label: str
    plans: tuple[MealPlan, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.plans
