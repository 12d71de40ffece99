"""HTTP client for the recipe server's meal plan API."""

from __future__ import annotations

import logging
from datetime import date

import httpx

from meal_calendar.errors import ApiError, ParseError
from meal_calendar.matching import normalize_date
from meal_calendar.models import MealPlan, MealPlanUpdate

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
MEAL_PLAN_PATH = "api/meal-plan/"


def _as_iso(value: date | str) -> str:
    return value.isoformat() if isinstance(value, date) else value


def parse_meal_plans(payload: object) -> list[MealPlan]:
    """Decode a meal plan listing, either a bare list or a {"results": [...]} page."""
    if isinstance(payload, dict):
        payload = payload.get("results")
    if not isinstance(payload, list):
        raise ParseError(f"Expected a list of meal plans, got {type(payload).__name__}")
    try:
        return [MealPlan.from_dict(item) for item in payload]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ParseError(f"Malformed meal plan record: {exc}") from exc


class TandoorClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._client = httpx.Client(
            base_url=self._base_url + "/",
            headers=self._headers(),
            timeout=timeout,
            transport=transport,
        )

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self._api_key}"}

    def __enter__(self) -> TandoorClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _check(self, resp: httpx.Response) -> None:
        logger.info("Response code: %s", resp.status_code)
        if not resp.is_success:
            raise ApiError(resp.status_code, resp.text)

    def _json(self, resp: httpx.Response) -> object:
        try:
            return resp.json()
        except ValueError as exc:
            raise ParseError(f"Response is not valid JSON: {exc}") from exc

    def fetch_meal_plans(self, from_date: date | str, to_date: date | str) -> list[MealPlan]:
        params = {"from_date": _as_iso(from_date), "to_date": _as_iso(to_date)}
        logger.info(
            "GET %s/%s?from_date=%s&to_date=%s",
            self._base_url, MEAL_PLAN_PATH, params["from_date"], params["to_date"],
        )
        logger.debug("Authorization: Bearer ***%d characters***", len(self._api_key))
        resp = self._client.get(MEAL_PLAN_PATH, params=params)
        self._check(resp)
        plans = parse_meal_plans(self._json(resp))
        logger.info("Received %d meal plans", len(plans))
        return plans

    def update_meal_plan(self, plan_id: int, update: MealPlanUpdate) -> MealPlan:
        """Move or extend a meal plan. to_date may not precede from_date."""
        if update.to_date is not None and normalize_date(update.to_date) < normalize_date(update.from_date):
            raise ValueError("End date cannot be before start date")

        path = f"{MEAL_PLAN_PATH}{plan_id}/"
        logger.info("PATCH %s/%s %s", self._base_url, path, update.to_dict())
        resp = self._client.patch(path, json=update.to_dict())
        self._check(resp)
        try:
            return MealPlan.from_dict(self._json(resp))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ParseError(f"Malformed meal plan record: {exc}") from exc
