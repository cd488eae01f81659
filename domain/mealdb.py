import logging
from typing import Any

import httpx

from domain.models import MealDetail, MealSummary, RawMeal


logger = logging.getLogger(__name__)


BASE_URL = "https://www.themealdb.com/api/json/v1/1/"
TIMEOUT = 20


class MealDBError(Exception):
    """The recipe database could not be reached or sent something unreadable."""


class MealNotFound(Exception):
    pass


def mealdb_client_factory(
    base_url: str | None = None,
    timeout: float | None = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=BASE_URL if base_url is None else base_url,
        headers={"Accept": "application/json"},
        timeout=TIMEOUT if timeout is None else timeout,
    )


class MealDBClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self.owns_client = http_client is None
        self.http_client = (
            mealdb_client_factory(base_url, timeout)
            if http_client is None
            else http_client
        )

    async def aclose(self) -> None:
        if self.owns_client:
            await self.http_client.aclose()

    async def _meals(self, path: str, params: dict[str, str]) -> list[RawMeal]:
        logger.debug("GET %s %s", path, params)
        try:
            resp = await self.http_client.get(path, params=params)
            resp.raise_for_status()
            data: Any = resp.json()
        except httpx.HTTPError as e:
            raise MealDBError(f"Request to {path} failed: {e!r}") from e
        except ValueError as e:
            raise MealDBError(f"{path} did not return JSON.") from e

        if not isinstance(data, dict) or "meals" not in data:
            raise MealDBError(f"Unexpected payload from {path}.")

        meals = data["meals"]
        if meals is None:
            return []
        if not isinstance(meals, list):
            raise MealDBError(f"Unexpected meals from {path}: {type(meals)}")
        return meals

    async def search_by_name(self, term: str) -> list[MealSummary]:
        """Meals whose name matches `term`. Empty when nothing matches."""
        raw_meals = await self._meals("search.php", {"s": term})
        try:
            return [MealSummary.from_raw(raw) for raw in raw_meals]
        except (KeyError, TypeError, AttributeError) as e:
            raise MealDBError(f"Malformed search result for {term!r}.") from e

    async def lookup_by_id(self, meal_id: str) -> MealDetail:
        raw_meals = await self._meals("lookup.php", {"i": meal_id})
        if not raw_meals or not raw_meals[0]:
            raise MealNotFound(meal_id)
        try:
            return MealDetail.from_raw(raw_meals[0])
        except (KeyError, TypeError, AttributeError) as e:
            raise MealDBError(f"Malformed meal {meal_id}.") from e
