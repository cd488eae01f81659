from pathlib import Path
from typing import Any, TypeAlias

import httpx
from jinja2 import Environment, FileSystemLoader, select_autoescape
import pytest

from domain.mealdb import BASE_URL, MealDBClient


HTML_DIR = Path(__file__).parent.parent / "assets" / "html"


Payload: TypeAlias = dict[str, Any] | httpx.Response | Exception


def raw_meal(id: str, name: str, **fields: Any) -> dict[str, Any]:
    meal: dict[str, Any] = {
        "idMeal": id,
        "strMeal": name,
        "strMealThumb": f"https://www.themealdb.com/images/media/meals/{id}.jpg",
        "strCategory": None,
        "strInstructions": None,
        "strYoutube": None,
    }
    for i in range(1, 21):
        meal[f"strIngredient{i}"] = ""
        meal[f"strMeasure{i}"] = ""
    meal.update(fields)
    return meal


class FakeMealDB:
    """Stands in for TheMealDB behind an `httpx.MockTransport`."""

    def __init__(self) -> None:
        self.searches: dict[str, Payload] = {}
        self.lookups: dict[str, Payload] = {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = request.url.path.rsplit("/", 1)[-1]
        if endpoint == "search.php":
            payload = self.searches.get(request.url.params["s"], {"meals": None})
        elif endpoint == "lookup.php":
            payload = self.lookups.get(request.url.params["i"], {"meals": None})
        else:
            return httpx.Response(404, text="Not Found")
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, httpx.Response):
            return payload
        return httpx.Response(200, json=payload)


@pytest.fixture
def arrabiata() -> dict[str, Any]:
    return raw_meal(
        "52771",
        "Spicy Arrabiata Penne",
        strCategory="Vegetarian",
        strInstructions="Bring a large pot of water to a boil.",
        strYoutube="https://www.youtube.com/watch?v=1IszT_guI08",
        strIngredient1="penne rigate",
        strMeasure1="1 pound",
        strIngredient2="olive oil",
        strMeasure2="1/4 cup",
        strIngredient3="garlic",
        strMeasure3="3 cloves",
    )


@pytest.fixture
def pasta_payload(arrabiata: dict[str, Any]) -> dict[str, Any]:
    return {
        "meals": [
            arrabiata,
            raw_meal("52772", "Teriyaki Chicken Casserole", strCategory="Chicken"),
        ]
    }


@pytest.fixture
def fake_mealdb(
    pasta_payload: dict[str, Any],
    arrabiata: dict[str, Any],
) -> FakeMealDB:
    fake = FakeMealDB()
    fake.searches["pasta"] = pasta_payload
    fake.lookups["52771"] = {"meals": [arrabiata]}
    return fake


@pytest.fixture
def mealdb(fake_mealdb: FakeMealDB) -> MealDBClient:
    return MealDBClient(
        http_client=httpx.AsyncClient(
            base_url=BASE_URL,
            transport=httpx.MockTransport(fake_mealdb),
        )
    )


@pytest.fixture
def templates() -> Environment:
    return Environment(
        loader=FileSystemLoader(HTML_DIR),
        autoescape=select_autoescape(),
    )
