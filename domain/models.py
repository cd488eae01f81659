from typing import Any, TypeAlias


INGREDIENT_SLOTS = 20


RawMeal: TypeAlias = dict[str, Any]


class MealSummary:
    def __init__(
        self,
        *,
        id: str,
        name: str,
        thumbnail_url: str,
        category: str | None = None,
    ) -> None:
        self.id = id
        self.name = name
        self.thumbnail_url = thumbnail_url
        self.category = category

    def __repr__(self) -> str:
        return f"<MealSummary(id={self.id}, name={self.name})>"

    @classmethod
    def from_raw(cls, raw: RawMeal) -> "MealSummary":
        return cls(
            id=str(raw["idMeal"]),
            name=raw.get("strMeal") or "",
            thumbnail_url=raw.get("strMealThumb") or "",
            category=raw.get("strCategory") or None,
        )

    def to_dict(self) -> dict[str, str | None]:
        return {
            "id": self.id,
            "name": self.name,
            "thumbnail_url": self.thumbnail_url,
            "category": self.category,
        }


class Ingredient:
    def __init__(self, *, ingredient: str, measure: str | None = None) -> None:
        self.ingredient = ingredient
        self.measure = measure

    def __repr__(self) -> str:
        return f"<Ingredient({self.measure} {self.ingredient})>"

    def to_dict(self) -> dict[str, str | None]:
        return {"ingredient": self.ingredient, "measure": self.measure}


def extract_ingredients(raw: RawMeal) -> list[Ingredient]:
    """Ingredients from the numbered `strIngredientN` / `strMeasureN` slots.

    Blank slots are skipped, slot order is kept.
    """
    ingredients: list[Ingredient] = []
    for i in range(1, INGREDIENT_SLOTS + 1):
        name = raw.get(f"strIngredient{i}")
        if not isinstance(name, str) or not name.strip():
            continue
        measure = raw.get(f"strMeasure{i}")
        ingredients.append(
            Ingredient(
                ingredient=name,
                measure=measure if isinstance(measure, str) else None,
            )
        )
    return ingredients


class MealDetail:
    def __init__(
        self,
        *,
        id: str,
        name: str,
        thumbnail_url: str,
        instructions: str,
        category: str | None = None,
        video_url: str | None = None,
        ingredients: list[Ingredient] | None = None,
    ) -> None:
        self.id = id
        self.name = name
        self.thumbnail_url = thumbnail_url
        self.instructions = instructions
        self.category = category
        self.video_url = video_url
        self.ingredients = [] if ingredients is None else ingredients

    def __repr__(self) -> str:
        return f"<MealDetail(id={self.id}, name={self.name})>"

    @classmethod
    def from_raw(cls, raw: RawMeal) -> "MealDetail":
        return cls(
            id=str(raw["idMeal"]),
            name=raw.get("strMeal") or "",
            thumbnail_url=raw.get("strMealThumb") or "",
            instructions=raw.get("strInstructions") or "",
            category=raw.get("strCategory") or None,
            video_url=raw.get("strYoutube") or None,
            ingredients=extract_ingredients(raw),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "thumbnail_url": self.thumbnail_url,
            "category": self.category,
            "instructions": self.instructions,
            "video_url": self.video_url,
            "ingredients": [i.to_dict() for i in self.ingredients],
        }


# What the widget is currently showing. Only the controller moves between these.


class Idle:
    def __repr__(self) -> str:
        return "<Idle>"


class Searching:
    def __init__(self, query: str) -> None:
        self.query = query

    def __repr__(self) -> str:
        return f"<Searching(query={self.query})>"


class Results:
    def __init__(self, meals: list[MealSummary]) -> None:
        self.meals = meals

    def __repr__(self) -> str:
        return f"<Results(n={len(self.meals)})>"


class Empty:
    def __init__(self, query: str) -> None:
        self.query = query

    def __repr__(self) -> str:
        return f"<Empty(query={self.query})>"


class Error:
    def __init__(self, message: str) -> None:
        self.message = message

    def __repr__(self) -> str:
        return f"<Error(message={self.message})>"


class DetailShown:
    def __init__(self, meal: MealDetail, previous: "UIState") -> None:
        self.meal = meal
        self.previous = previous

    def __repr__(self) -> str:
        return f"<DetailShown(meal={self.meal.id})>"


UIState: TypeAlias = Idle | Searching | Results | Empty | Error | DetailShown
