from urllib.parse import urlsplit

from jinja2 import Environment

from domain.models import MealDetail


UNCATEGORIZED = "Uncategorized"


class MealDetailPanel:
    def __init__(
        self,
        meal: MealDetail,
        *,
        environment: Environment,
        template_name: str = "meal-detail.html",
    ) -> None:
        self.meal = meal
        self.env = environment
        self.name = template_name

    @property
    def title(self) -> str:
        return self.meal.name

    @property
    def category(self) -> str:
        return self.meal.category or UNCATEGORIZED

    @property
    def ingredient_lines(self) -> list[str]:
        # A missing measure renders as nothing rather than "None".
        return [f"{i.measure or ''} {i.ingredient}" for i in self.meal.ingredients]

    @property
    def video_url(self) -> str | None:
        url = self.meal.video_url
        if url and urlsplit(url).scheme in ("http", "https"):
            return url
        return None

    def render(self) -> str:
        return self.env.get_template(self.name).render(meal=self.meal, panel=self)


def render_detail_panel(meal: MealDetail, *, environment: Environment) -> str:
    return MealDetailPanel(meal, environment=environment).render()
