from jinja2 import Environment

from domain.models import MealSummary


def render_card_list(
    meals: list[MealSummary],
    *,
    environment: Environment,
    template_name: str = "meal-cards.html",
) -> str:
    """One card per meal, in the order given."""
    return environment.get_template(template_name).render(meals=meals)
