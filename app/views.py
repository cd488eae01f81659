"""`MealView`s that answer with htmx out-of-band swaps."""

from abc import ABC, abstractmethod

from jinja2 import Environment
from markupsafe import Markup
from starlette.websockets import WebSocket

from app.html.meal_cards import render_card_list
from app.html.meal_detail import render_detail_panel
from domain.models import MealDetail, MealSummary


HEADING = Markup('<h2 id="result-heading" class="result-heading" hx-swap-oob="true">{}</h2>')
MEALS = Markup('<div id="meals" class="meals" hx-swap-oob="true">{}</div>')
ERROR = Markup('<div id="error-container" class="error-container" hx-swap-oob="true">{}</div>')
HIDDEN_ERROR = Markup(
    '<div id="error-container" class="error-container hidden" hx-swap-oob="true"></div>'
)
EMPTY_INPUT = Markup(
    '<input type="text" id="search-input" name="search" value="" '
    'placeholder="Search for a meal..." autocomplete="off" hx-swap-oob="true">'
)
DETAILS = Markup(
    '<div id="meal-details" class="meal-details" hx-swap-oob="true" '
    "hx-on::load=\"this.scrollIntoView({{behavior: 'smooth'}})\">"
    '<button id="back-btn" ws-send hx-trigger="click" hx-vals=\'{{"action": "back"}}\'>'
    '<i class="fas fa-arrow-left"></i> Back</button>'
    '<div class="meal-details-content">{}</div>'
    "</div>"
)
HIDDEN_DETAILS = Markup(
    '<div id="meal-details" class="meal-details hidden" hx-swap-oob="true"></div>'
)


class OobView(ABC):
    def __init__(self, *, environment: Environment) -> None:
        self.env = environment

    @abstractmethod
    async def emit(self, html: str) -> None:
        ...

    async def set_heading(self, text: str) -> None:
        await self.emit(HEADING.format(text))

    async def show_meals(self, meals: list[MealSummary]) -> None:
        cards = render_card_list(meals, environment=self.env)
        await self.emit(MEALS.format(Markup(cards)))

    async def clear_input(self) -> None:
        await self.emit(EMPTY_INPUT)

    async def show_error(self, message: str) -> None:
        await self.emit(ERROR.format(message))

    async def hide_error(self) -> None:
        await self.emit(HIDDEN_ERROR)

    async def show_detail(self, meal: MealDetail) -> None:
        panel = render_detail_panel(meal, environment=self.env)
        await self.emit(DETAILS.format(Markup(panel)))

    async def hide_detail(self) -> None:
        await self.emit(HIDDEN_DETAILS)


class WebSocketView(OobView):
    """Sends every swap as soon as it happens."""

    def __init__(self, ws: WebSocket, *, environment: Environment) -> None:
        super().__init__(environment=environment)
        self.ws = ws

    async def emit(self, html: str) -> None:
        await self.ws.send_text(html)


class FragmentView(OobView):
    """Collects swaps for a single http response."""

    def __init__(self, *, environment: Environment) -> None:
        super().__init__(environment=environment)
        self.fragments: list[str] = []

    async def emit(self, html: str) -> None:
        self.fragments.append(str(html))

    @property
    def html(self) -> str:
        return "\n".join(self.fragments)
