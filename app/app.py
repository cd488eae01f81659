import asyncio
import contextlib
import functools
import json
import logging
from typing import Any, Awaitable, Callable, Coroutine

from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich.logging import RichHandler
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse
from starlette.routing import Mount, Route, WebSocketRoute
from starlette.staticfiles import StaticFiles
from starlette.websockets import WebSocket, WebSocketDisconnect

from app import config
from app.views import FragmentView, WebSocketView
from domain.controller import (
    DETAIL_FAILED_MESSAGE,
    SEARCH_FAILED_MESSAGE,
    MealController,
)
from domain.mealdb import MealDBClient


CONFIG = config.Config()


logging.basicConfig(
    level=CONFIG.log_level.upper(),
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)],
)
logger = logging.getLogger(__name__)


TEMPLATES = Environment(
    loader=FileSystemLoader(CONFIG.html_dir),
    autoescape=select_autoescape(),
)


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


@contextlib.asynccontextmanager
async def lifespan(app: Starlette):
    logger.info("Recipe finder up (%s), using %s", CONFIG.env.value, CONFIG.mealdb_base_url)
    yield
    await app.state.mealdb.aclose()


def controller_for(request: Request | WebSocket, view: Any) -> MealController:
    return MealController(request.app.state.mealdb, view)


@aHTMLResponse
async def homepage(request: Request) -> str:
    return TEMPLATES.get_template("index.html").render()


@aHTMLResponse
async def search(request: Request) -> str:
    view = FragmentView(environment=TEMPLATES)
    await controller_for(request, view).search(request.query_params.get("q"))
    return view.html


@aHTMLResponse
async def meal_detail(request: Request) -> str:
    view = FragmentView(environment=TEMPLATES)
    await controller_for(request, view).select_meal(request.path_params["id"])
    return view.html


@aHTMLResponse
async def back(request: Request) -> str:
    view = FragmentView(environment=TEMPLATES)
    await controller_for(request, view).back()
    return view.html


def text_field(event: dict[str, Any], name: str) -> str | None:
    value = event.get(name)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{name} must be text, got {value!r}")
    return value


def dispatch(
    controller: MealController,
    event: dict[str, Any],
) -> Coroutine[Any, Any, None] | None:
    try:
        match event.get("action"):
            case "search":
                return controller.search(text_field(event, "search"))
            case "select":
                return controller.select_meal(text_field(event, "meal_id"))
            case "back":
                return controller.back()
            case action:
                logger.warning("Unknown action %r", action)
                return None
    except ValueError as e:
        logger.warning("Ignoring malformed event: %s", e)
        return None


async def run_action(
    action: Coroutine[Any, Any, None],
    view: WebSocketView,
    failure_message: str,
) -> None:
    try:
        await action
    except Exception:
        logger.exception("UI action failed")
        await view.show_error(failure_message)


def action_done(task: asyncio.Task[None]) -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.error("Could not report failure", exc_info=task.exception())


async def meal_session(ws: WebSocket) -> None:
    """One controller per page. Events run as tasks so a slow lookup never
    holds up the next search."""
    await ws.accept()
    view = WebSocketView(ws, environment=TEMPLATES)
    controller = controller_for(ws, view)
    tasks: set[asyncio.Task[None]] = set()

    try:
        while True:
            text = await ws.receive_text()
            try:
                event = json.loads(text)
            except ValueError:
                logger.warning("Ignoring malformed event %r", text)
                continue
            if not isinstance(event, dict):
                logger.warning("Ignoring malformed event %r", text)
                continue

            action = dispatch(controller, event)
            if action is None:
                continue
            failure_message = (
                DETAIL_FAILED_MESSAGE
                if event["action"] == "select"
                else SEARCH_FAILED_MESSAGE
            )
            task = asyncio.create_task(run_action(action, view, failure_message))
            tasks.add(task)
            task.add_done_callback(tasks.discard)
            task.add_done_callback(action_done)
    except WebSocketDisconnect:
        logger.debug("Session closed with %d pending actions.", len(tasks))
    finally:
        for task in tasks:
            task.cancel()


app = Starlette(
    debug=True if CONFIG.env == config.Env.local else False,
    routes=[
        Route("/", homepage),
        Route("/search", search),
        Route("/meals/{id}", meal_detail),
        Route("/back", back),
        WebSocketRoute("/ws", meal_session),
        Mount("/assets", StaticFiles(directory="assets")),
    ],
    lifespan=lifespan,
)

app.state.mealdb = MealDBClient(CONFIG.mealdb_base_url, timeout=CONFIG.http_timeout)
