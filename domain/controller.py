"""Turns widget events into recipe database calls and view updates."""

import logging
from typing import Protocol

from domain.mealdb import MealDBClient, MealDBError, MealNotFound
from domain.models import (
    DetailShown,
    Empty,
    Error,
    Idle,
    MealDetail,
    MealSummary,
    Results,
    Searching,
    UIState,
)


logger = logging.getLogger(__name__)


EMPTY_QUERY_MESSAGE = "Please enter a search term"
SEARCH_FAILED_MESSAGE = "Something went wrong. Please try again later."
DETAIL_FAILED_MESSAGE = "Could not load recipe details. Please try again later."


def searching_heading(term: str) -> str:
    return f'Searching for "{term}"...'


def results_heading(term: str) -> str:
    return f'Search results for "{term}":'


def no_results_message(term: str) -> str:
    return f'No recipes found for "{term}". Try another search term!'


class MealView(Protocol):
    async def set_heading(self, text: str) -> None:
        ...

    async def show_meals(self, meals: list[MealSummary]) -> None:
        ...

    async def clear_input(self) -> None:
        ...

    async def show_error(self, message: str) -> None:
        ...

    async def hide_error(self) -> None:
        ...

    async def show_detail(self, meal: MealDetail) -> None:
        """Render the panel, reveal it and bring it into view."""
        ...

    async def hide_detail(self) -> None:
        ...


class MealController:
    """One per page session.

    Searches and lookups are numbered as they are issued. A response that
    arrives after a newer request of the same kind was issued is dropped.
    """

    def __init__(self, client: MealDBClient, view: MealView) -> None:
        self.client = client
        self.view = view
        self.state: UIState = Idle()
        self._search_seq = 0
        self._lookup_seq = 0

    async def search(self, raw_input: str | None) -> None:
        term = (raw_input or "").strip()
        if not term:
            await self.view.show_error(EMPTY_QUERY_MESSAGE)
            return

        self._search_seq += 1
        seq = self._search_seq

        self.state = Searching(term)
        await self.view.set_heading(searching_heading(term))
        await self.view.show_meals([])
        await self.view.hide_error()

        try:
            meals = await self.client.search_by_name(term)
        except MealDBError:
            if seq != self._search_seq:
                logger.debug("Dropping failed search %r, superseded.", term)
                return
            logger.exception("Search error for %r", term)
            self.state = Error(SEARCH_FAILED_MESSAGE)
            await self.view.show_error(SEARCH_FAILED_MESSAGE)
            return

        if seq != self._search_seq:
            logger.debug("Dropping results for %r, superseded.", term)
            return

        if not meals:
            self.state = Empty(term)
            await self.view.set_heading("")
            await self.view.show_meals([])
            await self.view.show_error(no_results_message(term))
            return

        self.state = Results(meals)
        await self.view.set_heading(results_heading(term))
        await self.view.show_meals(meals)
        await self.view.clear_input()
        await self.view.hide_error()

    async def select_meal(self, meal_id: str | None) -> None:
        if not meal_id:
            return

        self._lookup_seq += 1
        seq = self._lookup_seq

        try:
            meal = await self.client.lookup_by_id(meal_id)
        except (MealDBError, MealNotFound) as e:
            if seq != self._lookup_seq:
                return
            if isinstance(e, MealNotFound):
                logger.warning("Meal %s not found.", meal_id)
            else:
                logger.exception("Meal details error for %s", meal_id)
            await self.view.show_error(DETAIL_FAILED_MESSAGE)
            return

        if seq != self._lookup_seq:
            logger.debug("Dropping details for %s, superseded.", meal_id)
            return

        previous = self.state
        if isinstance(previous, DetailShown):
            previous = previous.previous
        self.state = DetailShown(meal, previous)
        await self.view.show_detail(meal)

    async def back(self) -> None:
        await self.view.hide_detail()
        if isinstance(self.state, DetailShown):
            self.state = self.state.previous
