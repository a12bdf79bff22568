"""Carousel controller: fetches products and drives the view state.

The controller is single-threaded. Each load is tagged with a token, and only
the response for the most recent token is applied; a slower, older response
that arrives afterwards is dropped.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, List, Optional

import requests
from pydantic import ValidationError

from ..schemas import DisplayProduct, FilterCriteria, ProductListResponse
from . import state as transitions
from .render import CarouselView, render_view
from .state import CarouselViewState

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT_WIDTH = 1280


class LoadStatus(str, enum.Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class CarouselLoadError(Exception):
    pass


class CarouselController:
    def __init__(
        self,
        base_url: str,
        *,
        viewport_width: float = DEFAULT_VIEWPORT_WIDTH,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.viewport_width = viewport_width
        self.timeout = timeout
        self._session = session or requests.Session()
        self.status = LoadStatus.LOADING
        self.state = CarouselViewState(items_per_view=transitions.items_per_view_for_width(viewport_width))
        self.criteria = FilterCriteria()
        self.error: Optional[str] = None
        self.gold_price: Optional[float] = None
        self._token = 0

    @property
    def filters_enabled(self) -> bool:
        return self.status is not LoadStatus.LOADING

    # -- load lifecycle -------------------------------------------------

    def begin_load(self, criteria: Optional[FilterCriteria] = None) -> int:
        """Enter the loading state and return the token identifying this load."""
        self._token += 1
        self.criteria = criteria or FilterCriteria()
        self.status = LoadStatus.LOADING
        self.error = None
        return self._token

    def complete_load(self, token: int, items: List[DisplayProduct], gold_price: Optional[float] = None) -> bool:
        if token != self._token:
            logger.debug("Discarding stale product response (token %s, current %s)", token, self._token)
            return False
        self.state = CarouselViewState.from_items(items, self.viewport_width)
        self.gold_price = gold_price
        self.status = LoadStatus.READY
        return True

    def fail_load(self, token: int, message: str) -> bool:
        if token != self._token:
            return False
        self.status = LoadStatus.ERROR
        self.error = message
        return True

    def fetch_products(self, criteria: FilterCriteria):
        params = criteria.model_dump(by_alias=True, exclude_none=True)
        try:
            resp = self._session.get(f"{self.base_url}/products", params=params, timeout=self.timeout)
            resp.raise_for_status()
            body = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise CarouselLoadError(f"Failed to fetch products: {exc}") from exc

        if not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            raise CarouselLoadError(error or "Unknown error")
        try:
            listing = ProductListResponse.model_validate(body)
        except ValidationError as exc:
            raise CarouselLoadError(f"Malformed product listing in response: {exc}") from exc
        return listing.data, listing.gold_price

    def load(self, criteria: Optional[FilterCriteria] = None) -> LoadStatus:
        token = self.begin_load(criteria)
        try:
            items, gold_price = self.fetch_products(self.criteria)
        except CarouselLoadError as exc:
            logger.error("Error loading products: %s", exc)
            self.fail_load(token, str(exc))
        else:
            self.complete_load(token, items, gold_price)
        return self.status

    def apply_filters(self, criteria: FilterCriteria) -> LoadStatus:
        return self.load(criteria)

    def clear_filters(self) -> LoadStatus:
        return self.load(FilterCriteria())

    # -- user interaction -----------------------------------------------

    def _transition(self, step: Callable[[CarouselViewState], CarouselViewState]) -> bool:
        if self.status is not LoadStatus.READY:
            return False
        updated = step(self.state)
        changed = updated != self.state
        self.state = updated
        return changed

    def next(self) -> bool:
        return self._transition(transitions.next_slide)

    def previous(self) -> bool:
        return self._transition(transitions.previous_slide)

    def swipe(self, start_x: float, end_x: float) -> bool:
        return self._transition(lambda s: transitions.swipe(s, start_x, end_x))

    def select_color(self, index: int, color: str) -> bool:
        return self._transition(lambda s: transitions.select_color(s, index, color))

    def resize(self, viewport_width: float) -> bool:
        self.viewport_width = viewport_width
        updated = transitions.resize(self.state, viewport_width)
        changed = updated != self.state
        self.state = updated
        return changed

    def render(self) -> CarouselView:
        return render_view(self.state, self.status.value, error=self.error, filters_enabled=self.filters_enabled)
