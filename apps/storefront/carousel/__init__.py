"""Carousel client: view-window state, load lifecycle and view projection."""

from .controller import CarouselController, CarouselLoadError, LoadStatus
from .render import CardView, CarouselView, render_view
from .state import CarouselViewState, items_per_view_for_width

__all__ = [
    "CardView",
    "CarouselController",
    "CarouselLoadError",
    "CarouselView",
    "CarouselViewState",
    "LoadStatus",
    "items_per_view_for_width",
    "render_view",
]
