"""Project carousel state onto a plain view description.

Nothing here touches a rendering toolkit; the output is what a template or
widget layer needs to draw the carousel.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..schemas import COLOR_VARIANTS, DisplayProduct
from .state import DEFAULT_COLOR, CarouselViewState

COLOR_LABELS = {
    "yellow": "Yellow Gold",
    "white": "White Gold",
    "rose": "Rose Gold",
}

FULL_STAR = "★"
EMPTY_STAR = "☆"


def render_stars(rating: float) -> str:
    # a fractional rating shows as one extra outline star, always five glyphs
    full = int(math.floor(rating))
    partial = 1 if rating % 1 else 0
    empty = 5 - int(math.ceil(rating))
    return FULL_STAR * full + EMPTY_STAR * partial + EMPTY_STAR * empty


@dataclass(frozen=True)
class CardView:
    index: int
    name: str
    image: Optional[str]
    price_label: str
    color: str
    color_label: str
    color_options: Tuple[Tuple[str, bool], ...]
    stars: str
    rating_label: str
    popularity_label: str


@dataclass(frozen=True)
class CarouselView:
    status: str
    cards: List[CardView] = field(default_factory=list)
    window_start: int = 0
    visible: Tuple[int, ...] = ()
    show_previous: bool = False
    show_next: bool = False
    filters_enabled: bool = True
    error: Optional[str] = None


def render_card(index: int, product: DisplayProduct, color: str = DEFAULT_COLOR) -> CardView:
    return CardView(
        index=index,
        name=product.name,
        image=product.images.get(color),
        price_label=f"${product.price:.2f} USD",
        color=color,
        color_label=COLOR_LABELS[color],
        color_options=tuple((variant, variant == color) for variant in COLOR_VARIANTS),
        stars=render_stars(product.star_rating),
        rating_label=f"{product.star_rating:g}/5",
        popularity_label=f"Popularity: {product.popularity_score * 100:.0f}%",
    )


def render_view(
    state: CarouselViewState,
    status: str = "ready",
    *,
    error: Optional[str] = None,
    filters_enabled: bool = True,
) -> CarouselView:
    if status != "ready":
        return CarouselView(status=status, filters_enabled=filters_enabled, error=error)
    cards = [
        render_card(index, product, state.selected_colors[index])
        for index, product in enumerate(state.items)
    ]
    return CarouselView(
        status=status,
        cards=cards,
        window_start=state.window_start,
        visible=tuple(state.visible_indices),
        show_previous=state.can_go_previous,
        show_next=state.can_go_next,
        filters_enabled=filters_enabled,
    )
