"""Immutable carousel view state and the pure transitions over it.

Every transition takes a :class:`CarouselViewState` and returns a new one; the
window start is always clamped to ``[0, max(0, len(items) - items_per_view)]``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence, Tuple

from ..schemas import COLOR_VARIANTS, DisplayProduct

DEFAULT_COLOR = "yellow"
SWIPE_THRESHOLD_PX = 50

# (exclusive upper width bound, cards per view)
_BREAKPOINTS = ((480, 1), (768, 2), (1024, 3))
_WIDE_ITEMS_PER_VIEW = 4


def items_per_view_for_width(width: float) -> int:
    for limit, count in _BREAKPOINTS:
        if width < limit:
            return count
    return _WIDE_ITEMS_PER_VIEW


@dataclass(frozen=True)
class CarouselViewState:
    items: Tuple[DisplayProduct, ...] = ()
    window_start: int = 0
    items_per_view: int = _WIDE_ITEMS_PER_VIEW
    selected_colors: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        missing = len(self.items) - len(self.selected_colors)
        if missing < 0:
            raise ValueError(f"{len(self.selected_colors)} colour selections for {len(self.items)} items")
        if missing:
            colors = tuple(self.selected_colors) + (DEFAULT_COLOR,) * missing
            object.__setattr__(self, "selected_colors", colors)

    @classmethod
    def from_items(cls, items: Sequence[DisplayProduct], viewport_width: float) -> "CarouselViewState":
        return cls(
            items=tuple(items),
            window_start=0,
            items_per_view=items_per_view_for_width(viewport_width),
            selected_colors=(DEFAULT_COLOR,) * len(items),
        )

    @property
    def max_index(self) -> int:
        return max(0, len(self.items) - self.items_per_view)

    @property
    def can_go_previous(self) -> bool:
        return self.window_start > 0

    @property
    def can_go_next(self) -> bool:
        if len(self.items) <= self.items_per_view:
            return False
        return self.window_start < self.max_index

    @property
    def visible_indices(self) -> range:
        return range(self.window_start, min(len(self.items), self.window_start + self.items_per_view))


def _clamped(state: CarouselViewState, window_start: int) -> CarouselViewState:
    window_start = min(max(window_start, 0), state.max_index)
    if window_start == state.window_start:
        return state
    return replace(state, window_start=window_start)


def next_slide(state: CarouselViewState) -> CarouselViewState:
    return _clamped(state, state.window_start + 1)


def previous_slide(state: CarouselViewState) -> CarouselViewState:
    return _clamped(state, state.window_start - 1)


def resize(state: CarouselViewState, viewport_width: float) -> CarouselViewState:
    """Recompute cards per view for the new width and pull the window back in range."""
    resized = replace(state, items_per_view=items_per_view_for_width(viewport_width))
    return replace(resized, window_start=min(resized.window_start, resized.max_index))


def swipe(state: CarouselViewState, start_x: float, end_x: float) -> CarouselViewState:
    """Dragging left past the threshold moves forward, dragging right moves back."""
    distance = start_x - end_x
    if abs(distance) <= SWIPE_THRESHOLD_PX:
        return state
    if distance > 0:
        return next_slide(state)
    return previous_slide(state)


def select_color(state: CarouselViewState, index: int, color: str) -> CarouselViewState:
    if color not in COLOR_VARIANTS:
        raise ValueError(f"unknown colour variant {color!r}")
    if not 0 <= index < len(state.items):
        raise IndexError(f"no carousel item at index {index}")
    colors = list(state.selected_colors)
    colors[index] = color
    return replace(state, selected_colors=tuple(colors))
