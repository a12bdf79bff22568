"""Numeric range filtering over priced products."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..schemas import DisplayProduct, FilterCriteria


def _within(value: float, low: Optional[float], high: Optional[float]) -> bool:
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def apply_filters(
    products: Iterable[DisplayProduct], criteria: Optional[FilterCriteria] = None
) -> List[DisplayProduct]:
    """Keep products whose price and popularity fall inside the inclusive bounds.

    Missing bounds do not filter, and the input order is preserved.
    """
    if criteria is None or criteria.is_empty():
        return list(products)

    def match(product: DisplayProduct) -> bool:
        return _within(product.price, criteria.min_price, criteria.max_price) and _within(
            product.popularity_score, criteria.min_popularity, criteria.max_popularity
        )

    return [product for product in products if match(product)]
