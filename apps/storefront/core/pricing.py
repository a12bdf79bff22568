"""Pure price and rating derivations for catalog products."""

from __future__ import annotations

import math

from ..schemas import DisplayProduct, Product


def _round_half_up(value: float, digits: int) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def calculate_price(product: Product, gold_price: float) -> float:
    """Price scales with weight and spot price, with a popularity premium of up to 100%."""
    return _round_half_up((product.popularity_score + 1) * product.weight * gold_price, 2)


def popularity_to_stars(popularity_score: float) -> float:
    return _round_half_up(popularity_score * 5, 1)


def to_display_product(index: int, product: Product, gold_price: float) -> DisplayProduct:
    return DisplayProduct(
        id=index,
        name=product.name,
        weight=product.weight,
        popularity_score=product.popularity_score,
        images=dict(product.images),
        price=calculate_price(product, gold_price),
        star_rating=popularity_to_stars(product.popularity_score),
        gold_price=gold_price,
    )
