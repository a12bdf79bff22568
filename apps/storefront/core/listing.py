"""Listing service composing the catalog, the gold price oracle and filters."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..errors import ProductNotFound
from ..schemas import DisplayProduct, FilterCriteria
from .catalog import load_catalog
from .filters import apply_filters
from .gold_price import GoldPriceOracle
from .pricing import to_display_product


@dataclass
class ProductListing:
    products: List[DisplayProduct]
    gold_price: float


class ListingService:
    def __init__(self, catalog_path: Path, oracle: GoldPriceOracle) -> None:
        self.catalog_path = catalog_path
        self.oracle = oracle

    def list_products(self, criteria: Optional[FilterCriteria] = None) -> ProductListing:
        catalog = load_catalog(self.catalog_path)
        gold_price = self.oracle.get_spot_price()
        priced = [to_display_product(i, product, gold_price) for i, product in enumerate(catalog)]
        return ProductListing(products=apply_filters(priced, criteria), gold_price=gold_price)

    def get_product(self, product_id: int) -> DisplayProduct:
        catalog = load_catalog(self.catalog_path)
        if product_id < 0 or product_id >= len(catalog):
            raise ProductNotFound(product_id)
        gold_price = self.oracle.get_spot_price()
        return to_display_product(product_id, catalog[product_id], gold_price)
