"""Pydantic schemas for catalog records and API envelopes.

Field names are snake_case in Python and camelCase on the wire, matching the
keys used by the catalog file and the carousel client.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

COLOR_VARIANTS = ("yellow", "white", "rose")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Product(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str
    weight: float = Field(gt=0)
    popularity_score: float = Field(ge=0.0, le=1.0)
    images: Dict[str, str] = Field(default_factory=dict)


class DisplayProduct(Product):
    id: int
    price: float
    star_rating: float = Field(ge=0.0, le=5.0)
    gold_price: float


class FilterCriteria(CamelModel):
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_popularity: Optional[float] = None
    max_popularity: Optional[float] = None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


class ProductListResponse(CamelModel):
    success: bool = True
    data: List[DisplayProduct] = Field(default_factory=list)
    gold_price: float


class ProductResponse(CamelModel):
    success: bool = True
    data: DisplayProduct


class ErrorResponse(CamelModel):
    success: bool = False
    error: str


class HealthResponse(CamelModel):
    status: str = "OK"
    timestamp: str
