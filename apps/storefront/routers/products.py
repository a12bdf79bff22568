"""Product listing endpoints backed by the listing service."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from ..core.listing import ListingService
from ..schemas import FilterCriteria, ProductListResponse, ProductResponse

router = APIRouter()


def get_listing_service(request: Request) -> ListingService:
    return request.app.state.listing_service


def filter_criteria(
    min_price: Optional[float] = Query(default=None, alias="minPrice"),
    max_price: Optional[float] = Query(default=None, alias="maxPrice"),
    min_popularity: Optional[float] = Query(default=None, alias="minPopularity"),
    max_popularity: Optional[float] = Query(default=None, alias="maxPopularity"),
) -> FilterCriteria:
    return FilterCriteria(
        min_price=min_price,
        max_price=max_price,
        min_popularity=min_popularity,
        max_popularity=max_popularity,
    )


@router.get("/products", response_model=ProductListResponse)
def list_products(
    criteria: FilterCriteria = Depends(filter_criteria),
    service: ListingService = Depends(get_listing_service),
) -> ProductListResponse:
    listing = service.list_products(criteria)
    return ProductListResponse(data=listing.products, gold_price=listing.gold_price)


@router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    service: ListingService = Depends(get_listing_service),
) -> ProductResponse:
    return ProductResponse(data=service.get_product(product_id))
