"""Error taxonomy shared by the listing service and the HTTP layer."""

from __future__ import annotations


class StorefrontError(Exception):
    """Base class for errors the API converts into a JSON envelope."""

    status_code = 500
    public_message = "Internal server error"


class ProductNotFound(StorefrontError):
    status_code = 404
    public_message = "Product not found"

    def __init__(self, product_id: int):
        super().__init__(f"no product at index {product_id}")
        self.product_id = product_id


class CatalogUnavailable(StorefrontError):
    """The static catalog could not be read or parsed."""


class UpstreamUnavailable(StorefrontError):
    """The spot-price source failed. Recovered by the oracle, never sent to clients."""
