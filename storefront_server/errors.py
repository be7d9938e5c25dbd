"""Exceptions raised by the storefront."""

from typing import Optional


class StorefrontError(Exception):
    """Base class for storefront errors."""


class InvalidArgumentError(StorefrontError, ValueError):
    """Raised when a pricing input is out of range (e.g. discount above 100%)."""


class CatalogFetchError(StorefrontError):
    """Raised when the catalog provider cannot deliver products."""


class ProductNotFoundError(CatalogFetchError):
    """Raised when a product ID is unknown to the catalog provider."""

    def __init__(self, product_id: str, message: Optional[str] = None) -> None:
        self.product_id = product_id
        super().__init__(message or f"Product {product_id} not found")
