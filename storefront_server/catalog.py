"""Catalog providers: where the storefront gets its products from."""

import asyncio
import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Iterable, Optional

import httpx
from pydantic import ValidationError

from .errors import CatalogFetchError, ProductNotFoundError
from .models import Product

logger = logging.getLogger(__name__)


DEMO_PRODUCTS: tuple[Product, ...] = (
    Product(id="1", name="Wireless Headphones", price=Decimal("79.99"), image="🎧"),
    Product(id="2", name="Mechanical Keyboard", price=Decimal("129.99"), image="⌨️"),
    Product(id="3", name="USB-C Hub", price=Decimal("49.99"), image="🔌"),
    Product(id="4", name="Webcam HD", price=Decimal("59.99"), image="📷"),
)


class CatalogProvider(ABC):
    """Source of product records."""

    @abstractmethod
    async def list_products(self) -> list[Product]:
        """
        Fetch every available product.

        Raises:
            CatalogFetchError: If the products cannot be fetched
        """

    @abstractmethod
    async def get_product(self, product_id: str) -> Product:
        """
        Fetch a single product.

        Raises:
            ProductNotFoundError: If the product does not exist
            CatalogFetchError: If the product cannot be fetched
        """

    async def aclose(self) -> None:
        """Release any resources held by the provider."""

    async def __aenter__(self) -> "CatalogProvider":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


class FixtureCatalog(CatalogProvider):
    """In-memory catalog for demos and tests."""

    def __init__(self, products: Optional[Iterable[Product]] = None, latency: float = 0.0) -> None:
        """
        Initialize the fixture catalog.

        Args:
            products: Products to serve (default: the demo products)
            latency: Simulated delay in seconds before each response
        """
        self._products = list(DEMO_PRODUCTS if products is None else products)
        self.latency = latency

    async def _delay(self, seconds: float) -> None:
        if seconds > 0:
            await asyncio.sleep(seconds)

    async def list_products(self) -> list[Product]:
        await self._delay(self.latency)
        return list(self._products)

    async def get_product(self, product_id: str) -> Product:
        await self._delay(self.latency / 2)
        for product in self._products:
            if product.id == product_id:
                return product
        raise ProductNotFoundError(product_id)


class HttpCatalog(CatalogProvider):
    """Catalog served by a REST backend exposing /products and /products/{id}."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize the HTTP catalog.

        Args:
            base_url: Backend base URL (e.g. https://api.example.com)
            timeout: Request timeout in seconds
            client: Preconfigured client to use instead of creating one
        """
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )

    async def _get_json(
        self, path: str, failure_message: str, product_id: Optional[str] = None
    ) -> Any:
        try:
            response = await self.client.get(path)
        except httpx.HTTPError as e:
            logger.warning(f"Catalog request {path} failed: {e}")
            raise CatalogFetchError(failure_message) from e

        if not response.is_success:
            logger.warning(f"Catalog request {path} returned status {response.status_code}")
            if response.status_code == 404 and product_id is not None:
                raise ProductNotFoundError(product_id, failure_message)
            raise CatalogFetchError(failure_message)

        try:
            return response.json(parse_float=Decimal)
        except ValueError as e:
            logger.warning(f"Catalog request {path} returned invalid JSON: {e}")
            raise CatalogFetchError(failure_message) from e

    async def list_products(self) -> list[Product]:
        failure_message = "Failed to fetch products"
        data = await self._get_json("/products", failure_message)

        if not isinstance(data, list):
            logger.warning(f"Expected a product list, got {type(data).__name__}")
            raise CatalogFetchError(failure_message)

        try:
            products = [Product.model_validate(item) for item in data]
        except ValidationError as e:
            logger.warning(f"Invalid product payload: {e}")
            raise CatalogFetchError(failure_message) from e

        logger.info(f"Fetched {len(products)} products from {self.base_url}")
        return products

    async def get_product(self, product_id: str) -> Product:
        failure_message = f"Failed to fetch product {product_id}"
        data = await self._get_json(f"/products/{product_id}", failure_message, product_id)

        try:
            return Product.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Invalid product payload for {product_id}: {e}")
            raise CatalogFetchError(failure_message) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
