"""Storefront: wires the catalog loader and the cart together."""

import logging
from typing import Optional

from pydantic import BaseModel

from .cart import CartEngine
from .catalog import CatalogProvider, FixtureCatalog, HttpCatalog
from .config import StorefrontConfig
from .loader import CatalogLoader
from .models import Cart, CartItem, CatalogState, Product
from .pricing import DEFAULT_TAX_RATE, Amount

logger = logging.getLogger(__name__)


class StorefrontView(BaseModel):
    """Everything the presentation layer needs to render the store."""

    catalog: CatalogState
    cart: Cart


class Storefront:
    """
    Composition point between the catalog, the cart and the presentation layer.

    User intents (add, remove, set_quantity, clear) are forwarded unchanged
    to the cart engine. The storefront holds no business state of its own.
    """

    def __init__(
        self,
        provider: CatalogProvider,
        discount_percent: Amount = 0,
        tax_rate: Amount = DEFAULT_TAX_RATE,
    ) -> None:
        """
        Initialize the storefront.

        Args:
            provider: Catalog provider to load products from
            discount_percent: Cart discount percentage (0-100)
            tax_rate: Tax rate as a fraction
        """
        self.cart = CartEngine(discount_percent=discount_percent, tax_rate=tax_rate)
        self.loader = CatalogLoader(provider)

    @classmethod
    def from_config(cls, config: StorefrontConfig) -> "Storefront":
        """Build a storefront with the provider selected by the configuration."""
        provider: CatalogProvider
        if config.catalog_url:
            logger.info(f"Using HTTP catalog at {config.catalog_url}")
            provider = HttpCatalog(config.catalog_url, timeout=config.request_timeout)
        else:
            logger.info("Using built-in fixture catalog")
            provider = FixtureCatalog(latency=config.fixture_latency)
        return cls(provider, discount_percent=config.discount_percent, tax_rate=config.tax_rate)

    @property
    def provider(self) -> CatalogProvider:
        return self.loader.provider

    async def reload(self) -> CatalogState:
        """Load the catalog from the current provider, discarding any load in flight."""
        return await self.loader.load()

    start = reload

    async def ensure_loaded(self) -> CatalogState:
        """Wait for the catalog, joining a load already in progress."""
        return await self.loader.ensure_loaded()

    async def use_provider(self, provider: CatalogProvider) -> CatalogState:
        """Switch catalog provider and reload from it."""
        previous = self.loader.provider
        await self.loader.set_provider(provider)
        if previous is not provider:
            await previous.aclose()
        return self.loader.state

    async def find_product(self, product_id: str) -> Product:
        """
        Resolve a product from the loaded catalog, asking the provider if needed.

        Raises:
            ProductNotFoundError: If the provider does not know the product
            CatalogFetchError: If the provider request fails
        """
        for product in self.loader.products:
            if product.id == product_id:
                return product
        return await self.provider.get_product(product_id)

    # Intents

    def add(self, product: Product) -> None:
        self.cart.add_item(product)

    def remove(self, product_id: str) -> None:
        self.cart.remove_item(product_id)

    def set_quantity(self, product_id: str, quantity: int) -> None:
        self.cart.update_quantity(product_id, quantity)

    def clear(self) -> None:
        self.cart.clear_cart()

    async def add_by_id(self, product_id: str) -> Optional[CartItem]:
        """Resolve a product by ID, add one unit of it and return its cart line."""
        product = await self.find_product(product_id)
        self.add(product)
        return self.cart.get_item(product.id)

    def view(self) -> StorefrontView:
        return StorefrontView(catalog=self.loader.state, cart=self.cart.snapshot())

    async def close(self) -> None:
        """Stop the loader and release the provider."""
        self.loader.close()
        await self.provider.aclose()
