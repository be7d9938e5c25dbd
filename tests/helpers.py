"""Test doubles shared across test modules."""

import asyncio

from storefront_server.catalog import CatalogProvider
from storefront_server.errors import ProductNotFoundError


class GatedCatalog(CatalogProvider):
    """Catalog whose responses are held back until the gate is opened."""

    def __init__(self, products=None, error=None):
        self.products = list(products or [])
        self.error = error
        self.gate = asyncio.Event()
        self.closed = False

    async def list_products(self):
        await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.products)

    async def get_product(self, product_id):
        await self.gate.wait()
        for product in self.products:
            if product.id == product_id:
                return product
        raise ProductNotFoundError(product_id)

    async def aclose(self):
        self.closed = True
