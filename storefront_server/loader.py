"""Catalog loader: fetches the product list and tracks its status."""

import asyncio
import logging
from typing import Optional

from .catalog import CatalogProvider
from .errors import CatalogFetchError
from .models import CatalogState, CatalogStatus, Product

logger = logging.getLogger(__name__)


class CatalogLoader:
    """
    Loads products from a catalog provider for the presentation layer.

    The loader moves from ``loading`` to either ``ready`` or ``failed``.
    Each call to start() is a new activation; results that arrive for an
    older activation, or after close(), are dropped.
    """

    def __init__(self, provider: CatalogProvider) -> None:
        """
        Initialize the loader.

        Args:
            provider: Catalog provider to fetch products from
        """
        self._provider = provider
        self._generation = 0
        self._closed = False
        self._task: Optional[asyncio.Task] = None
        self._state = CatalogState()

    @property
    def provider(self) -> CatalogProvider:
        return self._provider

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def status(self) -> CatalogStatus:
        return self._state.status

    @property
    def products(self) -> list[Product]:
        return list(self._state.products)

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> asyncio.Task:
        """
        Begin a new activation and schedule the fetch.

        Must be called with a running event loop.

        Returns:
            Task completing when this activation's fetch has been handled

        Raises:
            RuntimeError: If the loader has been closed
        """
        if self._closed:
            raise RuntimeError("Catalog loader is closed")

        self._generation += 1
        self._state = CatalogState(status=CatalogStatus.LOADING)
        logger.info(f"Loading catalog (activation {self._generation})")
        self._task = asyncio.create_task(self._fetch(self._generation, self._provider))
        return self._task

    async def load(self) -> CatalogState:
        """Run an activation to completion and return the resulting state."""
        await self.start()
        return self._state

    async def ensure_loaded(self) -> CatalogState:
        """
        Wait until the catalog has been loaded.

        Joins the activation in flight if there is one; otherwise starts a
        new activation unless the catalog is already ready.
        """
        if self._state.status is CatalogStatus.READY:
            return self._state

        if self._state.status is CatalogStatus.LOADING and self._task is not None and not self._task.done():
            await asyncio.shield(self._task)
            return self._state

        return await self.load()

    def set_provider(self, provider: CatalogProvider) -> asyncio.Task:
        """Switch to another provider and reload from it."""
        self._provider = provider
        return self.start()

    def close(self) -> None:
        """Tear down the loader. Pending results will be discarded."""
        self._closed = True
        self._generation += 1
        logger.debug("Catalog loader closed")

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    async def _fetch(self, generation: int, provider: CatalogProvider) -> None:
        try:
            products = await provider.list_products()
        except CatalogFetchError as e:
            self._fail(generation, str(e))
            return
        except Exception as e:
            if self._is_current(generation):
                logger.error(f"Unexpected error loading catalog: {e}", exc_info=True)
            self._fail(generation, str(e))
            return

        if not self._is_current(generation):
            logger.debug(f"Discarding stale catalog result (activation {generation})")
            return

        self._state = CatalogState(status=CatalogStatus.READY, products=list(products))
        logger.info(f"Catalog ready with {len(products)} products")

    def _fail(self, generation: int, message: str) -> None:
        if not self._is_current(generation):
            logger.debug(f"Discarding stale catalog failure (activation {generation}): {message}")
            return

        self._state = CatalogState(status=CatalogStatus.FAILED, error=message)
        logger.warning(f"Catalog failed to load: {message}")
