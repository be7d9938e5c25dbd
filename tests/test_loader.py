"""Tests for the catalog loader."""

import asyncio
import logging
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from helpers import GatedCatalog
from storefront_server.catalog import CatalogProvider, FixtureCatalog
from storefront_server.errors import CatalogFetchError
from storefront_server.loader import CatalogLoader
from storefront_server.models import CatalogStatus, Product

TEST_PRODUCT = Product(id="1", name="Test", price=Decimal("10"), image="🧪")


def _mock_provider(**kwargs) -> CatalogProvider:
    provider = AsyncMock(spec=CatalogProvider)
    provider.list_products = AsyncMock(**kwargs)
    return provider


class TestCatalogLoader:
    """Tests for loading state transitions."""

    async def test_loads_products_from_api(self):
        """A successful fetch moves the loader to ready."""
        provider = _mock_provider(return_value=[TEST_PRODUCT])
        loader = CatalogLoader(provider)
        assert loader.status is CatalogStatus.LOADING
        assert loader.state.loading

        task = loader.start()
        assert loader.state.loading
        await task

        assert loader.status is CatalogStatus.READY
        assert loader.products == [TEST_PRODUCT]
        assert loader.error is None

    async def test_handles_errors(self):
        """A failed fetch moves the loader to failed with the message."""
        provider = _mock_provider(side_effect=CatalogFetchError("Network error"))
        loader = CatalogLoader(provider)

        state = await loader.load()

        assert state.status is CatalogStatus.FAILED
        assert state.error == "Network error"
        assert state.products == []

    async def test_unexpected_errors_also_fail(self):
        """Errors that are not fetch errors still end in failed state."""
        provider = _mock_provider(side_effect=RuntimeError("boom"))
        loader = CatalogLoader(provider)

        state = await loader.load()

        assert state.status is CatalogStatus.FAILED
        assert state.error == "boom"

    async def test_reload_restarts_from_loading(self):
        """Starting again resets a failed loader to loading."""
        provider = GatedCatalog(error=CatalogFetchError("down"))
        loader = CatalogLoader(provider)
        provider.gate.set()
        await loader.load()
        assert loader.status is CatalogStatus.FAILED

        provider.error = None
        provider.products = [TEST_PRODUCT]
        task = loader.start()
        assert loader.status is CatalogStatus.LOADING
        assert loader.error is None
        await task

        assert loader.status is CatalogStatus.READY

    async def test_changing_provider_discards_previous_result(self):
        """A fetch superseded by a provider change is ignored when it finishes."""
        slow = GatedCatalog(products=[Product(id="old", name="Old", price=Decimal("1"))])
        loader = CatalogLoader(slow)
        stale_task = loader.start()

        await loader.set_provider(FixtureCatalog(products=[TEST_PRODUCT]))
        assert loader.products == [TEST_PRODUCT]

        slow.gate.set()
        await stale_task

        assert loader.status is CatalogStatus.READY
        assert loader.products == [TEST_PRODUCT]

    async def test_stale_failure_is_discarded(self):
        """A superseded fetch that fails does not overwrite a newer result."""
        failing = GatedCatalog(error=CatalogFetchError("too late"))
        loader = CatalogLoader(failing)
        stale_task = loader.start()
        await loader.set_provider(FixtureCatalog(products=[TEST_PRODUCT]))

        failing.gate.set()
        await stale_task

        assert loader.status is CatalogStatus.READY
        assert loader.error is None

    async def test_close_discards_in_flight_result(self):
        """Results arriving after close() are dropped."""
        provider = GatedCatalog(products=[TEST_PRODUCT])
        loader = CatalogLoader(provider)
        task = loader.start()

        loader.close()
        provider.gate.set()
        await task

        assert loader.closed
        assert loader.status is CatalogStatus.LOADING
        assert loader.products == []

    async def test_cannot_start_after_close(self):
        """A closed loader refuses to start again."""
        loader = CatalogLoader(FixtureCatalog())
        loader.close()

        with pytest.raises(RuntimeError):
            loader.start()

    async def test_stale_unexpected_error_is_not_logged_as_error(self, caplog):
        """A crash in a fetch that was already superseded is only logged at debug level."""
        crashing = GatedCatalog(error=RuntimeError("client closed"))
        loader = CatalogLoader(crashing)
        task = loader.start()
        loader.close()

        with caplog.at_level(logging.DEBUG, logger="storefront_server.loader"):
            crashing.gate.set()
            await task

        assert not [record for record in caplog.records if record.levelno >= logging.ERROR]
        assert loader.status is CatalogStatus.LOADING


class TestEnsureLoaded:
    """Tests for CatalogLoader.ensure_loaded."""

    async def test_joins_load_in_progress(self):
        """Concurrent waiters share the activation in flight."""
        provider = GatedCatalog(products=[TEST_PRODUCT])
        loader = CatalogLoader(provider)
        task = loader.start()

        async def open_gate():
            await asyncio.sleep(0.01)
            provider.gate.set()

        first, second, _ = await asyncio.gather(loader.ensure_loaded(), loader.ensure_loaded(), open_gate())

        assert first.status is CatalogStatus.READY
        assert second.status is CatalogStatus.READY
        assert loader._task is task

    async def test_ready_catalog_is_not_reloaded(self):
        """A ready catalog is returned without another fetch."""
        provider = _mock_provider(return_value=[TEST_PRODUCT])
        loader = CatalogLoader(provider)
        await loader.load()

        state = await loader.ensure_loaded()

        assert state.status is CatalogStatus.READY
        provider.list_products.assert_awaited_once()

    async def test_failed_catalog_is_retried(self):
        """A failed catalog starts a new activation."""
        provider = GatedCatalog(error=CatalogFetchError("down"))
        provider.gate.set()
        loader = CatalogLoader(provider)
        await loader.load()

        provider.error = None
        provider.products = [TEST_PRODUCT]
        state = await loader.ensure_loaded()

        assert state.status is CatalogStatus.READY
        assert state.products == [TEST_PRODUCT]

    async def test_starts_loader_that_never_ran(self):
        """A loader that was never started loads on demand."""
        loader = CatalogLoader(FixtureCatalog(products=[TEST_PRODUCT]))

        state = await loader.ensure_loaded()

        assert state.products == [TEST_PRODUCT]
