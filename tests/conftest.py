"""Shared fixtures for storefront tests."""

from decimal import Decimal

import pytest

from storefront_server.models import Product


@pytest.fixture
def headphones() -> Product:
    return Product(id="1", name="Headphones", price=Decimal("80"), image="🎧")


@pytest.fixture
def keyboard() -> Product:
    return Product(id="2", name="Keyboard", price=Decimal("120"), image="⌨️")
