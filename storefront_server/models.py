"""Data models for storefront entities."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .pricing import DEFAULT_TAX_RATE, round_money


class Product(BaseModel):
    """Represents a product offered by the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Product ID")
    name: str = Field(description="Display name")
    price: Decimal = Field(ge=0, description="Unit price")
    image: str = Field(default="", description="Image URL or icon")


class CartItem(BaseModel):
    """Represents a line in the shopping cart."""

    product: Product
    quantity: int = Field(ge=1, description="Quantity of the product")

    @computed_field
    @property
    def line_total(self) -> Decimal:
        """Unit price times quantity, rounded to cents."""
        return round_money(self.product.price * self.quantity)


class Cart(BaseModel):
    """Point-in-time view of a cart and its derived totals."""

    model_config = ConfigDict(frozen=True)

    items: list[CartItem] = Field(default_factory=list, description="Cart items")
    item_count: int = Field(default=0, description="Sum of all quantities")
    subtotal: Decimal = Field(default=Decimal("0.00"), description="Total before discount")
    discounted_total: Decimal = Field(default=Decimal("0.00"), description="Subtotal after discount")
    tax: Decimal = Field(default=Decimal("0.00"), description="Tax on the discounted total")
    total: Decimal = Field(default=Decimal("0.00"), description="Discounted total plus tax")
    discount_percent: Decimal = Field(default=Decimal("0"), description="Cart discount percentage")
    tax_rate: Decimal = Field(default=DEFAULT_TAX_RATE, description="Tax rate as a fraction")


class CatalogStatus(str, Enum):
    """Catalog loader states."""

    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class CatalogState(BaseModel):
    """Catalog loader status as seen by the presentation layer."""

    model_config = ConfigDict(frozen=True)

    status: CatalogStatus = CatalogStatus.LOADING
    products: list[Product] = Field(default_factory=list)
    error: Optional[str] = Field(None, description="Failure message when status is failed")

    @property
    def loading(self) -> bool:
        return self.status is CatalogStatus.LOADING
