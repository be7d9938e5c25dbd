"""Shopping cart state engine."""

import logging
from decimal import Decimal
from typing import Optional

from .errors import InvalidArgumentError
from .models import Cart, CartItem, Product
from .pricing import (
    DEFAULT_TAX_RATE,
    Amount,
    apply_discount,
    apply_tax,
    round_money,
    sum_line_totals,
    to_decimal,
)

logger = logging.getLogger(__name__)


class CartEngine:
    """
    Owns the lines of a shopping cart and derives its totals.

    Lines are kept in the order their product was first added, one line per
    product ID. Totals are recomputed from the lines on every access; nothing
    monetary is stored.
    """

    def __init__(self, discount_percent: Amount = 0, tax_rate: Amount = DEFAULT_TAX_RATE) -> None:
        """
        Initialize an empty cart.

        Args:
            discount_percent: Discount applied to the subtotal, 0-100 (fixed for the cart's lifetime)
            tax_rate: Tax rate applied to the discounted total, as a fraction

        Raises:
            InvalidArgumentError: If discount_percent is outside 0-100
        """
        discount = to_decimal(discount_percent)
        if discount < 0 or discount > 100:
            raise InvalidArgumentError("Discount must be between 0 and 100")
        self._discount_percent = discount
        self._tax_rate = to_decimal(tax_rate)
        self._lines: dict[str, CartItem] = {}

    @property
    def discount_percent(self) -> Decimal:
        return self._discount_percent

    @property
    def tax_rate(self) -> Decimal:
        return self._tax_rate

    # Mutations

    def add_item(self, product: Product) -> None:
        """Add one unit of a product, creating its line if needed."""
        line = self._lines.get(product.id)
        if line is None:
            self._lines[product.id] = CartItem(product=product, quantity=1)
            logger.debug(f"Added product {product.id} to cart")
        else:
            line.quantity += 1
            logger.debug(f"Incremented product {product.id} to quantity {line.quantity}")

    def remove_item(self, product_id: str) -> None:
        """Remove a product's line. Unknown IDs are ignored."""
        if self._lines.pop(product_id, None) is not None:
            logger.debug(f"Removed product {product_id} from cart")

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """
        Set the quantity of an existing line.

        A quantity of zero or less removes the line. Setting a positive
        quantity for a product that is not in the cart does nothing; use
        add_item first.
        """
        if quantity <= 0:
            self.remove_item(product_id)
            return

        line = self._lines.get(product_id)
        if line is None:
            logger.debug(f"Ignoring quantity update for product {product_id}: not in cart")
            return
        line.quantity = quantity
        logger.debug(f"Set product {product_id} to quantity {quantity}")

    def clear_cart(self) -> None:
        """Remove every line. The discount is kept."""
        self._lines.clear()
        logger.debug("Cleared cart")

    # Reads

    @property
    def items(self) -> list[CartItem]:
        """Copies of the cart lines in insertion order."""
        return [line.model_copy() for line in self._lines.values()]

    def get_item(self, product_id: str) -> Optional[CartItem]:
        line = self._lines.get(product_id)
        return line.model_copy() if line is not None else None

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def subtotal(self) -> Decimal:
        return sum_line_totals(
            (line.product.price, line.quantity) for line in self._lines.values()
        )

    @property
    def discounted_total(self) -> Decimal:
        return apply_discount(self.subtotal, self._discount_percent)

    @property
    def tax(self) -> Decimal:
        return apply_tax(self.discounted_total, self._tax_rate)

    @property
    def total(self) -> Decimal:
        discounted_total = self.discounted_total
        return round_money(discounted_total + apply_tax(discounted_total, self._tax_rate))

    def snapshot(self) -> Cart:
        """Capture the lines and totals as an immutable Cart."""
        discounted_total = self.discounted_total
        tax = apply_tax(discounted_total, self._tax_rate)
        return Cart(
            items=self.items,
            item_count=self.item_count,
            subtotal=self.subtotal,
            discounted_total=discounted_total,
            tax=tax,
            total=round_money(discounted_total + tax),
            discount_percent=self._discount_percent,
            tax_rate=self._tax_rate,
        )

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._lines

    def __repr__(self) -> str:
        return f"CartEngine(lines={len(self._lines)}, items={self.item_count}, total={self.total})"
