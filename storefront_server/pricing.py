"""Money arithmetic for cart totals.

Every function here is pure. Amounts are handled as ``Decimal`` and rounded
to whole cents (half away from zero) at each monetary boundary, so a
discounted subtotal is rounded before tax is computed on it.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, NamedTuple, Sequence, Union

from .errors import InvalidArgumentError

Amount = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
DEFAULT_TAX_RATE = Decimal("0.10")
CURRENCY_SYMBOL = "$"


class PricedLine(NamedTuple):
    """Unit price and quantity of a single cart line."""

    unit_price: Amount
    quantity: int


def to_decimal(value: Amount) -> Decimal:
    """Convert an amount to Decimal.

    Floats go through ``str`` so that ``9.9`` becomes ``Decimal("9.9")``
    rather than its binary expansion.

    Raises:
        InvalidArgumentError: If the value is not a finite number
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
        except InvalidOperation as e:
            raise InvalidArgumentError(f"Invalid amount: {value!r}") from e

    if not result.is_finite():
        raise InvalidArgumentError(f"Invalid amount: {value!r}")
    return result


def round_money(amount: Amount) -> Decimal:
    """Round an amount to cents, half away from zero."""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def apply_discount(amount: Amount, discount_percent: Amount) -> Decimal:
    """
    Apply a percentage discount to an amount.

    Args:
        amount: Amount to discount
        discount_percent: Discount between 0 and 100 (inclusive)

    Returns:
        Discounted amount rounded to cents

    Raises:
        InvalidArgumentError: If discount_percent is outside 0-100
    """
    percent = to_decimal(discount_percent)
    if percent < 0 or percent > 100:
        raise InvalidArgumentError("Discount must be between 0 and 100")
    return round_money(to_decimal(amount) * (1 - percent / 100))


def apply_tax(amount: Amount, tax_rate: Amount = DEFAULT_TAX_RATE) -> Decimal:
    """
    Compute the tax owed on an amount.

    The rate is a fraction (0.10 for 10%) and is not range-checked.
    """
    return round_money(to_decimal(amount) * to_decimal(tax_rate))


def sum_line_totals(lines: Iterable[Sequence]) -> Decimal:
    """
    Sum ``unit_price * quantity`` over ``(unit_price, quantity)`` pairs.

    The sum is exact and rounded once at the end, not per line.
    """
    total = Decimal("0")
    for unit_price, quantity in lines:
        total += to_decimal(unit_price) * quantity
    return round_money(total)


def format_money(amount: Amount) -> str:
    """Render an amount as ``$1234.50``."""
    return f"{CURRENCY_SYMBOL}{round_money(amount):.2f}"
