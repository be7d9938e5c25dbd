"""Tests for money arithmetic."""

from decimal import Decimal

import pytest

from storefront_server.errors import InvalidArgumentError
from storefront_server.pricing import (
    PricedLine,
    apply_discount,
    apply_tax,
    format_money,
    round_money,
    sum_line_totals,
)


class TestApplyDiscount:
    """Tests for apply_discount."""

    def test_applies_percentage_discount(self):
        """20% off 100 is 80."""
        assert apply_discount(100, 20) == Decimal("80")

    def test_zero_discount_returns_rounded_amount(self):
        """A 0% discount only rounds the amount."""
        assert apply_discount(Decimal("49.99"), 0) == Decimal("49.99")
        assert apply_discount(Decimal("10.005"), 0) == Decimal("10.01")

    def test_full_discount_is_zero(self):
        """A 100% discount leaves nothing to pay."""
        assert apply_discount(49.99, 100) == Decimal("0")

    @pytest.mark.parametrize("discount", [-5, -0.01, 100.01, 101])
    def test_rejects_out_of_range_discount(self, discount):
        """Discounts outside 0-100 raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="between 0 and 100"):
            apply_discount(100, discount)

    def test_invalid_argument_is_a_value_error(self):
        """Callers catching ValueError also catch bad discounts."""
        with pytest.raises(ValueError):
            apply_discount(100, 150)

    def test_rounds_to_cents(self):
        """Results are rounded to two decimals."""
        assert apply_discount(10, 33) == Decimal("6.7")
        assert apply_discount(Decimal("19.99"), 15) == Decimal("16.99")

    def test_rounds_half_away_from_zero(self):
        """Half a cent rounds up, not to even."""
        assert apply_discount(Decimal("0.05"), 50) == Decimal("0.03")
        assert apply_discount(Decimal("0.01"), 50) == Decimal("0.01")

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("0.01"), Decimal("9.99"), Decimal("1234.56")])
    @pytest.mark.parametrize("discount", [0, 1, 33, 50, 99.5, 100])
    def test_never_increases_amount(self, amount, discount):
        """A discount never makes an amount larger."""
        assert apply_discount(amount, discount) <= amount


class TestApplyTax:
    """Tests for apply_tax."""

    def test_default_rate_is_ten_percent(self):
        """The default tax rate is 10%."""
        assert apply_tax(100) == Decimal("10")

    def test_accepts_custom_rate(self):
        """A custom rate can be passed."""
        assert apply_tax(100, 0.25) == Decimal("25")

    def test_rounds_to_cents(self):
        """Tax is rounded to cents."""
        assert apply_tax(Decimal("71.99")) == Decimal("7.20")

    def test_negative_rate_is_not_validated(self):
        """Negative rates are computed, not rejected."""
        assert apply_tax(100, Decimal("-0.1")) == Decimal("-10")


class TestSumLineTotals:
    """Tests for sum_line_totals."""

    def test_sums_price_times_quantity(self):
        """Each line contributes unit price times quantity."""
        assert sum_line_totals([(10, 2), (5.5, 3)]) == Decimal("36.5")

    def test_empty_is_zero(self):
        """No lines sum to zero."""
        assert sum_line_totals([]) == Decimal("0")

    def test_order_does_not_matter(self):
        """Reordering the lines gives the same sum."""
        lines = [PricedLine(Decimal("79.99"), 3), PricedLine("0.10", 7), PricedLine(49.99, 1)]
        assert sum_line_totals(lines) == sum_line_totals(reversed(lines))

    def test_rounds_once_at_the_end(self):
        """Fractions of a cent are summed before rounding."""
        assert sum_line_totals([("0.004", 1), ("0.004", 1)]) == Decimal("0.01")


class TestFormatMoney:
    """Tests for format_money."""

    def test_formats_with_symbol_and_two_decimals(self):
        """Amounts get a dollar sign and exactly two decimals."""
        assert format_money(9.9) == "$9.90"
        assert format_money(1234.5) == "$1234.50"
        assert format_money(0) == "$0.00"

    def test_formats_decimals_with_half_up_rounding(self):
        """Half cents round away from zero."""
        assert format_money(Decimal("2.675")) == "$2.68"

    def test_round_money_returns_cents(self):
        """round_money quantizes to two decimals."""
        assert str(round_money(80)) == "80.00"


class TestInvalidAmounts:
    """Tests for inputs that are not finite numbers."""

    @pytest.mark.parametrize("discount", [float("nan"), float("inf"), "ten"])
    def test_discount_must_be_a_number(self, discount):
        """Non-numeric or non-finite discounts raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="Invalid amount"):
            apply_discount(100, discount)

    @pytest.mark.parametrize("amount", [Decimal("NaN"), "abc", float("-inf")])
    def test_amount_must_be_a_number(self, amount):
        """Bad amounts are rejected the same way for every function."""
        with pytest.raises(InvalidArgumentError):
            apply_tax(amount)
        with pytest.raises(InvalidArgumentError):
            format_money(amount)
