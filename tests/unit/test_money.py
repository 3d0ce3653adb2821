"""
Unit tests for the Money value object.

Verifies:
- Boundary conversion (Decimal, int, str, float via repr)
- Rejection of non-numeric and non-finite input
- Centavo rounding is half-up and deterministic
- Arithmetic never drops to float
"""

from decimal import Decimal

import pytest

from ledger_kernel.domain.values import POSTING_TOLERANCE, Money
from ledger_kernel.exceptions import InvalidAmountError


class TestMoneyOf:
    """Tests for Money.of boundary conversion."""

    def test_from_string(self):
        assert Money.of("100.50").amount == Decimal("100.50")

    def test_from_int(self):
        assert Money.of(50000).amount == Decimal("50000")

    def test_float_uses_shortest_repr(self):
        """0.1 must become Decimal('0.1'), not the binary expansion."""
        assert Money.of(0.1).amount == Decimal("0.1")

    def test_money_passthrough(self):
        m = Money.of("5")
        assert Money.of(m) is m

    def test_whitespace_is_stripped(self):
        assert Money.of(" 12.5 ") == Money.of("12.5")

    @pytest.mark.parametrize("bad", ["abc", "", None, [], True])
    def test_non_numeric_raises(self, bad):
        with pytest.raises(InvalidAmountError) as exc_info:
            Money.of(bad, "debit")
        assert exc_info.value.field == "debit"
        assert exc_info.value.code == "INVALID_AMOUNT"

    @pytest.mark.parametrize("bad", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_raises(self, bad):
        with pytest.raises(InvalidAmountError):
            Money.of(bad)


class TestNonNegative:

    def test_zero_allowed(self):
        assert Money.non_negative("0").is_zero

    def test_negative_rejected(self):
        with pytest.raises(InvalidAmountError) as exc_info:
            Money.non_negative("-0.01", "credit")
        assert exc_info.value.field == "credit"


class TestRounding:
    """Centavo rounding is half-up."""

    def test_half_up(self):
        assert Money.of("10.555").round() == Money.of("10.56")

    def test_below_half_rounds_down(self):
        assert Money.of("10.554").round() == Money.of("10.55")

    def test_negative_half_rounds_away_from_zero(self):
        assert Money.of("-10.555").round() == Money.of("-10.56")

    def test_rate_product_is_exact_before_rounding(self):
        assert (Money.of("22000") * Decimal("0.045")).round() == Money.of("990.00")


class TestArithmetic:

    def test_add_and_subtract(self):
        total = Money.of("0.10") + Money.of("0.20")
        assert total == Money.of("0.30")
        assert total - Money.of("0.30") == Money.zero()

    def test_repeated_addition_has_no_drift(self):
        total = Money.sum(Money.of("0.1") for _ in range(1000))
        assert total == Money.of("100")

    def test_multiply_by_int_and_str(self):
        assert Money.of("2.50") * 4 == Money.of("10")
        assert Money.of("100") * "0.15" == Money.of("15")

    def test_float_factor_not_supported(self):
        with pytest.raises(TypeError):
            Money.of("1") * 0.5

    def test_adding_decimal_not_supported(self):
        with pytest.raises(TypeError):
            Money.of("1") + Decimal("1")

    def test_floor_at_zero(self):
        assert Money.of("-5").floor_at_zero() == Money.zero()
        assert Money.of("5").floor_at_zero() == Money.of("5")

    def test_comparisons(self):
        assert Money.of("1") < Money.of("2")
        assert Money.of("2") >= Money.of("2.00")
        assert abs(Money.of("-3")) == Money.of("3")

    def test_equality_ignores_trailing_zeros(self):
        assert Money.of("100") == Money.of("100.00")
        assert hash(Money.of("100")) == hash(Money.of("100.00"))

    def test_repr_and_str(self):
        assert str(Money.of("12.50")) == "12.50"
        assert repr(Money.of("12.50")) == "Money('12.50')"


def test_posting_tolerance_is_one_centavo():
    assert POSTING_TOLERANCE == Money.of("0.01")
