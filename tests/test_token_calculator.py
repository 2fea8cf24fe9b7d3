"""
Token conversion tests.

Invariants checked:
1. Minimal token count: (n - 1) * 5.4 < p <= n * 5.4
2. 0 <= change_due < 5.4
3. Determinism
4. Negative and non-finite prices are rejected
"""

from decimal import Decimal

import pytest

from domain.value_objects.price import Price
from domain.value_objects.token_count import TokenCount
from services.domain.token_calculator import calculate_euro_value, calculate_token_count, convert
from shared.constants import TOKEN_COST, TOKEN_VALUE
from shared.exceptions import InvalidArgumentError


SAMPLE_PRICES = [
    "0.01", "1", "2.69", "2.7", "5.39", "5.4", "5.41", "5.5", "8.1", "10.8",
    "10.81", "12.50", "16.2", "21.6", "27", "33.33", "99.99", "250",
]


# =============================================================================
# BOUNDARIES
# =============================================================================


class TestConvertBoundaries:

    def test_zero_price(self):
        result = convert(0)
        assert result.token_count == 0
        assert result.change_due == Decimal("0")
        assert result.real_amount_paid == Decimal("0")

    def test_exactly_one_token(self):
        result = convert(Decimal("5.4"))
        assert result.token_count == 1
        assert result.change_due == Decimal("0.00")
        assert result.real_amount_paid == Decimal("2.70")

    def test_just_over_one_token(self):
        result = convert(Decimal("5.5"))
        assert result.token_count == 2
        assert result.change_due == Decimal("5.30")
        assert result.real_amount_paid == Decimal("0.10")

    def test_float_input_uses_decimal_text(self):
        # 5.4 as a float must not pick up binary noise and require two tokens
        assert convert(5.4).token_count == 1

    def test_string_input(self):
        assert convert("10.8").token_count == 2

    def test_price_value_object_input(self):
        assert convert(Price.from_string("12,50")) == convert(Decimal("12.50"))

    def test_one_cent_over_two_tokens(self):
        # 10.81 needs 3 tokens: change 5.39, real paid 8.10 - 5.39
        result = convert("10.81")
        assert result.token_count == 3
        assert result.change_due == Decimal("5.39")
        assert result.real_amount_paid == Decimal("2.71")

    def test_real_amount_negative_for_small_price(self):
        result = convert("1")
        assert result.token_count == 1
        assert result.change_due == Decimal("4.40")
        assert result.real_amount_paid == Decimal("-1.70")

    def test_results_rounded_to_cents(self):
        result = convert("1.234")
        assert result.change_due == Decimal("4.17")
        assert result.change_due.as_tuple().exponent == -2


# =============================================================================
# PROPERTIES
# =============================================================================


class TestConvertProperties:

    @pytest.mark.parametrize("raw", SAMPLE_PRICES)
    def test_token_count_is_minimal(self, raw):
        price = Decimal(raw)
        n = convert(price).token_count
        assert (n - 1) * TOKEN_VALUE < price <= n * TOKEN_VALUE

    @pytest.mark.parametrize("raw", SAMPLE_PRICES)
    def test_change_is_bounded(self, raw):
        change = convert(raw).change_due
        assert Decimal("0") <= change < TOKEN_VALUE

    @pytest.mark.parametrize("raw", SAMPLE_PRICES)
    def test_real_amount_formula(self, raw):
        result = convert(raw)
        expected = result.token_count * TOKEN_COST - (result.token_count * TOKEN_VALUE - Decimal(raw))
        assert abs(result.real_amount_paid - expected) <= Decimal("0.005")

    def test_deterministic(self):
        assert convert("33.33") == convert("33.33")

    def test_token_value_is_twice_cost(self):
        assert TOKEN_VALUE == 2 * TOKEN_COST


# =============================================================================
# INVALID INPUT
# =============================================================================


class TestConvertInvalidInput:

    @pytest.mark.parametrize("bad", [-1, "-0.01", Decimal("-5.4")])
    def test_negative_price_rejected(self, bad):
        with pytest.raises(InvalidArgumentError):
            convert(bad)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), "NaN", "Infinity", Decimal("NaN")])
    def test_non_finite_price_rejected(self, bad):
        with pytest.raises(InvalidArgumentError):
            convert(bad)

    @pytest.mark.parametrize("bad", [None, True, "twelve", ""])
    def test_non_numeric_rejected(self, bad):
        with pytest.raises(InvalidArgumentError):
            convert(bad)

    def test_calculate_token_count_rejects_negative(self):
        with pytest.raises(InvalidArgumentError):
            calculate_token_count(-3)


# =============================================================================
# EURO VALUE
# =============================================================================


class TestEuroValue:

    def test_positive_tokens(self):
        assert calculate_euro_value(TokenCount(3)) == Price("16.2")

    def test_negative_tokens_use_absolute_value(self):
        assert calculate_euro_value(TokenCount(-2)) == Price("10.8")

    def test_zero_tokens(self):
        assert calculate_euro_value(TokenCount.zero()) == Price.zero()


# =============================================================================
# LARGE PRICES
# =============================================================================


class TestConvertLargePrices:

    def test_price_beyond_default_decimal_precision(self):
        result = convert("1e30")
        assert result.token_count == 185185185185185185185185185186
        assert result.change_due == Decimal("4.40")
        assert result.real_amount_paid == Decimal("499999999999999999999999999997.80")

    def test_huge_float_price(self):
        result = convert(1e300)
        assert Decimal("0") <= result.change_due < TOKEN_VALUE
        assert result == convert("1e300")

    def test_large_token_count_alone(self):
        assert calculate_token_count("5.4e29") == 10 ** 29

    def test_large_price_renders_in_euros(self):
        assert Price("1e30").to_euro_string() == "€1000000000000000000000000000000,00"
