import pytest
from decimal import Decimal, InvalidOperation

from apps.exchange.domain.calculations import (
    DecimalCalculations,
    quantize,
    to_decimal,
    to_plain_string,
)
from apps.exchange.domain.models import RoundingMode


class TestToDecimal:
    """Tests for amount parsing."""

    def test_float_goes_through_repr(self):
        """Test 0.1 becomes exactly 0.1 rather than its binary expansion."""
        assert to_decimal(0.1) == Decimal("0.1")

    def test_strings_and_ints(self):
        assert to_decimal(" 12.50 ") == Decimal("12.50")
        assert to_decimal(7) == Decimal(7)

    def test_rejects_non_numbers(self):
        with pytest.raises(InvalidOperation):
            to_decimal("not-a-number")
        with pytest.raises(TypeError):
            to_decimal(None)
        with pytest.raises(TypeError):
            to_decimal(True)


class TestQuantize:

    @pytest.mark.parametrize("mode, expected", [
        (RoundingMode.HALF_UP, "2.35"),
        (RoundingMode.UP, "2.35"),
        (RoundingMode.DOWN, "2.34"),
        (RoundingMode.HALF_EVEN, "2.34"),
    ])
    def test_rounding_modes_on_midpoint(self, mode, expected):
        assert quantize(Decimal("2.345"), 2, mode) == Decimal(expected)

    def test_up_and_down_are_relative_to_zero(self):
        assert quantize(Decimal("-2.341"), 2, RoundingMode.UP) == Decimal("-2.35")
        assert quantize(Decimal("-2.349"), 2, RoundingMode.DOWN) == Decimal("-2.34")

    def test_large_values_are_not_limited_by_precision(self):
        value = Decimal("123456789012345678901234.5")

        assert quantize(value, 2) == Decimal("123456789012345678901234.50")

    def test_plain_string_never_uses_exponent(self):
        assert to_plain_string(Decimal("1E+3")) == "1000"
        assert to_plain_string(Decimal("0.92500"), strip_zeros=True) == "0.925"
        assert to_plain_string(Decimal("100"), strip_zeros=True) == "100"


class TestDecimalCalculations:
    """Tests for the pure calculation helpers."""

    def test_convert(self):
        assert DecimalCalculations.convert(100, "0.925") == "92.50"
        assert DecimalCalculations.convert("2.345", 1, 2, "DOWN") == "2.34"

    def test_inverse_rate_has_six_places(self):
        assert DecimalCalculations.inverse_rate("0.925") == "1.081081"
        assert DecimalCalculations.inverse_rate(3) == "0.333333"

    def test_arithmetic_avoids_float_error(self):
        assert DecimalCalculations.add(0.1, 0.2) == "0.30"
        assert DecimalCalculations.add("0.1", "0.2", 10) == "0.3000000000"
        assert DecimalCalculations.subtract("10", "0.01") == "9.99"
        assert DecimalCalculations.multiply("19.99", 3) == "59.97"
        assert DecimalCalculations.divide("10", "3") == "3.33"

    def test_divide_by_zero_raises(self):
        with pytest.raises(ArithmeticError):
            DecimalCalculations.divide(1, 0)

    def test_compare_and_equals(self):
        assert DecimalCalculations.compare("1.10", "1.1") == 0
        assert DecimalCalculations.compare(1, 2) == -1
        assert DecimalCalculations.compare("2", "1.999") == 1
        assert DecimalCalculations.equals("1.004", "1.001") is True
        assert DecimalCalculations.equals("1.004", "1.006") is False

    def test_round_and_decimal(self):
        assert DecimalCalculations.round("2.345", 2, RoundingMode.HALF_EVEN) == "2.34"
        assert DecimalCalculations.round("2.5", 0) == "3"
        assert DecimalCalculations.decimal("1.50") == Decimal("1.50")
