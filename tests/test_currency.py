"""
Test suite for currency module

Tests Amount, MultiCurrencyAmount arithmetic and the tolerance checks.
All monetary calculations must use Decimal precision.
"""

import pytest
from decimal import Decimal

from ledger_core.currency import (
    Amount, MultiCurrencyAmount, decimal_digit_to_keep, format_decimal, tolerance_for
)


class TestAmount:
    """Test Amount class"""

    def test_amount_creation(self):
        """Test Amount creation and conversion to Decimal"""
        amount = Amount(Decimal('100.50'), "USD", 2)
        assert amount.number == Decimal('100.50')
        assert amount.commodity_symbol == "USD"
        assert amount.decimal_digits == 2

        # Integers are converted to Decimal
        amount = Amount(10, "EUR")
        assert isinstance(amount.number, Decimal)
        assert amount.decimal_digits == 0

    def test_negative_decimal_digits(self):
        """Test that negative decimal digits are rejected"""
        with pytest.raises(ValueError, match="must not be negative"):
            Amount(Decimal('1'), "EUR", -1)

    def test_amount_equality(self):
        """Test that number, commodity and digits are compared"""
        amount = Amount(Decimal('1'), "CAD")
        assert amount == Amount(Decimal('1'), "CAD")
        assert amount != Amount(Decimal('10'), "CAD")
        assert amount != Amount(Decimal('1'), "EUR")
        assert amount != Amount(Decimal('1.0'), "CAD", 1)

    def test_amount_string_formatting(self):
        """Test Amount string representation"""
        assert str(Amount(Decimal('123'), "USD")) == "123 USD"
        assert str(Amount(Decimal('1234567890.00'), "USD", 2)) == "1,234,567,890.00 USD"
        assert str(Amount(Decimal('125.5'), "USD", 1)) == "125.5 USD"
        assert str(Amount(Decimal('125.5'), "USD", 2)) == "125.50 USD"
        assert str(Amount(Decimal('0.0009765625'), "USD", 10)) == "0.0009765625 USD"
        assert str(Amount(Decimal('-8.52'), "EUR", 2)) == "-8.52 EUR"

    def test_multi_currency_amount(self):
        """Test conversion to a one entry MultiCurrencyAmount"""
        amount = Amount(Decimal('10'), "EUR")
        assert amount.multi_currency_amount.amounts == {"EUR": Decimal('10')}
        assert amount.multi_currency_amount.decimal_digits == {"EUR": 0}

        amount = Amount(Decimal('10.25'), "EUR", 2)
        assert amount.multi_currency_amount.amounts == {"EUR": Decimal('10.25')}
        assert amount.multi_currency_amount.decimal_digits == {"EUR": 2}

    def test_negation(self):
        """Test negation keeps commodity and digits"""
        assert -Amount(Decimal('5.00'), "EUR", 2) == Amount(Decimal('-5.00'), "EUR", 2)


class TestDecimalHelpers:
    """Test tolerance and formatting helpers"""

    def test_decimal_digit_to_keep(self):
        """Test that the less precise non-zero digits win"""
        assert decimal_digit_to_keep(3, 5) == 3
        assert decimal_digit_to_keep(5, 3) == 3
        assert decimal_digit_to_keep(0, 5) == 5
        assert decimal_digit_to_keep(5, 0) == 5
        assert decimal_digit_to_keep(0, 0) == 0
        assert decimal_digit_to_keep(4, None) == 4

    def test_tolerance_for(self):
        """Test tolerance is half of the last digit"""
        assert tolerance_for(0) == Decimal('0')
        assert tolerance_for(1) == Decimal('0.05')
        assert tolerance_for(2) == Decimal('0.005')
        assert tolerance_for(5) == Decimal('0.000005')

    def test_format_decimal(self):
        """Test decimals are shown without trailing zeros or exponent"""
        assert format_decimal(Decimal('0.0051000000')) == "0.0051"
        assert format_decimal(Decimal('10')) == "10"
        assert format_decimal(Decimal('1E+1')) == "10"
        assert format_decimal(Decimal('5E-7')) == "0.0000005"
        assert format_decimal(Decimal('-0.00')) == "0"
        assert format_decimal(Decimal('-8.5251')) == "-8.5251"


class TestMultiCurrencyAmount:
    """Test MultiCurrencyAmount arithmetic and tolerance"""

    def test_empty(self):
        """Test the empty amount"""
        empty = MultiCurrencyAmount()
        assert empty.is_empty()
        assert empty.amounts == {}
        assert empty.decimal_digits == {}
        assert empty.validate_zero_with_tolerance()

    def test_addition_same_commodity(self):
        """Test amounts of the same commodity are summed"""
        result = Amount(Decimal('1.5'), "EUR", 1) + Amount(Decimal('2.25'), "EUR", 2)
        assert result.amounts == {"EUR": Decimal('3.75')}
        assert result.decimal_digits == {"EUR": 1}

    def test_addition_zero_digits_overridden(self):
        """Test that zero digits lose against any stated digits"""
        result = Amount(Decimal('1'), "EUR") + Amount(Decimal('2.25'), "EUR", 2)
        assert result.decimal_digits == {"EUR": 2}

    def test_addition_multiple_commodities(self):
        """Test amounts of different commodities are kept apart"""
        result = MultiCurrencyAmount() + Amount(Decimal('10'), "EUR") + Amount(Decimal('-5.5'), "CAD", 1)
        assert result.amounts == {"EUR": Decimal('10'), "CAD": Decimal('-5.5')}
        assert result.decimal_digits == {"EUR": 0, "CAD": 1}

    def test_addition_does_not_mutate(self):
        """Test that adding creates a new amount"""
        left = Amount(Decimal('1'), "EUR").multi_currency_amount
        left + Amount(Decimal('2'), "EUR")
        assert left.amounts == {"EUR": Decimal('1')}

    def test_addition_digits_without_amount(self):
        """Test digits of commodities without amount are merged as well"""
        left = MultiCurrencyAmount({"EUR": Decimal('1')}, {"EUR": 2})
        right = MultiCurrencyAmount({"EUR": Decimal('1')}, {"CAD": 5})
        result = left + right
        assert result.amounts == {"EUR": Decimal('2')}
        assert result.decimal_digits == {"EUR": 2, "CAD": 5}

    def test_negation(self):
        """Test negation of all amounts"""
        amount = MultiCurrencyAmount({"EUR": Decimal('1'), "CAD": Decimal('-2')}, {"EUR": 2})
        negated = -amount
        assert negated.amounts == {"EUR": Decimal('-1'), "CAD": Decimal('2')}
        assert negated.decimal_digits == {"EUR": 2}

    def test_zero_tolerance_boundary(self):
        """Test deviation of exactly the tolerance is allowed"""
        assert MultiCurrencyAmount({"EUR": Decimal('0.005')}, {"EUR": 2}).validate_zero_with_tolerance()
        assert MultiCurrencyAmount({"EUR": Decimal('-0.005')}, {"EUR": 2}).validate_zero_with_tolerance()

    def test_zero_tolerance_exceeded(self):
        """Test deviation above the tolerance is reported"""
        result = MultiCurrencyAmount({"EUR": Decimal('0.0051')}, {"EUR": 2}).validate_zero_with_tolerance()
        assert not result
        assert result.message == "0.0051 EUR too much (0.005 tolerance)"

        result = MultiCurrencyAmount({"EUR": Decimal('-0.0051')}, {"EUR": 2}).validate_zero_with_tolerance()
        assert result.message == "-0.0051 EUR too much (0.005 tolerance)"

    def test_zero_tolerance_integer(self):
        """Test integer amounts have no tolerance"""
        assert MultiCurrencyAmount({"EUR": Decimal('0.00')}, {"EUR": 0}).validate_zero_with_tolerance()

        result = MultiCurrencyAmount({"EUR": Decimal('0.01')}, {"EUR": 0}).validate_zero_with_tolerance()
        assert result.message == "0.01 EUR too much (0 tolerance)"

    def test_zero_tolerance_missing_digits(self):
        """Test commodities without digits are treated as integer amounts"""
        result = MultiCurrencyAmount({"EUR": Decimal('8.5251000000')}, {"CAD": 5}).validate_zero_with_tolerance()
        assert result.message == "8.5251 EUR too much (0 tolerance)"

    def test_one_amount_with_tolerance(self):
        """Test comparing with one amount uses the tolerance of the amount"""
        amount = MultiCurrencyAmount({"EUR": Decimal('10.004'), "CAD": Decimal('5')}, {"EUR": 0, "CAD": 0})

        assert amount.validate_one_amount_with_tolerance(Amount(Decimal('10.00'), "EUR", 2))

        result = amount.validate_one_amount_with_tolerance(Amount(Decimal('10.01'), "EUR", 2))
        assert result.message == "0.006 EUR too much (0.005 tolerance)"

    def test_one_amount_missing_commodity(self):
        """Test a commodity missing in the MultiCurrencyAmount counts as zero"""
        amount = MultiCurrencyAmount({"EUR": Decimal('10')}, {"EUR": 0})
        result = amount.validate_one_amount_with_tolerance(Amount(Decimal('5'), "USD"))
        assert result.message == "5 USD too much (0 tolerance)"

    def test_equality(self):
        """Test amounts and digits are compared"""
        assert MultiCurrencyAmount({"EUR": Decimal('1')}, {"EUR": 2}) == MultiCurrencyAmount({"EUR": Decimal('1.00')}, {"EUR": 2})
        assert MultiCurrencyAmount({"EUR": Decimal('1')}, {"EUR": 2}) != MultiCurrencyAmount({"EUR": Decimal('1')}, {"EUR": 3})

    def test_hash(self):
        """Test equal amounts hash equal"""
        assert hash(MultiCurrencyAmount()) == hash(MultiCurrencyAmount())
        amount = MultiCurrencyAmount({"EUR": Decimal('1'), "CAD": Decimal('2')}, {"EUR": 2})
        other = MultiCurrencyAmount({"CAD": Decimal('2'), "EUR": Decimal('1.00')}, {"EUR": 2})
        assert hash(amount) == hash(other)
        assert len({amount, other}) == 1
