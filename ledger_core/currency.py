"""
Multi-Currency Amount Module

Amounts are Decimal numbers tagged with a commodity symbol and a declared
number of decimal digits. The declared digits drive the tolerance used when
checking that a sum of amounts is zero. NEVER uses float for monetary values.

**Tolerance**: half of the last declared digit, separately for each
commodity. Zero declared digits mean no tolerance at all.
"""

from dataclasses import dataclass, field
from decimal import Decimal, getcontext
from typing import Dict, Optional

from .config import get_config
from .validation import ValidationResult

# Set global decimal context for financial precision
getcontext().prec = get_config().decimal_precision


def format_decimal(value: Decimal) -> str:
    """
    Format a decimal without trailing zeros and without exponent

    Used in user-visible tolerance messages, e.g. 0.0051000 -> "0.0051",
    1E+1 -> "10".
    """
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


def tolerance_for(decimal_digits: int) -> Decimal:
    """
    Tolerance for a number of decimal digits: 5 * 10^-(digits + 1)

    Zero digits mean integer amounts, which have no tolerance.
    """
    if decimal_digits == 0:
        return Decimal(0)
    return Decimal(5).scaleb(-(decimal_digits + 1))


def decimal_digit_to_keep(decimal1: int, decimal2: Optional[int]) -> int:
    """
    Returns the number of decimal digits which is less precise

    Zero means no tolerance was stated, so any non-zero number wins over it.
    Otherwise the smaller number (= less precise) is returned.

    Args:
        decimal1: digits of the amount being added
        decimal2: digits already present, if any

    Returns:
        Number of decimal digits to keep
    """
    if decimal2 is None:
        return decimal1
    min_value = min(decimal1, decimal2)
    if min_value == 0:
        return max(decimal1, decimal2)
    return min_value


@dataclass(frozen=True)
class MultiCurrencyAmount:
    """
    Sum of amounts in multiple commodities

    Keeps a total per commodity symbol plus the decimal digits which define
    the tolerance per commodity. Created empty or by adding amounts.
    """
    amounts: Dict[str, Decimal] = field(default_factory=dict)
    decimal_digits: Dict[str, int] = field(default_factory=dict)

    @property
    def multi_currency_amount(self) -> 'MultiCurrencyAmount':
        return self

    def __add__(self, other) -> 'MultiCurrencyAmount':
        """
        Adds an Amount or MultiCurrencyAmount

        Totals of the same commodity are summed, decimal digits are merged
        with decimal_digit_to_keep.
        """
        right = other.multi_currency_amount
        amounts = dict(self.amounts)
        decimal_digits = dict(self.decimal_digits)
        for symbol, number in right.amounts.items():
            amounts[symbol] = amounts.get(symbol, Decimal(0)) + number
        for symbol, right_digits in right.decimal_digits.items():
            decimal_digits[symbol] = decimal_digit_to_keep(right_digits, decimal_digits.get(symbol))
        return MultiCurrencyAmount(amounts, decimal_digits)

    def __neg__(self) -> 'MultiCurrencyAmount':
        return MultiCurrencyAmount({symbol: -number for symbol, number in self.amounts.items()},
                                   dict(self.decimal_digits))

    def __hash__(self) -> int:
        return hash((tuple(sorted(self.amounts.items())), tuple(sorted(self.decimal_digits.items()))))

    def is_empty(self) -> bool:
        return not self.amounts

    @staticmethod
    def _equal_within_tolerance(amount1: 'MultiCurrencyAmount',
                                amount2: 'MultiCurrencyAmount') -> ValidationResult:
        """
        Checks if all amounts of the first one are equal to the ones in the second

        Commodities only present in the second amount are NOT checked, and
        only the tolerance of the first amount is used. Call twice with
        switched arguments for a symmetric comparison.
        """
        for symbol, number1 in amount1.amounts.items():
            result = number1 - amount2.amounts.get(symbol, Decimal(0))
            tolerance = tolerance_for(amount1.decimal_digits.get(symbol, 0))
            lower_bound = tolerance if tolerance == 0 else -tolerance
            if result > tolerance or result < lower_bound:
                return ValidationResult.invalid(
                    f"{format_decimal(result)} {symbol} too much ({format_decimal(tolerance)} tolerance)"
                )
        return ValidationResult.valid()

    def validate_zero_with_tolerance(self) -> ValidationResult:
        """Validates that the amount is zero within the allowed tolerance"""
        zero = MultiCurrencyAmount({}, dict(self.decimal_digits))
        return self._equal_within_tolerance(self, zero)

    def validate_one_amount_with_tolerance(self, amount: 'Amount') -> ValidationResult:
        """
        Validates that the amount is the same in this MultiCurrencyAmount

        Other commodities are ignored. The tolerance of the passed amount is
        used, the tolerance of this MultiCurrencyAmount is ignored.
        """
        return self._equal_within_tolerance(amount.multi_currency_amount, self)


@dataclass(frozen=True)
class Amount:
    """
    Immutable amount of a commodity

    decimal_digits is the declared precision, it is not derived from the
    number and is only used for display and tolerance.
    """
    number: Decimal
    commodity_symbol: str
    decimal_digits: int = 0

    def __post_init__(self):
        if not isinstance(self.number, Decimal):
            object.__setattr__(self, 'number', Decimal(str(self.number)))
        if self.decimal_digits < 0:
            raise ValueError(f"Decimal digits must not be negative: {self.decimal_digits}")

    @property
    def multi_currency_amount(self) -> MultiCurrencyAmount:
        """One entry MultiCurrencyAmount with the number and digits of this amount"""
        return MultiCurrencyAmount({self.commodity_symbol: self.number},
                                   {self.commodity_symbol: self.decimal_digits})

    def __add__(self, other) -> MultiCurrencyAmount:
        return self.multi_currency_amount + other

    def __neg__(self) -> 'Amount':
        return Amount(-self.number, self.commodity_symbol, self.decimal_digits)

    def __str__(self) -> str:
        return f"{self.number:,.{self.decimal_digits}f} {self.commodity_symbol}"
