"""
Price Module

A Price quotes one commodity in another on a given date, either per unit
(@) or as a total for a quantity (@@). The other form is derived on demand
for a given quantity and never stored.
"""

from dataclasses import dataclass, field
import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict

from .currency import Amount
from .errors import SameCommodityError, ZeroQuantityError


class PriceType(Enum):
    """Type of price specification, valued with the ledger syntax"""
    PER_UNIT = "@"
    TOTAL = "@@"


def per_unit_amount(amount: Amount, price_type: PriceType, quantity: Decimal) -> Amount:
    """
    Per-unit form of a price amount

    Keeps the commodity and decimal digits of the price amount.

    Raises:
        ZeroQuantityError: If a total price has to be split over zero units
    """
    if price_type == PriceType.PER_UNIT:
        return amount
    if quantity == 0:
        raise ZeroQuantityError(f"{price_type.value} {amount}")
    return Amount(amount.number / quantity, amount.commodity_symbol, amount.decimal_digits)


def total_amount(amount: Amount, price_type: PriceType, quantity: Decimal) -> Amount:
    """
    Total form of a price amount

    Keeps the commodity and decimal digits of the price amount.
    """
    if price_type == PriceType.TOTAL:
        return amount
    return Amount(amount.number * quantity, amount.commodity_symbol, amount.decimal_digits)


@dataclass(frozen=True)
class Price:
    """Price of a commodity in another commodity on a given date"""
    date: datetime.date
    commodity_symbol: str
    amount: Amount
    price_type: PriceType = PriceType.PER_UNIT
    metadata: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.commodity_symbol == self.amount.commodity_symbol:
            raise SameCommodityError(self.commodity_symbol)

    def per_unit_price(self, quantity: Decimal) -> Amount:
        """Per-unit price for the given quantity of commodity units"""
        return per_unit_amount(self.amount, self.price_type, quantity)

    def total_price(self, quantity: Decimal) -> Amount:
        """Total price for the given quantity of commodity units"""
        return total_amount(self.amount, self.price_type, quantity)

    def __hash__(self) -> int:
        return hash((self.date, self.commodity_symbol, self.amount, self.price_type,
                     tuple(sorted(self.metadata.items()))))

    def __str__(self) -> str:
        result = f"{self.date.isoformat()} price {self.commodity_symbol} {self.amount}"
        if self.metadata:
            result += "\n" + "\n".join(f'  {key}: "{value}"' for key, value in self.metadata.items())
        return result
