"""
Typed errors raised by the ledger core

Construction errors abort object creation. Balance errors are raised lazily
when a posting's contribution cannot be computed and are surfaced as
validation messages by the transaction pipeline.
"""


class LedgerCoreError(ValueError):
    """Base class for all ledger core errors"""

    code = "LEDGER_CORE_ERROR"


class SameCommodityError(LedgerCoreError):
    """A price is quoted in the commodity it prices"""

    code = "SAME_COMMODITY"

    def __init__(self, commodity_symbol: str):
        self.commodity_symbol = commodity_symbol
        super().__init__(f"Invalid Price, using same commodity: {commodity_symbol}")


class NegativeCostAmountError(LedgerCoreError):
    """A cost carries an amount which is not positive"""

    code = "NEGATIVE_COST_AMOUNT"

    def __init__(self, cost_description: str):
        self.cost_description = cost_description
        super().__init__(f"Invalid Cost, negative amount: {cost_description}")


class PriceWithoutTypeError(LedgerCoreError):
    code = "PRICE_WITHOUT_TYPE"

    def __init__(self):
        super().__init__("Posting has a price but no price type")


class PriceTypeWithoutPriceError(LedgerCoreError):
    code = "PRICE_TYPE_WITHOUT_PRICE"

    def __init__(self):
        super().__init__("Posting has a price type but no price")


class NoCostError(LedgerCoreError):
    """A posting adds to the inventory without an amount in its cost"""

    code = "NO_COST"


class InvalidAccountNameError(LedgerCoreError):
    code = "INVALID_ACCOUNT_NAME"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid Account name: {name}")


class DuplicateEntryError(LedgerCoreError):
    """An entry with the same key was already added to a ledger"""

    code = "DUPLICATE_ENTRY"

    def __init__(self, entry: object):
        self.entry = entry
        super().__init__(f"Entry already exists in Ledger: {entry}")


class ZeroQuantityError(LedgerCoreError):
    """A total price cannot be split over a quantity of zero"""

    code = "ZERO_QUANTITY"

    def __init__(self, price_description: str):
        self.price_description = price_description
        super().__init__(f"Cannot derive a per-unit price of {price_description} for a quantity of zero")
