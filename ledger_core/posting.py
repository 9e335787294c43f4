"""
Posting Module

A posting books an amount into an account, optionally with the cost of the
lot it belongs to and/or the price paid for it. Inside a transaction every
posting is bound to the transaction and can compute the balance it
contributes to it.
"""

import weakref
from dataclasses import dataclass, field
from typing import Dict, Optional

from .accounts import AccountName
from .cost import Cost
from .currency import Amount, MultiCurrencyAmount
from .errors import NoCostError, PriceTypeWithoutPriceError, PriceWithoutTypeError
from .price import PriceType, per_unit_amount, total_amount


@dataclass(frozen=True, eq=False)
class Posting:
    """
    Account and amount line of a transaction

    The price is stored exactly as supplied, per unit or as total depending
    on price_type. Only the supplied form is used for equality, hashing and
    display; the other form is derived on demand so no rounding difference
    can make two postings unequal.
    """
    account_name: AccountName
    amount: Amount
    price_amount: Optional[Amount] = None
    price_type: Optional[PriceType] = None
    cost: Optional[Cost] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.account_name, str):
            object.__setattr__(self, 'account_name', AccountName(self.account_name))
        if self.price_amount is not None and self.price_type is None:
            raise PriceWithoutTypeError()
        if self.price_amount is None and self.price_type is not None:
            raise PriceTypeWithoutPriceError()

    @property
    def price(self) -> Optional[Amount]:
        """Per-unit price, in the commodity and digits of the supplied price"""
        if self.price_amount is None:
            return None
        return per_unit_amount(self.price_amount, self.price_type, self.amount.number)

    @property
    def total_price(self) -> Optional[Amount]:
        """Total price, in the commodity and digits of the supplied price"""
        if self.price_amount is None:
            return None
        return total_amount(self.price_amount, self.price_type, self.amount.number)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Posting):
            return NotImplemented
        return (self.account_name == other.account_name
                and self.amount == other.amount
                and self.price_type == other.price_type
                and self.price_amount == other.price_amount
                and self.cost == other.cost
                and self.metadata == other.metadata)

    def __hash__(self) -> int:
        return hash((self.account_name, self.amount, self.price_type, self.price_amount, self.cost,
                     tuple(sorted(self.metadata.items()))))

    def __str__(self) -> str:
        result = f"  {self.account_name} {self.amount}"
        if self.cost is not None:
            result += f" {self.cost}"
        if self.price_amount is not None:
            result += f" {self.price_type.value} {self.price_amount}"
        if self.metadata:
            result += "\n" + "\n".join(f'    {key}: "{value}"' for key, value in self.metadata.items())
        return result


@dataclass(frozen=True, eq=False)
class TransactionPosting(Posting):
    """
    Posting which is part of a Transaction

    Only a weak reference to the transaction is kept, the transaction owns
    its postings. Created by the Transaction, never on its own.

    Callers must keep the transaction alive while using its postings:
    balance() of a posting with a cost looks up the transaction, and
    raises ValueError once the transaction has been garbage collected.
    """
    _transaction_ref: Optional[weakref.ref] = field(default=None, init=False, repr=False)

    @classmethod
    def bind(cls, posting: Posting, transaction) -> 'TransactionPosting':
        """Copy of the posting bound to the given transaction"""
        bound = cls(
            account_name=posting.account_name,
            amount=posting.amount,
            price_amount=posting.price_amount,
            price_type=posting.price_type,
            cost=posting.cost,
            metadata=dict(posting.metadata),
        )
        object.__setattr__(bound, '_transaction_ref', weakref.ref(transaction))
        return bound

    @property
    def transaction(self):
        """The Transaction this posting is part of"""
        transaction = self._transaction_ref() if self._transaction_ref is not None else None
        if transaction is None:
            raise ValueError(f"Posting {self} is not part of a transaction")
        return transaction

    def balance(self, ledger) -> MultiCurrencyAmount:
        """
        Balance this posting contributes to its transaction

        A cost takes precedence over a price. The tolerance of the result is
        always the one of the posting's own amount.

        Args:
            ledger: Ledger which may hold a resolved cost for this posting

        Returns:
            MultiCurrencyAmount

        Raises:
            NoCostError: If the posting has a cost without amount and no resolved cost exists
        """
        decimal_digits = {self.amount.commodity_symbol: self.amount.decimal_digits}
        if self.cost is not None:
            resolved = ledger.posting_price(self.transaction, self)
            if resolved is not None:
                return MultiCurrencyAmount(dict(resolved.amounts), decimal_digits)
            cost_amount = self.cost.amount
            if cost_amount is not None and cost_amount.number > 0:
                return MultiCurrencyAmount({cost_amount.commodity_symbol: cost_amount.number * self.amount.number},
                                           decimal_digits)
            raise NoCostError(
                f"Posting {self} of transaction {self.transaction} does not have an amount in the cost "
                f"and adds to the inventory"
            )
        if self.price_type == PriceType.PER_UNIT:
            return MultiCurrencyAmount({self.price_amount.commodity_symbol: self.price_amount.number * self.amount.number},
                                       decimal_digits)
        if self.price_type == PriceType.TOTAL:
            # Supplied total is used as is, dividing and multiplying again would round
            return MultiCurrencyAmount({self.price_amount.commodity_symbol: self.price_amount.number},
                                       decimal_digits)
        return self.amount.multi_currency_amount
