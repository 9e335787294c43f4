"""
In-Memory Ledger

Container for the entries transactions are validated against: accounts,
commodities, prices, enabled plugins, and the resolved costs computed by
an inventory/booking step for postings with a cost.

The ledger must not be changed while transactions are being validated
against it.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from .accounts import Account, AccountName
from .commodity import Commodity
from .config import get_config
from .currency import MultiCurrencyAmount
from .errors import DuplicateEntryError
from .ledger_rules import LedgerRule, rules_from_plugins
from .posting import TransactionPosting
from .price import Price
from .transactions import Transaction

logger = logging.getLogger("ledger_core.ledger")


class Ledger:
    """Ledger holding all entries of a bookkeeping file"""

    def __init__(self, plugins: Optional[Iterable[str]] = None):
        self.accounts: Dict[str, Account] = {}
        self.commodities: Dict[str, Commodity] = {}
        self.transactions: List[Transaction] = []
        self.prices: List[Price] = []
        self.plugins: List[str] = list(plugins) if plugins is not None else list(get_config().default_plugins)
        # id(transaction) -> (transaction, {id(posting): resolved cost})
        self._posting_prices: Dict[int, Tuple[Transaction, Dict[int, MultiCurrencyAmount]]] = {}

    @property
    def enabled_rules(self) -> FrozenSet[LedgerRule]:
        """Optional validation rules enabled by the plugins of this ledger"""
        return rules_from_plugins(self.plugins)

    def add_account(self, account: Account) -> Account:
        """
        Add an account

        Raises:
            DuplicateEntryError: If an account with the same name exists
        """
        key = str(account.name)
        if key in self.accounts:
            raise DuplicateEntryError(account)
        self.accounts[key] = account
        return account

    def add_commodity(self, commodity: Commodity) -> Commodity:
        """
        Add a commodity

        Raises:
            DuplicateEntryError: If a commodity with the same symbol exists
        """
        if commodity.symbol in self.commodities:
            raise DuplicateEntryError(commodity)
        self.commodities[commodity.symbol] = commodity
        return commodity

    def add_price(self, price: Price) -> Price:
        """
        Add a price

        Raises:
            DuplicateEntryError: If the same price was already added
        """
        if price in self.prices:
            raise DuplicateEntryError(price)
        self.prices.append(price)
        return price

    def add_transaction(self, transaction: Transaction) -> Transaction:
        self.transactions.append(transaction)
        return transaction

    def account(self, name: Union[AccountName, str]) -> Optional[Account]:
        """Get account by name"""
        return self.accounts.get(str(name))

    def commodity(self, symbol: str) -> Optional[Commodity]:
        """Get commodity by symbol"""
        return self.commodities.get(symbol)

    def set_posting_price(self, transaction: Transaction, posting: TransactionPosting,
                          amount: MultiCurrencyAmount) -> None:
        """
        Store the resolved cost of a posting

        The resolved cost is looked up by identity of the transaction and
        posting, it takes precedence over the cost declared on the posting.

        Raises:
            ValueError: If the posting is not part of the transaction
        """
        if not any(candidate is posting for candidate in transaction.postings):
            raise ValueError(f"Posting {posting} is not part of transaction {transaction}")
        _, resolved = self._posting_prices.setdefault(id(transaction), (transaction, {}))
        resolved[id(posting)] = amount

    def posting_price(self, transaction: Transaction, posting: TransactionPosting) -> Optional[MultiCurrencyAmount]:
        """Resolved cost of a posting, None if there is none"""
        entry = self._posting_prices.get(id(transaction))
        if entry is None or entry[0] is not transaction:
            return None
        return entry[1].get(id(posting))

    @property
    def errors(self) -> List[str]:
        """
        Messages of all invalid entries

        Commodities are validated first, then transactions, each in the
        order they were added.
        """
        rules = self.enabled_rules
        errors = []
        for commodity in self.commodities.values():
            validation = commodity.validate(rules)
            if not validation:
                errors.append(validation.message)
        for transaction in self.transactions:
            validation = transaction.validate(self, rules)
            if not validation:
                errors.append(validation.message)
        if errors:
            logger.info(f"Ledger validation found {len(errors)} errors")
        return errors
