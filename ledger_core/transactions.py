"""
Transaction Module

A transaction groups postings under a date, payee and narration. Validation
runs an ordered pipeline of checks against a ledger and reports the message
of the first failing check:

1. the transaction has postings
2. the postings balance to zero within tolerance
3. no commodity is used before its opening date
4. sale proceeds match the cost of the sold lots (sellgains rule only)
5. every account exists and accepts its posting
"""

import datetime
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from functools import partial
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from .accounts import AccountType
from .currency import Amount, MultiCurrencyAmount
from .errors import NoCostError
from .ledger_rules import LedgerRule
from .logging_config import log_validation_failure
from .posting import Posting, TransactionPosting
from .validation import ValidationResult

logger = logging.getLogger("ledger_core.transactions")


class Flag(Enum):
    """Flag of a transaction"""
    COMPLETE = "*"
    INCOMPLETE = "!"


@dataclass(frozen=True, order=True)
class Tag:
    name: str

    def __str__(self) -> str:
        return f"#{self.name}"


@dataclass(frozen=True, eq=False)
class TransactionMetaData:
    """Date, payee, narration, flag and tags of a transaction"""
    date: datetime.date
    payee: str
    narration: str
    flag: Flag = Flag.COMPLETE
    tags: FrozenSet[Tag] = frozenset()
    metadata: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'tags', frozenset(self.tags))

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransactionMetaData):
            return NotImplemented
        return (self.date == other.date and self.payee == other.payee and self.narration == other.narration
                and self.flag == other.flag and self.tags == other.tags and self.metadata == other.metadata)

    def __hash__(self) -> int:
        return hash((self.date, self.payee, self.narration, self.flag, self.tags,
                     tuple(sorted(self.metadata.items()))))

    def __str__(self) -> str:
        result = f'{self.date.isoformat()} {self.flag.value} "{self.payee}" "{self.narration}"'
        for tag in sorted(self.tags):
            result += f" {tag}"
        if self.metadata:
            result += "\n" + "\n".join(f'  {key}: "{value}"' for key, value in self.metadata.items())
        return result


@dataclass(frozen=True, eq=False)
class Transaction:
    """
    Transaction with meta data and postings

    The postings are bound to the transaction on creation and cannot be
    changed afterwards. A valid transaction has at least one posting.
    """
    metadata: TransactionMetaData
    postings: Tuple[TransactionPosting, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'postings',
                           tuple(TransactionPosting.bind(posting, self) for posting in self.postings))

    def validate(self, ledger, rules: Optional[Iterable[LedgerRule]] = None) -> ValidationResult:
        """
        Validates the transaction in the context of a ledger

        Checks run in a fixed order, the first failing check is returned
        and later checks are skipped.

        Args:
            ledger: Ledger with accounts, commodities and resolved costs
            rules: enabled optional rules, taken from the ledger plugins if not given

        Returns:
            ValidationResult
        """
        rules = ledger.enabled_rules if rules is None else frozenset(rules)
        checks = [
            ("postings", self._validate_has_postings),
            ("balance", partial(self._validate_balance, ledger)),
            ("commodity_usage_dates", partial(self._validate_commodity_usage_dates, ledger, rules)),
            ("sellgains", partial(self._validate_sellgains, ledger, rules)),
            ("accounts", partial(self._validate_accounts, ledger)),
        ]
        for check_name, check in checks:
            result = check()
            if not result:
                log_validation_failure(logger, result.message, transaction=str(self.metadata).split("\n")[0],
                                       check=check_name)
                return result
        return ValidationResult.valid()

    def balance(self, ledger) -> MultiCurrencyAmount:
        """
        Balance of the transaction, should be zero within tolerance

        Raises:
            NoCostError: If the balance of a posting cannot be calculated
        """
        total = MultiCurrencyAmount()
        for posting in self.postings:
            total += posting.balance(ledger)
        return total

    def effect(self, ledger) -> MultiCurrencyAmount:
        """
        Effect of the transaction on income and expenses

        Postings into asset, liability and equity accounts are ignored.

        Raises:
            NoCostError: If the balance of a posting cannot be calculated
        """
        total = MultiCurrencyAmount()
        for posting in self.postings:
            if posting.account_name.account_type in (AccountType.INCOME, AccountType.EXPENSE):
                total += posting.balance(ledger)
        return total

    def _validate_has_postings(self) -> ValidationResult:
        if not self.postings:
            return ValidationResult.invalid(f"{self} has no postings")
        return ValidationResult.valid()

    def _validate_balance(self, ledger) -> ValidationResult:
        """
        Checks that the transaction is balanced within the allowed tolerance

        Integer amounts have no tolerance. Digits of prices and costs are
        irrelevant, only the digits of the posting amounts count.
        """
        try:
            amount = self.balance(ledger)
        except NoCostError as e:
            return ValidationResult.invalid(str(e))
        validation = amount.validate_zero_with_tolerance()
        if not validation:
            return ValidationResult.invalid(f"{self} is not balanced - {validation.message}")
        return validation

    def _validate_commodity_usage_dates(self, ledger, rules: FrozenSet[LedgerRule]) -> ValidationResult:
        """Checks that no commodity of amount, price or cost is used before its opening"""
        transaction_date = self.metadata.date
        for posting in self.postings:
            symbols = [posting.amount.commodity_symbol]
            if posting.price_amount is not None:
                symbols.append(posting.price_amount.commodity_symbol)
            if posting.cost is not None and posting.cost.amount is not None:
                symbols.append(posting.cost.amount.commodity_symbol)
            for symbol in symbols:
                commodity = ledger.commodity(symbol)
                if commodity is None:
                    continue
                validation = commodity.validate_usage_date(transaction_date, rules)
                if not validation:
                    return validation
        return ValidationResult.valid()

    def _validate_sellgains(self, ledger, rules: FrozenSet[LedgerRule]) -> ValidationResult:
        """
        Checks that the proceeds of a sale match the cost of the sold units

        Sell postings are postings with a cost and a negative amount. Their
        cost value has to equal the balance of all other postings, not
        counting income accounts which book the gain or loss.

        Within validate() the balance check runs first and already reports
        postings whose balance cannot be computed, so the balance failure
        message here is only seen when this check is called on its own.
        """
        if LedgerRule.SELLGAINS not in rules:
            return ValidationResult.valid()

        sell_postings = [posting for posting in self.postings
                         if posting.cost is not None and posting.amount.number < 0]
        if not sell_postings:
            return ValidationResult.valid()

        expected_proceeds = self._expected_proceeds(sell_postings)

        sell_ids = {id(posting) for posting in sell_postings}
        actual_proceeds = MultiCurrencyAmount()
        for posting in self.postings:
            if id(posting) in sell_ids or posting.account_name.account_type == AccountType.INCOME:
                continue
            try:
                actual_proceeds += posting.balance(ledger)
            except NoCostError as e:
                return ValidationResult.invalid(f"Failed to calculate balance for posting {posting}: {e}")

        validation = (actual_proceeds + -expected_proceeds).validate_zero_with_tolerance()
        if not validation:
            return ValidationResult.invalid(f"{self} sellgains validation failed - {validation.message}")
        return validation

    @staticmethod
    def _expected_proceeds(sell_postings: List[TransactionPosting]) -> MultiCurrencyAmount:
        """Sold quantity times cost per unit, in the cost commodity"""
        expected = MultiCurrencyAmount()
        for posting in sell_postings:
            cost_amount = posting.cost.amount
            if cost_amount is None:
                continue
            proceeds: Decimal = abs(posting.amount.number) * cost_amount.number
            expected += Amount(proceeds, cost_amount.commodity_symbol, cost_amount.decimal_digits)
        return expected

    def _validate_accounts(self, ledger) -> ValidationResult:
        for posting in self.postings:
            account = ledger.account(posting.account_name)
            if account is None:
                return ValidationResult.invalid(f"Account {posting.account_name} does not exist in the ledger")
            validation = account.validate_posting(posting)
            if not validation:
                return validation
        return ValidationResult.valid()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.metadata == other.metadata and self.postings == other.postings

    def __hash__(self) -> int:
        return hash((self.metadata, self.postings))

    def __lt__(self, other: 'Transaction') -> bool:
        return str(self) < str(other)

    def __str__(self) -> str:
        return "\n".join([str(self.metadata)] + [str(posting) for posting in self.postings])


def create_transaction(date: datetime.date, payee: str, narration: str, postings: Iterable[Posting],
                       flag: Flag = Flag.COMPLETE, tags: Iterable[str] = ()) -> Transaction:
    """Convenience constructor taking tag names"""
    metadata = TransactionMetaData(date=date, payee=payee, narration=narration, flag=flag,
                                   tags=frozenset(Tag(name) for name in tags))
    return Transaction(metadata, tuple(postings))
