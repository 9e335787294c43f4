"""
Account Module

Account names, account types, and the rules an account applies to the
postings booked into it: it has to be open on the transaction date and,
if it is restricted to a commodity, the posting has to use it.
"""

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from .errors import InvalidAccountNameError
from .validation import ValidationResult

ACCOUNT_NAME_SEPARATOR = ":"


class AccountType(Enum):
    """Standard accounting account types, valued with the name prefix"""
    ASSET = "Assets"            # Debit normal balance
    LIABILITY = "Liabilities"   # Credit normal balance
    EQUITY = "Equity"           # Credit normal balance
    INCOME = "Income"           # Credit normal balance
    EXPENSE = "Expenses"        # Debit normal balance


@dataclass(frozen=True, order=True)
class AccountName:
    """
    Validated account name like Assets:Cash

    The first segment is the account type, at least one more segment must
    follow and no segment may be empty.
    """
    full_name: str

    def __post_init__(self):
        if not self.is_name_valid(self.full_name):
            raise InvalidAccountNameError(self.full_name)

    @staticmethod
    def is_name_valid(name: str) -> bool:
        """Check if a string is a valid account name"""
        parts = name.split(ACCOUNT_NAME_SEPARATOR)
        if len(parts) < 2 or any(not part for part in parts):
            return False
        return parts[0] in {account_type.value for account_type in AccountType}

    @property
    def account_type(self) -> AccountType:
        return AccountType(self.full_name.split(ACCOUNT_NAME_SEPARATOR, 1)[0])

    @property
    def name_item(self) -> str:
        """Last segment of the name"""
        return self.full_name.rsplit(ACCOUNT_NAME_SEPARATOR, 1)[-1]

    def __str__(self) -> str:
        return self.full_name


@dataclass(eq=False)
class Account:
    """
    Account of the ledger with its lifecycle dates

    An account without opening date is never open.
    """
    name: AccountName
    opening: Optional[datetime.date] = None
    closing: Optional[datetime.date] = None
    commodity_symbol: Optional[str] = None  # Only this commodity may be posted if set
    metadata: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.name, str):
            self.name = AccountName(self.name)
        if self.opening and self.closing and self.closing < self.opening:
            raise ValueError(f"Account {self.name} cannot be closed before it is opened")

    def is_open_at(self, day: datetime.date) -> bool:
        """Check if the account is open on the given day"""
        if self.opening is None or day < self.opening:
            return False
        return self.closing is None or day <= self.closing

    def allows_commodity(self, commodity_symbol: str) -> bool:
        return self.commodity_symbol is None or self.commodity_symbol == commodity_symbol

    def validate_posting(self, posting) -> ValidationResult:
        """
        Validates that the posting may be booked into this account

        Args:
            posting: TransactionPosting, its transaction supplies the date

        Returns:
            ValidationResult
        """
        if posting.account_name != self.name:
            return ValidationResult.invalid(
                f"Tried to validate a posting with account {posting.account_name} on account {self.name}"
            )
        transaction = posting.transaction
        transaction_date = transaction.metadata.date
        if not self.allows_commodity(posting.amount.commodity_symbol):
            return ValidationResult.invalid(
                f"{transaction_date.isoformat()} {transaction.metadata.narration} uses a wrong commodity "
                f"for account {self.name} - Only {self.commodity_symbol} is allowed"
            )
        if not self.is_open_at(transaction_date):
            return ValidationResult.invalid(f"{transaction} was posted while the account {self.name} was closed")
        return ValidationResult.valid()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Account):
            return False
        return (self.name == other.name and self.opening == other.opening
                and self.closing == other.closing and self.commodity_symbol == other.commodity_symbol
                and self.metadata == other.metadata)

    def __str__(self) -> str:
        if self.opening is None:
            return ""
        result = f"{self.opening.isoformat()} open {self.name}"
        if self.commodity_symbol:
            result += f" {self.commodity_symbol}"
        if self.metadata:
            result += "\n" + "\n".join(f'  {key}: "{value}"' for key, value in self.metadata.items())
        if self.closing is not None:
            result += f"\n{self.closing.isoformat()} close {self.name}"
        return result
