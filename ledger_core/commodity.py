"""
Commodity Module

Commodities are referenced by their symbol. A commodity may declare an
opening date; when the commodity check plugin is enabled, using it before
that date, or without any opening date, is invalid.
"""

import datetime
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from .ledger_rules import LedgerRule
from .validation import ValidationResult


@dataclass(eq=False)
class Commodity:
    """Commodity with an optional opening date"""
    symbol: str
    opening: Optional[datetime.date] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def validate(self, rules: Iterable[LedgerRule] = ()) -> ValidationResult:
        """
        Validates the commodity under the enabled rules

        Only with LedgerRule.CHECK_COMMODITY the opening date is required.
        """
        if LedgerRule.CHECK_COMMODITY in rules and self.opening is None:
            return ValidationResult.invalid(f"Commodity {self.symbol} does not have an opening date")
        return ValidationResult.valid()

    def validate_usage_date(self, day: datetime.date, rules: Iterable[LedgerRule] = ()) -> ValidationResult:
        """
        Validates that the commodity may be used on the given day

        Args:
            day: date of the transaction using the commodity
            rules: enabled ledger rules

        Returns:
            ValidationResult, always valid unless LedgerRule.CHECK_COMMODITY is enabled
        """
        rules = frozenset(rules)
        if LedgerRule.CHECK_COMMODITY not in rules:
            return ValidationResult.valid()
        validation = self.validate(rules)
        if not validation:
            return validation
        if day < self.opening:
            return ValidationResult.invalid(
                f"Commodity {self.symbol} used on {day.isoformat()} before its opening date of "
                f"{self.opening.isoformat()}"
            )
        return ValidationResult.valid()

    def __lt__(self, other: 'Commodity') -> bool:
        return self.symbol < other.symbol

    def __eq__(self, other) -> bool:
        if not isinstance(other, Commodity):
            return False
        return self.symbol == other.symbol and self.metadata == other.metadata

    def __str__(self) -> str:
        if self.opening is None:
            return ""
        result = f"{self.opening.isoformat()} commodity {self.symbol}"
        if self.metadata:
            result += "\n" + "\n".join(f'  {key}: "{value}"' for key, value in self.metadata.items())
        return result
