"""
Cost Module

A Cost identifies the lot a posting's amount was acquired in: the cost per
unit, the acquisition date and an optional label. Costs with missing parts
are used as wildcards when selecting lots.
"""

from dataclasses import dataclass
import datetime
from typing import Optional

from .currency import Amount
from .errors import NegativeCostAmountError


@dataclass(frozen=True)
class Cost:
    """
    Cost of a lot

    Equality is strict, use matches() for wildcard comparison.
    """
    amount: Optional[Amount] = None
    date: Optional[datetime.date] = None
    label: Optional[str] = None

    def __post_init__(self):
        if self.amount is not None and self.amount.number <= 0:
            raise NegativeCostAmountError(str(self))

    def matches(self, cost: 'Cost') -> bool:
        """
        Checks if the given cost matches this one

        Every part which is set on this cost must be equal on the other one,
        parts which are not set match anything.

        Args:
            cost: candidate cost, e.g. of a lot in the inventory

        Returns:
            True if the cost matches
        """
        if self.amount is not None and self.amount != cost.amount:
            return False
        if self.date is not None and self.date != cost.date:
            return False
        if self.label is not None and self.label != cost.label:
            return False
        return True

    def __str__(self) -> str:
        parts = []
        if self.date is not None:
            parts.append(self.date.isoformat())
        if self.amount is not None:
            parts.append(str(self.amount))
        if self.label is not None:
            parts.append(f'"{self.label}"')
        return "{" + ", ".join(parts) + "}"
