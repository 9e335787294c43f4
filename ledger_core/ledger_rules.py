"""
Optional ledger rules

Rules are enabled in a ledger through plugin names. The validation core
only knows this closed set, other plugin names are ignored.
"""

from enum import Enum
from typing import FrozenSet, Iterable


class LedgerRule(Enum):
    """Optional validation rules, valued with their plugin name"""
    CHECK_COMMODITY = "beancount.plugins.check_commodity"  # Commodities need an opening date
    SELLGAINS = "beancount.plugins.sellgains"              # Sale proceeds must match the cost


def rules_from_plugins(plugins: Iterable[str]) -> FrozenSet[LedgerRule]:
    """Rules enabled by the given plugin names"""
    known = {rule.value: rule for rule in LedgerRule}
    return frozenset(known[plugin] for plugin in plugins if plugin in known)
