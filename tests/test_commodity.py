"""
Test suite for commodity module
"""

from datetime import date

from ledger_core.commodity import Commodity
from ledger_core.ledger_rules import LedgerRule, rules_from_plugins


DATE_1 = date(2017, 6, 8)
DATE_2 = date(2017, 6, 9)
CHECK = {LedgerRule.CHECK_COMMODITY}


class TestCommodity:
    """Test commodity validation and formatting"""

    def test_validate(self):
        assert Commodity("EUR").validate()
        assert Commodity("EUR", opening=DATE_1).validate(CHECK)

        result = Commodity("EUR").validate(CHECK)
        assert not result
        assert result.message == "Commodity EUR does not have an opening date"

    def test_validate_usage_date(self):
        commodity = Commodity("EUR", opening=DATE_2)
        assert commodity.validate_usage_date(DATE_1)
        assert commodity.validate_usage_date(DATE_2, CHECK)

        result = commodity.validate_usage_date(DATE_1, CHECK)
        assert result.message == "Commodity EUR used on 2017-06-08 before its opening date of 2017-06-09"

    def test_validate_usage_date_without_opening(self):
        result = Commodity("EUR").validate_usage_date(DATE_1, CHECK)
        assert result.message == "Commodity EUR does not have an opening date"

    def test_sorting(self):
        commodities = [Commodity("USD"), Commodity("CAD"), Commodity("EUR")]
        assert [c.symbol for c in sorted(commodities)] == ["CAD", "EUR", "USD"]

    def test_equality(self):
        assert Commodity("EUR") == Commodity("EUR", opening=DATE_1)
        assert Commodity("EUR") != Commodity("USD")
        assert Commodity("EUR") != Commodity("EUR", metadata={"A": "B"})

    def test_description(self):
        assert str(Commodity("EUR")) == ""
        assert str(Commodity("EUR", opening=DATE_1)) == "2017-06-08 commodity EUR"
        assert str(Commodity("EUR", opening=DATE_1, metadata={"A": "B"})) == \
            '2017-06-08 commodity EUR\n  A: "B"'


class TestLedgerRules:
    """Test rule lookup from plugin names"""

    def test_rules_from_plugins(self):
        rules = rules_from_plugins(["beancount.plugins.check_commodity", "beancount.plugins.sellgains"])
        assert rules == frozenset({LedgerRule.CHECK_COMMODITY, LedgerRule.SELLGAINS})

    def test_unknown_plugins_ignored(self):
        assert rules_from_plugins(["beancount.plugins.auto_accounts"]) == frozenset()
        assert rules_from_plugins([]) == frozenset()
