"""
Tests for LedgerValidator and BillSplitSettings.
"""

import pytest
from decimal import Decimal

from pydantic import ValidationError

from billsplit.config import BillSplitSettings, get_settings
from billsplit.errors import (
    EmptyNameError,
    InvalidPriceError,
    NoAssigneesError,
    ValidationErrorCode,
)
from billsplit.validation import LedgerValidator


class TestLedgerValidator:
    """Tests for field normalisation."""

    def setup_method(self):
        self.validator = LedgerValidator()

    def test_normalize_name(self):
        assert self.validator.normalize_name("  Pizza\t") == "Pizza"

    def test_normalize_name_none(self):
        with pytest.raises(EmptyNameError) as exc_info:
            self.validator.normalize_name(None, kind="participant")
        assert exc_info.value.field == "name"

    def test_normalize_price_decimal_passthrough(self):
        assert self.validator.normalize_price(Decimal("3.10")) == Decimal("3.10")

    def test_normalize_price_negative_infinity(self):
        with pytest.raises(InvalidPriceError):
            self.validator.normalize_price("-Infinity")

    def test_normalize_assignees_freezes_order(self):
        assert self.validator.normalize_assignees(["b", "a", "b"]) == ("b", "a", "b")

    def test_normalize_assignees_single_string(self):
        """Test that one id given as a string is not split into characters."""
        assert self.validator.normalize_assignees("p12") == ("p12",)

    def test_normalize_assignees_none(self):
        with pytest.raises(NoAssigneesError):
            self.validator.normalize_assignees(None)

    def test_validate_item(self):
        name, price, assignees = self.validator.validate_item(" Tea ", 2.5, ["p1"])
        assert (name, price, assignees) == ("Tea", Decimal("2.5"), ("p1",))

    def test_collect_item_issues_codes(self):
        issues = self.validator.collect_item_issues("", 0, [])
        assert [issue.code for issue in issues] == [
            ValidationErrorCode.EMPTY_NAME.value,
            ValidationErrorCode.INVALID_PRICE.value,
            ValidationErrorCode.NO_ASSIGNEES.value,
        ]
        assert [issue.field for issue in issues] == ["name", "price", "assigned_to"]

    def test_collect_item_issues_only_price(self):
        issues = self.validator.collect_item_issues("Pizza", "abc", ["p1"])
        assert len(issues) == 1
        assert issues[0].message == "Please enter a valid price"


class TestSettings:
    """Tests for configuration."""

    def test_defaults(self):
        settings = BillSplitSettings()
        assert settings.summary_title == "Bill Summary"
        assert settings.default_tax_rate == 0
        assert settings.max_tax_rate == 100
        assert settings.activity_history_size == 50

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("BILLSPLIT_SUMMARY_TITLE", "Friday Dinner")
        monkeypatch.setenv("BILLSPLIT_DEFAULT_TAX_RATE", "8.25")
        settings = BillSplitSettings()
        assert settings.summary_title == "Friday Dinner"
        assert settings.default_tax_rate == Decimal("8.25")

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValidationError, match="max_tax_rate cannot be below min_tax_rate"):
            BillSplitSettings(min_tax_rate=Decimal("20"), max_tax_rate=Decimal("10"))

    def test_default_outside_bounds_rejected(self):
        with pytest.raises(ValidationError, match="default_tax_rate must lie within the tax bounds"):
            BillSplitSettings(default_tax_rate=Decimal("150"))

    def test_history_size_bounds(self):
        with pytest.raises(ValidationError):
            BillSplitSettings(activity_history_size=0)

    @pytest.mark.parametrize("rate,expected", [
        (Decimal("-5"), Decimal("0")),
        (Decimal("8.5"), Decimal("8.5")),
        (Decimal("250"), Decimal("100")),
    ])
    def test_clamp_tax_rate(self, rate, expected):
        assert BillSplitSettings().clamp_tax_rate(rate) == expected

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()
