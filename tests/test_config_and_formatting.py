"""Tests for settings and currency formatting."""

import pytest
from decimal import Decimal

from pydantic import ValidationError

from finledger.config import AppSettings, StorageSettings, get_settings, validate_all_settings
from finledger.formatting import format_currency


class TestSettings:
    """Tests for pydantic-settings configuration."""

    @pytest.fixture(autouse=True)
    def fresh_settings(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_storage_defaults(self, monkeypatch):
        """Test default storage settings."""
        for name in ("LEDGER_STORAGE_BACKEND", "LEDGER_STORAGE_PATH", "LEDGER_STORAGE_KEY"):
            monkeypatch.delenv(name, raising=False)
        settings = StorageSettings(_env_file=None)
        assert settings.backend == "json"
        assert settings.path == "ledger.json"
        assert settings.key == "transactions"

    def test_storage_from_env(self, monkeypatch):
        """Test environment overrides."""
        monkeypatch.setenv("LEDGER_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("LEDGER_STORAGE_KEY", "ledger")
        settings = get_settings().storage
        assert settings.backend == "memory"
        assert settings.key == "ledger"

    def test_log_level_normalized(self):
        """Test log level names are upper-cased."""
        assert AppSettings(log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        """Test unknown log levels fail validation."""
        with pytest.raises(ValidationError):
            AppSettings(log_level="chatty")

    def test_unknown_backend_rejected(self):
        """Test the backend is a closed set."""
        with pytest.raises(ValidationError):
            StorageSettings(backend="postgres")

    def test_validate_all_settings_reports_errors(self, monkeypatch):
        """Test startup validation reports which section failed."""
        monkeypatch.setenv("LEDGER_DIGIT_GROUPING", "roman")
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["app"] is False
        assert "app_error" in results

    def test_get_settings_is_cached(self):
        """Test settings are only built once."""
        assert get_settings() is get_settings()


class TestFormatCurrency:
    """Tests for format_currency."""

    @pytest.mark.parametrize("amount, expected", [
        (Decimal("0"), "₹0.00"),
        (Decimal("5"), "₹5.00"),
        (Decimal("999.999"), "₹1,000.00"),
        (Decimal("1000"), "₹1,000.00"),
        (Decimal("100000"), "₹1,00,000.00"),
        (Decimal("12345678.9"), "₹1,23,45,678.90"),
        (Decimal("-500"), "-₹500.00"),
        (2500.5, "₹2,500.50"),
    ])
    def test_indian_grouping(self, amount, expected):
        """Test lakh/crore digit grouping."""
        assert format_currency(amount) == expected

    def test_western_grouping(self):
        """Test thousands grouping."""
        assert format_currency(Decimal("12345678.9"), symbol="$", grouping="western") == "$12,345,678.90"

    def test_negative_zero(self):
        """Test that -0 is not shown with a sign."""
        assert format_currency(Decimal("-0.001")) == "₹0.00"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
