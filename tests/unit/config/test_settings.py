"""
Unit tests for settings loading.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from douanier.config.settings import Settings, load_config


class TestSettings:
    """Test Settings validation."""

    def test_defaults(self):
        """Test verification defaults."""
        settings = Settings(_env_file=None)

        assert settings.API_PORT == 3001
        assert settings.VERIFICATION_AMOUNT == Decimal("0.00001")
        assert settings.SESSION_EXPIRY_MINUTES == 15
        assert settings.AMOUNT_BUCKET_SIZE == 1000
        assert settings.SESSION_STORE_BACKEND == "memory"
        assert settings.MATCH_TOLERANCE == Decimal("0.0000000005")
        assert settings.VERIFIED_SESSION_TTL_MINUTES is None

    def test_blank_receiver_is_none(self):
        """Test empty receiver address counts as unset."""
        settings = Settings(_env_file=None, RECEIVER_WALLET_ADDRESS="  ")

        assert settings.RECEIVER_WALLET_ADDRESS is None

    def test_log_level_normalized(self):
        """Test log level is upper-cased."""
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("LOG_LEVEL", "LOUD"),
            ("SOLANA_NETWORK", "localnet"),
            ("SESSION_STORE_BACKEND", "postgres"),
            ("VERIFICATION_AMOUNT", "0"),
        ],
    )
    def test_invalid_values_rejected(self, field, value):
        """Test invalid values raise ValidationError."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})


class TestLoadConfig:
    """Test YAML and environment layering."""

    def test_environment_yaml_overrides_default(self, monkeypatch):
        """Test test.yaml values win over default.yaml."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("SWEEP_INTERVAL_SECONDS", raising=False)

        settings = load_config(env="test")

        assert settings.LOG_LEVEL == "WARNING"
        assert settings.SWEEP_INTERVAL_SECONDS == 1
        assert settings.LEDGER_SCAN_LIMIT == 20

    def test_environment_variable_wins_over_yaml(self, monkeypatch):
        """Test environment variables outrank YAML files."""
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        monkeypatch.setenv("SESSION_EXPIRY_MINUTES", "5")

        settings = load_config(env="test")

        assert settings.LOG_LEVEL == "ERROR"
        assert settings.SESSION_EXPIRY_MINUTES == 5
