"""Unit tests for configuration management."""

import os
from unittest.mock import patch

from mwarrior_payment.config import PRODUCTION_ENDPOINT, SANDBOX_ENDPOINT, GatewaySettings, Settings


def test_settings_default_values():
    """Test that Settings loads with default values."""
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings(_env_file=None)

    assert settings.environment == "development"
    assert settings.log_level == "INFO"
    assert settings.log_json is True
    assert settings.gateway.test_mode is True
    assert settings.gateway.transaction_currency == "aud"
    assert settings.gateway.connect_timeout_seconds == 30.0
    assert settings.gateway.timeout_seconds == 3600.0
    assert settings.gateway.verify_tls is True
    assert settings.gateway.ca_bundle is None
    assert settings.gateway.order_status is None
    assert settings.gateway.endpoint == SANDBOX_ENDPOINT


def test_settings_from_environment():
    """Test that nested gateway settings can be overridden by environment variables."""
    env_vars = {
        "LOG_LEVEL": "DEBUG",
        "GATEWAY__TEST_MODE": "false",
        "GATEWAY__MERCHANT_UUID": "  5265f8eed6a19 ",
        "GATEWAY__API_KEY": "ksmnwxab",
        "GATEWAY__PASSPHRASE": "Passphrase",
        "GATEWAY__TRANSACTION_CURRENCY": "NZD",
        "GATEWAY__ORDER_STATUS": "processing",
    }

    with patch.dict(os.environ, env_vars, clear=True):
        settings = Settings(_env_file=None)

    assert settings.log_level == "DEBUG"
    assert settings.gateway.test_mode is False
    assert settings.gateway.endpoint == PRODUCTION_ENDPOINT
    assert settings.gateway.merchant_uuid == "5265f8eed6a19"
    assert settings.gateway.api_key == "ksmnwxab"
    assert settings.gateway.passphrase == "Passphrase"
    assert settings.gateway.transaction_currency == "nzd"
    assert settings.gateway.order_status == "processing"


def test_gateway_settings_standalone_prefix():
    """Test that GatewaySettings reads GATEWAY_-prefixed variables on its own."""
    with patch.dict(os.environ, {"GATEWAY_VERIFY_TLS": "false", "GATEWAY_TIMEOUT_SECONDS": "120"}, clear=True):
        gateway = GatewaySettings()

    assert gateway.verify_tls is False
    assert gateway.timeout_seconds == 120.0
