"""Unit tests for logging configuration and redaction."""

import structlog

from mwarrior_payment.logging_config import configure_logging, get_logger, redact_sensitive_fields
from mwarrior_payment.sanitize import mask_card_number, sanitize_fields


class TestRedaction:
    """Tests for removing sensitive values from log events."""

    def test_redact_sensitive_fields(self):
        event = {
            "event": "gateway_request_starting",
            "paymentCardNumber": "5123456789012346",
            "CVV2": "123",
            "apiKey": "ksmnwxab",
            "merchantUUID": "5265f8eed6a19",
            "passphrase": "Passphrase",
            "order_id": "1001",
        }

        result = redact_sensitive_fields(None, "info", event)

        assert result == {
            "event": "gateway_request_starting",
            "paymentCardNumber": "...2346",
            "order_id": "1001",
        }

    def test_mask_card_number(self):
        assert mask_card_number("4111111111111111") == "...1111"

    def test_sanitize_fields(self):
        fields = {
            "method": "processCard",
            "merchantUUID": "5265f8eed6a19",
            "apiKey": "ksmnwxab",
            "paymentCardNumber": "5123456789012346",
            "paymentCardCSC": "123",
            "hash": "abc",
            "transactionAmount": "10.50",
        }

        assert sanitize_fields(fields) == {
            "method": "processCard",
            "paymentCardNumber": "...2346",
            "transactionAmount": "10.50",
        }
        assert fields["paymentCardNumber"] == "5123456789012346"

    def test_sanitize_empty(self):
        assert sanitize_fields(None) == {}
        assert sanitize_fields({}) == {}


class TestConfigureLogging:
    """Tests for structlog setup."""

    def test_configure_logging_installs_redaction(self):
        try:
            configure_logging(log_level="DEBUG", format_as_json=True)

            processors = structlog.get_config()["processors"]
            assert redact_sensitive_fields in processors
            assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        finally:
            structlog.reset_defaults()

    def test_console_renderer(self):
        try:
            configure_logging(log_level="INFO", format_as_json=False)

            processors = structlog.get_config()["processors"]
            assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        finally:
            structlog.reset_defaults()

    def test_get_logger(self):
        assert get_logger(__name__) is not None
