"""Pytest configuration and shared fixtures for all tests.

This module provides shared test fixtures including:
- Gateway settings with sandbox credentials
- In-memory backend and a sample order
- A stub gateway built on httpx.MockTransport
"""

from collections.abc import Callable
from decimal import Decimal
from urllib.parse import parse_qsl

import httpx
import pytest

from mwarrior_payment.backends import InMemoryPaymentBackend
from mwarrior_payment.clients import MerchantWarriorClient
from mwarrior_payment.config import GatewaySettings
from mwarrior_payment.models import Order
from mwarrior_payment.processors import ServerToServerPayment

APPROVED_XML = (
    "<?xml version=\"1.0\" encoding=\"UTF-8\"?>"
    "<mwResponse>"
    "<responseCode>0</responseCode>"
    "<responseMessage>Transaction approved</responseMessage>"
    "<transactionID>1336-20be3569-b600-11e6-b9c3-005056b209e0</transactionID>"
    "<authCode>731357421</authCode>"
    "<receiptNo>731357421</receiptNo>"
    "</mwResponse>"
)


class StubGateway:
    """Records every request and answers with a canned reply or error."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: str | bytes = APPROVED_XML
        self.error: Exception | None = None

    def reply(self, body: str | bytes, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code

    def fail(self, error: Exception) -> None:
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, bytes):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def form(self, index: int = -1) -> dict[str, str]:
        """Decoded form body of a recorded request."""
        return dict(parse_qsl(self.requests[index].content.decode("utf-8")))


@pytest.fixture
def gateway_settings() -> GatewaySettings:
    """Sandbox gateway settings with test credentials."""
    return GatewaySettings(
        test_mode=True,
        merchant_uuid="5265f8eed6a19",
        api_key="ksmnwxab",
        passphrase="Passphrase",
        order_status="processing",
        transaction_currency="aud",
    )


@pytest.fixture
def backend() -> InMemoryPaymentBackend:
    return InMemoryPaymentBackend()


@pytest.fixture
def order() -> Order:
    return Order(
        id="1001",
        total=Decimal("10.5"),
        billing_first_name="Jane",
        billing_last_name="Citizen",
        billing_email="jane@example.com",
        billing_country_code="AU",
        billing_state_code="QLD",
        billing_city="Brisbane",
        billing_street_addr="123 Test Street",
        billing_zip="4000",
    )


@pytest.fixture
def valid_form() -> dict[str, str]:
    """Posted form data that passes validation."""
    return {
        "FIRSTNAME": " Jane ",
        "LASTNAME": "Citizen",
        "EXPDATE_MONTH": "5",
        "EXPDATE_YEAR": "2027",
        "PHONE": "0400111222",
        "ACCT": "5123456789012346",
        "CVV2": "123",
    }


@pytest.fixture
def stub_gateway() -> StubGateway:
    return StubGateway()


@pytest.fixture
def make_payment_type(
    gateway_settings: GatewaySettings,
    backend: InMemoryPaymentBackend,
    stub_gateway: StubGateway,
) -> Callable[..., ServerToServerPayment]:
    """Build a payment type wired to the stub gateway."""

    def _make(gateway: GatewaySettings | None = None) -> ServerToServerPayment:
        gateway = gateway or gateway_settings
        client = MerchantWarriorClient(gateway, transport=stub_gateway.transport)
        return ServerToServerPayment(gateway=gateway, backend=backend, client=client)

    return _make
