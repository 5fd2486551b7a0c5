"""Payment attempt domain models."""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class FieldFailure:
    """A single failing form field."""

    field: str
    constraint: str
    message: str


@dataclass(frozen=True)
class PaymentForm:
    """Trimmed card-holder input that passed validation."""

    first_name: str
    last_name: str
    expiry_month: str
    expiry_year: str
    phone: str
    card_number: str
    cvv: str

    @property
    def cardholder_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class PaymentRequest:
    """
    Outbound processCard request.

    Built fresh for every attempt and never persisted. ``to_fields`` yields
    the wire parameters in the order the gateway documents them.
    """

    merchant_uuid: str
    api_key: str
    transaction_amount: str
    transaction_currency: str
    transaction_product: str
    customer_name: str
    customer_country: str
    customer_state: str
    customer_city: str
    customer_address: str
    customer_post_code: str
    customer_phone: str
    customer_email: str
    customer_ip: str
    payment_card_number: str
    payment_card_name: str
    payment_card_expiry: str
    hash: str

    METHOD = "processCard"

    def to_fields(self) -> "OrderedDict[str, str]":
        return OrderedDict(
            [
                ("method", self.METHOD),
                ("merchantUUID", self.merchant_uuid),
                ("apiKey", self.api_key),
                ("transactionAmount", self.transaction_amount),
                ("transactionCurrency", self.transaction_currency),
                ("transactionProduct", self.transaction_product),
                ("customerName", self.customer_name),
                ("customerCountry", self.customer_country),
                ("customerState", self.customer_state),
                ("customerCity", self.customer_city),
                ("customerAddress", self.customer_address),
                ("customerPostCode", self.customer_post_code),
                ("customerPhone", self.customer_phone),
                ("customerEmail", self.customer_email),
                ("customerIP", self.customer_ip),
                ("paymentCardNumber", self.payment_card_number),
                ("paymentCardName", self.payment_card_name),
                ("paymentCardExpiry", self.payment_card_expiry),
                ("hash", self.hash),
            ]
        )


@dataclass(frozen=True)
class PaymentResponse:
    """
    Parsed gateway reply.

    The expected fields are typed; anything else the gateway sends is kept in
    ``raw`` and reachable through ``get``.
    """

    response_code: int
    response_message: str | None = None
    message_text: str | None = None
    transaction_id: str | None = None
    auth_code: str | None = None
    receipt_no: str | None = None
    raw: dict[str, str] = field(default_factory=dict)

    @property
    def approved(self) -> bool:
        """Only responseCode 0 is an approval."""
        return self.response_code == 0

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.raw.get(key, default)


@dataclass
class AttemptLogEntry:
    """
    One record of a payment attempt.

    Request and response fields must already be sanitized when the entry is
    built; see ``mwarrior_payment.sanitize.sanitize_fields``.
    """

    order_id: str
    message: str
    is_success: bool
    request_fields: dict[str, Any] = field(default_factory=dict)
    response_fields: dict[str, Any] = field(default_factory=dict)
    raw_response: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
