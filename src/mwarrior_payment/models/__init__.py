"""Domain models for the Merchant Warrior server-to-server payment type."""

from mwarrior_payment.models.exceptions import (
    ConfigurationError,
    GatewayDeclineError,
    PaymentError,
    ResponseFormatError,
    StatusInUseError,
    TransportError,
    ValidationError,
)
from mwarrior_payment.models.order import Order
from mwarrior_payment.models.payment import (
    AttemptLogEntry,
    FieldFailure,
    PaymentForm,
    PaymentRequest,
    PaymentResponse,
)

__all__ = [
    "AttemptLogEntry",
    "ConfigurationError",
    "FieldFailure",
    "GatewayDeclineError",
    "Order",
    "PaymentError",
    "PaymentForm",
    "PaymentRequest",
    "PaymentResponse",
    "ResponseFormatError",
    "StatusInUseError",
    "TransportError",
    "ValidationError",
]
