"""Custom exceptions for the Merchant Warrior server-to-server payment type."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mwarrior_payment.models.payment import FieldFailure, PaymentResponse


class PaymentError(Exception):
    """
    Base exception for payment attempt failures.

    Every subclass carries a generic ``customer_message`` that is safe to show
    to a shopper. The exception text itself holds the detailed reason.
    """

    customer_message = "The payment could not be processed."

    def with_message(self, message: str) -> "PaymentError":
        """Return a copy of this error, of the same kind, with a new message."""
        error = type(self).__new__(type(self), message)
        error.__dict__.update(self.__dict__)
        error.args = (message,)
        return error


class ValidationError(PaymentError):
    """
    Raised when the posted payment form has one or more invalid fields.

    All failing fields are collected; ``failures`` holds every one of them.
    """

    def __init__(self, failures: "list[FieldFailure]") -> None:
        self.failures = list(failures)
        super().__init__(" ".join(failure.message for failure in self.failures))

    @property
    def customer_message(self) -> str:  # type: ignore[override]
        return str(self)


class ConfigurationError(PaymentError):
    """
    Raised when merchant configuration or order data is incomplete.

    Examples:
    - Missing or blank transaction amount or currency before signing
    - Missing merchant UUID, API key or pass phrase
    """

    customer_message = "The payment method is not configured correctly."


class StatusInUseError(ConfigurationError):
    """Raised when deleting an order status that the payment type assigns."""


class TransportError(PaymentError):
    """
    Raised when the gateway cannot be reached.

    Examples:
    - DNS resolution or connection errors
    - Connect or read timeouts
    - TLS handshake or certificate verification failures
    - Gateway returns a 5xx status
    """

    customer_message = "Error connecting the payment gateway."


class ResponseFormatError(PaymentError):
    """Raised when the gateway reply is not valid XML or lacks a usable responseCode."""

    customer_message = "Invalid payment gateway response."


class GatewayDeclineError(PaymentError):
    """
    Raised when the gateway returns a well-formed, non-approved response.

    ``reason`` is the gateway-supplied text; ``response`` is the parsed reply.
    """

    customer_message = "Transaction Error: Payment Processor declined transaction."

    def __init__(self, reason: str, response: "PaymentResponse | None" = None) -> None:
        self.reason = reason
        self.response = response
        super().__init__(reason)
