"""
Merchant Warrior server-to-server payment type.

Card details are collected on the shop's own checkout page and submitted to
the gateway from the server, so the shopper's browser is never redirected.

Workflow of ``process_payment_form``:
1. Validate the posted form (all failing fields are collected)
2. Build the signed processCard request
3. POST it to the sandbox or production endpoint
4. Parse the XML reply and interpret responseCode
5. Write exactly one sanitized attempt log entry
6. On approval, set the configured order status and mark the order paid
"""

from collections.abc import Mapping
from typing import Any

import structlog

from mwarrior_payment.backends.base import PaymentBackend
from mwarrior_payment.clients.merchant_warrior_client import MerchantWarriorClient
from mwarrior_payment.config import GatewaySettings, Settings
from mwarrior_payment.config import settings as default_settings
from mwarrior_payment.models import (
    AttemptLogEntry,
    ConfigurationError,
    Order,
    PaymentError,
    PaymentResponse,
    StatusInUseError,
    ValidationError,
)
from mwarrior_payment.request_builder import build_payment_request
from mwarrior_payment.response import decode_body, gateway_message, interpret_response, parse_response
from mwarrior_payment.sanitize import sanitize_fields
from mwarrior_payment.validation import validate_payment_form

logger = structlog.get_logger(__name__)

SUCCESS_MESSAGE = "Successful payment"


class ServerToServerPayment:
    """
    Payment type that charges a card through the Merchant Warrior POST API.

    Only new card charges are supported. The instance holds no per-attempt
    state, so one instance may serve any number of orders.
    """

    name = "Merchant Warrior Server-To-Server Integration"
    description = (
        "Merchant Warrior server-to-server protocol implementation. "
        "Prevents browser redirects from occurring during the transaction process."
    )

    def __init__(
        self,
        gateway: GatewaySettings,
        backend: PaymentBackend,
        client: MerchantWarriorClient | None = None,
    ) -> None:
        """
        Initialize the payment type.

        Args:
            gateway: Merchant credentials and gateway options
            backend: Order persistence and attempt log collaborator
            client: Gateway client (built from ``gateway`` if omitted)
        """
        self.gateway = gateway
        self.backend = backend
        self.client = client or MerchantWarriorClient(gateway)

    @classmethod
    def from_settings(
        cls,
        backend: PaymentBackend,
        app_settings: Settings | None = None,
    ) -> "ServerToServerPayment":
        """Build the payment type from application settings, with default config data."""
        app_settings = app_settings or default_settings
        payment_type = cls(gateway=app_settings.gateway, backend=backend)
        payment_type.init_config_data()
        return payment_type

    def get_info(self) -> dict[str, str]:
        return {"name": self.name, "description": self.description}

    @property
    def order_status(self) -> str:
        """Status assigned to an order after an approved payment."""
        return self.gateway.order_status or self.backend.paid_status_id()

    def init_config_data(self) -> None:
        """Default the success status to the shop's paid status."""
        if not self.gateway.order_status:
            self.gateway = self.gateway.model_copy(
                update={"order_status": self.backend.paid_status_id()}
            )

    def validate_config(self) -> None:
        """
        Check that the merchant credentials are present.

        Raises:
            ConfigurationError: Listing every missing credential
        """
        required = (
            ("merchant_uuid", "Please provide Merchant UUID."),
            ("api_key", "Please provide Merchant API Key."),
            ("passphrase", "Please provide Merchant API Pass Phrase."),
        )
        missing = [
            message
            for attribute, message in required
            if not getattr(self.gateway, attribute).strip()
        ]
        if missing:
            raise ConfigurationError(" ".join(missing))

    def status_deletion_check(self, status_id: str) -> None:
        """
        Refuse deletion of the status this payment type assigns.

        Raises:
            StatusInUseError: If ``status_id`` is the configured success status
        """
        if self.order_status == status_id:
            raise StatusInUseError(
                "Status cannot be deleted because it is used in "
                f"{self.name} payment method."
            )

    def process_payment_form(
        self,
        data: Mapping[str, Any],
        order: Order,
        *,
        customer_ip: str,
        back_office: bool = False,
    ) -> PaymentResponse:
        """
        Charge the order's total to the card posted in ``data``.

        Args:
            data: Posted form values (FIRSTNAME, LASTNAME, EXPDATE_MONTH,
                EXPDATE_YEAR, PHONE, ACCT, CVV2)
            order: Order being paid for
            customer_ip: IP address of the shopper's request
            back_office: True when called from the administration area; errors
                then carry the detailed gateway message instead of a generic one

        Returns:
            The approved PaymentResponse

        Raises:
            ValidationError: One or more form fields are invalid
            ConfigurationError: Amount or currency missing before signing
            TransportError: The gateway could not be reached
            ResponseFormatError: The reply was malformed or lacked responseCode
            GatewayDeclineError: The gateway declined the transaction
        """
        log = logger.bind(order_id=order.id, back_office=back_office)

        validation = validate_payment_form(data)
        if not validation.ok:
            error = ValidationError(list(validation.failures))
            log.info(
                "payment_form_invalid",
                fields=[failure.field for failure in validation.failures],
            )
            self._log_attempt(order, str(error), is_success=False)
            raise error

        request_fields: dict[str, str] = {}
        response: PaymentResponse | None = None
        body: bytes | None = None

        try:
            payment_request = build_payment_request(
                validation.to_form(),
                self.gateway,
                order,
                customer_ip,
            )
            request_fields = dict(payment_request.to_fields())
            body = self.client.post(request_fields)
            response = parse_response(body)
            interpret_response(response)

        except PaymentError as e:
            detail = gateway_message(response) or str(e)
            log.warning(
                "payment_failed",
                error_type=type(e).__name__,
                error=detail,
            )
            self._log_attempt(
                order,
                detail,
                is_success=False,
                request_fields=request_fields,
                response=response,
                raw_response=body,
            )
            message = detail if back_office else e.customer_message
            raise e.with_message(message) from e

        except Exception as e:
            log.error(
                "payment_unexpected_error",
                error_type=type(e).__name__,
                error=str(e),
                exc_info=True,
            )
            self._log_attempt(
                order,
                str(e),
                is_success=False,
                request_fields=request_fields,
                response=response,
                raw_response=body,
            )
            raise

        self._log_attempt(
            order,
            SUCCESS_MESSAGE,
            is_success=True,
            request_fields=request_fields,
            response=response,
            raw_response=body,
        )
        self.backend.set_order_status(order, self.order_status)
        self.backend.mark_order_paid(order)

        log.info(
            "payment_succeeded",
            transaction_id=response.transaction_id,
            status_id=self.order_status,
        )
        return response

    def _log_attempt(
        self,
        order: Order,
        message: str,
        *,
        is_success: bool,
        request_fields: Mapping[str, Any] | None = None,
        response: PaymentResponse | None = None,
        raw_response: bytes | None = None,
    ) -> None:
        entry = AttemptLogEntry(
            order_id=str(order.id),
            message=message,
            is_success=is_success,
            request_fields=sanitize_fields(request_fields),
            response_fields=sanitize_fields(response.raw if response else None),
            raw_response=decode_body(raw_response) if raw_response is not None else None,
        )
        self.backend.log_payment_attempt(entry)
        logger.info(
            "payment_attempt_recorded",
            order_id=entry.order_id,
            is_success=is_success,
        )
