"""HTTP client for the Merchant Warrior server-to-server POST API."""

import ssl
from collections.abc import Mapping
from urllib.parse import quote_plus

import httpx
import structlog

from mwarrior_payment.config import GatewaySettings
from mwarrior_payment.models.exceptions import ConfigurationError, TransportError

logger = structlog.get_logger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def encode_form(fields: Mapping[str, object]) -> str:
    """Percent-encode each key and value independently and join them with '&'."""
    return "&".join(
        f"{quote_plus(str(key))}={quote_plus('' if value is None else str(value))}"
        for key, value in fields.items()
    )


class MerchantWarriorClient:
    """
    Client for POSTing transactions to the Merchant Warrior gateway.

    Every call opens a fresh connection that is closed when the call
    returns; nothing is pooled between attempts. TLS certificates are
    verified unless ``verify_tls`` is explicitly turned off.
    """

    def __init__(
        self,
        gateway: GatewaySettings,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the gateway client.

        Args:
            gateway: Gateway settings (endpoint flag, timeouts, TLS options)
            transport: Optional httpx transport, used by tests to stub the gateway
        """
        self.gateway = gateway
        self.transport = transport

        if not gateway.verify_tls:
            logger.warning(
                "gateway_tls_verification_disabled",
                endpoint=gateway.endpoint,
            )

    @property
    def endpoint(self) -> str:
        return self.gateway.endpoint

    @property
    def timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            self.gateway.timeout_seconds,
            connect=self.gateway.connect_timeout_seconds,
        )

    def _verify(self) -> ssl.SSLContext | bool:
        if not self.gateway.verify_tls:
            return False
        if self.gateway.ca_bundle:
            try:
                return ssl.create_default_context(cafile=self.gateway.ca_bundle)
            except OSError as e:
                logger.error(
                    "gateway_ca_bundle_invalid",
                    ca_bundle=self.gateway.ca_bundle,
                    error=str(e),
                )
                raise ConfigurationError(
                    f"Cannot load CA bundle {self.gateway.ca_bundle}: {e}"
                ) from e
        return True

    def _build_http_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.timeout,
            verify=self._verify(),
            limits=httpx.Limits(max_keepalive_connections=0),
            transport=self.transport,
        )

    def post(self, fields: Mapping[str, object]) -> bytes:
        """
        Submit a transaction and return the raw response body.

        Args:
            fields: Wire parameters of the transaction

        Returns:
            Undecoded response body (expected to be XML, decoded by the parser
            according to its own encoding declaration)

        Raises:
            TransportError: DNS, connection, timeout or TLS failure, or a 5xx reply
            ConfigurationError: The configured CA bundle cannot be loaded
        """
        body = encode_form(fields)

        logger.info(
            "gateway_request_starting",
            endpoint=self.endpoint,
            method=fields.get("method"),
            transaction_product=fields.get("transactionProduct"),
        )

        try:
            with self._build_http_client() as http_client:
                response = http_client.post(
                    self.endpoint,
                    content=body,
                    headers={
                        "Content-Type": FORM_CONTENT_TYPE,
                        "Connection": "close",
                    },
                )

                if response.status_code >= 500:
                    logger.error(
                        "gateway_server_error",
                        endpoint=self.endpoint,
                        status_code=response.status_code,
                    )
                    raise TransportError(
                        f"Payment gateway unavailable (status: {response.status_code})"
                    )

                logger.info(
                    "gateway_response_received",
                    endpoint=self.endpoint,
                    status_code=response.status_code,
                )
                return response.content

        except httpx.TimeoutException as e:
            logger.error(
                "gateway_timeout",
                endpoint=self.endpoint,
                error=str(e),
            )
            raise TransportError(f"Payment gateway timeout: {e}") from e

        except httpx.RequestError as e:
            # DNS, connection refused, TLS handshake and certificate failures
            logger.error(
                "gateway_transport_error",
                endpoint=self.endpoint,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise TransportError(f"Error connecting the payment gateway: {e}") from e
