"""Construction of signed processCard requests."""

import hashlib
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import structlog

from mwarrior_payment.config import GatewaySettings
from mwarrior_payment.models import ConfigurationError, Order, PaymentForm, PaymentRequest

logger = structlog.get_logger(__name__)

CENTS = Decimal("0.01")


def format_expiry_month(value: str | int) -> str:
    """Zero-pad the expiry month to two digits (3 -> "03")."""
    return f"{int(value):02d}"


def format_expiry_year(value: str | int) -> str:
    """
    Reduce the expiry year to the gateway's two-digit form.

    Years after 2000 have 2000 subtracted (2027 -> "27"); anything else is
    only zero-padded (27 -> "27", 5 -> "05", 2000 -> "2000").
    """
    year = int(value)
    if year > 2000:
        year -= 2000
    return f"{year:02d}"


def format_amount(total: Decimal | str | int | float | None) -> str:
    """
    Render an order total with two decimal places, or "" when missing.

    Half-cents round up (10.005 -> "10.01").

    Raises:
        ConfigurationError: If the total is not a finite number
    """
    if total is None or total == "":
        return ""
    try:
        amount = Decimal(str(total))
        if amount.is_finite():
            return str(amount.quantize(CENTS, rounding=ROUND_HALF_UP))
    except InvalidOperation as e:
        raise ConfigurationError(f"Invalid order total: {total!r}") from e
    raise ConfigurationError(f"Invalid order total: {total!r}")


def calculate_hash(passphrase: str, merchant_uuid: str, amount: str | None, currency: str | None) -> str:
    """
    Compute the request signature.

    The signature is the hex MD5 of the lower-cased concatenation of pass
    phrase, merchant UUID, transaction amount and transaction currency.

    Raises:
        ConfigurationError: If the amount or currency is missing or blank
    """
    if amount is None or not str(amount).strip():
        raise ConfigurationError("Missing or blank amount field in postData array.")
    if currency is None or not str(currency).strip():
        raise ConfigurationError("Missing or blank currency field in postData array.")

    payload = f"{passphrase}{merchant_uuid}{amount}{currency}".lower()
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


def build_payment_request(
    form: PaymentForm,
    gateway: GatewaySettings,
    order: Order,
    customer_ip: str,
) -> PaymentRequest:
    """
    Assemble the processCard request for an order.

    Args:
        form: Validated card-holder input
        gateway: Merchant credentials and currency
        order: Order being paid for
        customer_ip: IP address of the shopper's originating HTTP request

    Returns:
        PaymentRequest ready for transport encoding

    Raises:
        ConfigurationError: If the amount or currency cannot be signed
    """
    amount = format_amount(order.total)
    currency = gateway.transaction_currency

    signature = calculate_hash(gateway.passphrase, gateway.merchant_uuid, amount, currency)

    logger.debug(
        "payment_request_built",
        order_id=order.id,
        amount=amount,
        currency=currency,
    )

    return PaymentRequest(
        merchant_uuid=gateway.merchant_uuid,
        api_key=gateway.api_key,
        transaction_amount=amount,
        transaction_currency=currency,
        transaction_product=str(order.id),
        customer_name=f"{order.billing_first_name} {order.billing_last_name}",
        customer_country=order.billing_country_code,
        customer_state=order.billing_state_code,
        customer_city=order.billing_city,
        customer_address=order.billing_street_addr,
        customer_post_code=order.billing_zip,
        customer_phone=form.phone,
        customer_email=order.billing_email,
        customer_ip=customer_ip,
        payment_card_number=form.card_number,
        payment_card_name=form.cardholder_name,
        payment_card_expiry=format_expiry_month(form.expiry_month) + format_expiry_year(form.expiry_year),
        hash=signature,
    )
