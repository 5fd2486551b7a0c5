"""
Example usage of ServerToServerPayment against the Merchant Warrior sandbox.

Set the merchant credentials before running:

    export GATEWAY__MERCHANT_UUID=...
    export GATEWAY__API_KEY=...
    export GATEWAY__PASSPHRASE=...
"""

from decimal import Decimal

from mwarrior_payment.backends import InMemoryPaymentBackend
from mwarrior_payment.config import settings
from mwarrior_payment.logging_config import configure_logging
from mwarrior_payment.models import Order, PaymentError
from mwarrior_payment.processors import ServerToServerPayment


def main() -> None:
    configure_logging(settings.log_level, format_as_json=False)

    backend = InMemoryPaymentBackend()
    payment_type = ServerToServerPayment.from_settings(backend)
    payment_type.validate_config()

    order = Order(
        id="1001",
        total=Decimal("10.00"),
        billing_first_name="Test",
        billing_last_name="Customer",
        billing_email="test@example.com",
        billing_country_code="AU",
        billing_state_code="QLD",
        billing_city="Brisbane",
        billing_street_addr="123 Test Street",
        billing_zip="4000",
    )

    form = {
        "FIRSTNAME": "Test",
        "LASTNAME": "Customer",
        "ACCT": "5123456789012346",
        "CVV2": "123",
        "EXPDATE_MONTH": "5",
        "EXPDATE_YEAR": "2030",
        "PHONE": "0400000000",
    }

    try:
        response = payment_type.process_payment_form(
            form, order, customer_ip="127.0.0.1", back_office=True
        )
        print(f"Approved: transaction {response.transaction_id}")
    except PaymentError as e:
        print(f"{type(e).__name__}: {e}")

    for entry in backend.attempts:
        print(f"Attempt log: success={entry.is_success} message={entry.message!r}")
        print(f"  request={entry.request_fields}")
    print(f"Order status={order.status_id} paid={order.payment_processed}")


if __name__ == "__main__":
    main()
