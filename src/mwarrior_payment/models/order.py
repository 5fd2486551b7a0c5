"""Order entity as seen by the payment type."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class Order:
    """
    Shop order being paid for.

    The payment type only reads the total and billing details. ``status_id``
    and ``payment_processed`` are changed by the backend after an approved
    payment.
    """

    id: str
    total: Decimal
    billing_first_name: str
    billing_last_name: str
    billing_email: str
    billing_country_code: str = ""
    billing_state_code: str = ""
    billing_city: str = ""
    billing_street_addr: str = ""
    billing_zip: str = ""
    status_id: str | None = None
    payment_processed: bool = False
