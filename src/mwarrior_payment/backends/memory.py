"""
In-memory payment backend.

Used by tests, examples and local development in place of a real shop
database.
"""

import structlog

from mwarrior_payment.backends.base import PaymentBackend
from mwarrior_payment.models import AttemptLogEntry, Order

logger = structlog.get_logger(__name__)

PAID_STATUS_ID = "paid"


class InMemoryPaymentBackend(PaymentBackend):
    def __init__(self) -> None:
        self.attempts: list[AttemptLogEntry] = []
        # order_id -> list of status ids, oldest first
        self.status_log: dict[str, list[str]] = {}

    def log_payment_attempt(self, entry: AttemptLogEntry) -> None:
        self.attempts.append(entry)

    def set_order_status(self, order: Order, status_id: str) -> None:
        self.status_log.setdefault(order.id, []).append(status_id)
        order.status_id = status_id
        logger.info("order_status_changed", order_id=order.id, status_id=status_id)

    def mark_order_paid(self, order: Order) -> None:
        order.payment_processed = True
        logger.info("order_marked_paid", order_id=order.id)

    def paid_status_id(self) -> str:
        return PAID_STATUS_ID
