"""Base interface for the shop services the payment type reports to."""

from abc import ABC, abstractmethod

from mwarrior_payment.models import AttemptLogEntry, Order


class PaymentBackend(ABC):
    """
    Abstract boundary to order persistence and the payment attempt log.

    The payment type never stores anything itself. It hands attempt log
    entries and order transitions to an implementation of this interface.
    """

    @abstractmethod
    def log_payment_attempt(self, entry: AttemptLogEntry) -> None:
        """Persist one payment attempt. Fields in ``entry`` are already sanitized."""

    @abstractmethod
    def set_order_status(self, order: Order, status_id: str) -> None:
        """Record a status transition for the order."""

    @abstractmethod
    def mark_order_paid(self, order: Order) -> None:
        """Flag the order as paid."""

    @abstractmethod
    def paid_status_id(self) -> str:
        """Identifier of the shop's default "paid" order status."""
