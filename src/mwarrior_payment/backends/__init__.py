"""Collaborator boundary for order persistence and attempt logging."""

from mwarrior_payment.backends.base import PaymentBackend
from mwarrior_payment.backends.memory import InMemoryPaymentBackend

__all__ = ["InMemoryPaymentBackend", "PaymentBackend"]
