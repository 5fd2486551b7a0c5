"""Merchant Warrior server-to-server card payments for shop checkouts."""

from mwarrior_payment.processors import ServerToServerPayment

__all__ = ["ServerToServerPayment"]

__version__ = "0.1.0"
