"""
Payment type implementations.

- server_to_server.ServerToServerPayment: Merchant Warrior server-to-server
  card charges (no browser redirect)
"""

from mwarrior_payment.processors.server_to_server import ServerToServerPayment

__all__ = ["ServerToServerPayment"]
