"""Outbound HTTP clients."""

from mwarrior_payment.clients.merchant_warrior_client import MerchantWarriorClient, encode_form

__all__ = ["MerchantWarriorClient", "encode_form"]
