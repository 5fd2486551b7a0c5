"""Removal of card data and merchant credentials from anything that gets stored or logged."""

from collections.abc import Mapping
from typing import Any

# Merchant credentials, the credential-derived signature and CVV values
DROPPED_KEYS = frozenset(
    {
        "merchantUUID",
        "merchant_uuid",
        "apiKey",
        "api_key",
        "passphrase",
        "hash",
        "paymentCardCSC",
        "CVV2",
        "cvv",
    }
)

CARD_NUMBER_KEYS = frozenset({"paymentCardNumber", "ACCT", "card_number"})


def mask_card_number(card_number: str) -> str:
    """Reduce a card number to its last four digits ("...4242")."""
    return "..." + card_number[-4:]


def sanitize_fields(fields: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a copy of ``fields`` that is safe to persist in the attempt log."""
    if not fields:
        return {}

    sanitized: dict[str, Any] = {}
    for key, value in fields.items():
        if key in DROPPED_KEYS:
            continue
        if key in CARD_NUMBER_KEYS and value:
            value = mask_card_number(str(value))
        sanitized[key] = value
    return sanitized
