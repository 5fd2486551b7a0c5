"""Parsing and interpretation of gateway XML replies."""

import re

import structlog
from lxml import etree

from mwarrior_payment.models import GatewayDeclineError, PaymentResponse, ResponseFormatError

logger = structlog.get_logger(__name__)

_TAG = re.compile(r"<[^>]*>")
_BR = re.compile(r"<br\s*/?>", re.IGNORECASE)
_DECLARED_ENCODING = re.compile(rb"""\A\s*<\?xml[^>]*?encoding=["']([A-Za-z0-9._-]+)["']""")

DEFAULT_DECLINE_REASON = "Payment Processor declined transaction."


def _parser(encoding: str | None = None) -> etree.XMLParser:
    return etree.XMLParser(
        encoding=encoding,
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
    )


def decode_body(body: bytes) -> str:
    """Decode a raw reply using its XML declaration, falling back to UTF-8."""
    match = _DECLARED_ENCODING.match(body)
    encoding = match.group(1).decode("ascii") if match else "utf-8"
    try:
        return body.decode(encoding, errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


def flatten_xml(body: str | bytes) -> dict[str, str]:
    """
    Flatten an XML document into a map of leaf tag name to text.

    Namespaces are dropped from tag names. When a tag repeats, the last
    occurrence wins. Bytes are decoded by lxml according to the document's
    own encoding declaration; text is treated as already decoded.

    Raises:
        ResponseFormatError: If the document is empty or not well-formed
    """
    if isinstance(body, str):
        data, parser = body.encode("utf-8"), _parser(encoding="utf-8")
    else:
        data, parser = body, _parser()
    if not data or not data.strip():
        raise ResponseFormatError("Invalid payment gateway response.")

    try:
        root = etree.fromstring(data, parser=parser)
    except (etree.XMLSyntaxError, LookupError, ValueError) as e:
        raise ResponseFormatError("Invalid payment gateway response.") from e

    fields: dict[str, str] = {}
    for element in root.iter():
        # Skip comments and processing instructions
        if not isinstance(element.tag, str) or len(element):
            continue
        fields[etree.QName(element).localname] = (element.text or "").strip()
    return fields


def parse_response(body: str | bytes) -> PaymentResponse:
    """
    Parse a raw gateway reply into a PaymentResponse.

    Raises:
        ResponseFormatError: Malformed XML, missing responseCode, or a
            responseCode that is not an integer
    """
    fields = flatten_xml(body)

    if "responseCode" not in fields:
        logger.error("gateway_response_missing_code", fields=sorted(fields))
        raise ResponseFormatError("API Response did not contain a valid responseCode.")

    raw_code = fields["responseCode"]
    try:
        response_code = int(raw_code)
    except ValueError as e:
        logger.error("gateway_response_invalid_code", response_code=raw_code)
        raise ResponseFormatError(
            f"API Response contained a non-numeric responseCode: {raw_code!r}"
        ) from e

    return PaymentResponse(
        response_code=response_code,
        response_message=fields.get("responseMessage"),
        message_text=fields.get("messageText"),
        transaction_id=fields.get("transactionID"),
        auth_code=fields.get("authCode"),
        receipt_no=fields.get("receiptNo"),
        raw=fields,
    )


def strip_html(text: str) -> str:
    """Turn <br> into spaces and drop any other markup."""
    return _TAG.sub("", _BR.sub(" ", text)).strip()


def gateway_message(response: PaymentResponse | None) -> str | None:
    """Plain-text messageText of a reply, if the gateway sent one."""
    if response is None or not response.message_text:
        return None
    return strip_html(response.message_text) or None


def interpret_response(response: PaymentResponse) -> PaymentResponse:
    """
    Accept an approved reply or raise for a decline.

    Returns:
        The same response when responseCode is 0

    Raises:
        GatewayDeclineError: For any other responseCode
    """
    if response.approved:
        logger.info(
            "gateway_transaction_approved",
            transaction_id=response.transaction_id,
            auth_code=response.auth_code,
        )
        return response

    reason = response.response_message or gateway_message(response) or DEFAULT_DECLINE_REASON
    logger.info(
        "gateway_transaction_declined",
        response_code=response.response_code,
        reason=reason,
    )
    raise GatewayDeclineError(reason, response=response)
