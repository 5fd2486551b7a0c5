"""Validation of the posted card-holder payment form."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from mwarrior_payment.models import FieldFailure, PaymentForm, ValidationError

DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class FieldRule:
    name: str
    attribute: str
    required_message: str
    digits_message: str | None = None


FORM_RULES = (
    FieldRule("FIRSTNAME", "first_name", "Please specify a cardholder first name."),
    FieldRule("LASTNAME", "last_name", "Please specify a cardholder last name."),
    FieldRule(
        "EXPDATE_MONTH",
        "expiry_month",
        "Please specify a card expiration month.",
        "Credit card expiration month can contain only digits.",
    ),
    FieldRule(
        "EXPDATE_YEAR",
        "expiry_year",
        "Please specify a card expiration year.",
        "Credit card expiration year can contain only digits.",
    ),
    FieldRule("PHONE", "phone", "Please specify a phone number."),
    FieldRule(
        "ACCT",
        "card_number",
        "Please specify a credit card number.",
        "Please specify a valid credit card number. Credit card number can contain only digits.",
    ),
    FieldRule(
        "CVV2",
        "cvv",
        "Please specify CVV2 value.",
        "Please specify a CVV2 number. CVV2 can contain only digits.",
    ),
)


@dataclass(frozen=True)
class FormValidationResult:
    """Trimmed field values plus every failure found."""

    values: dict[str, str] = field(default_factory=dict)
    failures: tuple[FieldFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        if self.failures:
            raise ValidationError(list(self.failures))

    def to_form(self) -> PaymentForm:
        """Build the validated form, raising ValidationError if any field failed."""
        self.raise_for_failures()
        return PaymentForm(
            **{rule.attribute: self.values[rule.name] for rule in FORM_RULES}
        )


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def validate_payment_form(data: Mapping[str, Any]) -> FormValidationResult:
    """
    Validate posted payment form data.

    Every field is trimmed and checked; the first failing rule of each field
    is reported and validation carries on with the remaining fields.

    Args:
        data: Posted form values keyed by form field name (FIRSTNAME, ACCT, ...)

    Returns:
        FormValidationResult with the trimmed values and all failures
    """
    values: dict[str, str] = {}
    failures: list[FieldFailure] = []

    for rule in FORM_RULES:
        value = _clean(data.get(rule.name))
        values[rule.name] = value

        if not value:
            failures.append(FieldFailure(rule.name, "required", rule.required_message))
        elif rule.digits_message and not DIGITS.fullmatch(value):
            failures.append(FieldFailure(rule.name, "digits", rule.digits_message))

    return FormValidationResult(values=values, failures=tuple(failures))
