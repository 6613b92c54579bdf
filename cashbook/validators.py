"""Validation helpers for the transaction entry form."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Dict

from .exceptions import ValidationError
from .models import TRANSACTION_TYPES, NewTransaction

AMOUNT_PATTERN = re.compile(r"[0-9]+")

AMOUNT_INVALID = "Amount must be a valid number"
AMOUNT_REQUIRED = "Amount is required"
DESCRIPTION_REQUIRED = "Description is required"
TYPE_INVALID = "Type must be either income or expense"


def check_amount(raw: object) -> str:
    """Return the first rule the amount breaks, or an empty string.

    A missing amount is "required"; anything present that is not a plain
    run of ASCII digits, the empty string included, is "not a valid number".
    """
    if raw is None:
        return AMOUNT_REQUIRED
    if not isinstance(raw, str) or not AMOUNT_PATTERN.fullmatch(raw):
        return AMOUNT_INVALID
    return ""


def check_description(raw: object) -> str:
    if not isinstance(raw, str) or len(raw) < 1:
        return DESCRIPTION_REQUIRED
    return ""


def check_type(raw: object) -> str:
    if raw not in TRANSACTION_TYPES:
        return TYPE_INVALID
    return ""


def validate_transaction_form(amount: object, description: object, type: object) -> NewTransaction:
    """Validate raw form strings into a NewTransaction.

    Every field is checked; only the first violated rule per field is kept.
    Raises ValidationError whose ``errors`` maps field name to message.
    """
    errors: Dict[str, str] = {}
    for name, message in (
        ("amount", check_amount(amount)),
        ("description", check_description(description)),
        ("type", check_type(type)),
    ):
        if message:
            errors[name] = message

    if errors:
        summary = "; ".join(f"{name}: {message}" for name, message in errors.items())
        raise ValidationError(summary, errors)

    return NewTransaction(
        amount=Decimal(int(amount)),  # type: ignore[arg-type]
        description=description,  # type: ignore[arg-type]
        type=type,  # type: ignore[arg-type]
    )
