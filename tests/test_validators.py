"""Tests for transaction form validation."""

from decimal import Decimal

import pytest

from cashbook.exceptions import ValidationError
from cashbook.validators import (
    AMOUNT_INVALID,
    AMOUNT_REQUIRED,
    DESCRIPTION_REQUIRED,
    TYPE_INVALID,
    validate_transaction_form,
)


def _errors(amount, description, type):
    with pytest.raises(ValidationError) as exc_info:
        validate_transaction_form(amount, description, type)
    return exc_info.value.errors


class TestAmount:
    def test_digits_are_accepted(self):
        entry = validate_transaction_form("1500", "Lunch", "expense")
        assert entry.amount == Decimal("1500")

    def test_zero_is_accepted(self):
        entry = validate_transaction_form("0", "Nothing", "income")
        assert entry.amount == 0

    @pytest.mark.parametrize("raw", ["12.5", "-1", "abc", "1e3", " 12", "12 ", "12\n", "١٢"])
    def test_non_digit_strings_are_rejected(self, raw):
        assert _errors(raw, "x", "income") == {"amount": AMOUNT_INVALID}

    def test_empty_amount_reports_invalid_number_first(self):
        assert _errors("", "x", "income") == {"amount": AMOUNT_INVALID}

    def test_missing_amount_is_required(self):
        assert _errors(None, "x", "income") == {"amount": AMOUNT_REQUIRED}

    def test_non_string_amount_is_rejected(self):
        assert _errors(12, "x", "income") == {"amount": AMOUNT_INVALID}

    def test_message_wording(self):
        assert AMOUNT_INVALID == "Amount must be a valid number"


class TestDescription:
    def test_empty_description_is_required(self):
        assert _errors("10", "", "income") == {"description": DESCRIPTION_REQUIRED}
        assert DESCRIPTION_REQUIRED == "Description is required"

    def test_description_is_kept_verbatim(self):
        entry = validate_transaction_form("10", "  Rent  ", "expense")
        assert entry.description == "  Rent  "


class TestType:
    @pytest.mark.parametrize("value", ["income", "expense"])
    def test_known_types(self, value):
        assert validate_transaction_form("10", "x", value).type == value

    @pytest.mark.parametrize("value", ["Income", "transfer", "", None])
    def test_unknown_types(self, value):
        assert _errors("10", "x", value) == {"type": TYPE_INVALID}


class TestErrorMapping:
    def test_every_bad_field_is_reported_once(self):
        errors = _errors("12.5", "", "gift")

        assert errors == {
            "amount": AMOUNT_INVALID,
            "description": DESCRIPTION_REQUIRED,
            "type": TYPE_INVALID,
        }

    def test_valid_fields_are_absent(self):
        errors = _errors("abc", "Groceries", "expense")
        assert "description" not in errors
        assert "type" not in errors

    def test_message_mentions_fields(self):
        with pytest.raises(ValidationError, match="amount"):
            validate_transaction_form("", "x", "income")

    def test_record_payload(self):
        entry = validate_transaction_form("2500", "Book", "expense")

        assert entry.to_record("2024-05-01T00:00:00.000Z") == {
            "amount": 2500,
            "description": "Book",
            "type": "expense",
            "created_at": "2024-05-01T00:00:00.000Z",
        }
