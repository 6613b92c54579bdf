"""Tests for Rupiah display formatting."""

from decimal import Decimal

import pytest

from cashbook.formatting import format_currency


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "Rp\u00a00"),
        (500, "Rp\u00a0500"),
        (1000, "Rp\u00a01.000"),
        (1500000, "Rp\u00a01.500.000"),
        (Decimal("1234567"), "Rp\u00a01.234.567"),
        (Decimal("999.5"), "Rp\u00a01.000"),
        (Decimal("999.4"), "Rp\u00a0999"),
        (12.5, "Rp\u00a013"),
        (-1000, "-Rp\u00a01.000"),
        (Decimal("-0.4"), "Rp\u00a00"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected
