"""Display helpers for Rupiah amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

NBSP = "\u00a0"
CURRENCY_PREFIX = "Rp"


def format_currency(amount: Union[Decimal, int, float]) -> str:
    """Format an amount as whole-unit Indonesian Rupiah, e.g. 'Rp 1.500.000'.

    Uses '.' for thousands and a non-breaking space after the symbol, rounding
    half away from zero to whole rupiah.
    """
    value = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    digits = f"{abs(value):,.0f}".replace(",", ".")
    return f"{sign}{CURRENCY_PREFIX}{NBSP}{digits}"
