"""Money helpers.

Amounts are ``Decimal`` with two places end to end; floats never enter
arithmetic. Formatting to a display string happens only at the edges
(logs, notifications), never parsed back.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

CENT = Decimal("0.01")

# Precision of subtotals and totals. Wide enough for a full cart line
# (MAX_LINE_QUANTITY x the largest listing price) times many lines.
AMOUNT_MAX_DIGITS = 18


def to_money(value: Decimal | int | str) -> Decimal:
    """Quantize *value* to cents (half-up)."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def line_subtotal(unit_price: Decimal, quantity: int) -> Decimal:
    return to_money(unit_price * quantity)


def total(amounts: Iterable[Decimal]) -> Decimal:
    """Exact sum of already-quantized amounts."""
    return to_money(sum(amounts, Decimal("0.00")))


def format_money(value: Decimal) -> str:
    """Display form, e.g. ``$11.50``."""
    return f"${to_money(value):,.2f}"
