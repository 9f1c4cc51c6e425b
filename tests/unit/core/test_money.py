from decimal import Decimal

import pytest

from modules.core.money import format_money, line_subtotal, to_money, total

pytestmark = pytest.mark.unit


class TestMoney:
    def test_to_money_rounds_half_up(self):
        assert to_money("2.345") == Decimal("2.35")
        assert to_money(3) == Decimal("3.00")

    def test_line_subtotal_is_exact(self):
        assert line_subtotal(Decimal("0.10"), 3) == Decimal("0.30")
        assert line_subtotal(Decimal("2.50"), 3) == Decimal("7.50")

    def test_total_of_lines(self):
        amounts = [line_subtotal(Decimal("2.50"), 3), line_subtotal(Decimal("4.00"), 1)]
        assert total(amounts) == Decimal("11.50")

    def test_total_of_nothing_is_zero(self):
        assert total([]) == Decimal("0.00")

    def test_format_money(self):
        assert format_money(Decimal("1234.5")) == "$1,234.50"
