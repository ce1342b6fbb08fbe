"""Unit tests for cent-precision money helpers"""

import pytest
from decimal import Decimal

from src.app.pricing.money import (
    apply_rate,
    format_amount,
    format_money,
    format_percent,
    from_minor_units,
    per_day,
    to_minor_units,
)


class TestToMinorUnits:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (Decimal("140.00"), 14000),
            (Decimal("0.005"), 1),
            (Decimal("1.004"), 100),
            (Decimal("-0.005"), -1),
            ("19.99", 1999),
            (0.1, 10),
            (3, 300),
            (None, 0),
            ("", 0),
        ],
    )
    def test_rounds_half_up(self, value, expected):
        assert to_minor_units(value) == expected

    def test_round_trip_keeps_two_places(self):
        assert from_minor_units(14000) == Decimal("140.00")
        assert str(from_minor_units(5)) == "0.05"


class TestArithmetic:
    def test_apply_rate_rounds_once(self):
        # 333 cents x 7% = 23.31 -> 23
        assert apply_rate(333, Decimal("0.07")) == 23
        # 50 cents x 7% = 3.5 -> 4
        assert apply_rate(50, "0.07") == 4

    def test_per_day(self):
        assert per_day(14000, 3) == 4667
        assert per_day(14000, 0) == 0


class TestFormatting:
    def test_format_money(self):
        assert format_money(14000) == "$140.00"
        assert format_money(5) == "$0.05"
        assert format_money(-150) == "-$1.50"

    def test_format_amount(self):
        assert format_amount(Decimal("58")) == "$58.00"
        assert format_amount(None) == "$0.00"

    @pytest.mark.parametrize(
        "rate,expected",
        [(Decimal("0.07"), "7%"), (Decimal("0.05"), "5%"), (Decimal("0.075"), "7.5%"), ("0.10", "10%")],
    )
    def test_format_percent(self, rate, expected):
        assert format_percent(rate) == expected
