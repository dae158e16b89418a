from decimal import Decimal

import pytest

from mortgage_calc.utils import as_decimal, decimal_from_str, number_or_default, parse_amount, to_money


class TestParsing:
    def test_decimal_from_str_strips_commas(self):
        assert decimal_from_str("1,500.50") == Decimal("1500.50")

    def test_decimal_from_str_rejects_text(self):
        with pytest.raises(ValueError):
            decimal_from_str("abc")

    def test_decimal_from_str_rejects_nan(self):
        with pytest.raises(ValueError):
            decimal_from_str("NaN")

    def test_parse_amount_suffixes(self):
        assert parse_amount("400k") == Decimal("400000")
        assert parse_amount("1.2m") == Decimal("1200000")
        assert parse_amount(" 360,000 ") == Decimal("360000")


class TestNumberOrDefault:
    def test_numeric_text(self):
        assert number_or_default("3.65") == Decimal("3.65")

    def test_invalid_text_uses_default(self):
        assert number_or_default("abc", 30) == Decimal("30")
        assert number_or_default("", Decimal("3.65")) == Decimal("3.65")
        assert number_or_default(None, 5) == Decimal("5")

    def test_default_is_zero(self):
        assert number_or_default("not a number") == 0

    def test_numbers_pass_through(self):
        assert number_or_default(12) == Decimal("12")
        assert number_or_default(3.65) == Decimal("3.65")


class TestMoney:
    def test_as_decimal_float(self):
        assert as_decimal(3.65) == Decimal("3.65")

    def test_to_money_rounds_half_up(self):
        assert to_money(Decimal("0.005")) == Decimal("0.01")
        assert to_money(Decimal("1646.8544")) == Decimal("1646.85")
