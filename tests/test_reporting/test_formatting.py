"""Tests for display formatting."""

import math

import pytest

from gridlab.reporting.formatting import (
    format_currency,
    format_number,
    format_percentage,
    price_color_class,
)


class TestFormatNumber:
    def test_trims_to_minimum_two_decimals(self):
        assert format_number(1234.5) == "1,234.50"

    def test_keeps_significant_decimals(self):
        assert format_number(13.1234) == "13.1234"
        assert format_number(13.123456) == "13.1235"

    def test_zero_decimals(self):
        assert format_number(1234.6, decimals=0) == "1,235"

    def test_one_decimal(self):
        assert format_number(2.0, decimals=1) == "2.0"

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite(self, value):
        assert format_number(value) == "-"


class TestFormatPercentage:
    def test_signs(self):
        assert format_percentage(1.234) == "+1.23%"
        assert format_percentage(0.0) == "+0.00%"
        assert format_percentage(-5.5) == "-5.50%"

    def test_non_finite(self):
        assert format_percentage(math.nan) == "-"


class TestFormatCurrency:
    def test_usd(self):
        assert format_currency(2000.4) == "$2,000"
        assert format_currency(-20.0) == "-$20"

    def test_other_currency(self):
        assert format_currency(5, "EUR") == "€5"
        assert format_currency(5, "CHF") == "CHF 5"

    def test_small_negative_keeps_sign(self):
        assert format_currency(-0.4) == "-$0"
        assert format_currency(-0.2) == "-$0"

    def test_halves_round_away_from_zero(self):
        assert format_currency(-0.5) == "-$1"
        assert format_currency(0.5) == "$1"
        assert format_currency(2.5) == "$3"

    def test_large_amount(self):
        text = format_currency(1e30)
        assert text.startswith("$1,000,000,000,000,000,")
        assert len(text.replace(",", "")) == 32

    def test_negative_zero_unsigned(self):
        assert format_currency(-0.0) == "$0"

    def test_non_finite(self):
        assert format_currency(math.inf) == "-"


class TestPriceColor:
    def test_classes(self):
        assert price_color_class(2, 1) == "positive"
        assert price_color_class(1, 2) == "negative"
        assert price_color_class(1, 1) == ""
