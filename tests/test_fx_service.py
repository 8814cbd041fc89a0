"""
FX conversion against the fixed rate table
"""

import math

import pytest

from world_property.models.offer import Money
from world_property.services.fx_service import (
    FX_BASE_CURRENCY,
    FX_RATES,
    MINOR_UNIT_EXPONENTS,
    convert,
    convert_money,
    is_supported_currency,
    minor_unit_exponent,
    supported_currencies,
)


class TestConvert:

    def test_base_currency_has_rate_one(self):
        assert FX_BASE_CURRENCY == "GBP"
        assert FX_RATES["GBP"] == 1
        assert len(supported_currencies()) == 15

    def test_same_currency_returns_value(self):
        assert convert(123.45, "EUR", "EUR") == 123.45

    def test_from_base(self):
        assert convert(100, "GBP", "EUR") == pytest.approx(117)
        assert convert(100, "GBP", "JPY") == pytest.approx(19150)

    def test_to_base(self):
        assert convert(117, "EUR", "GBP") == pytest.approx(100)

    def test_cross_rate_goes_through_base(self):
        assert convert(1.17, "EUR", "USD") == pytest.approx(1.28)

    def test_codes_are_normalised(self):
        assert convert(100, " gbp ", "eur") == pytest.approx(117)
        assert is_supported_currency(" nzd")

    @pytest.mark.parametrize("source,target", [("GBP", "XYZ"), ("ABC", "GBP"), ("", "EUR")])
    def test_unknown_currency_returns_none(self, source, target):
        assert convert(100, source, target) is None

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_value_returns_none(self, value):
        assert convert(value, "GBP", "EUR") is None

    def test_custom_rate_table(self):
        assert convert(10, "AAA", "BBB", rates={"AAA": 1, "BBB": 3}) == 30


class TestConvertMoney:

    def test_rounds_half_to_even(self):
        assert convert_money(Money(amount_minor=15, currency_code="GBP"), "AED").amount_minor == 70
        assert convert_money(Money(amount_minor=5, currency_code="GBP"), "AED").amount_minor == 24

    def test_target_code_is_normalised(self):
        converted = convert_money(Money(amount_minor=10000, currency_code="GBP"), "jpy")
        assert converted == Money(amount_minor=19150, currency_code="JPY")

    def test_pence_to_yen_drops_minor_digits(self):
        converted = convert_money(Money(amount_minor=100000, currency_code="GBP"), "JPY")
        assert converted.amount_minor == 191500

    @pytest.mark.parametrize("amount_minor,expected", [(19150, 10000), (1000, 522), (1, 1)])
    def test_yen_to_pence(self, amount_minor, expected):
        converted = convert_money(Money(amount_minor=amount_minor, currency_code="JPY"), "GBP")
        assert converted == Money(amount_minor=expected, currency_code="GBP")

    def test_same_currency_is_unchanged(self):
        assert convert_money(Money(amount_minor=1234, currency_code="JPY"), "jpy").amount_minor == 1234

    def test_exponents(self):
        assert minor_unit_exponent("jpy") == 0
        assert minor_unit_exponent("GBP") == 2
        assert set(MINOR_UNIT_EXPONENTS) == set(FX_RATES)

    def test_unsupported_target(self):
        assert convert_money(Money(amount_minor=100, currency_code="GBP"), "XYZ") is None
