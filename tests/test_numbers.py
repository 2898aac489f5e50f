from __future__ import annotations

import math

import pytest

from orcamento.utils.numbers import non_negative, normalize_number, to_finite


class TestNormalizeNumber:
    def test_comma_decimal_with_dot_thousands(self):
        assert normalize_number("1.234,56") == 1234.56

    def test_dot_decimal_with_comma_thousands(self):
        assert normalize_number("1,234.56") == 1234.56

    def test_comma_decimal(self):
        assert normalize_number("35,50") == 35.5

    def test_plain_integer(self):
        assert normalize_number("100") == 100

    def test_empty(self):
        assert normalize_number("") == 0

    def test_whitespace_only(self):
        assert normalize_number("   ") == 0

    def test_none(self):
        assert normalize_number(None) == 0

    def test_garbage(self):
        assert normalize_number("abc") == 0

    def test_int_too_large_for_float(self):
        assert normalize_number(10**400) == 0

    def test_negative_number_keeps_sign(self):
        assert normalize_number(-5) == -5

    def test_negative_text_keeps_sign(self):
        assert normalize_number("-12,5") == -12.5

    def test_currency_symbol_and_nbsp(self):
        assert normalize_number("R$ 1.500,00") == 1500.0

    def test_multiple_dots_unparseable(self):
        assert normalize_number("1.2.3") == 0

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_number(self, value):
        assert normalize_number(value) == 0

    def test_float_passthrough(self):
        assert normalize_number(1e20) == 1e20


class TestToFinite:
    def test_numeric_string(self):
        assert to_finite("2.5") == 2.5

    def test_invalid_uses_default(self):
        assert to_finite("x", default=7) == 7

    def test_nan_uses_default(self):
        assert to_finite(float("nan")) == 0

    def test_bool(self):
        assert to_finite(True) == 1.0

    def test_int_too_large_for_float(self):
        assert to_finite(10**400) == 0
        assert to_finite(-(10**400), default=7.0) == 7.0


class TestNonNegative:
    def test_positive(self):
        assert non_negative("3") == 3

    def test_negative_becomes_zero(self):
        assert non_negative(-1) == 0

    def test_invalid_becomes_zero(self):
        assert non_negative(None) == 0
