from decimal import Decimal

import pytest

from money import EPSILON, is_negligible, quantize, to_amount, to_decimal


def test_to_decimal_uses_float_repr():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(Decimal("1.005")) == Decimal("1.005")


def test_quantize_rounds_half_away_from_zero():
    assert quantize(0.005) == Decimal("0.01")
    assert quantize(-0.005) == Decimal("-0.01")
    assert quantize(2.675) == Decimal("2.68")
    assert quantize(1.004) == Decimal("1.00")


def test_to_amount_never_returns_negative_zero():
    amount = to_amount(Decimal("-0.001"))
    assert amount == 0.0
    assert str(amount) == "0.0"


def test_negligible_threshold():
    assert EPSILON == Decimal("0.01")
    assert is_negligible(0.005)
    assert is_negligible(-0.0099)
    assert not is_negligible(0.01)
    assert not is_negligible(-0.02)


def test_to_decimal_rejects_non_finite():
    with pytest.raises(ValueError):
        to_decimal(float("nan"))
    with pytest.raises(ValueError):
        quantize(float("-inf"))
