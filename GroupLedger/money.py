"""
Money Module

This module holds the rounding and tolerance rules shared by every part of
the group ledger.

Features:
    - Decimal conversion of float amounts without binary drift
    - Round-half-away-from-zero quantization to 2 decimal places
    - Single tolerance (EPSILON) for "settled" comparisons

Functions:
    to_decimal: Convert a numeric value to Decimal.
    quantize: Round a value to the nearest hundredth.
    to_amount: Round a value and return it as a float.
    is_negligible: Check whether a value is below the tolerance.
"""

from decimal import Decimal, ROUND_HALF_UP


CENT = Decimal("0.01")

# Threshold for ignoring tiny rounding differences
EPSILON = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """
    Convert a numeric value to Decimal.

    Floats go through str() so that 0.1 becomes Decimal("0.1") and not the
    exact binary expansion.

    Args:
        value: int, float, str or Decimal.

    Returns:
        Decimal: The converted value.

    Raises:
        ValueError: If the value is NaN or infinite.
    """
    result = value if isinstance(value, Decimal) else Decimal(str(value))
    if not result.is_finite():
        raise ValueError(f"amount must be a finite number, got: {value}")
    return result


def quantize(value) -> Decimal:
    """
    Round a value to 2 decimal places.

    ROUND_HALF_UP in the decimal module rounds ties away from zero, so
    0.005 -> 0.01 and -0.005 -> -0.01.

    Args:
        value: Numeric value to round.

    Returns:
        Decimal: Rounded value.
    """
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_amount(value) -> float:
    """Round a value to 2 decimal places and convert to float (never -0.0)."""
    return float(quantize(value)) or 0.0


def is_negligible(value) -> bool:
    """True when the absolute value is below EPSILON."""
    return abs(to_decimal(value)) < EPSILON
