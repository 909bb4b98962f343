"""Round-half-up helpers shared by inference, binding and arithmetic.

Ties round toward positive infinity (``floor(v + 1/2)``) for both floats and
scaled integers, so the three code paths never disagree on a tie.
"""

from __future__ import annotations

from fractions import Fraction


def shift_round(raw: int, shift: int) -> int:
    """Divide *raw* by ``2**shift`` and round half up. ``shift <= 0`` scales up exactly."""
    if shift <= 0:
        return raw << -shift
    quotient, remainder = divmod(raw, 1 << shift)
    if remainder >= 1 << (shift - 1):
        quotient += 1
    return quotient


def scale(value: float, fractional_bits: int) -> int:
    """Return ``round(value * 2**fractional_bits)``, computed exactly.

    *value* must be finite. The result is an arbitrary-size integer, so wide
    formats never overflow the float range here.
    """
    numerator, denominator = float(value).as_integer_ratio()
    return shift_round(numerator << fractional_bits, denominator.bit_length() - 1)


def scaled_error(value: float, fractional_bits: int) -> Fraction:
    """Exact absolute error of *value* rounded to *fractional_bits* fractional bits."""
    return abs(Fraction(scale(value, fractional_bits), 1 << fractional_bits) - Fraction(value))
