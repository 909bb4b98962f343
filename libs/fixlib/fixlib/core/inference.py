"""Data-dependent inference of the minimal fixed-point format for a sample set."""

from __future__ import annotations

import logging
import math
import sys
from collections.abc import Iterable
from fractions import Fraction

from fixlib.core.errors import (
    EmptyInputError,
    InvalidSampleError,
    InvalidToleranceError,
    ToleranceUnreachableError,
)
from fixlib.core.format import FormatDescriptor
from fixlib.core.rounding import scaled_error

logger = logging.getLogger(__name__)

# Significand bits of a double, excluding the implicit leading one.
DEFAULT_MAX_FRACTIONAL_BITS = sys.float_info.mant_dig - 1


def integer_width(x: float) -> float:
    """Bits needed left of the binary point for *x*, before rounding up.

    ``log2(x)`` for positive samples and ``log2(1 - x)`` otherwise, which
    gives 0 for a zero sample.
    """
    if x > 0:
        return math.log2(x)
    return math.log2(-x + 1)


def rounding_error(x: float, fractional_bits: int) -> float:
    """Absolute error of *x* rounded to *fractional_bits* fractional bits."""
    return float(scaled_error(x, fractional_bits))


def infer_format(
    samples: Iterable[float],
    epsilon: float,
    *,
    max_fractional_bits: int = DEFAULT_MAX_FRACTIONAL_BITS,
) -> FormatDescriptor:
    """
    Compute the smallest fixed-point format that holds every sample within *epsilon*.

    Args:
        samples: Non-empty collection of finite reals. Not modified.
        epsilon: Maximum absolute rounding error allowed per sample, exclusive.
        max_fractional_bits: Upper bound of the fractional-width search.

    Returns:
        The inferred format descriptor.

    Raises:
        EmptyInputError: If *samples* is empty.
        InvalidToleranceError: If *epsilon* is not a positive finite number.
        InvalidSampleError: If a sample is NaN or infinite.
        ToleranceUnreachableError: If no fractional width up to
            *max_fractional_bits* meets the tolerance.
    """
    values = [float(x) for x in samples]
    if not values:
        raise EmptyInputError("Cannot infer a format from an empty sample set")
    try:
        tolerance = float(epsilon)
    except (TypeError, ValueError):
        raise InvalidToleranceError(f"Tolerance must be a number, got {epsilon!r}") from None
    if not (math.isfinite(tolerance) and tolerance > 0):
        raise InvalidToleranceError(f"Tolerance must be a positive finite number, got {epsilon!r}")
    for i, x in enumerate(values):
        if not math.isfinite(x):
            raise InvalidSampleError(f"Sample {i} is not finite: {x!r}")

    finest_half_step = math.ldexp(1.0, -(max_fractional_bits + 1))
    if tolerance <= finest_half_step:
        raise ToleranceUnreachableError(
            f"Tolerance {tolerance!r} is below half the finest step "
            f"2^-{max_fractional_bits} of the fractional-width search"
        )

    signed = any(x < 0 for x in values)
    integer_bits = max(0, math.ceil(max(integer_width(x) for x in values)))

    for fractional_bits in range(max_fractional_bits + 1):
        if _meets_tolerance(values, fractional_bits, tolerance):
            descriptor = FormatDescriptor(signed, integer_bits, fractional_bits)
            logger.debug("Inferred %s for %d samples at tolerance %g", descriptor, len(values), tolerance)
            return descriptor

    raise ToleranceUnreachableError(
        f"No fractional width up to {max_fractional_bits} bits represents all "
        f"{len(values)} samples within {tolerance!r}"
    )


def _meets_tolerance(values: list[float], fractional_bits: int, epsilon: float) -> bool:
    bound = Fraction(epsilon)
    return all(scaled_error(x, fractional_bits) < bound for x in values)
