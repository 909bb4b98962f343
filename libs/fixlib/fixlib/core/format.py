"""Fixed-point format descriptors."""

from __future__ import annotations

import re
from dataclasses import dataclass
from fractions import Fraction

from fixlib.core.errors import InvalidFormatError

_KEY_RE = re.compile(r"^\s*([su])fix\s*<\s*(\d+)\s*,\s*(\d+)\s*>\s*$")


@dataclass(frozen=True)
class FormatDescriptor:
    """Signedness plus integer and fractional widths of a fixed-point format.

    A format represents every value ``k * 2**-fractional_bits`` whose magnitude
    does not exceed ``2**integer_bits``; unsigned formats also exclude negative
    values. The sign bit is not counted in ``integer_bits``.

    The key form ``sfix<I,F>`` / ``ufix<I,F>`` is stable and round-trips
    through :meth:`parse`.
    """

    signed: bool
    integer_bits: int
    fractional_bits: int

    def __post_init__(self) -> None:
        if not isinstance(self.signed, bool):
            raise InvalidFormatError(f"signed must be a bool, got {self.signed!r}")
        for field_name in ("integer_bits", "fractional_bits"):
            bits = getattr(self, field_name)
            if isinstance(bits, bool) or not isinstance(bits, int):
                raise InvalidFormatError(f"{field_name} must be an integer, got {bits!r}")
            if bits < 0:
                raise InvalidFormatError(f"{field_name} must be non-negative, got {bits}")

    @classmethod
    def parse(cls, key: str) -> FormatDescriptor:
        """Parse the ``sfix<I,F>`` / ``ufix<I,F>`` key form."""
        m = _KEY_RE.match(key)
        if m is None:
            raise InvalidFormatError(f"Malformed format key {key!r} (expected sfix<I,F> or ufix<I,F>)")
        return cls(m.group(1) == "s", int(m.group(2)), int(m.group(3)))

    @property
    def key(self) -> str:
        prefix = "sfix" if self.signed else "ufix"
        return f"{prefix}<{self.integer_bits},{self.fractional_bits}>"

    def __str__(self) -> str:
        return self.key

    @property
    def width(self) -> int:
        """Nominal storage width: sign bit plus integer and fractional bits."""
        return int(self.signed) + self.integer_bits + self.fractional_bits

    @property
    def resolution(self) -> Fraction:
        """Distance between adjacent representable values."""
        return Fraction(1, 1 << self.fractional_bits)

    @property
    def raw_max(self) -> int:
        return 1 << (self.integer_bits + self.fractional_bits)

    @property
    def raw_min(self) -> int:
        return -self.raw_max if self.signed else 0

    @property
    def max_value(self) -> float:
        return float(1 << self.integer_bits)

    @property
    def min_value(self) -> float:
        return -self.max_value if self.signed else 0.0

    def contains_raw(self, raw: int) -> bool:
        """Return True if the scaled integer *raw* lies within this format."""
        return self.raw_min <= raw <= self.raw_max

    def with_fractional_bits(self, fractional_bits: int) -> FormatDescriptor:
        return FormatDescriptor(self.signed, self.integer_bits, fractional_bits)
