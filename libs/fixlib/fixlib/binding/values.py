"""Base class of the fixed-point value types synthesized per format."""

from __future__ import annotations

import functools
from typing import Any, ClassVar

from fixlib.core.errors import FormatMismatchError, ValueOutOfRangeError
from fixlib.core.format import FormatDescriptor
from fixlib.core.rounding import shift_round


def _describe(raw: int, fractional_bits: int) -> str:
    try:
        return repr(raw / (1 << fractional_bits))
    except OverflowError:
        return f"{raw} * 2**-{fractional_bits}"


@functools.total_ordering
class FixedValue:
    """A fixed-point number bound to exactly one :class:`FormatDescriptor`.

    Concrete subclasses are synthesized at runtime, one per format, by
    :class:`~fixlib.binding.binder.DynamicTypeBinder`; the base class is never
    instantiated. Instances are immutable and store the value scaled by
    ``2**fractional_bits`` as a Python integer.

    Arithmetic is closed over a single format: both operands must share the
    same descriptor and the result is range-checked against it.
    """

    __slots__ = ("_raw",)

    format: ClassVar[FormatDescriptor]

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError(f"{type(self).__name__} values are created with DynamicTypeBinder.bind")

    @classmethod
    def _from_raw(cls, raw: int) -> FixedValue:
        fmt = cls.format
        if not fmt.contains_raw(raw):
            raise ValueOutOfRangeError(
                f"{_describe(raw, fmt.fractional_bits)} is outside the range "
                f"[{fmt.min_value!r}, {fmt.max_value!r}] of {fmt}"
            )
        obj = object.__new__(cls)
        object.__setattr__(obj, "_raw", raw)
        return obj

    @property
    def raw(self) -> int:
        """The value scaled by ``2**fractional_bits``."""
        return self._raw

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __copy__(self) -> FixedValue:
        return self

    def __deepcopy__(self, memo: dict) -> FixedValue:
        return self

    def __reduce__(self):
        # Synthesized classes are not importable; rebuild through the default binder.
        from fixlib.binding.binder import _restore

        return _restore, (self.format.key, self._raw)

    def __float__(self) -> float:
        return self._raw / (1 << self.format.fractional_bits)

    def __repr__(self) -> str:
        return f"{self.format}({float(self)!r})"

    def __hash__(self) -> int:
        return hash((self.format, self._raw))

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedValue):
            return NotImplemented
        return self.format == other.format and self._raw == other._raw

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FixedValue):
            return NotImplemented
        return self._raw < self._operand(other)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _operand(self, other: FixedValue) -> int:
        if other.format != self.format:
            raise FormatMismatchError(f"Cannot combine {self.format} with {other.format}")
        return other._raw

    def __add__(self, other: object) -> FixedValue:
        if not isinstance(other, FixedValue):
            return NotImplemented
        return self._from_raw(self._raw + self._operand(other))

    def __sub__(self, other: object) -> FixedValue:
        if not isinstance(other, FixedValue):
            return NotImplemented
        return self._from_raw(self._raw - self._operand(other))

    def __mul__(self, other: object) -> FixedValue:
        if not isinstance(other, FixedValue):
            return NotImplemented
        product = self._raw * self._operand(other)
        return self._from_raw(shift_round(product, self.format.fractional_bits))

    def __neg__(self) -> FixedValue:
        return self._from_raw(-self._raw)

    def __pos__(self) -> FixedValue:
        return self

    def __abs__(self) -> FixedValue:
        return self if self._raw >= 0 else -self
