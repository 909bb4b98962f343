"""Binding of runtime values to fixed-point formats known only at runtime.

A format inferred from data cannot be written down as a class ahead of time,
so the binder creates one :class:`FixedValue` subclass per descriptor with
``type()`` the first time the descriptor is used, and memoizes it in a
:class:`SynthesisCache`. Callers receive instances of the synthesized class;
the only static guarantee they get is ``isinstance(value, FixedValue)``, and
``value.format`` tells them which format they hold.
"""

from __future__ import annotations

import logging
import math
import sys
import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING

from fixlib.binding.cache import SynthesisCache
from fixlib.binding.values import FixedValue
from fixlib.core.errors import SynthesisFailureError, ValueOutOfRangeError
from fixlib.core.format import FormatDescriptor
from fixlib.core.rounding import scale, shift_round

if TYPE_CHECKING:
    from fixlib.config import FixConfig

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOTAL_BITS = 1024


def type_name(descriptor: FormatDescriptor) -> str:
    """Class name used for the type synthesized for *descriptor*, e.g. ``SFix1_4``."""
    prefix = "SFix" if descriptor.signed else "UFix"
    return f"{prefix}{descriptor.integer_bits}_{descriptor.fractional_bits}"


class DynamicTypeBinder:
    """Produces and converts :class:`FixedValue` instances for arbitrary formats.

    Args:
        cache: Cache of synthesized types. A private cache is created when
            omitted; pass one explicitly to share synthesized types between
            binders.
        max_total_bits: Largest :attr:`FormatDescriptor.width` the binder will
            synthesize a type for.
    """

    def __init__(
        self,
        cache: SynthesisCache[type[FixedValue]] | None = None,
        *,
        max_total_bits: int = DEFAULT_MAX_TOTAL_BITS,
    ) -> None:
        self._cache: SynthesisCache[type[FixedValue]] = cache if cache is not None else SynthesisCache()
        self._max_total_bits = max_total_bits

    @classmethod
    def from_config(
        cls,
        config: FixConfig,
        cache: SynthesisCache[type[FixedValue]] | None = None,
    ) -> DynamicTypeBinder:
        return cls(cache, max_total_bits=config.max_total_bits)

    @property
    def cache(self) -> SynthesisCache[type[FixedValue]]:
        return self._cache

    @property
    def max_total_bits(self) -> int:
        return self._max_total_bits

    # ------------------------------------------------------------------
    # Synthesis
    # ------------------------------------------------------------------

    def type_for(self, descriptor: FormatDescriptor) -> type[FixedValue]:
        """Return the value class for *descriptor*, synthesizing it on first use.

        Raises:
            SynthesisFailureError: If *descriptor* is not a format descriptor,
                is wider than :attr:`max_total_bits`, has more integer bits than
                a float exponent covers, or class creation fails.
        """
        if not isinstance(descriptor, FormatDescriptor):
            raise SynthesisFailureError(f"Expected a FormatDescriptor, got {descriptor!r}")
        return self._cache.get_or_create(descriptor, self._synthesize)

    def _synthesize(self, descriptor: FormatDescriptor) -> type[FixedValue]:
        if descriptor.width > self._max_total_bits:
            raise SynthesisFailureError(
                f"{descriptor} is {descriptor.width} bits wide; the limit is {self._max_total_bits}"
            )
        if descriptor.integer_bits >= sys.float_info.max_exp:
            raise SynthesisFailureError(
                f"{descriptor} holds values beyond the float range; "
                f"integer_bits must be below {sys.float_info.max_exp}"
            )
        name = type_name(descriptor)
        namespace = {
            "__slots__": (),
            "__module__": __name__,
            "__qualname__": name,
            "__doc__": f"Fixed-point value of format {descriptor}.",
            "format": descriptor,
        }
        try:
            value_type = type(name, (FixedValue,), namespace)
        except (TypeError, ValueError) as exc:
            raise SynthesisFailureError(f"Could not synthesize a type for {descriptor}: {exc}") from exc
        logger.debug("Created %s for %s", name, descriptor)
        return value_type

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    def bind(self, descriptor: FormatDescriptor, value: float) -> FixedValue:
        """Round *value* to *descriptor* and return it as a typed value.

        Raises:
            ValueOutOfRangeError: If *value* is not finite or its rounded
                magnitude exceeds what *descriptor* can hold.
            SynthesisFailureError: See :meth:`type_for`.
        """
        value_type = self.type_for(descriptor)
        x = float(value)
        if not math.isfinite(x):
            raise ValueOutOfRangeError(f"{x!r} cannot be represented in {descriptor}")
        return value_type._from_raw(scale(x, descriptor.fractional_bits))

    def bind_all(self, descriptor: FormatDescriptor, values: Iterable[float]) -> tuple[FixedValue, ...]:
        return tuple(self.bind(descriptor, v) for v in values)

    def unbind(self, typed: FixedValue) -> float:
        """Return the real value held by *typed*."""
        if not isinstance(typed, FixedValue):
            raise TypeError(f"Expected a FixedValue, got {type(typed).__name__}")
        return float(typed)

    def reformat(self, typed: FixedValue, descriptor: FormatDescriptor) -> FixedValue:
        """Round *typed* to another format.

        Widening the fractional part is exact; narrowing rounds half up.

        Raises:
            ValueOutOfRangeError: If the result does not fit *descriptor*.
        """
        if not isinstance(typed, FixedValue):
            raise TypeError(f"Expected a FixedValue, got {type(typed).__name__}")
        value_type = self.type_for(descriptor)
        shift = typed.format.fractional_bits - descriptor.fractional_bits
        return value_type._from_raw(shift_round(typed.raw, shift))


# ---------------------------------------------------------------------------
# Process-wide default
# ---------------------------------------------------------------------------

_default_binder: DynamicTypeBinder | None = None
_default_lock = threading.Lock()


def default_binder() -> DynamicTypeBinder:
    """Return the shared binder configured from the packaged format registry."""
    global _default_binder
    if _default_binder is None:
        with _default_lock:
            if _default_binder is None:
                from fixlib.config import load_config

                _default_binder = DynamicTypeBinder.from_config(load_config())
    return _default_binder


def _restore(key: str, raw: int) -> FixedValue:
    return default_binder().type_for(FormatDescriptor.parse(key))._from_raw(raw)
