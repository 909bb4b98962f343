"""fixlib binding subpackage (Layer 2 -- depends on core)."""

from fixlib.binding.binder import DEFAULT_MAX_TOTAL_BITS, DynamicTypeBinder, default_binder, type_name
from fixlib.binding.cache import SynthesisCache
from fixlib.binding.values import FixedValue

__all__ = [
    "DynamicTypeBinder",
    "SynthesisCache",
    "FixedValue",
    "default_binder",
    "type_name",
    "DEFAULT_MAX_TOTAL_BITS",
]
