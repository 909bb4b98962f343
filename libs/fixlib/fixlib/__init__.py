"""fixlib: data-driven fixed-point format inference and runtime type binding.

Layers:
    diagnostics  source locations and collected messages
    core         format descriptors, errors, format inference
    binding      per-format value types synthesized at runtime
    config       format registry (limits and named presets)
    parser       constant-program lexer, parser and AST
    graph        constant nodes built from parsed programs
    storage      read/write closures over value stores
    cli          the ``fixc`` command
"""

from fixlib.binding import DynamicTypeBinder, FixedValue, SynthesisCache, default_binder
from fixlib.core import (
    BindingError,
    ConfigError,
    EmptyInputError,
    FixError,
    FormatDescriptor,
    FormatMismatchError,
    InferenceError,
    InvalidFormatError,
    InvalidSampleError,
    InvalidToleranceError,
    SynthesisFailureError,
    ToleranceUnreachableError,
    ValueOutOfRangeError,
    infer_format,
)

__version__ = "0.1.0"


def bind(descriptor: FormatDescriptor, value: float) -> FixedValue:
    """Bind *value* to *descriptor* using the shared default binder."""
    return default_binder().bind(descriptor, value)


def unbind(typed: FixedValue) -> float:
    return default_binder().unbind(typed)


def reformat(typed: FixedValue, descriptor: FormatDescriptor) -> FixedValue:
    return default_binder().reformat(typed, descriptor)


__all__ = [
    "FormatDescriptor",
    "infer_format",
    "DynamicTypeBinder",
    "SynthesisCache",
    "FixedValue",
    "default_binder",
    "bind",
    "unbind",
    "reformat",
    "FixError",
    "InvalidFormatError",
    "ConfigError",
    "InferenceError",
    "EmptyInputError",
    "InvalidToleranceError",
    "InvalidSampleError",
    "ToleranceUnreachableError",
    "BindingError",
    "ValueOutOfRangeError",
    "SynthesisFailureError",
    "FormatMismatchError",
]
