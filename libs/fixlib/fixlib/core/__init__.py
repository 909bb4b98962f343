"""fixlib core subpackage (Layer 1 -- depends only on diagnostics)."""

from fixlib.core.errors import (
    BindingError,
    ConfigError,
    EmptyInputError,
    FixError,
    FormatMismatchError,
    InferenceError,
    InvalidFormatError,
    InvalidSampleError,
    InvalidToleranceError,
    SynthesisFailureError,
    ToleranceUnreachableError,
    ValueOutOfRangeError,
)
from fixlib.core.format import FormatDescriptor
from fixlib.core.inference import (
    DEFAULT_MAX_FRACTIONAL_BITS,
    infer_format,
    integer_width,
    rounding_error,
)

__all__ = [
    "FormatDescriptor",
    "infer_format",
    "integer_width",
    "rounding_error",
    "DEFAULT_MAX_FRACTIONAL_BITS",
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
