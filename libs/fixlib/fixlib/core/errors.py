"""Error types raised by format inference and value binding."""

from __future__ import annotations

from fixlib.diagnostics.location import SourceLocation


class FixError(Exception):
    """Base class for all fixlib failures."""

    def __init__(self, message: str, location: SourceLocation | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.location = location


class InvalidFormatError(FixError, ValueError):
    """A format descriptor was constructed or parsed from malformed parts."""


class ConfigError(FixError):
    """A format registry file is unreadable or fails validation."""

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        super().__init__(message)
        self.problems = list(problems or [])

    def __str__(self) -> str:
        if not self.problems:
            return self.message
        return self.message + "\n" + "\n".join(f"  - {p}" for p in self.problems)


# ---------------------------------------------------------------------------
# Inference
# ---------------------------------------------------------------------------


class InferenceError(FixError):
    """Base class for failures of format inference."""


class EmptyInputError(InferenceError):
    """Inference was asked to cover an empty sample set."""


class InvalidToleranceError(InferenceError):
    """The tolerance is not a positive finite number."""


class InvalidSampleError(InferenceError):
    """A sample is NaN or infinite."""


class ToleranceUnreachableError(InferenceError):
    """No fractional width within the search bound meets the tolerance."""


# ---------------------------------------------------------------------------
# Binding
# ---------------------------------------------------------------------------


class BindingError(FixError):
    """Base class for failures of the dynamic type binder."""


class ValueOutOfRangeError(BindingError):
    """A value does not fit the integer range of the target format."""


class SynthesisFailureError(BindingError):
    """A concrete value type could not be synthesized for a descriptor."""


class FormatMismatchError(BindingError, TypeError):
    """An operation mixed values of two different formats."""
