"""Diagnostics: severity, single messages, and the collector that gathers them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fixlib.diagnostics.location import SourceLocation


class DiagnosticSeverity(Enum):
    """Severity level of a diagnostic message."""

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Diagnostic:
    """A single diagnostic message."""

    severity: DiagnosticSeverity
    message: str
    location: SourceLocation | None = None

    def __str__(self) -> str:
        loc = f"{self.location}: " if self.location else ""
        return f"{loc}{self.severity}: {self.message}"


class DiagnosticCollector:
    """Accumulates diagnostics while a program is lexed, parsed and built."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def error(self, message: str, location: SourceLocation | None = None) -> None:
        self._diagnostics.append(Diagnostic(DiagnosticSeverity.ERROR, message, location))

    def warning(self, message: str, location: SourceLocation | None = None) -> None:
        self._diagnostics.append(Diagnostic(DiagnosticSeverity.WARNING, message, location))

    def note(self, message: str, location: SourceLocation | None = None) -> None:
        self._diagnostics.append(Diagnostic(DiagnosticSeverity.NOTE, message, location))

    def report(self, exc: Exception, location: SourceLocation | None = None) -> None:
        """Record *exc* as an error, preferring the location it carries."""
        self.error(str(exc), getattr(exc, "location", None) or location)

    def has_errors(self) -> bool:
        """Return True if any error diagnostics have been recorded."""
        return any(d.severity == DiagnosticSeverity.ERROR for d in self._diagnostics)

    def errors(self) -> list[Diagnostic]:
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.ERROR]

    def get_all(self) -> list[Diagnostic]:
        """Return a copy of all collected diagnostics."""
        return list(self._diagnostics)

    def format_all(self) -> str:
        """Format all diagnostics as a newline-separated string."""
        return "\n".join(str(d) for d in self._diagnostics)
