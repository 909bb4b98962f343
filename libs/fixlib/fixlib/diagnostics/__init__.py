"""fixlib diagnostics subpackage (Layer 0 -- zero internal dependencies)."""

from fixlib.diagnostics.collector import Diagnostic, DiagnosticCollector, DiagnosticSeverity
from fixlib.diagnostics.location import SourceLocation

__all__ = ["SourceLocation", "DiagnosticSeverity", "Diagnostic", "DiagnosticCollector"]
