"""AST node types for constant programs.

Expression nodes are defined in ``fixlib.parser.expressions`` and re-exported
here.  This module adds format, statement and program nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from fixlib.diagnostics.location import SourceLocation
from fixlib.parser.expressions import (
    ArrayLiteral,
    BinaryOp,
    ExprNode,
    FloatLiteral,
    Identifier,
    IntLiteral,
    ParenExpr,
    UnaryOp,
)

__all__ = [
    "ExprNode",
    "IntLiteral",
    "FloatLiteral",
    "Identifier",
    "BinaryOp",
    "UnaryOp",
    "ParenExpr",
    "ArrayLiteral",
    "ExplicitFormatNode",
    "PresetFormatNode",
    "FormatNode",
    "ConstDeclNode",
    "ProgramNode",
]


# ---------------------------------------------------------------------------
# Format annotations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExplicitFormatNode:
    """``sfix<I, F>`` or ``ufix<I, F>``."""

    signed: bool
    integer_bits: int
    fractional_bits: int
    location: SourceLocation | None = None


@dataclass(frozen=True)
class PresetFormatNode:
    """A registry preset referenced by name, e.g. ``q15``."""

    name: str
    location: SourceLocation | None = None


FormatNode = Union[ExplicitFormatNode, PresetFormatNode]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConstDeclNode:
    """``const NAME [: format] = value [within tolerance]``.

    *value* is an :class:`ArrayLiteral` of samples, a scalar expression, or an
    :class:`Identifier` naming an earlier constant.
    """

    name: str
    value: ExprNode
    format: FormatNode | None = None
    tolerance: ExprNode | None = None
    location: SourceLocation | None = None


@dataclass(frozen=True)
class ProgramNode:
    """Top-level program: optional name and the constant declarations."""

    name: str | None
    statements: tuple[ConstDeclNode, ...]
    location: SourceLocation | None = None
