"""Expression AST nodes and the real-valued expression evaluator."""

from __future__ import annotations

import math
from abc import ABC
from collections.abc import Mapping
from dataclasses import dataclass

from fixlib.core.errors import FixError
from fixlib.diagnostics.location import SourceLocation


class ExprNode(ABC):
    """Base type for expression nodes. All concrete subclasses are frozen dataclasses."""


@dataclass(frozen=True)
class IntLiteral(ExprNode):
    """Integer literal: 42, 0."""

    value: int
    location: SourceLocation | None = None


@dataclass(frozen=True)
class FloatLiteral(ExprNode):
    """Float literal: 1.0, 0.001, 1e-3, 2.5E+2."""

    value: float
    location: SourceLocation | None = None


@dataclass(frozen=True)
class Identifier(ExprNode):
    """Reference to a previously declared constant."""

    name: str
    location: SourceLocation | None = None


@dataclass(frozen=True)
class BinaryOp(ExprNode):
    """Binary operation: left op right. Op is one of +, -, *, /."""

    op: str
    left: ExprNode
    right: ExprNode
    location: SourceLocation | None = None


@dataclass(frozen=True)
class UnaryOp(ExprNode):
    """Unary operation: -operand."""

    op: str
    operand: ExprNode
    location: SourceLocation | None = None


@dataclass(frozen=True)
class ParenExpr(ExprNode):
    """Parenthesized expression: (expr)."""

    expr: ExprNode
    location: SourceLocation | None = None


@dataclass(frozen=True)
class ArrayLiteral(ExprNode):
    """Sample list: ``[expr, expr, ...]``. Only valid as a whole constant value."""

    elements: tuple[ExprNode, ...]
    location: SourceLocation | None = None


class ExprEvalError(FixError):
    """Raised when a value expression cannot be evaluated."""


def evaluate_expr(expr: ExprNode, env: Mapping[str, float]) -> float:
    """
    Evaluate a scalar value expression.

    Args:
        expr: The expression to evaluate.
        env: Scalar constants visible to the expression, by name.

    Returns:
        The real result.

    Raises:
        ExprEvalError: On unknown names, division by zero, nested arrays or
            a non-finite result.
    """
    if isinstance(expr, (IntLiteral, FloatLiteral)):
        try:
            return float(expr.value)
        except OverflowError:
            raise ExprEvalError("Integer literal is too large for a value expression", expr.location) from None
    elif isinstance(expr, Identifier):
        if expr.name not in env:
            raise ExprEvalError(f"Unknown scalar constant {expr.name}", expr.location)
        return env[expr.name]
    elif isinstance(expr, BinaryOp):
        left = evaluate_expr(expr.left, env)
        right = evaluate_expr(expr.right, env)
        if expr.op == "+":
            result = left + right
        elif expr.op == "-":
            result = left - right
        elif expr.op == "*":
            result = left * right
        elif expr.op == "/":
            if right == 0:
                raise ExprEvalError("Division by zero in value expression", expr.location)
            result = left / right
        else:
            raise ExprEvalError(f"Unknown operator: {expr.op!r}", expr.location)
        if not math.isfinite(result):
            raise ExprEvalError("Value expression overflows", expr.location)
        return result
    elif isinstance(expr, UnaryOp):
        operand = evaluate_expr(expr.operand, env)
        if expr.op == "-":
            return -operand
        raise ExprEvalError(f"Unknown unary operator: {expr.op!r}", expr.location)
    elif isinstance(expr, ParenExpr):
        return evaluate_expr(expr.expr, env)
    elif isinstance(expr, ArrayLiteral):
        raise ExprEvalError("Sample lists cannot appear inside an expression", expr.location)
    else:
        raise ExprEvalError(
            f"Cannot evaluate expression type: {type(expr).__name__}",
            getattr(expr, "location", None),
        )
