"""fixlib parser subpackage (Layer 2 -- depends on core, diagnostics)."""

from fixlib.parser.ast_nodes import (
    ConstDeclNode,
    ExplicitFormatNode,
    FormatNode,
    PresetFormatNode,
    ProgramNode,
)
from fixlib.parser.expressions import (
    ArrayLiteral,
    BinaryOp,
    ExprEvalError,
    ExprNode,
    FloatLiteral,
    Identifier,
    IntLiteral,
    ParenExpr,
    UnaryOp,
    evaluate_expr,
)
from fixlib.parser.lexer import Lexer
from fixlib.parser.parser import ParseError, Parser, parse
from fixlib.parser.tokens import Token, TokenKind

__all__ = [
    "TokenKind",
    "Token",
    "Lexer",
    "ExprNode",
    "IntLiteral",
    "FloatLiteral",
    "Identifier",
    "BinaryOp",
    "UnaryOp",
    "ParenExpr",
    "ArrayLiteral",
    "ExprEvalError",
    "evaluate_expr",
    "ExplicitFormatNode",
    "PresetFormatNode",
    "FormatNode",
    "ConstDeclNode",
    "ProgramNode",
    "Parser",
    "parse",
    "ParseError",
]
