"""Recursive-descent parser for constant programs.

Handles:
- ``program NAME:``                          (optional header)
- ``const NAME = value within expr``         tolerance-driven inference
- ``const NAME : sfix<I, F> = value``        explicit format
- ``const NAME : preset = value``            registry preset
- Values: ``[expr, ...]`` sample lists or scalar expressions
- Expressions with standard arithmetic precedence
"""

from __future__ import annotations

from fixlib.core.errors import FixError
from fixlib.diagnostics.collector import DiagnosticCollector
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
    ExprNode,
    FloatLiteral,
    Identifier,
    IntLiteral,
    ParenExpr,
    UnaryOp,
)
from fixlib.parser.lexer import Lexer
from fixlib.parser.tokens import Token, TokenKind


class ParseError(FixError):
    """Raised during parsing on unrecoverable errors."""


class Parser:
    """Recursive-descent parser for constant programs."""

    def __init__(
        self,
        tokens: list[Token],
        diagnostics: DiagnosticCollector | None = None,
    ) -> None:
        self._tokens = tokens
        self._diag = diagnostics or DiagnosticCollector()
        self._pos = 0

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        """Return the current token without consuming it."""
        return self._tokens[self._pos]

    def _at_end(self) -> bool:
        """True once the current token is EOF."""
        return self._peek().kind == TokenKind.EOF

    def _advance(self) -> Token:
        """Consume and return the current token; EOF is never consumed."""
        tok = self._tokens[self._pos]
        if tok.kind != TokenKind.EOF:
            self._pos += 1
        return tok

    def _check(self, kind: TokenKind) -> bool:
        """True if the current token is of *kind*."""
        return self._peek().kind == kind

    def _match(self, *kinds: TokenKind) -> Token | None:
        """Consume the current token if it is one of *kinds*."""
        for kind in kinds:
            if self._check(kind):
                return self._advance()
        return None

    def _expect(self, kind: TokenKind, message: str) -> Token:
        """Consume a token of *kind* or report an error."""
        tok = self._peek()
        if tok.kind == kind:
            return self._advance()
        self._diag.error(f"{message} (got {tok.kind.name} {tok.lexeme!r})", tok.location)
        raise ParseError(message, tok.location)

    def _int_value(self, tok: Token) -> int:
        """Convert an integer literal token, reporting literals too long to convert."""
        try:
            return int(tok.lexeme)
        except ValueError:
            self._diag.error(f"Integer literal with {len(tok.lexeme)} digits is too long", tok.location)
            raise ParseError("Integer literal too long", tok.location) from None

    def _skip_newlines(self) -> None:
        """Skip any NEWLINE tokens."""
        while self._check(TokenKind.NEWLINE):
            self._advance()

    def _skip_to_newline(self) -> None:
        """Advance until NEWLINE or EOF (for error recovery)."""
        while not self._at_end() and not self._check(TokenKind.NEWLINE):
            self._advance()

    # ------------------------------------------------------------------
    # Program
    # ------------------------------------------------------------------

    def parse_program(self) -> ProgramNode:
        """Parse a complete program."""
        loc = self._peek().location
        self._skip_newlines()

        name: str | None = None
        if self._check(TokenKind.PROGRAM):
            try:
                name = self._parse_program_header()
            except ParseError:
                self._skip_to_newline()

        stmts: list[ConstDeclNode] = []
        while True:
            self._skip_newlines()
            if self._at_end():
                break
            if not self._check(TokenKind.CONST):
                tok = self._peek()
                self._diag.error(f"Expected 'const' declaration, got {tok.lexeme!r}", tok.location)
                self._skip_to_newline()
                continue
            try:
                stmts.append(self.parse_const_decl())
                self._end_of_statement()
            except ParseError:
                self._skip_to_newline()

        return ProgramNode(name=name, statements=tuple(stmts), location=loc)

    def _parse_program_header(self) -> str:
        """Parse ``program NAME:``."""
        self._advance()
        name_tok = self._expect(TokenKind.IDENT, "Expected identifier after 'program'")
        self._expect(TokenKind.COLON, "Expected ':' after program name")
        return name_tok.lexeme

    def _end_of_statement(self) -> None:
        if not (self._check(TokenKind.NEWLINE) or self._at_end()):
            tok = self._peek()
            self._diag.error(f"Unexpected {tok.lexeme!r} after declaration", tok.location)
            raise ParseError("Expected end of line", tok.location)

    # ------------------------------------------------------------------
    # const declaration
    # ------------------------------------------------------------------

    def parse_const_decl(self) -> ConstDeclNode:
        """Parse ``const NAME [: format] = value [within expr]``."""
        const_tok = self._expect(TokenKind.CONST, "Expected 'const'")
        name_tok = self._expect(TokenKind.IDENT, "Expected identifier after 'const'")

        fmt: FormatNode | None = None
        if self._match(TokenKind.COLON):
            fmt = self.parse_format()

        self._expect(TokenKind.EQUALS, "Expected '=' after const name")
        value = self._parse_value()

        tolerance: ExprNode | None = None
        if self._match(TokenKind.WITHIN):
            tolerance = self.parse_expression()

        return ConstDeclNode(
            name=name_tok.lexeme,
            value=value,
            format=fmt,
            tolerance=tolerance,
            location=const_tok.location,
        )

    def parse_format(self) -> FormatNode:
        """Parse ``sfix<I, F>``, ``ufix<I, F>`` or a preset name."""
        tok = self._peek()
        if tok.kind == TokenKind.IDENT:
            self._advance()
            return PresetFormatNode(name=tok.lexeme, location=tok.location)

        sign_tok = self._match(TokenKind.SFIX, TokenKind.UFIX)
        if sign_tok is None:
            self._diag.error(
                f"Expected a format (sfix<I, F>, ufix<I, F> or a preset name), got {tok.lexeme!r}",
                tok.location,
            )
            raise ParseError("Expected format", tok.location)
        self._expect(TokenKind.LANGLE, f"Expected '<' after '{sign_tok.lexeme}'")
        integer_bits = self._parse_width("integer")
        self._expect(TokenKind.COMMA, "Expected ',' between integer and fractional bits")
        fractional_bits = self._parse_width("fractional")
        self._expect(TokenKind.RANGLE, "Expected '>' to close format")
        return ExplicitFormatNode(
            signed=sign_tok.kind == TokenKind.SFIX,
            integer_bits=integer_bits,
            fractional_bits=fractional_bits,
            location=sign_tok.location,
        )

    def _parse_width(self, what: str) -> int:
        tok = self._expect(TokenKind.INT_LIT, f"Expected {what} bit count")
        return self._int_value(tok)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _parse_value(self) -> ExprNode:
        """Parse a sample list or a scalar expression."""
        if self._check(TokenKind.LBRACKET):
            return self._parse_array_literal()
        return self.parse_expression()

    def _parse_array_literal(self) -> ArrayLiteral:
        """Parse ``[expr, expr, ...]``; a trailing comma is allowed.

        Line breaks may appear anywhere between the brackets.
        """
        tok = self._expect(TokenKind.LBRACKET, "Expected '['")
        elements: list[ExprNode] = []
        self._skip_newlines()
        if not self._check(TokenKind.RBRACKET):
            elements.append(self.parse_expression())
            self._skip_newlines()
            while self._match(TokenKind.COMMA):
                self._skip_newlines()
                if self._check(TokenKind.RBRACKET):
                    break
                elements.append(self.parse_expression())
                self._skip_newlines()
        self._expect(TokenKind.RBRACKET, "Expected ']'")
        return ArrayLiteral(elements=tuple(elements), location=tok.location)

    # ------------------------------------------------------------------
    # Expression parsing (precedence climbing)
    # ------------------------------------------------------------------

    def parse_expression(self) -> ExprNode:
        return self._parse_additive()

    def _parse_additive(self) -> ExprNode:
        """Left-associative ``+`` and ``-``."""
        left = self._parse_multiplicative()
        while True:
            tok = self._match(TokenKind.PLUS, TokenKind.MINUS)
            if tok is None:
                break
            right = self._parse_multiplicative()
            left = BinaryOp(op=tok.lexeme, left=left, right=right, location=tok.location)
        return left

    def _parse_multiplicative(self) -> ExprNode:
        """Left-associative ``*`` and ``/``."""
        left = self._parse_unary()
        while True:
            tok = self._match(TokenKind.STAR, TokenKind.SLASH)
            if tok is None:
                break
            right = self._parse_unary()
            left = BinaryOp(op=tok.lexeme, left=left, right=right, location=tok.location)
        return left

    def _parse_unary(self) -> ExprNode:
        tok = self._match(TokenKind.MINUS)
        if tok is not None:
            return UnaryOp(op="-", operand=self._parse_unary(), location=tok.location)
        return self._parse_primary()

    def _parse_primary(self) -> ExprNode:
        tok = self._peek()

        if tok.kind == TokenKind.INT_LIT:
            self._advance()
            return IntLiteral(value=self._int_value(tok), location=tok.location)

        if tok.kind == TokenKind.FLOAT_LIT:
            self._advance()
            return FloatLiteral(value=float(tok.lexeme), location=tok.location)

        if tok.kind == TokenKind.IDENT:
            self._advance()
            return Identifier(name=tok.lexeme, location=tok.location)

        if tok.kind == TokenKind.LPAREN:
            self._advance()
            expr = self.parse_expression()
            self._expect(TokenKind.RPAREN, "Expected ')' after expression")
            return ParenExpr(expr=expr, location=tok.location)

        self._diag.error(f"Expected expression, got {tok.kind.name} {tok.lexeme!r}", tok.location)
        raise ParseError("Expected expression", tok.location)


# ------------------------------------------------------------------
# Convenience function
# ------------------------------------------------------------------


def parse(source: str, filename: str = "<string>") -> tuple[ProgramNode, DiagnosticCollector]:
    """Parse constant-program source.

    Returns:
        A ``(program_ast, diagnostics)`` tuple.
    """
    diag = DiagnosticCollector()
    tokens = Lexer(source, filename, diag).tokenize()
    program = Parser(tokens, diag).parse_program()
    return program, diag


__all__ = ["Parser", "ParseError", "parse"]
