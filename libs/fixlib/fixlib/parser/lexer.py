"""Lexer (tokenizer) for constant-program source."""

from __future__ import annotations

from fixlib.diagnostics.collector import DiagnosticCollector
from fixlib.diagnostics.location import SourceLocation
from fixlib.parser.tokens import KEYWORDS, Token, TokenKind


class Lexer:
    """Tokenize source text into a flat token stream.

    Comments run from ``#`` to end of line. Runs of blank lines collapse into
    a single NEWLINE token. Unknown characters are reported as diagnostics
    and skipped.
    """

    _SINGLE_CHAR: dict[str, TokenKind] = {
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.STAR,
        "/": TokenKind.SLASH,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "[": TokenKind.LBRACKET,
        "]": TokenKind.RBRACKET,
        ":": TokenKind.COLON,
        ",": TokenKind.COMMA,
        "=": TokenKind.EQUALS,
        "<": TokenKind.LANGLE,
        ">": TokenKind.RANGLE,
    }

    def __init__(
        self,
        source: str,
        filename: str = "<string>",
        diagnostics: DiagnosticCollector | None = None,
    ) -> None:
        self._source = source
        self._filename = filename
        self._diag = diagnostics or DiagnosticCollector()
        self._pos = 0
        self._line = 1
        self._col = 1

    # ------------------------------------------------------------------
    # Helper methods
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        """Return the character *offset* places ahead, or "" past the end."""
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        """Consume one character, tracking line and column."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _at_end(self) -> bool:
        """True once all source characters are consumed."""
        return self._pos >= len(self._source)

    def _loc(self, line: int, col: int) -> SourceLocation:
        """Build a location in the current file."""
        return SourceLocation(file=self._filename, line=line, column=col)

    def _consume_digits(self) -> None:
        """Consume a run of decimal digits."""
        while self._peek().isdigit():
            self._advance()

    # ------------------------------------------------------------------
    # Scanning helpers
    # ------------------------------------------------------------------

    def _scan_number(self, start_line: int, start_col: int) -> Token:
        """Scan ``digits[.digits][e[+-]digits]``. First digit already consumed."""
        begin = self._pos - 1
        self._consume_digits()
        is_float = False

        if self._peek() == "." and self._peek(1).isdigit():
            is_float = True
            self._advance()
            self._consume_digits()

        end = None
        if self._peek() in ("e", "E"):
            mantissa_end = self._pos
            self._advance()
            if self._peek() in ("+", "-"):
                self._advance()
            if self._peek().isdigit():
                is_float = True
                self._consume_digits()
            else:
                self._diag.error(
                    "Expected digits after exponent in float literal",
                    self._loc(self._line, self._col),
                )
                end = mantissa_end

        # A malformed exponent is dropped from the lexeme so it still converts.
        lexeme = self._source[begin : self._pos if end is None else end]
        kind = TokenKind.FLOAT_LIT if is_float else TokenKind.INT_LIT
        return Token(kind, lexeme, self._loc(start_line, start_col))

    def _scan_identifier_or_keyword(self, start_line: int, start_col: int) -> Token:
        """Scan an identifier or keyword. First char already consumed."""
        begin = self._pos - 1
        while self._peek().isalnum() or self._peek() == "_":
            self._advance()
        lexeme = self._source[begin : self._pos]
        kind = KEYWORDS.get(lexeme, TokenKind.IDENT)
        return Token(kind, lexeme, self._loc(start_line, start_col))

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source. Returns list ending with an EOF token."""
        tokens: list[Token] = []
        last_was_newline = True  # suppress leading newlines

        while not self._at_end():
            ch = self._peek()
            line, col = self._line, self._col

            if ch in (" ", "\t", "\r"):
                self._advance()
                continue

            if ch == "#":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            if ch == "\n":
                self._advance()
                if not last_was_newline:
                    tokens.append(Token(TokenKind.NEWLINE, "\\n", self._loc(line, col)))
                    last_was_newline = True
                continue

            last_was_newline = False
            self._advance()

            if ch.isdigit():
                tokens.append(self._scan_number(line, col))
            elif ch.isalpha() or ch == "_":
                tokens.append(self._scan_identifier_or_keyword(line, col))
            elif ch in self._SINGLE_CHAR:
                tokens.append(Token(self._SINGLE_CHAR[ch], ch, self._loc(line, col)))
            else:
                self._diag.error(f"Unexpected character: {ch!r}", self._loc(line, col))

        tokens.append(Token(TokenKind.EOF, "", self._loc(self._line, self._col)))
        return tokens
