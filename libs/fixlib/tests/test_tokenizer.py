"""Tests for the constant-program lexer."""

from __future__ import annotations

from fixlib.diagnostics import DiagnosticCollector
from fixlib.parser import Lexer, TokenKind

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def lex(source: str) -> list[tuple[TokenKind, str]]:
    """Tokenize *source* and return ``(kind, lexeme)`` pairs (excluding EOF)."""
    diag = DiagnosticCollector()
    tokens = Lexer(source, "<test>", diag).tokenize()
    assert not diag.has_errors(), diag.format_all()
    return [(t.kind, t.lexeme) for t in tokens if t.kind != TokenKind.EOF]


def lex_with_diag(source: str) -> tuple[list[tuple[TokenKind, str]], DiagnosticCollector]:
    diag = DiagnosticCollector()
    tokens = Lexer(source, "<test>", diag).tokenize()
    return [(t.kind, t.lexeme) for t in tokens if t.kind != TokenKind.EOF], diag


class TestKeywords:
    def test_keywords(self) -> None:
        assert lex("program const within sfix ufix") == [
            (TokenKind.PROGRAM, "program"),
            (TokenKind.CONST, "const"),
            (TokenKind.WITHIN, "within"),
            (TokenKind.SFIX, "sfix"),
            (TokenKind.UFIX, "ufix"),
        ]

    def test_keywords_are_case_sensitive(self) -> None:
        assert lex("Const") == [(TokenKind.IDENT, "Const")]

    def test_identifiers(self) -> None:
        assert lex("q15 _w weights2") == [
            (TokenKind.IDENT, "q15"),
            (TokenKind.IDENT, "_w"),
            (TokenKind.IDENT, "weights2"),
        ]


class TestNumbers:
    def test_integer(self) -> None:
        assert lex("42") == [(TokenKind.INT_LIT, "42")]

    def test_float(self) -> None:
        assert lex("1.3125") == [(TokenKind.FLOAT_LIT, "1.3125")]

    def test_exponent_without_fraction_is_float(self) -> None:
        assert lex("1e-30") == [(TokenKind.FLOAT_LIT, "1e-30")]

    def test_exponent_with_fraction(self) -> None:
        assert lex("2.5E+2") == [(TokenKind.FLOAT_LIT, "2.5E+2")]

    def test_negative_number_is_two_tokens(self) -> None:
        assert lex("-1.0") == [(TokenKind.MINUS, "-"), (TokenKind.FLOAT_LIT, "1.0")]

    def test_missing_exponent_digits(self) -> None:
        tokens, diag = lex_with_diag("1e+")
        assert diag.has_errors()
        assert "exponent" in diag.format_all()
        assert tokens == [(TokenKind.INT_LIT, "1")]


class TestPunctuation:
    def test_format_annotation(self) -> None:
        assert lex("sfix<1, 4>") == [
            (TokenKind.SFIX, "sfix"),
            (TokenKind.LANGLE, "<"),
            (TokenKind.INT_LIT, "1"),
            (TokenKind.COMMA, ","),
            (TokenKind.INT_LIT, "4"),
            (TokenKind.RANGLE, ">"),
        ]

    def test_sample_list(self) -> None:
        kinds = [k for k, _ in lex("[0.5, -1]")]
        assert kinds == [
            TokenKind.LBRACKET,
            TokenKind.FLOAT_LIT,
            TokenKind.COMMA,
            TokenKind.MINUS,
            TokenKind.INT_LIT,
            TokenKind.RBRACKET,
        ]

    def test_operators(self) -> None:
        kinds = [k for k, _ in lex("+ - * / ( ) : =")]
        assert kinds == [
            TokenKind.PLUS,
            TokenKind.MINUS,
            TokenKind.STAR,
            TokenKind.SLASH,
            TokenKind.LPAREN,
            TokenKind.RPAREN,
            TokenKind.COLON,
            TokenKind.EQUALS,
        ]

    def test_unexpected_character(self) -> None:
        tokens, diag = lex_with_diag("const $X = 1")
        assert diag.has_errors()
        assert "'$'" in diag.format_all()
        assert (TokenKind.IDENT, "X") in tokens


class TestLayout:
    def test_comments_are_skipped(self) -> None:
        assert lex("# header\nconst # trailing") == [(TokenKind.CONST, "const")]

    def test_blank_lines_collapse(self) -> None:
        assert lex("const\n\n\nconst") == [
            (TokenKind.CONST, "const"),
            (TokenKind.NEWLINE, "\\n"),
            (TokenKind.CONST, "const"),
        ]

    def test_leading_newlines_suppressed(self) -> None:
        assert lex("\n\nconst") == [(TokenKind.CONST, "const")]

    def test_locations(self) -> None:
        tokens = Lexer("const X\n  = 1", "prog.fx").tokenize()
        eq = next(t for t in tokens if t.kind == TokenKind.EQUALS)
        assert (eq.location.file, eq.location.line, eq.location.column) == ("prog.fx", 2, 3)

    def test_ends_with_eof(self) -> None:
        tokens = Lexer("").tokenize()
        assert [t.kind for t in tokens] == [TokenKind.EOF]
