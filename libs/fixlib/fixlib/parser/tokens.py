"""Token definitions for the constant-program lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from fixlib.diagnostics.location import SourceLocation


class TokenKind(Enum):
    """All token types recognized by the lexer."""

    # === Keywords ===
    PROGRAM = auto()
    CONST = auto()
    WITHIN = auto()
    SFIX = auto()
    UFIX = auto()

    # Operators
    PLUS = auto()  # +
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /

    # Delimiters
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    COLON = auto()  # :
    COMMA = auto()  # ,
    EQUALS = auto()  # =
    LANGLE = auto()  # <
    RANGLE = auto()  # >

    # Literals
    INT_LIT = auto()
    FLOAT_LIT = auto()
    IDENT = auto()

    # Special
    NEWLINE = auto()
    EOF = auto()


KEYWORDS: dict[str, TokenKind] = {
    "program": TokenKind.PROGRAM,
    "const": TokenKind.CONST,
    "within": TokenKind.WITHIN,
    "sfix": TokenKind.SFIX,
    "ufix": TokenKind.UFIX,
}


@dataclass(frozen=True)
class Token:
    """A single token produced by the lexer."""

    kind: TokenKind
    lexeme: str
    location: SourceLocation
