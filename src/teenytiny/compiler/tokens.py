"""
Teeny Tiny Token Model
======================

The closed vocabulary of token kinds and the keyword table.

Token Categories
----------------
- Structural: NEWLINE (statement terminator), EOF, UNKNOWN
- Literals: NUMBER, IDENT, STRING
- Keywords: LABEL GOTO PRINT INPUT LET IF THEN ENDIF WHILE REPEAT ENDWHILE
- Operators: = == + - * / > >= < <= !=

Keywords are not a separate lexical class: the lexer scans an
identifier-shaped lexeme and then looks its exact text up in KEYWORDS.
"""

from dataclasses import dataclass
from enum import Enum, auto

from teenytiny.errors import SourceLocation


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """Token kinds for the Teeny Tiny language."""

    # === Structural Tokens ===
    NEWLINE = auto()        # Statement terminator
    EOF = auto()            # End of input
    UNKNOWN = auto()        # Never produced by the lexer

    # === Literals ===
    NUMBER = auto()         # 42, 3.14
    IDENT = auto()          # Variable and label names
    STRING = auto()         # "text" (stored without quotes)

    # === Keywords ===
    LABEL = auto()
    GOTO = auto()
    PRINT = auto()
    INPUT = auto()
    LET = auto()
    IF = auto()
    THEN = auto()
    ENDIF = auto()
    WHILE = auto()
    REPEAT = auto()
    ENDWHILE = auto()

    # === Operators ===
    EQ = auto()             # =
    EQEQ = auto()           # ==
    PLUS = auto()           # +
    MINUS = auto()          # -
    ASTERISK = auto()       # *
    SLASH = auto()          # /
    GT = auto()             # >
    GTEQ = auto()           # >=
    LT = auto()             # <
    LTEQ = auto()           # <=
    NOTEQ = auto()          # !=

    @property
    def is_keyword(self) -> bool:
        """True for reserved words."""
        return self in _KEYWORD_KINDS

    @property
    def is_operator(self) -> bool:
        """True for arithmetic, assignment and comparison operators."""
        return self in _OPERATOR_KINDS

    @property
    def is_comparison(self) -> bool:
        """True for the operators allowed between expressions in IF/WHILE."""
        return self in COMPARISON_KINDS


# =============================================================================
# Keyword Mapping
# =============================================================================

KEYWORDS: dict[str, TokenKind] = {
    "LABEL": TokenKind.LABEL,
    "GOTO": TokenKind.GOTO,
    "PRINT": TokenKind.PRINT,
    "INPUT": TokenKind.INPUT,
    "LET": TokenKind.LET,
    "IF": TokenKind.IF,
    "THEN": TokenKind.THEN,
    "ENDIF": TokenKind.ENDIF,
    "WHILE": TokenKind.WHILE,
    "REPEAT": TokenKind.REPEAT,
    "ENDWHILE": TokenKind.ENDWHILE,
}

_KEYWORD_KINDS = frozenset(KEYWORDS.values())

COMPARISON_KINDS = frozenset({
    TokenKind.EQEQ,
    TokenKind.NOTEQ,
    TokenKind.GT,
    TokenKind.GTEQ,
    TokenKind.LT,
    TokenKind.LTEQ,
})

_OPERATOR_KINDS = COMPARISON_KINDS | {
    TokenKind.EQ,
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.ASTERISK,
    TokenKind.SLASH,
}


def lookup_keyword(text: str) -> TokenKind:
    """
    Classify an identifier-shaped lexeme.

    The match is exact and case-sensitive: "PRINT" is a keyword,
    "print" and "PRINTX" are identifiers.
    """
    return KEYWORDS.get(text, TokenKind.IDENT)


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token: its exact lexeme plus its kind.

    Attributes:
        text: The lexeme (string literals without their quotes)
        kind: The TokenKind classification
        line: Line where the lexeme starts (1-indexed)
        column: Column where the lexeme starts (1-indexed)
        filename: Source filename for diagnostics
    """
    text: str
    kind: TokenKind
    line: int = 0
    column: int = 0
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def describe(self) -> str:
        """Short human-readable form used in 'expected X, got Y' messages."""
        if self.kind in (TokenKind.NEWLINE, TokenKind.EOF):
            return self.kind.name
        return f"{self.kind.name} '{self.text}'"
