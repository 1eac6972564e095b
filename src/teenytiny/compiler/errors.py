"""
Teeny Tiny Compiler Error Hierarchy
===================================

Every error the compiler detects is fatal: it aborts the whole
compilation and no output artifact is produced.

Exception Hierarchy
-------------------
TeenyCompileError (base for all compiler errors)
├── LexicalError - raised by the lexer
│   ├── InvalidCharacterError - character that starts no token
│   ├── UnterminatedStringError - missing closing quote
│   ├── IllegalStringCharacterError - forbidden character inside a string
│   └── MalformedNumberError - decimal point without digits
└── ParseError - raised by the parser
    ├── UnexpectedTokenError - expected X, got Y
    ├── InvalidStatementError - token cannot start a statement
    ├── UndeclaredVariableError - variable read before assignment
    ├── DuplicateLabelError - LABEL defined twice
    ├── UndefinedLabelError - GOTO to a label never defined
    └── ReservedNameError - name that clashes with the generated C

Example:
    loop.teeny:4:11: error: variable 'cuont' referenced before assignment
        PRINT 2 * cuont
                  ^
    hint: did you mean 'count'?
"""

from typing import List, Optional

from teenytiny.errors import TeenyError, SourceLocation


# =============================================================================
# Base Compiler Exception
# =============================================================================

class TeenyCompileError(TeenyError):
    """
    Base exception for all compiler errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            fib.teeny:3:7: error: expected IDENT, got NUMBER
                LABEL 12
                      ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(TeenyCompileError):
    """
    Error while converting characters into tokens.

    Examples:
        - Unknown character such as '@'
        - A lone '!' not followed by '='
        - Malformed numeric or string literal
    """
    pass


class InvalidCharacterError(LexicalError):
    """A character that cannot start any token."""

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"unknown token '{char}' (0x{ord(char):02X})",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnterminatedStringError(LexicalError):
    """
    String literal not closed before the end of the line.

    Example:
        PRINT "hello
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated string literal",
            location=location,
            hint="add closing '\"' to complete the string",
            source_line=source_line,
        )


class IllegalStringCharacterError(LexicalError):
    """
    Character that may not appear inside a string literal.

    String text is copied unescaped into a C printf format, so control
    characters, backslashes and percent signs are rejected.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"illegal character {char!r} in string literal",
            location=location,
            hint="strings cannot contain control characters, '\\' or '%'",
            source_line=source_line,
        )


class MalformedNumberError(LexicalError):
    """Decimal point not followed by at least one digit (e.g. '3.')."""

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"malformed number '{text}'",
            location=location,
            hint="a decimal point must be followed by at least one digit",
            source_line=source_line,
        )


# =============================================================================
# Parse Errors (Syntactic and Semantic)
# =============================================================================

class ParseError(TeenyCompileError):
    """
    Error detected by the parser.

    Covers both grammar violations and the semantic checks performed
    during the single pass (variables, labels).
    """
    pass


class UnexpectedTokenError(ParseError):
    """The current token does not match what the grammar requires."""

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}, got {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class InvalidStatementError(ParseError):
    """The current token cannot start a statement."""

    def __init__(
        self,
        text: str,
        kind: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        self.kind = kind
        super().__init__(
            f"invalid statement at '{text}' ({kind})",
            location=location,
            hint="statements start with PRINT, IF, WHILE, LABEL, GOTO, LET or INPUT",
            source_line=source_line,
        )


class UndeclaredVariableError(ParseError):
    """
    Variable read before any LET or INPUT assigned it.

    Similar variable names already declared are offered as a hint,
    which catches most typos.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_names: Optional[List[str]] = None,
    ):
        self.name = name
        self.similar_names = similar_names or []

        hint = None
        if self.similar_names:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_names[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"variable '{name}' referenced before assignment",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class DuplicateLabelError(ParseError):
    """LABEL defined more than once."""

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{name}' was first defined at {original_location}"

        super().__init__(
            f"label already exists: '{name}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UndefinedLabelError(ParseError):
    """
    GOTO target that no LABEL statement defines.

    Only detectable once the whole program has been parsed, since
    forward references are legal.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        super().__init__(
            f"label '{name}' referenced but not declared",
            location=location,
            hint=f"add 'LABEL {name}' somewhere in the program",
            source_line=source_line,
        )


class ReservedNameError(ParseError):
    """
    Variable or label name that cannot be used in the generated C.

    Examples:
        LET int = 1       (C keyword)
        INPUT printf      (would hide the stdio function in main)
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        super().__init__(
            f"'{name}' is reserved in the generated C code",
            location=location,
            hint="choose another name",
            source_line=source_line,
        )
