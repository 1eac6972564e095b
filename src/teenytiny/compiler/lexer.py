"""
Teeny Tiny Lexer (Tokenizer)
============================

Converts raw source text into a lazy sequence of classified tokens.
The parser pulls one token at a time with next_token(); nothing is
tokenized ahead of demand.

Lexical Rules
-------------
- Blanks (space, tab, carriage return) separate tokens and are skipped.
- Newline is significant: it terminates statements.
- '#' starts a comment running to the end of the line.
- Numbers: digits, optionally followed by '.' and more digits (3, 3.14).
  No sign, exponent or leading-dot forms; unary sign belongs to the parser.
- Strings: "double quoted", no escapes. Control characters, '\\' and '%'
  are rejected because the text is emitted verbatim into a C format string.
- Identifiers: runs of ASCII letters. Exact matches in KEYWORDS become
  keyword tokens.
- Operators: + - * / and = == > >= < <= != ('!' alone is an error).

Example Usage
-------------
>>> from teenytiny.compiler.lexer import Lexer
>>> lexer = Lexer("LET x = 1.5")
>>> for token in lexer.tokenize():
...     print(token)
Token(LET, 'LET', 1:1)
Token(IDENT, 'x', 1:5)
Token(EQ, '=', 1:7)
Token(NUMBER, '1.5', 1:9)
Token(NEWLINE, '\\n', 1:12)
Token(EOF, '', 2:1)
"""

import logging
import string
from typing import Iterator

from teenytiny.errors import SourceLocation
from teenytiny.compiler.tokens import Token, TokenKind, lookup_keyword
from teenytiny.compiler.errors import (
    InvalidCharacterError,
    UnterminatedStringError,
    IllegalStringCharacterError,
    MalformedNumberError,
)

logger = logging.getLogger(__name__)


class Lexer:
    """
    Tokenizes Teeny Tiny source code on demand.

    One synthetic newline is appended to the source so the last
    statement is always terminated. The cursor only moves forward and
    looks at most one character ahead.

    Usage:
        lexer = Lexer(source_text, filename)
        token = lexer.next_token()

    Attributes:
        source: The source code being tokenized (with trailing newline)
        filename: Name of the source file (for error reporting)
        token_count: Number of tokens produced so far
    """

    BLANKS = " \t\r"
    LETTERS = string.ascii_letters
    DIGITS = string.digits
    COMMENT_START = "#"

    # Tokens that never need lookahead
    SINGLE_TOKENS = {
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.ASTERISK,
        "/": TokenKind.SLASH,
        "\n": TokenKind.NEWLINE,
    }

    # Operators that become a two-character token when followed by '='.
    # None marks a character that is invalid on its own.
    COMPOSITE_TOKENS = {
        "=": (TokenKind.EQ, TokenKind.EQEQ),
        ">": (TokenKind.GT, TokenKind.GTEQ),
        "<": (TokenKind.LT, TokenKind.LTEQ),
        "!": (None, TokenKind.NOTEQ),
    }

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: The Teeny Tiny source code to tokenize
            filename: Name of the source file (for error messages)
        """
        self.source = source + "\n"
        self.filename = filename
        self.token_count = 0

        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Once the input is exhausted every call returns an EOF token, so
        callers can poll without special-casing the end.

        Raises:
            LexicalError: If the input contains an invalid lexeme
        """
        self._skip_blanks()
        self._skip_comment()

        start_line = self._line
        start_column = self._column

        if self._at_end():
            return self._make_token("", TokenKind.EOF, start_line, start_column)

        char = self._current()

        if char in self.SINGLE_TOKENS:
            self._advance()
            token = self._make_token(char, self.SINGLE_TOKENS[char], start_line, start_column)
        elif char in self.COMPOSITE_TOKENS:
            token = self._scan_operator(start_line, start_column)
        elif char == '"':
            token = self._scan_string(start_line, start_column)
        elif char in self.DIGITS:
            token = self._scan_number(start_line, start_column)
        elif char in self.LETTERS:
            token = self._scan_identifier(start_line, start_column)
        else:
            raise InvalidCharacterError(
                char,
                SourceLocation(self.filename, start_line, start_column),
                self._get_current_line(),
            )

        self.token_count += 1
        return token

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including the first EOF token.

        Raises:
            LexicalError: If invalid syntax is encountered
        """
        while True:
            token = self.next_token()
            yield token
            if token.kind == TokenKind.EOF:
                logger.debug(f"Lexed {self.token_count} tokens from {self.filename}")
                return

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self._pos >= len(self.source)

    def _current(self) -> str:
        """Return the character under the cursor, or '' at end of input."""
        if self._at_end():
            return ""
        return self.source[self._pos]

    def _peek(self) -> str:
        """Return the character after the cursor, or '' past the end."""
        pos = self._pos + 1
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line and column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _make_token(
        self,
        text: str,
        kind: TokenKind,
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            text=text,
            kind=kind,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self._line, self._column)

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_blanks(self) -> None:
        """Skip blanks, but never newlines."""
        while not self._at_end() and self._current() in self.BLANKS:
            self._advance()

    def _skip_comment(self) -> None:
        """Skip a '#' comment up to, not including, the newline."""
        if self._current() == self.COMMENT_START:
            while not self._at_end() and self._current() != "\n":
                self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        """Scan one of = == > >= < <= != using one character of lookahead."""
        char = self._current()
        single_kind, double_kind = self.COMPOSITE_TOKENS[char]

        if self._peek() == "=":
            self._advance()
            self._advance()
            return self._make_token(char + "=", double_kind, start_line, start_column)

        if single_kind is None:
            raise InvalidCharacterError(
                char,
                SourceLocation(self.filename, start_line, start_column),
                self._get_current_line(),
                hint=f"did you mean '{char}='?",
            )

        self._advance()
        return self._make_token(char, single_kind, start_line, start_column)

    def _scan_string(self, start_line: int, start_column: int) -> Token:
        """Scan a double-quoted string literal; the token text excludes the quotes."""
        self._advance()  # consume opening "

        chars = []
        while True:
            char = self._current()

            if char == "" or char == "\n":
                raise UnterminatedStringError(
                    SourceLocation(self.filename, start_line, start_column),
                    self._get_current_line(),
                )

            if char == '"':
                self._advance()  # consume closing "
                return self._make_token("".join(chars), TokenKind.STRING, start_line, start_column)

            if self._is_illegal_in_string(char):
                raise IllegalStringCharacterError(
                    char,
                    self._location(),
                    self._get_current_line(),
                )

            chars.append(self._advance())

    @staticmethod
    def _is_illegal_in_string(char: str) -> bool:
        return ord(char) < 0x20 or char == "\x7f" or char in "\\%"

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """Scan digits, optionally followed by '.' and at least one more digit."""
        chars = []
        while self._current() and self._current() in self.DIGITS:
            chars.append(self._advance())

        if self._current() == ".":
            chars.append(self._advance())

            if not (self._current() and self._current() in self.DIGITS):
                raise MalformedNumberError(
                    "".join(chars),
                    SourceLocation(self.filename, start_line, start_column),
                    self._get_current_line(),
                )

            while self._current() and self._current() in self.DIGITS:
                chars.append(self._advance())

        return self._make_token("".join(chars), TokenKind.NUMBER, start_line, start_column)

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """Scan a run of letters, then classify it against the keyword table."""
        chars = []
        while self._current() and self._current() in self.LETTERS:
            chars.append(self._advance())

        text = "".join(chars)
        return self._make_token(text, lookup_keyword(text), start_line, start_column)

