# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the Teeny Tiny lexer/tokenizer.
#
# Test coverage includes:
#   - Keywords, identifiers, numbers and string literals
#   - Single and composite operators
#   - Comments, blanks and significant newlines
#   - End-of-input behaviour and pull-based scanning
#   - Error conditions
# =============================================================================

import pytest
from teenytiny.compiler.lexer import Lexer
from teenytiny.compiler.tokens import Token, TokenKind, KEYWORDS, lookup_keyword
from teenytiny.compiler.errors import (
    LexicalError,
    InvalidCharacterError,
    UnterminatedStringError,
    IllegalStringCharacterError,
    MalformedNumberError,
)


# =============================================================================
# Helper Functions
# =============================================================================

def tokenize(source: str) -> list[Token]:
    """Tokenize and drop the structural tokens (NEWLINE, EOF)."""
    tokens = list(Lexer(source, "<test>").tokenize())
    return [t for t in tokens if t.kind not in (TokenKind.NEWLINE, TokenKind.EOF)]


def kinds(source: str) -> list[TokenKind]:
    """Return every token kind, including NEWLINE and EOF."""
    return [t.kind for t in Lexer(source, "<test>").tokenize()]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """The synthetic trailing newline is the only token before EOF."""
        assert kinds("") == [TokenKind.NEWLINE, TokenKind.EOF]

    def test_blanks_only(self):
        """Spaces, tabs and carriage returns produce no tokens."""
        assert kinds("  \t \r") == [TokenKind.NEWLINE, TokenKind.EOF]

    def test_newlines_are_tokens(self):
        """Every newline is significant."""
        assert kinds("\n\n") == [
            TokenKind.NEWLINE,
            TokenKind.NEWLINE,
            TokenKind.NEWLINE,
            TokenKind.EOF,
        ]

    def test_crlf_line_endings(self):
        """Carriage returns before newlines are skipped."""
        assert kinds("PRINT 1\r\n") == [
            TokenKind.PRINT,
            TokenKind.NUMBER,
            TokenKind.NEWLINE,
            TokenKind.NEWLINE,
            TokenKind.EOF,
        ]

    def test_statement(self):
        """A complete LET statement."""
        tokens = tokenize("LET foo = 12")
        assert [(t.kind, t.text) for t in tokens] == [
            (TokenKind.LET, "LET"),
            (TokenKind.IDENT, "foo"),
            (TokenKind.EQ, "="),
            (TokenKind.NUMBER, "12"),
        ]


# =============================================================================
# Keyword and Identifier Tests
# =============================================================================

class TestKeywordsAndIdentifiers:
    """Keywords are identifiers that exactly match a reserved word."""

    def test_all_keywords(self):
        """Every entry in the keyword table is recognized."""
        for text, expected_kind in KEYWORDS.items():
            tokens = tokenize(text)
            assert len(tokens) == 1
            assert tokens[0].kind == expected_kind
            assert tokens[0].text == text

    def test_keywords_are_case_sensitive(self):
        """Lowercase keywords are plain identifiers."""
        tokens = tokenize("print")
        assert tokens[0].kind == TokenKind.IDENT

    def test_keyword_prefix_is_identifier(self):
        """A longer word starting with a keyword is an identifier."""
        assert tokenize("PRINTER")[0].kind == TokenKind.IDENT
        assert tokenize("LETTER")[0].kind == TokenKind.IDENT

    def test_identifier_is_letters_only(self):
        """Digits end an identifier instead of continuing it."""
        tokens = tokenize("abc1")
        assert [(t.kind, t.text) for t in tokens] == [
            (TokenKind.IDENT, "abc"),
            (TokenKind.NUMBER, "1"),
        ]

    def test_underscore_is_invalid(self):
        """Underscores are not part of identifiers."""
        with pytest.raises(InvalidCharacterError):
            tokenize("my_var")

    def test_lookup_keyword(self):
        """lookup_keyword falls back to IDENT."""
        assert lookup_keyword("WHILE") == TokenKind.WHILE
        assert lookup_keyword("while") == TokenKind.IDENT

    def test_kind_groups(self):
        """Kinds report their category."""
        assert TokenKind.ENDWHILE.is_keyword
        assert not TokenKind.IDENT.is_keyword
        assert TokenKind.PLUS.is_operator
        assert TokenKind.GTEQ.is_comparison
        assert not TokenKind.EQ.is_comparison


# =============================================================================
# Number Tests
# =============================================================================

class TestNumbers:
    """Numeric literals keep their exact lexeme."""

    def test_integer(self):
        tokens = tokenize("42")
        assert tokens[0].kind == TokenKind.NUMBER
        assert tokens[0].text == "42"

    def test_decimal(self):
        tokens = tokenize("3.14159")
        assert tokens[0].kind == TokenKind.NUMBER
        assert tokens[0].text == "3.14159"

    def test_leading_zeros_preserved(self):
        assert tokenize("007.50")[0].text == "007.50"

    def test_decimal_point_needs_digit(self):
        """'3.' is malformed."""
        with pytest.raises(MalformedNumberError):
            tokenize("3.")

    def test_decimal_point_followed_by_letter(self):
        with pytest.raises(MalformedNumberError):
            tokenize("1.x")

    def test_leading_dot_rejected(self):
        """'.5' is not a number; the dot is an unknown character."""
        with pytest.raises(InvalidCharacterError):
            tokenize(".5")

    def test_sign_is_separate_token(self):
        """A minus sign is never part of the literal."""
        tokens = tokenize("-5")
        assert [t.kind for t in tokens] == [TokenKind.MINUS, TokenKind.NUMBER]
        assert tokens[1].text == "5"


# =============================================================================
# String Tests
# =============================================================================

class TestStrings:
    """String literals are copied verbatim, without quotes."""

    def test_simple_string(self):
        tokens = tokenize('"hello, world!"')
        assert tokens[0].kind == TokenKind.STRING
        assert tokens[0].text == "hello, world!"

    def test_empty_string(self):
        tokens = tokenize('""')
        assert tokens[0].kind == TokenKind.STRING
        assert tokens[0].text == ""

    def test_keywords_inside_string(self):
        tokens = tokenize('"PRINT LET # not a comment"')
        assert len(tokens) == 1
        assert tokens[0].text == "PRINT LET # not a comment"

    def test_tab_in_string_rejected(self):
        with pytest.raises(IllegalStringCharacterError):
            tokenize('"a\tb"')

    def test_percent_in_string_rejected(self):
        with pytest.raises(IllegalStringCharacterError):
            tokenize('"100%"')

    def test_backslash_in_string_rejected(self):
        with pytest.raises(IllegalStringCharacterError):
            tokenize('"a\\nb"')

    def test_control_character_rejected(self):
        with pytest.raises(IllegalStringCharacterError):
            tokenize('"bell\x07"')

    def test_carriage_return_rejected(self):
        with pytest.raises(IllegalStringCharacterError):
            tokenize('"line\r"')

    def test_unterminated_string(self):
        with pytest.raises(UnterminatedStringError):
            tokenize('PRINT "hello')

    def test_newline_ends_unterminated_string(self):
        with pytest.raises(UnterminatedStringError):
            tokenize('PRINT "hello\nworld"')

    def test_illegal_character_location(self):
        """The error points at the offending character."""
        with pytest.raises(IllegalStringCharacterError) as exc_info:
            tokenize('PRINT "50%"')
        assert exc_info.value.location.line == 1
        assert exc_info.value.location.column == 10


# =============================================================================
# Operator Tests
# =============================================================================

class TestOperators:
    """Single and composite operators."""

    def test_arithmetic_operators(self):
        tokens = tokenize("+ - * /")
        assert [t.kind for t in tokens] == [
            TokenKind.PLUS,
            TokenKind.MINUS,
            TokenKind.ASTERISK,
            TokenKind.SLASH,
        ]

    def test_comparison_operators(self):
        tokens = tokenize("== != < <= > >=")
        assert [(t.kind, t.text) for t in tokens] == [
            (TokenKind.EQEQ, "=="),
            (TokenKind.NOTEQ, "!="),
            (TokenKind.LT, "<"),
            (TokenKind.LTEQ, "<="),
            (TokenKind.GT, ">"),
            (TokenKind.GTEQ, ">="),
        ]

    def test_composite_operator_is_one_token(self):
        """'>=' is one two-character token, not '>' followed by '='."""
        tokens = tokenize(">=")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.GTEQ
        assert tokens[0].text == ">="

    def test_separated_composite_is_two_tokens(self):
        tokens = tokenize("> =")
        assert [t.kind for t in tokens] == [TokenKind.GT, TokenKind.EQ]

    def test_operators_without_spaces(self):
        tokens = tokenize("a<=b")
        assert [t.kind for t in tokens] == [TokenKind.IDENT, TokenKind.LTEQ, TokenKind.IDENT]

    def test_lone_bang_rejected(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("!")
        assert exc_info.value.char == "!"
        assert "!=" in exc_info.value.hint

    def test_bang_followed_by_other_rejected(self):
        with pytest.raises(InvalidCharacterError):
            tokenize("a !< b")


# =============================================================================
# Comment Tests
# =============================================================================

class TestComments:
    """'#' comments run to the end of the line."""

    def test_comment_line(self):
        assert kinds("# just a comment") == [TokenKind.NEWLINE, TokenKind.EOF]

    def test_comment_keeps_newline(self):
        assert kinds("# comment\nPRINT") == [
            TokenKind.NEWLINE,
            TokenKind.PRINT,
            TokenKind.NEWLINE,
            TokenKind.EOF,
        ]

    def test_trailing_comment(self):
        tokens = tokenize("LET x = 1 # set x")
        assert [t.kind for t in tokens] == [
            TokenKind.LET,
            TokenKind.IDENT,
            TokenKind.EQ,
            TokenKind.NUMBER,
        ]

    def test_comment_hides_invalid_characters(self):
        assert tokenize("# @ ! % _ $") == []


# =============================================================================
# Stream Behaviour Tests
# =============================================================================

class TestStream:
    """next_token() is pull-based and keeps returning EOF at the end."""

    def test_eof_repeats(self):
        lexer = Lexer("")
        assert lexer.next_token().kind == TokenKind.NEWLINE
        for _ in range(3):
            assert lexer.next_token().kind == TokenKind.EOF

    def test_errors_raised_on_demand(self):
        """Tokens before an invalid character are delivered first."""
        lexer = Lexer("PRINT 1\n@")
        assert lexer.next_token().kind == TokenKind.PRINT
        assert lexer.next_token().kind == TokenKind.NUMBER
        assert lexer.next_token().kind == TokenKind.NEWLINE
        with pytest.raises(InvalidCharacterError):
            lexer.next_token()

    def test_token_count(self):
        lexer = Lexer("LET a = 1")
        list(lexer.tokenize())
        # LET, a, =, 1, NEWLINE (EOF is not counted)
        assert lexer.token_count == 5

    def test_positions(self):
        tokens = list(Lexer("PRINT 1\n  LET b = 2", "prog.teeny").tokenize())
        let_token = tokens[3]
        assert let_token.kind == TokenKind.LET
        assert (let_token.line, let_token.column) == (2, 3)
        assert str(let_token.location) == "prog.teeny:2:3"


# =============================================================================
# Error Reporting Tests
# =============================================================================

class TestErrors:
    """Lexical errors carry location and source context."""

    def test_unknown_character(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("LET x = 1 @ 2")
        error = exc_info.value
        assert error.char == "@"
        assert error.location.column == 11
        assert error.source_line == "LET x = 1 @ 2"
        assert "unknown token '@'" in str(error)

    def test_lexical_errors_share_base(self):
        for source in ("@", "!", "1.", '"a%"', '"open'):
            with pytest.raises(LexicalError):
                tokenize(source)

    def test_formatted_message_has_caret(self):
        with pytest.raises(LexicalError) as exc_info:
            list(Lexer("PRINT $", "bad.teeny").tokenize())
        lines = str(exc_info.value).splitlines()
        assert lines[0].startswith("bad.teeny:1:7: error:")
        assert lines[1] == "    PRINT $"
        assert lines[2] == " " * 10 + "^"
