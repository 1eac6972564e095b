"""
Teeny Tiny Recursive Descent Parser
===================================

This module implements a syntax-directed translator: it recognizes the
Teeny Tiny grammar by recursive descent and emits C code as each rule
is matched. There is no abstract syntax tree and no second pass; the
only whole-program check (GOTO targets) runs after the statement loop.

Grammar (EBNF)
--------------
program     ::= {nl} {statement} EOF
statement   ::= "PRINT" (STRING | expression) nl
              | "IF" comparison "THEN" nl {statement} "ENDIF" nl
              | "WHILE" comparison "REPEAT" nl {statement} "ENDWHILE" nl
              | "LABEL" IDENT nl
              | "GOTO" IDENT nl
              | "LET" IDENT "=" expression nl
              | "INPUT" IDENT nl
comparison  ::= expression (("==" | "!=" | ">" | ">=" | "<" | "<=") expression)+
expression  ::= term {("-" | "+") term}
term        ::= unary {("/" | "*") unary}
unary       ::= ["+" | "-"] primary
primary     ::= NUMBER | IDENT
nl          ::= NEWLINE+

Semantic Checks
---------------
- A variable must be assigned (LET or INPUT) before an expression reads it.
- A label may be defined only once.
- Every GOTO target must be defined somewhere, before or after the GOTO.
- Variable and label names may not be C keywords; variables may also not
  shadow the stdio names the generated program uses (printf, EOF, ...).

Example Usage
-------------
>>> from teenytiny.compiler.lexer import Lexer
>>> from teenytiny.compiler.emitter import Emitter
>>> from teenytiny.compiler.parser import Parser
>>> emitter = Emitter()
>>> Parser(Lexer("LET x = 1\\nPRINT x"), emitter).compile_program()
>>> print(emitter.text)
#include <stdio.h>
int main(void){
float x;
x = 1;
printf("%.2f\\n", (float)(x));
return 0;
}
"""

import logging
from typing import Optional

from teenytiny.errors import SourceLocation
from teenytiny.compiler.lexer import Lexer
from teenytiny.compiler.emitter import Emitter
from teenytiny.compiler.tokens import Token, TokenKind
from teenytiny.compiler.errors import (
    UnexpectedTokenError,
    InvalidStatementError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndefinedLabelError,
    ReservedNameError,
)

logger = logging.getLogger(__name__)

# C keywords made only of letters (Teeny identifiers cannot contain digits or
# underscores). None of them can name a variable or a label.
C_KEYWORDS = frozenset({
    "auto", "break", "case", "char", "const", "continue", "default", "do",
    "double", "else", "enum", "extern", "float", "for", "goto", "if",
    "inline", "int", "long", "register", "restrict", "return", "short",
    "signed", "sizeof", "static", "struct", "switch", "typedef", "union",
    "unsigned", "void", "volatile", "while",
})

# Names the generated program relies on. A local float with one of these
# names would hide the function or break the macro expansion.
RUNTIME_NAMES = frozenset({
    "printf", "scanf",
    "EOF", "NULL", "BUFSIZ", "stdin", "stdout", "stderr",
})


class Parser:
    """
    Single-pass parser and C code generator for Teeny Tiny.

    The parser exclusively owns its lexer and holds exactly two tokens:
    the current one and one token of lookahead. Generated code goes to
    the emitter as a side effect of recognizing each rule.

    Attributes:
        declared_variables: Variable name -> location of its first assignment
        declared_labels: Label name -> location of its definition
        gotoed_labels: Label name -> location of its first GOTO
    """

    def __init__(
        self,
        lexer: Lexer,
        emitter: Emitter,
        print_precision: int = 2,
        line_comments: bool = False,
    ):
        """
        Initialize the parser and prime the current and peek tokens.

        Args:
            lexer: Token source, consumed by this parser only
            emitter: Destination for generated C code
            print_precision: Decimal places for numeric PRINT output
            line_comments: Precede each statement with a /* line N */ comment
        """
        self.lexer = lexer
        self.emitter = emitter
        self.print_precision = print_precision
        self.line_comments = line_comments

        self.declared_variables: dict[str, SourceLocation] = {}
        self.declared_labels: dict[str, SourceLocation] = {}
        self.gotoed_labels: dict[str, SourceLocation] = {}
        self.statement_count = 0

        self._source_lines: Optional[list[str]] = None

        self.current: Optional[Token] = None
        self.peek: Optional[Token] = None
        self.advance()
        self.advance()

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def check(self, kind: TokenKind) -> bool:
        """Return True if the current token is of the given kind."""
        return self.current.kind == kind

    def check_peek(self, kind: TokenKind) -> bool:
        """Return True if the lookahead token is of the given kind."""
        return self.peek.kind == kind

    def advance(self) -> None:
        """Shift the lookahead token into current and pull a fresh one."""
        self.current = self.peek
        self.peek = self.lexer.next_token()

    def expect(self, kind: TokenKind) -> Token:
        """
        Require the current token to be of the given kind and consume it.

        Returns:
            The consumed token

        Raises:
            UnexpectedTokenError: If the current token is of another kind
        """
        if not self.check(kind):
            raise self._unexpected(kind.name)
        token = self.current
        self.advance()
        return token

    # =========================================================================
    # Program
    # =========================================================================

    def compile_program(self) -> None:
        """
        Parse the whole token stream and emit the complete C program.

        Raises:
            TeenyCompileError: On the first lexical, syntactic or semantic error
        """
        self.emitter.append_header_line("#include <stdio.h>")
        self.emitter.append_header_line("int main(void){")

        # Newlines are required by the grammar, so skip leading blank lines
        while self.check(TokenKind.NEWLINE):
            self.advance()

        while not self.check(TokenKind.EOF):
            self.statement()

        self.emitter.append_body_line("return 0;")
        self.emitter.append_body_line("}")

        self._check_labels()

        logger.debug(
            f"Parsed {self.statement_count} statements, "
            f"{len(self.declared_variables)} variables, "
            f"{len(self.declared_labels)} labels"
        )

    def _check_labels(self) -> None:
        """Make sure every GOTO target was defined somewhere in the program."""
        for name, location in self.gotoed_labels.items():
            if name not in self.declared_labels:
                raise UndefinedLabelError(
                    name,
                    location,
                    self._get_source_line(location.line),
                )

    # =========================================================================
    # Statements
    # =========================================================================

    def statement(self) -> None:
        """Parse one statement, including its terminating newlines."""
        self.statement_count += 1
        if self.line_comments:
            self.emitter.append_body_line(f"/* line {self.current.line} */")

        if self.check(TokenKind.PRINT):
            self._print_statement()
        elif self.check(TokenKind.IF):
            self._block_statement("if", TokenKind.THEN, TokenKind.ENDIF)
        elif self.check(TokenKind.WHILE):
            self._block_statement("while", TokenKind.REPEAT, TokenKind.ENDWHILE)
        elif self.check(TokenKind.LABEL):
            self._label_statement()
        elif self.check(TokenKind.GOTO):
            self._goto_statement()
        elif self.check(TokenKind.LET):
            self._let_statement()
        elif self.check(TokenKind.INPUT):
            self._input_statement()
        else:
            token = self.current
            raise InvalidStatementError(
                token.text,
                token.kind.name,
                token.location,
                self._get_source_line(token.line),
            )

        self.newline()

    def newline(self) -> None:
        """nl ::= NEWLINE+"""
        self.expect(TokenKind.NEWLINE)
        while self.check(TokenKind.NEWLINE):
            self.advance()

    def _print_statement(self) -> None:
        """PRINT (STRING | expression)"""
        self.advance()

        if self.check(TokenKind.STRING):
            self.emitter.append_body_line(f'printf("{self.current.text}\\n");')
            self.advance()
        else:
            self.emitter.append_body(f'printf("%.{self.print_precision}f\\n", (float)(')
            self.expression()
            self.emitter.append_body_line("));")

    def _block_statement(self, keyword: str, opener: TokenKind, closer: TokenKind) -> None:
        """
        IF comparison THEN nl {statement} ENDIF
        WHILE comparison REPEAT nl {statement} ENDWHILE
        """
        self.advance()
        self.emitter.append_body(f"{keyword}(")
        self.comparison()
        self.expect(opener)
        self.emitter.append_body_line("){")
        self.newline()

        while not self.check(closer):
            if self.check(TokenKind.EOF):
                raise self._unexpected(closer.name)
            self.statement()

        self.expect(closer)
        self.emitter.append_body_line("}")

    def _label_statement(self) -> None:
        """LABEL IDENT"""
        self.advance()
        token = self.expect(TokenKind.IDENT)
        self._check_name(token, C_KEYWORDS)

        if token.text in self.declared_labels:
            raise DuplicateLabelError(
                token.text,
                token.location,
                self.declared_labels[token.text],
                self._get_source_line(token.line),
            )
        self.declared_labels[token.text] = token.location

        # The empty statement keeps the label valid at the end of a block
        self.emitter.append_body_line(f"{token.text}:;")

    def _goto_statement(self) -> None:
        """GOTO IDENT (target checked once the whole program is parsed)"""
        self.advance()
        token = self.expect(TokenKind.IDENT)
        self._check_name(token, C_KEYWORDS)
        self.gotoed_labels.setdefault(token.text, token.location)
        self.emitter.append_body_line(f"goto {token.text};")

    def _let_statement(self) -> None:
        """
        LET IDENT = expression

        The target becomes a declared variable only after the right-hand
        side has been parsed. A first assignment may therefore not read
        its own target: 'LET x = x' is rejected instead of compiling to C
        that reads an uninitialized float.
        """
        self.advance()
        token = self.expect(TokenKind.IDENT)
        self._check_name(token, C_KEYWORDS | RUNTIME_NAMES)
        self.emitter.append_body(f"{token.text} = ")
        self.expect(TokenKind.EQ)
        self.expression()
        self.emitter.append_body_line(";")
        self._declare_variable(token)

    def _input_statement(self) -> None:
        """INPUT IDENT (non-numeric input stores 0 and discards the word)"""
        self.advance()
        token = self.expect(TokenKind.IDENT)
        self._check_name(token, C_KEYWORDS | RUNTIME_NAMES)
        name = token.text
        self._declare_variable(token)

        self.emitter.append_body_line(f'if(0 == scanf("%f", &{name})) {{')
        self.emitter.append_body_line(f"{name} = 0;")
        self.emitter.append_body_line('scanf("%*s");')
        self.emitter.append_body_line("}")

    def _declare_variable(self, token: Token) -> None:
        """Hoist a declaration into the header the first time a name is assigned."""
        name = token.text
        if name in self.declared_variables:
            return
        self.declared_variables[name] = token.location
        self.emitter.append_header_line(f"float {name};")
        logger.debug(f"Declared variable '{name}'")

    def _check_name(self, token: Token, reserved: frozenset) -> None:
        """Reject a name the generated C cannot use as written."""
        if token.text in reserved:
            raise ReservedNameError(
                token.text,
                token.location,
                self._get_source_line(token.line),
            )

    # =========================================================================
    # Expressions
    # =========================================================================

    def comparison(self) -> None:
        """comparison ::= expression (compare_op expression)+"""
        self.expression()

        # At least one comparison operator is required
        if not self.current.kind.is_comparison:
            raise self._unexpected("comparison operator")

        while self.current.kind.is_comparison:
            self.emitter.append_body(self.current.text)
            self.advance()
            self.expression()

    def expression(self) -> None:
        """expression ::= term {("-" | "+") term}"""
        self.term()
        while self.check(TokenKind.PLUS) or self.check(TokenKind.MINUS):
            self.emitter.append_body(self.current.text)
            self.advance()
            self.term()

    def term(self) -> None:
        """term ::= unary {("/" | "*") unary}"""
        self.unary()
        while self.check(TokenKind.ASTERISK) or self.check(TokenKind.SLASH):
            self.emitter.append_body(self.current.text)
            self.advance()
            self.unary()

    def unary(self) -> None:
        """
        unary ::= ["+" | "-"] primary

        A signed operand is parenthesized so that a binary operator
        followed by a sign ('1 - -1') never emits C's '--' or '++'.
        """
        if self.check(TokenKind.PLUS) or self.check(TokenKind.MINUS):
            self.emitter.append_body(f"({self.current.text}")
            self.advance()
            self.primary()
            self.emitter.append_body(")")
        else:
            self.primary()

    def primary(self) -> None:
        """primary ::= NUMBER | IDENT"""
        token = self.current

        if self.check(TokenKind.NUMBER):
            self.emitter.append_body(token.text)
            self.advance()
        elif self.check(TokenKind.IDENT):
            if token.text not in self.declared_variables:
                raise UndeclaredVariableError(
                    token.text,
                    token.location,
                    self._get_source_line(token.line),
                    similar_names=find_similar_names(token.text, self.declared_variables),
                )
            self.emitter.append_body(token.text)
            self.advance()
        else:
            raise self._unexpected("NUMBER or IDENT")

    # =========================================================================
    # Error Helpers
    # =========================================================================

    def _unexpected(self, expected: str) -> UnexpectedTokenError:
        token = self.current
        return UnexpectedTokenError(
            expected,
            token.describe(),
            token.location,
            self._get_source_line(token.line),
        )

    def _get_source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if self._source_lines is None:
            self._source_lines = self.lexer.source.split("\n")
        if 0 < line <= len(self._source_lines):
            return self._source_lines[line - 1]
        return None


# =============================================================================
# Utility Functions
# =============================================================================

def find_similar_names(name: str, candidates) -> list[str]:
    """
    Find names that look like a typo of the given one.

    Matches case-insensitive equality, or names within edit distance 2
    whose length differs by at most one. Returns at most 3, sorted.
    """
    name_lower = name.lower()
    similar = []

    for candidate in sorted(candidates):
        candidate_lower = candidate.lower()
        if (
            candidate_lower == name_lower or
            abs(len(candidate) - len(name)) <= 1 and
            _edit_distance(name_lower, candidate_lower) <= 2
        ):
            similar.append(candidate)

    return similar[:3]


def _edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min(distances[j], distances[j + 1], new_distances[-1]))
        distances = new_distances
    return distances[-1]
