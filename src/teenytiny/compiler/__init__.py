"""
Teeny Tiny Compiler
===================

A single-pass compiler from Teeny Tiny BASIC to C.

- A lexer producing tokens on demand
- A recursive descent parser that emits C while it parses (no AST)
- A two-section emitter so variable declarations land before main's body

Pipeline
--------
    Teeny source → Lexer → Parser (+ Emitter) → C source

The generated C can be built with any C compiler.

Usage
-----
>>> from teenytiny.compiler import compile_teeny
>>> source = '''
... LET n = 3
... WHILE n > 0 REPEAT
...     PRINT n
...     LET n = n - 1
... ENDWHILE
... '''
>>> c_code = compile_teeny(source)

Language Summary
----------------
- Statements: PRINT, INPUT, LET, IF/THEN/ENDIF, WHILE/REPEAT/ENDWHILE,
  LABEL, GOTO
- One numeric type (float); variables are declared by first assignment
- Comments start with '#'
"""

from teenytiny.compiler.compiler import (
    TeenyCompiler,
    CompilerOptions,
    CompilerResult,
    compile_teeny,
    compile_file,
)
from teenytiny.compiler.errors import (
    TeenyCompileError,
    LexicalError,
    InvalidCharacterError,
    UnterminatedStringError,
    IllegalStringCharacterError,
    MalformedNumberError,
    ParseError,
    UnexpectedTokenError,
    InvalidStatementError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndefinedLabelError,
    ReservedNameError,
)
from teenytiny.compiler.tokens import Token, TokenKind, KEYWORDS
from teenytiny.compiler.lexer import Lexer
from teenytiny.compiler.parser import Parser
from teenytiny.compiler.emitter import Emitter

__all__ = [
    # Main API
    "TeenyCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_teeny",
    "compile_file",
    # Errors
    "TeenyCompileError",
    "LexicalError",
    "InvalidCharacterError",
    "UnterminatedStringError",
    "IllegalStringCharacterError",
    "MalformedNumberError",
    "ParseError",
    "UnexpectedTokenError",
    "InvalidStatementError",
    "UndeclaredVariableError",
    "DuplicateLabelError",
    "UndefinedLabelError",
    "ReservedNameError",
    # Components
    "Token",
    "TokenKind",
    "KEYWORDS",
    "Lexer",
    "Parser",
    "Emitter",
]
