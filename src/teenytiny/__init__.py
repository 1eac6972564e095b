"""
Teeny Tiny - A Single-Pass BASIC-to-C Compiler
==============================================

This package compiles Teeny Tiny, a minimal BASIC dialect, into
portable C source code in a single pass.

Main Components
---------------
- **compiler**: lexer, parser and emitter (ttc)
    Converts Teeny Tiny source files (.teeny) to C source files (.c)

- **cli**: command-line tools

Quick Start
-----------
Compile a program:
    >>> from teenytiny import compile_teeny
    >>> c_code = compile_teeny('PRINT "hello, world"')

Or use the command-line tool:
    $ ttc hello.teeny -o hello.c
    $ cc hello.c -o hello

Example Program
---------------
    # Print the first ten Fibonacci numbers
    LET a = 0
    LET b = 1
    LET n = 0
    WHILE n < 10 REPEAT
        PRINT a
        LET c = a + b
        LET a = b
        LET b = c
        LET n = n + 1
    ENDWHILE
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from teenytiny.errors import TeenyError, SourceLocation
from teenytiny.compiler import (
    TeenyCompiler,
    CompilerOptions,
    CompilerResult,
    compile_teeny,
    compile_file,
    TeenyCompileError,
    LexicalError,
    ParseError,
)

__all__ = [
    # Version info
    "__version__",
    # Compiler
    "TeenyCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_teeny",
    "compile_file",
    # Exception hierarchy
    "TeenyError",
    "SourceLocation",
    "TeenyCompileError",
    "LexicalError",
    "ParseError",
]
