"""
Teeny Tiny Compiler Main Module
===============================

This module provides the main compiler interface. It wires the three
single-use components of one compilation together:

    Source → Lexer → Parser (+ Emitter) → C source

Usage
-----
Command line:
    $ ttc hello.teeny -o hello.c

Programmatic:
    >>> from teenytiny.compiler import compile_teeny
    >>> c_code = compile_teeny('PRINT "hello, world"')

The generated C is a complete program with a main() function. Build it
with any C compiler, e.g. ``cc hello.c -o hello``.

Error Handling
--------------
Every error is fatal. The first lexical or parse error aborts the
compilation and propagates as a TeenyCompileError; no partial output
is returned or written.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from teenytiny.compiler.lexer import Lexer
from teenytiny.compiler.parser import Parser
from teenytiny.compiler.emitter import Emitter

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        print_precision: Decimal places used when PRINT outputs a number
        line_comments: Precede each translated statement with a
                       ``/* line N */`` comment pointing at the source
    """
    print_precision: int = 2
    line_comments: bool = False

    MAX_PRINT_PRECISION = 10

    def __post_init__(self):
        if not 0 <= self.print_precision <= self.MAX_PRINT_PRECISION:
            raise ValueError(
                f"print_precision must be between 0 and {self.MAX_PRINT_PRECISION}, "
                f"got {self.print_precision}"
            )

    @classmethod
    def from_env(cls) -> "CompilerOptions":
        """
        Create CompilerOptions from environment variables.

        Environment variables (all optional):
            TEENY_PRINT_PRECISION: Decimal places for numeric PRINT
            TEENY_LINE_COMMENTS: "1", "true" or "yes" to enable line comments

        Invalid values are ignored and the default is kept.
        """
        options = cls()

        if precision := os.environ.get("TEENY_PRINT_PRECISION"):
            try:
                value = int(precision)
            except ValueError:
                value = -1
            if 0 <= value <= cls.MAX_PRINT_PRECISION:
                options.print_precision = value

        if line_comments := os.environ.get("TEENY_LINE_COMMENTS"):
            options.line_comments = line_comments.strip().lower() in ("1", "true", "yes")

        return options


@dataclass
class CompilerResult:
    """
    Result of a successful compilation.

    Attributes:
        filename: Source filename
        output: Generated C source
        output_bytes: The materialized artifact, ready to write
        header: Header section (prologue and declarations)
        body: Body section (statements and epilogue)
        token_count: Number of tokens lexed
        statement_count: Number of statements translated
        variables: Declared variables in first-use order
        labels: Defined labels in source order
    """
    filename: str = ""
    output: str = ""
    output_bytes: bytes = b""
    header: str = ""
    body: str = ""
    token_count: int = 0
    statement_count: int = 0
    variables: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)


class TeenyCompiler:
    """
    Teeny Tiny to C compiler.

    Each call to compile_source() builds a fresh lexer, parser and
    emitter, so compiling the same source twice gives identical output.

    Example:
        compiler = TeenyCompiler()
        result = compiler.compile_file("hello.teeny")
        print(result.output)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile Teeny Tiny source code to C.

        Args:
            source: Teeny Tiny source code string
            filename: Source filename for error messages

        Returns:
            CompilerResult containing the C output and statistics

        Raises:
            TeenyCompileError: If compilation fails
        """
        logger.debug(f"Compiling {filename} ({len(source)} characters)")

        lexer = Lexer(source, filename)
        emitter = Emitter()
        parser = Parser(
            lexer,
            emitter,
            print_precision=self.options.print_precision,
            line_comments=self.options.line_comments,
        )
        parser.compile_program()

        result = CompilerResult(
            filename=filename,
            output=emitter.text,
            output_bytes=emitter.materialize(),
            header=emitter.header,
            body=emitter.body,
            token_count=lexer.token_count,
            statement_count=parser.statement_count,
            variables=list(parser.declared_variables),
            labels=list(parser.declared_labels),
        )

        logger.debug(
            f"Compiled {filename}: {result.token_count} tokens, "
            f"{result.statement_count} statements"
        )
        return result

    def compile_file(self, filepath: Union[str, Path]) -> CompilerResult:
        """
        Compile a Teeny Tiny source file to C.

        Raises:
            TeenyCompileError: If compilation fails
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_teeny(
    source: str,
    filename: str = "<input>",
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Compile Teeny Tiny source code to C.

    This is the primary high-level interface.

    Raises:
        TeenyCompileError: If compilation fails

    Example:
        >>> c_code = compile_teeny('LET a = 1\\nPRINT a')
    """
    compiler = TeenyCompiler(options)
    return compiler.compile_source(source, filename).output


def compile_file(
    filepath: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Compile a Teeny Tiny source file to C.

    Args:
        filepath: Path to the source file
        output_path: Optional path to write the generated C to
        options: Compiler configuration

    Returns:
        Generated C source

    Raises:
        TeenyCompileError: If compilation fails (nothing is written)
        FileNotFoundError: If source file not found
    """
    compiler = TeenyCompiler(options)
    result = compiler.compile_file(filepath)

    if output_path:
        Path(output_path).write_bytes(result.output_bytes)

    return result.output
