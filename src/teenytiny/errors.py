"""
Teeny Tiny Error Base
=====================

This module defines the root of the exception hierarchy for the
Teeny Tiny toolchain. All exceptions inherit from TeenyError, allowing
callers to catch every toolchain error with a single except clause.

Exception Hierarchy
-------------------
TeenyError (base)
└── TeenyCompileError (see teenytiny.compiler.errors)
    ├── LexicalError - raised by the lexer
    └── ParseError - raised by the parser

Each compiler exception captures source location information (filename,
line, column) when applicable, so messages can point at the offending
text:

    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class TeenyError(Exception):
    """
    Base exception for all Teeny Tiny errors.

        try:
            compile_teeny(source)
        except TeenyError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
