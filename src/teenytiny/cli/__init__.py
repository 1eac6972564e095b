"""
Teeny Tiny Command-Line Interface
=================================

This package provides the command-line tools:

- **ttc**: Teeny Tiny to C compiler

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["ttc"]
