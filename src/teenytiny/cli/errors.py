"""
ttc Exit Codes and Error Reporting
==================================

ttc catches every exception at the top of its command and turns it into
a message on stderr and a process exit status. Compile errors arrive
already formatted (location, source line, caret, hint) and are printed
as they are; everything else gets a short prefix.

    0  the C file was written
    1  the Teeny source is wrong
    2  ttc was called wrongly or could not read its input
    3  a bug in ttc
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from teenytiny.errors import TeenyError
from teenytiny.compiler.errors import TeenyCompileError


class ExitCode(IntEnum):
    """Process exit status of ttc."""
    SUCCESS = 0
    BUILD_ERROR = 1
    INVALID_ARGS = 2
    INTERNAL_ERROR = 3


# Problems with the invocation or the input file rather than the program
_INPUT_ERRORS = (
    click.BadParameter,
    FileNotFoundError,
    PermissionError,
    IsADirectoryError,
    UnicodeDecodeError,
)


def exit_code_for(error: Exception) -> ExitCode:
    """Classify an exception raised while running ttc."""
    if isinstance(error, TeenyError):
        return ExitCode.BUILD_ERROR
    if isinstance(error, _INPUT_ERRORS):
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def format_error(error: Exception, error_type: str | None = None) -> str:
    """Build the one-shot stderr message for an exception."""
    if isinstance(error, TeenyCompileError):
        return str(error)
    if isinstance(error, UnicodeDecodeError):
        return f"Error: source file is not valid UTF-8: {error}"
    if isinstance(error, TeenyError):
        prefix = f"{error_type} error" if error_type else "Error"
        return f"{prefix}: {error}"
    if isinstance(error, _INPUT_ERRORS):
        return f"Error: {error}"
    return f"Internal error: {error}"


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report an exception from the ttc command and exit.

    Args:
        error: The exception caught by the command
        verbose: Also print the traceback of an internal error
        error_type: Prefix for non-compile TeenyErrors (e.g. "Compilation")

    Raises:
        SystemExit: Always, with the status from exit_code_for()
    """
    code = exit_code_for(error)
    click.echo(format_error(error, error_type), err=True)
    if verbose and code == ExitCode.INTERNAL_ERROR:
        traceback.print_exc()
    sys.exit(code)
