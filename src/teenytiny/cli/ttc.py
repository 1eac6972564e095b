"""
ttc - Teeny Tiny Compiler Command-Line Interface
================================================

Command-line front end for the Teeny Tiny compiler. It reads a source
file, compiles it to C and writes the result next to the input (or to
the path given with -o).

Usage Examples
--------------
Basic compilation:
    $ ttc hello.teeny

With output file:
    $ ttc hello.teeny -o hello.c

Show the token stream:
    $ ttc --tokens hello.teeny

Full pipeline to a native executable:
    $ ttc hello.teeny && cc hello.c -o hello
"""

import logging
from pathlib import Path
from typing import Optional

import click

from teenytiny import __version__
from teenytiny.compiler import TeenyCompiler, CompilerOptions, Lexer
from teenytiny.cli.errors import handle_cli_exception

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def dump_tokens(source: str, filename: str) -> None:
    """Print one line per token: position, kind and lexeme."""
    for token in Lexer(source, filename).tokenize():
        click.echo(f"{token.line}:{token.column}\t{token.kind.name}\t{token.text!r}")


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output C file (default: input.c)",
)
@click.option(
    "-p", "--precision",
    type=click.IntRange(0, CompilerOptions.MAX_PRINT_PRECISION),
    default=None,
    help="Decimal places for numeric PRINT (default: 2, or $TEENY_PRINT_PRECISION)",
)
@click.option(
    "--line-comments",
    is_flag=True,
    help="Annotate the generated C with /* line N */ source references",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="ttc")
def main(
    input_file: Path,
    output: Optional[Path],
    precision: Optional[int],
    line_comments: bool,
    tokens: bool,
    verbose: bool,
) -> None:
    """
    Compile Teeny Tiny source code to C.

    INPUT_FILE is the Teeny Tiny source file (.teeny) to compile.

    \b
    Examples:
        ttc hello.teeny                 # Outputs hello.c
        ttc hello.teeny -o out.c        # Specify output file
        ttc -p 4 hello.teeny            # Print numbers with 4 decimals
        ttc --tokens hello.teeny        # Dump tokens

    \b
    Language:
        PRINT "text" | PRINT expr       INPUT var
        LET var = expr                  LABEL name / GOTO name
        IF a < b THEN ... ENDIF         WHILE a < b REPEAT ... ENDWHILE
    """
    setup_logging(verbose)

    if output is None:
        output = input_file.with_suffix(".c")

    options = CompilerOptions.from_env()
    if precision is not None:
        options.print_precision = precision
    if line_comments:
        options.line_comments = True

    try:
        source = input_file.read_text(encoding="utf-8")

        if tokens:
            dump_tokens(source, str(input_file))
            return

        logger.debug(f"Compiling {input_file} -> {output}")
        compiler = TeenyCompiler(options)
        result = compiler.compile_source(source, str(input_file))

        output.write_bytes(result.output_bytes)

        if verbose:
            click.echo(f"Wrote {len(result.output_bytes)} bytes to {output}")
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Translated: {result.statement_count} statements")
            click.echo(f"Variables: {', '.join(result.variables) or '(none)'}")
            click.echo(f"Labels: {', '.join(result.labels) or '(none)'}")

        click.echo(f"Compiled {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Compilation")


if __name__ == "__main__":
    main()
