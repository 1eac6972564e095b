#!/usr/bin/env python3
"""
Teeny Tiny Compiler Demo
========================

This script compiles every .teeny program in this directory through the
Python API and shows:
1. The statistics collected for each compilation
2. The generated C for one program
3. How a compile error is reported

Usage:
    python examples/compile_examples.py

The generated .c files are written to trash/ and can be built with any
C compiler, e.g. ``cc trash/fibonacci.c -o fibonacci``.
"""

from pathlib import Path

from teenytiny.compiler import TeenyCompiler, CompilerOptions, TeenyCompileError


def main():
    examples_dir = Path(__file__).parent
    output_dir = Path("trash")
    output_dir.mkdir(exist_ok=True)

    compiler = TeenyCompiler(CompilerOptions(print_precision=0))

    # ==========================================================================
    # 1. Compile every example
    # ==========================================================================
    for source in sorted(examples_dir.glob("*.teeny")):
        result = compiler.compile_file(source)
        target = output_dir / source.with_suffix(".c").name
        target.write_bytes(result.output_bytes)

        print(f"{source.name} -> {target}")
        print(f"  Statements: {result.statement_count}")
        print(f"  Variables:  {', '.join(result.variables) or '(none)'}")
        print(f"  Labels:     {', '.join(result.labels) or '(none)'}")

    # ==========================================================================
    # 2. Show generated code
    # ==========================================================================
    print("\nGenerated C for hello.teeny:")
    print((output_dir / "hello.c").read_text())

    # ==========================================================================
    # 3. Compile errors
    # ==========================================================================
    # Errors carry the location, the offending line and a hint
    try:
        compiler.compile_source("LET count = 1\nPRINT cuont\n", "typo.teeny")
    except TeenyCompileError as e:
        print("Compile error:")
        print(e)


if __name__ == "__main__":
    main()
