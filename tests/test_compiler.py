"""
Compiler Integration Tests
==========================

End-to-end tests for the TeenyCompiler pipeline and its convenience
functions, plus CompilerOptions configuration.
"""

import pytest

from teenytiny import compile_teeny, TeenyError
from teenytiny.compiler import (
    TeenyCompiler,
    CompilerOptions,
    CompilerResult,
    compile_file,
    TeenyCompileError,
    UndeclaredVariableError,
    UndefinedLabelError,
    InvalidCharacterError,
    ReservedNameError,
)


FIBONACCI = """\
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

FIBONACCI_C = """\
#include <stdio.h>
int main(void){
float a;
float b;
float n;
float c;
a = 0;
b = 1;
n = 0;
while(n<10){
printf("%.2f\\n", (float)(a));
c = a+b;
a = b;
b = c;
n = n+1;
}
return 0;
}
"""


# =============================================================================
# Whole Program Tests
# =============================================================================

class TestCompileTeeny:
    """Tests for compile_teeny()."""

    def test_hello_world(self):
        assert compile_teeny('PRINT "hello, world"') == (
            "#include <stdio.h>\n"
            "int main(void){\n"
            'printf("hello, world\\n");\n'
            "return 0;\n"
            "}\n"
        )

    def test_fibonacci(self):
        assert compile_teeny(FIBONACCI) == FIBONACCI_C

    def test_countdown_with_goto(self):
        source = (
            "INPUT n\n"
            "LABEL loop\n"
            "IF n > 0 THEN\n"
            "    PRINT n\n"
            "    LET n = n - 1\n"
            "    GOTO loop\n"
            "ENDIF\n"
            'PRINT "liftoff"\n'
        )
        output = compile_teeny(source)
        assert output.count("float n;") == 1
        assert "loop:;\nif(n>0){\n" in output
        assert "goto loop;\n}\n" in output
        assert output.endswith('printf("liftoff\\n");\nreturn 0;\n}\n')

    def test_double_negation_is_valid_c(self):
        output = compile_teeny("LET b = 2\nLET a = b - -b\nPRINT 1 + +a\n")
        assert "a = b-(-b);" in output
        assert "(float)(1+(+a))" in output
        assert "--" not in output
        assert "++" not in output

    def test_reserved_variable_name(self):
        with pytest.raises(ReservedNameError):
            compile_teeny("INPUT n\nLET printf = n\n")

    def test_crlf_line_endings(self):
        assert compile_teeny("LET a = 1\r\nPRINT a\r\n") == compile_teeny("LET a = 1\nPRINT a\n")

    def test_deterministic(self):
        assert compile_teeny(FIBONACCI) == compile_teeny(FIBONACCI)

    def test_errors_derive_from_package_base(self):
        with pytest.raises(TeenyError):
            compile_teeny("PRINT @")

    def test_filename_in_error(self):
        with pytest.raises(UndeclaredVariableError) as exc_info:
            compile_teeny("PRINT x", filename="prog.teeny")
        assert str(exc_info.value).startswith("prog.teeny:1:7: error:")

    def test_options_applied(self):
        options = CompilerOptions(print_precision=4, line_comments=True)
        output = compile_teeny("PRINT 1", options=options)
        assert '/* line 1 */\nprintf("%.4f\\n", (float)(1));' in output


class TestTeenyCompiler:
    """Tests for the TeenyCompiler class."""

    def test_result_fields(self):
        result = TeenyCompiler().compile_source(
            "LET b = 1\nINPUT a\nLABEL end\nGOTO end\n", "stats.teeny"
        )
        assert isinstance(result, CompilerResult)
        assert result.filename == "stats.teeny"
        assert result.output == result.header + result.body
        assert result.variables == ["b", "a"]
        assert result.labels == ["end"]
        assert result.statement_count == 4
        assert result.token_count > 0

    def test_output_bytes_materialized_from_emitter(self):
        result = TeenyCompiler().compile_source('PRINT "naïve"')
        assert result.output_bytes == result.output.encode("utf-8")
        assert result.output_bytes.startswith(b"#include <stdio.h>\n")

    def test_compile_file_writes_output_bytes(self, tmp_path):
        source = tmp_path / "accent.teeny"
        source.write_text('PRINT "café"\n', encoding="utf-8")
        out = tmp_path / "accent.c"
        compile_file(source, out)
        assert out.read_bytes() == TeenyCompiler().compile_file(source).output_bytes

    def test_reusable(self):
        """A compiler instance carries no state between compilations."""
        compiler = TeenyCompiler()
        compiler.compile_source("LET a = 1\nLABEL x\n")
        result = compiler.compile_source("LABEL x\nPRINT 2\n")
        assert result.variables == []
        assert result.labels == ["x"]

    def test_error_leaves_no_result(self):
        with pytest.raises(UndefinedLabelError):
            TeenyCompiler().compile_source("GOTO away\n")

    def test_compile_file(self, tmp_path):
        source = tmp_path / "fib.teeny"
        source.write_text(FIBONACCI, encoding="utf-8")
        result = TeenyCompiler().compile_file(source)
        assert result.output == FIBONACCI_C
        assert result.filename == str(source)

    def test_compile_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TeenyCompiler().compile_file(tmp_path / "missing.teeny")


class TestCompileFile:
    """Tests for the compile_file() convenience function."""

    def test_writes_output(self, tmp_path):
        source = tmp_path / "fib.teeny"
        source.write_text(FIBONACCI, encoding="utf-8")
        out = tmp_path / "fib.c"

        output = compile_file(source, out)

        assert output == FIBONACCI_C
        assert out.read_text(encoding="utf-8") == FIBONACCI_C

    def test_no_output_path(self, tmp_path):
        source = tmp_path / "one.teeny"
        source.write_text("PRINT 1\n", encoding="utf-8")
        assert "printf" in compile_file(source)
        assert list(tmp_path.iterdir()) == [source]

    def test_nothing_written_on_error(self, tmp_path):
        source = tmp_path / "bad.teeny"
        source.write_text("PRINT 1\nPRINT $\n", encoding="utf-8")
        out = tmp_path / "bad.c"

        with pytest.raises(InvalidCharacterError) as exc_info:
            compile_file(source, out)

        assert exc_info.value.location.line == 2
        assert not out.exists()

    def test_error_is_compile_error(self, tmp_path):
        source = tmp_path / "bad.teeny"
        source.write_text("LET = 1\n", encoding="utf-8")
        with pytest.raises(TeenyCompileError):
            compile_file(source)


# =============================================================================
# Options Tests
# =============================================================================

class TestCompilerOptions:
    """Tests for CompilerOptions."""

    def test_defaults(self):
        options = CompilerOptions()
        assert options.print_precision == 2
        assert options.line_comments is False

    def test_precision_range(self):
        CompilerOptions(print_precision=0)
        CompilerOptions(print_precision=CompilerOptions.MAX_PRINT_PRECISION)
        with pytest.raises(ValueError):
            CompilerOptions(print_precision=-1)
        with pytest.raises(ValueError):
            CompilerOptions(print_precision=CompilerOptions.MAX_PRINT_PRECISION + 1)

    def test_from_env_defaults(self, monkeypatch):
        monkeypatch.delenv("TEENY_PRINT_PRECISION", raising=False)
        monkeypatch.delenv("TEENY_LINE_COMMENTS", raising=False)
        assert CompilerOptions.from_env() == CompilerOptions()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TEENY_PRINT_PRECISION", "5")
        monkeypatch.setenv("TEENY_LINE_COMMENTS", "yes")
        options = CompilerOptions.from_env()
        assert options.print_precision == 5
        assert options.line_comments is True

    def test_from_env_ignores_invalid_precision(self, monkeypatch):
        for value in ("many", "-3", "99"):
            monkeypatch.setenv("TEENY_PRINT_PRECISION", value)
            assert CompilerOptions.from_env().print_precision == 2

    def test_from_env_line_comments_off(self, monkeypatch):
        monkeypatch.setenv("TEENY_LINE_COMMENTS", "0")
        assert CompilerOptions.from_env().line_comments is False
