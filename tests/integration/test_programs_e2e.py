#!/usr/bin/env python3
"""
End-to-end programs through the public entry points: pnt.run, the compiler
driver plus runtime, and the command line.
"""

import io

import pytest

import pnt
from pnt.__main__ import main
from pnt.compiler.driver import CompilerDriver
from pnt.runtime.values import Instance
from pnt.shared.errors import (
    LexError, NoMatchingMethod, ParseError, RecursionLimitExceeded, UnknownClass,
)
from tests.test_utils import compile_and_execute, fields_of, int_of


POINT_PROGRAM = """class Point
  def + other -> other.
.
Point{x: 1, y: 2} + Point{x: 2, y: 3}.
"""


@pytest.mark.integration
class TestPointScenario:
    def test_returns_second_operand(self):
        value = pnt.run(POINT_PROGRAM)
        assert isinstance(value, Instance)
        assert value.class_name == "Point"
        assert fields_of(value) == {"x": "2", "y": "3"}

    def test_compilation_result(self, compiler):
        result = compiler.compile(POINT_PROGRAM, "point.pnt")
        assert result.success
        assert not result.has_errors()
        assert [c.name for c in result.ast.classes] == ["Point"]
        assert len(result.program.expressions) == 1
        point = result.program.context.registry.lookup("Point")
        assert len(point.methods) == 1


@pytest.mark.integration
class TestIntArithmetic:
    def test_addition(self):
        assert int_of(pnt.run("1 + 2.")) == 3

    def test_chained_addition(self):
        assert int_of(pnt.run("1 + 2. + 3. + 4.")) == 10

    def test_wraps_at_64_bits(self):
        assert int_of(pnt.run("9223372036854775807 + 1.")) == -(2 ** 63)

    def test_int_value_getter(self):
        assert pnt.display(pnt.run("5 :value.")) == "5"

    def test_user_method_using_addition(self, compiler, runtime):
        source = (
            "class Counter\n"
            "  def :next -> Counter{n: self :n. + 1}.\n"
            ".\n"
            "Counter{n: 0} :next. :next. :next. :n."
        )
        result = compile_and_execute(source, compiler, runtime)
        assert result.success, result.errors
        assert int_of(result.value) == 3

    def test_addition_requires_int(self, compiler, runtime):
        result = compile_and_execute("class P\n.\n1 + P{}.", compiler, runtime)
        assert isinstance(result.error, NoMatchingMethod)


@pytest.mark.integration
class TestRunApi:
    def test_run_raises_first_error(self):
        with pytest.raises(UnknownClass):
            pnt.run("Ghost{}.")
        with pytest.raises(LexError):
            pnt.run("1 ~ 2.")
        with pytest.raises(ParseError):
            pnt.run("1 +")

    def test_unbounded_recursion_is_a_source_error(self):
        with pytest.raises(RecursionLimitExceeded) as exc_info:
            pnt.run("class A\n  def :go -> self :go.\n.\nA{} :go.")
        assert isinstance(exc_info.value, pnt.PntSourceError)

    def test_runs_are_independent(self):
        pnt.run("class A\n  def :x -> 1.\n.")
        with pytest.raises(UnknownClass):
            pnt.run("A{}.")

    def test_legacy_dialect_output(self):
        out = io.StringIO()
        value = pnt.run(":abc :log.", dialect="legacy", output=out)
        assert out.getvalue() == ":abc\n"
        assert pnt.display(value) == ":abc"

    def test_unknown_dialect(self):
        with pytest.raises(ValueError):
            CompilerDriver().compile("1.", dialect="modern")

    def test_failed_compilation_is_reported(self, compiler):
        result = compiler.compile("Point{x: 1", "broken.pnt")
        assert not result.success
        assert result.has_errors()
        report = result.get_errors()[0]
        assert "error[E0002]" in report
        assert "broken.pnt:1" in report

    def test_tokenize_and_parse_exports(self):
        assert [t.text for t in pnt.tokenize("a :b.")] == ["a", ":b", "."]
        assert pnt.to_source(pnt.parse("a :b.")) == "a :b.\n"


@pytest.mark.integration
class TestCommandLine:
    def test_prints_result(self, tmp_path, capsys):
        path = tmp_path / "point.pnt"
        path.write_text(POINT_PROGRAM, encoding="utf-8")
        assert main([str(path)]) == 0
        assert capsys.readouterr().out.strip() == "Point{x: 2, y: 3}"

    def test_legacy_flag(self, tmp_path, capsys):
        path = tmp_path / "old.pnt"
        path.write_text(":abc :len.", encoding="utf-8")
        assert main([str(path), "--dialect", "legacy"]) == 0
        assert capsys.readouterr().out.strip() == "3"

    def test_reports_errors(self, tmp_path, capsys):
        path = tmp_path / "bad.pnt"
        path.write_text("Ghost{}.", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "error[E0004]" in capsys.readouterr().err

    def test_runtime_error_exit_code(self, tmp_path, capsys):
        path = tmp_path / "bad.pnt"
        path.write_text("x.", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "error[E0005]" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.pnt")]) == 1
        assert "file not found" in capsys.readouterr().err

    def test_unbounded_recursion_exit_code(self, tmp_path, capsys):
        path = tmp_path / "loop.pnt"
        path.write_text("class A\n  def :go -> self :go.\n.\nA{} :go.\n", encoding="utf-8")
        assert main([str(path)]) == 1
        err = capsys.readouterr().err
        assert "error[E0007]" in err
        assert "loop.pnt:2" in err
