#!/usr/bin/env python3
"""
Parametrized example programs: every file under examples/ runs to its
expected displayed value.
"""

from pathlib import Path

import pytest

from pnt.utils.config import DIALECT_LEGACY, DIALECT_PNT, SOURCE_FILE_EXTENSION
from pnt.utils.io_utils import read_source_file
from tests.test_utils import compile_and_execute

EXAMPLES_DIR = Path(__file__).parent.parent.parent / "examples"

EXPECTED = {
    ("demos", "point"): "Point{x: 2, y: 3}",
    ("demos", "vector"): "Vec{x: 11, y: 22}",
    ("demos", "counter"): "3",
    ("demos", "toggle"): ":off",
    ("demos", "literal_patterns"): ":zero",
    ("demos", "reopen_int"): "42",
    ("demos", "pair"): "Pair{left: :b, right: :a}",
    ("legacy", "keyword_len"): "7",
    ("legacy", "records"): "Point{x: 2, y: 3}",
    ("legacy", "log"): ":hello",
}

EXPECTED_OUTPUT = {
    ("legacy", "log"): ":hello\n",
}

DIALECT_BY_DIR = {"demos": DIALECT_PNT, "legacy": DIALECT_LEGACY}


def _example_params():
    params = []
    for directory in sorted(DIALECT_BY_DIR):
        for path in sorted((EXAMPLES_DIR / directory).glob(f"*{SOURCE_FILE_EXTENSION}")):
            params.append(pytest.param(directory, path, id=f"{directory}/{path.stem}"))
    return params


class TestExamples:
    @pytest.mark.parametrize("directory, path", _example_params())
    def test_execution(self, compiler, runtime, directory, path):
        key = (directory, path.stem)
        assert key in EXPECTED, f"no expected value recorded for {path.name}"

        result = compile_and_execute(
            read_source_file(path), compiler, runtime,
            source_file=str(path), dialect=DIALECT_BY_DIR[directory],
        )
        assert result.success, result.errors
        assert result.displayed == EXPECTED[key]
        assert result.output == EXPECTED_OUTPUT.get(key, "")

    def test_every_expectation_has_a_file(self):
        for directory, stem in EXPECTED:
            assert (EXAMPLES_DIR / directory / f"{stem}{SOURCE_FILE_EXTENSION}").is_file()
