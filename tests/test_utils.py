"""
Test utilities for the pnt test suite.

Provides helpers for the compile-then-execute pattern: the driver produces a
translated program and the runtime evaluates it.
"""

import io
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from pnt.compiler.driver import CompilerDriver
from pnt.runtime.runtime import PntRuntime
from pnt.runtime.values import Instance, display, int_magnitude
from pnt.utils.config import DIALECT_PNT


@dataclass
class ExecutionResult:
    """Unified execution result for tests."""
    value: Any = None
    output: str = ""
    success: bool = False
    error: Optional[Exception] = None
    errors: List[str] = field(default_factory=list)

    @property
    def displayed(self) -> str:
        return display(self.value)

    def get_errors(self) -> list:
        return self.errors


def compile_and_execute(
    source: str,
    compiler: Optional[CompilerDriver] = None,
    runtime: Optional[PntRuntime] = None,
    source_file: str = "<test>",
    dialect: str = DIALECT_PNT,
) -> ExecutionResult:
    """Compile and run `source`, capturing everything the program writes."""
    comp = compiler if compiler is not None else CompilerDriver()
    buffer = io.StringIO()
    rt = runtime if runtime is not None else PntRuntime()
    saved_output = rt.output
    rt.output = buffer
    try:
        compilation = comp.compile(source, source_file, dialect=dialect)
        if not compilation.success:
            return ExecutionResult(
                success=False,
                error=compilation.error,
                errors=compilation.get_errors(),
            )
        exec_result = rt.execute(compilation)
    finally:
        rt.output = saved_output

    if exec_result.error is not None:
        return ExecutionResult(
            output=buffer.getvalue(),
            success=False,
            error=exec_result.error,
            errors=[exec_result.error.render(color=False)],
        )
    return ExecutionResult(value=exec_result.value, output=buffer.getvalue(), success=True)


def int_of(value: Any) -> Optional[int]:
    """Magnitude of an Int instance (None for anything else)."""
    return int_magnitude(value)


def fields_of(value: Any) -> dict:
    """Property names mapped to displayed values, for instance comparisons."""
    assert isinstance(value, Instance), f"expected an instance, got {display(value)}"
    return {name: display(prop) for name, prop in value.properties.items()}
