"""
pnt: a pattern-matched, prototype-based object language.

Pipeline: lexer -> parser -> translator -> dispatch runtime.
"""

from typing import Optional, TextIO

from .compiler.driver import CompilationResult, CompilerDriver
from .frontend.emit import to_source
from .frontend.lexer import tokenize
from .frontend.parser import parse
from .runtime.runtime import ExecutionResult, PntRuntime
from .runtime.values import Value, display
from .shared.errors import (
    LexError, NoMatchingMethod, ParseError, PntError, PntSourceError, RecursionLimitExceeded,
    TranslationError, UnboundIdentifier, UnknownClass,
)
from .utils.config import DEFAULT_SOURCE_FILE, DIALECT_PNT

__version__ = "0.1.0"


def run(source: str, source_file: str = DEFAULT_SOURCE_FILE,
        dialect: str = DIALECT_PNT, output: Optional[TextIO] = None) -> Optional[Value]:
    """
    Compile and evaluate a program.

    Returns the value of the last top-level expression, or None if the program
    has none. The first error aborts the run and is raised.
    """
    compilation = CompilerDriver().compile(source, source_file, dialect)
    result = PntRuntime(output=output).execute(compilation)
    if result.error is not None:
        raise result.error
    return result.value


__all__ = [
    "run", "tokenize", "parse", "to_source", "display",
    "CompilerDriver", "CompilationResult", "PntRuntime", "ExecutionResult",
    "PntError", "PntSourceError", "LexError", "ParseError", "TranslationError",
    "UnknownClass", "UnboundIdentifier", "NoMatchingMethod", "RecursionLimitExceeded",
]
