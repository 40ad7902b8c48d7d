"""
Compiler Driver

Rust Pattern: rustc_driver::driver

Runs the front half of the pipeline for one program: a fresh context with the
prelude installed, parsing in the requested dialect, then translation.
"""

import logging
from typing import List, Optional

from ..frontend.legacy import LegacyParser
from ..frontend.parser import parse
from ..passes.translate import TranslatedProgram, translate
from ..runtime.prelude import new_context
from ..shared.errors import ErrorReporter, PntSourceError
from ..shared.nodes import Program
from ..utils.config import DEFAULT_SOURCE_FILE, DIALECT_LEGACY, DIALECT_PNT, DIALECTS

logger = logging.getLogger("pnt.compiler.driver")


class CompilationResult:
    """Compilation result"""
    def __init__(
        self,
        source: str,
        source_file: str,
        reporter: ErrorReporter,
        ast: Optional[Program] = None,
        program: Optional[TranslatedProgram] = None,
        error: Optional[PntSourceError] = None,
    ):
        self.source = source
        self.source_file = source_file
        self.reporter = reporter
        self.ast = ast
        self.program = program
        self.error = error

    @property
    def success(self) -> bool:
        return self.program is not None and self.error is None

    def has_errors(self) -> bool:
        """True if compilation reported errors."""
        return self.reporter.has_errors()

    def get_errors(self) -> List[str]:
        if self.reporter.has_errors():
            return [self.reporter.format_all_errors()]
        return []


class CompilerDriver:
    """
    Compiler driver (Rust naming: rustc_driver::driver).

    Phases:
    1. Context: fresh ProgramContext with the dialect's prelude
    2. Parsing (source -> AST), lexing included
    3. Translation (AST -> IR, classes registered into the context)

    The first error aborts compilation and is recorded on the result.
    """

    def __init__(self):
        self._legacy_parser: Optional[LegacyParser] = None

    @property
    def legacy_parser(self) -> LegacyParser:
        if self._legacy_parser is None:
            self._legacy_parser = LegacyParser()
        return self._legacy_parser

    def parse(self, source: str, source_file: str = DEFAULT_SOURCE_FILE,
              dialect: str = DIALECT_PNT) -> Program:
        if dialect not in DIALECTS:
            raise ValueError(f"unknown dialect {dialect!r}; expected one of {', '.join(DIALECTS)}")
        if dialect == DIALECT_LEGACY:
            return self.legacy_parser.parse(source, source_file)
        return parse(source, source_file)

    def compile(
        self,
        source: str,
        source_file: str = DEFAULT_SOURCE_FILE,
        dialect: str = DIALECT_PNT,
    ) -> CompilationResult:
        reporter = ErrorReporter({source_file: source})
        result = CompilationResult(source, source_file, reporter)

        try:
            context = new_context(dialect)
            result.ast = self.parse(source, source_file, dialect)
            result.program = translate(result.ast, context)
        except PntSourceError as e:
            if e.source_code is None:
                e.source_code = source
            reporter.report_exception(e)
            result.error = e
            logger.debug(f"Compilation of {source_file} failed: {e.message}")
            return result

        logger.debug(
            f"Compiled {source_file} ({dialect}): "
            f"{len(result.program.expressions)} top-level expressions"
        )
        return result
