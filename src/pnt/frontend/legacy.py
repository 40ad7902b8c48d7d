"""
Legacy Dialect Parser

Rust Pattern: rustc_parse

The earlier pnt dialect has no identifiers, methods, strings or operators:
programs are keywords, empty class declarations, integers and records, called
by juxtaposition. It is parsed by a Lark LALR grammar and transformed into the
same AST the main parser produces, so translation and dispatch are shared.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from lark import Lark, Transformer, v_args
from lark.exceptions import (
    ParseError as LarkParseError,
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedToken,
)

from ..shared.errors import LexError, ParseError
from ..shared.nodes import (
    Call, ClassDef, Expression, IntLit, KeywordLit, Program, RecordConstruct,
)
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_PARSER_CACHE_FILE, DEFAULT_SOURCE_FILE

logger = logging.getLogger("pnt.frontend.legacy")

_END_OF_INPUT = "$END"


@v_args(inline=True, meta=True)
class LegacyTransformer(Transformer):
    """Converts the Lark parse tree of a legacy program into pnt AST nodes."""

    def __init__(self) -> None:
        super().__init__()
        self.current_file: str = DEFAULT_SOURCE_FILE

    def _location(self, meta) -> Optional[SourceLocation]:
        if meta is None or getattr(meta, "empty", True):
            return None
        return SourceLocation(
            file=self.current_file,
            line=meta.line,
            column=meta.column,
            offset=meta.start_pos,
            end_column=getattr(meta, "end_column", 0) or 0,
        )

    def start(self, meta, *exprs: Expression) -> Program:
        return Program(list(exprs), self._location(meta))

    def bare(self, meta, single: Expression) -> Expression:
        return single

    def call(self, meta, receiver: Expression, *args: Expression) -> Call:
        return Call(receiver, list(args), self._location(meta))

    def keyword_lit(self, meta, token) -> KeywordLit:
        return KeywordLit(str(token)[1:], self._location(meta))

    def class_def(self, meta, name) -> ClassDef:
        return ClassDef(str(name), [], self._location(meta))

    def int_lit(self, meta, token) -> IntLit:
        return IntLit(int(token), self._location(meta))

    def record_construct(self, meta, name, *fields: Tuple[str, Expression]) -> RecordConstruct:
        return RecordConstruct(str(name), dict(fields), self._location(meta))

    def field(self, meta, name, value: Expression) -> Tuple[str, Expression]:
        return str(name), value


class LegacyParser:
    """
    Parser for the legacy dialect (Rust naming: rustc_parse).

    Lark errors are converted to the pipeline's own errors: characters no
    terminal accepts become LexError, unexpected tokens become ParseError.
    """

    def __init__(self, cache_file: str = DEFAULT_PARSER_CACHE_FILE):
        grammar_path = Path(__file__).parent / "legacy.lark"
        self.parser = Lark.open(
            str(grammar_path),
            start="start",
            parser="lalr",
            cache=cache_file,
            propagate_positions=True,
            maybe_placeholders=False,
        )
        self.transformer = LegacyTransformer()
        self._spellings: Dict[str, str] = {
            terminal.name: terminal.pattern.value
            for terminal in self.parser.terminals
            if terminal.pattern.type == "str"
        }

    def parse(self, source: str, source_file: str = DEFAULT_SOURCE_FILE) -> Program:
        self.transformer.current_file = source_file
        try:
            tree = self.parser.parse(source)
        except UnexpectedCharacters as e:
            char = source[e.pos_in_stream] if 0 <= e.pos_in_stream < len(source) else ""
            raise LexError(
                f"unexpected character `{char}`",
                SourceLocation(source_file, e.line, e.column, e.pos_in_stream),
                source_code=source,
                label="no token starts here",
            ) from e
        except UnexpectedToken as e:
            found = None if e.token.type == _END_OF_INPUT else str(e.token)
            raise ParseError(
                self._expected(e.expected),
                found,
                self._error_location(e, source_file),
            ) from e
        except UnexpectedEOF as e:
            raise ParseError(self._expected(e.expected), None) from e
        except LarkParseError as e:
            raise ParseError((), None, message=f"Parse error: {e}") from e

        program = self.transformer.transform(tree)
        logger.debug(f"Parsed {len(program.statements)} legacy expressions from {source_file}")
        return program

    def _expected(self, names) -> List[str]:
        return sorted(self._spellings.get(name, name.lower()) for name in names)

    @staticmethod
    def _error_location(error: UnexpectedToken, source_file: str) -> Optional[SourceLocation]:
        line = getattr(error, "line", -1)
        column = getattr(error, "column", -1)
        if not isinstance(line, int) or line < 1:
            return None
        offset = getattr(error.token, "start_pos", 0) or 0
        return SourceLocation(source_file, line, column, offset)
