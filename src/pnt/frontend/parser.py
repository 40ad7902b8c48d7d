"""
Parser

Rust Pattern: rustc_parse

Hand-written recursive descent over the lexer's token list. Call grouping is
juxtaposition based and line sensitive: after a primary expression, further
primaries become call arguments for as long as the chain continues on the line
of the first argument token.
"""

import logging
from typing import Dict, List, Optional

from .lexer import tokenize
from .tokens import ARGUMENT_TERMINATORS, OPERATOR_KINDS, Token, TokenKind
from ..shared.errors import ParseError
from ..shared.nodes import (
    Call, ClassDef, Expression, Identifier, IntLit, KeywordLit, MethodDef,
    Operator, ParenExpr, Program, RecordConstruct, RecordPattern, StringLit,
)
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_SOURCE_FILE

logger = logging.getLogger("pnt.frontend.parser")


class Parser:
    """
    Parser (Rust naming: rustc_parse).

    - Takes tokens, returns a Program whose statements are top-level nodes
    - Preserves source locations on every node
    - Raises ParseError naming the expected token kinds
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.index = 0

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    @property
    def current(self) -> Optional[Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _check(self, *kinds: TokenKind) -> bool:
        """True if the upcoming tokens have exactly these kinds, in order."""
        for offset, kind in enumerate(kinds):
            position = self.index + offset
            if position >= len(self.tokens) or self.tokens[position].kind is not kind:
                return False
        return True

    def _eof_location(self) -> Optional[SourceLocation]:
        if not self.tokens:
            return None
        last = self.tokens[-1].location
        column = last.end_column or last.column + 1
        return SourceLocation(file=last.file, line=last.line, column=column, offset=last.offset)

    def _error(self, *expected: str) -> ParseError:
        token = self.current
        if token is None:
            return ParseError(expected, None, self._eof_location())
        return ParseError(expected, token.text, token.location)

    def _expect(self, kind: TokenKind) -> Token:
        token = self.current
        if token is None or token.kind is not kind:
            raise self._error(kind.value)
        self.index += 1
        return token

    def _accept(self, kind: TokenKind) -> Optional[Token]:
        if self._check(kind):
            token = self.tokens[self.index]
            self.index += 1
            return token
        return None

    def _at_argument_end(self) -> bool:
        token = self.current
        if token is None:
            raise self._error(TokenKind.DOT.value)
        return token.kind in ARGUMENT_TERMINATORS

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def parse(self) -> Program:
        statements: List[Expression] = []
        while self.current is not None:
            statements.append(self.parse_expr())
        logger.debug(f"Parsed {len(statements)} top-level nodes")
        location = self.tokens[0].location if self.tokens else None
        return Program(statements, location=location)

    def parse_expr(self) -> Expression:
        expr = self.parse_single_expr()
        if self._accept(TokenKind.DOT):
            return expr
        if self.current is None:
            raise self._error(TokenKind.DOT.value)

        current_line = self.current.line
        while self.current is not None and self.current.line == current_line:
            args: List[Expression] = []
            while not self._at_argument_end():
                args.append(self.parse_single_expr())
            if not args:
                break
            expr = Call(expr, args, location=expr.location)
            self._accept(TokenKind.DOT)
        return expr

    def parse_single_expr(self) -> Expression:
        token = self.current
        if token is None:
            raise self._error("expression")
        if token.kind is TokenKind.CLASS:
            return self.parse_class()
        elif token.kind is TokenKind.KEYWORD:
            return self.parse_keyword()
        elif token.kind is TokenKind.DEF:
            return self.parse_def()
        elif token.kind is TokenKind.INT:
            return self.parse_int()
        elif token.kind is TokenKind.STRING:
            return self.parse_string()
        elif token.kind is TokenKind.LPAREN:
            return self.parse_paren_expr()
        elif self._check(TokenKind.ID, TokenKind.LBRACE):
            return self.parse_record_constructor()
        elif token.kind is TokenKind.ID:
            return self.parse_id()
        elif token.kind in OPERATOR_KINDS:
            return self.parse_operator()
        raise self._error("expression")

    def parse_paren_expr(self) -> ParenExpr:
        start = self._expect(TokenKind.LPAREN)
        inner = self.parse_expr()
        self._expect(TokenKind.RPAREN)
        return ParenExpr(inner, location=start.location)

    def parse_int(self) -> IntLit:
        token = self._expect(TokenKind.INT)
        return IntLit(int(token.text), location=token.location)

    def parse_operator(self) -> Operator:
        token = self.tokens[self.index]
        self.index += 1
        return Operator(token.text, location=token.location)

    def parse_string(self) -> StringLit:
        token = self._expect(TokenKind.STRING)
        return StringLit(token.text[1:-1], location=token.location)

    def parse_keyword(self) -> KeywordLit:
        token = self._expect(TokenKind.KEYWORD)
        return KeywordLit(token.text[1:], location=token.location)

    def parse_id(self) -> Identifier:
        token = self._expect(TokenKind.ID)
        return Identifier(token.text, location=token.location)

    def parse_record_constructor(self) -> RecordConstruct:
        name = self._expect(TokenKind.ID)
        self._expect(TokenKind.LBRACE)
        fields: Dict[str, Expression] = {}
        while not self._check(TokenKind.RBRACE):
            if self.current is None:
                raise self._error(TokenKind.RBRACE.value)
            field_name = self._expect(TokenKind.ID).text
            self._expect(TokenKind.COLON)
            fields[field_name] = self.parse_expr()
            self._accept(TokenKind.COMMA)
        self._expect(TokenKind.RBRACE)
        return RecordConstruct(name.text, fields, location=name.location)

    def parse_record_constructor_pattern(self) -> RecordPattern:
        name = self._expect(TokenKind.ID)
        self._expect(TokenKind.LBRACE)
        fields: List[str] = []
        while not self._check(TokenKind.RBRACE):
            if self.current is None:
                raise self._error(TokenKind.RBRACE.value)
            fields.append(self._expect(TokenKind.ID).text)
            self._accept(TokenKind.COMMA)
        self._expect(TokenKind.RBRACE)
        return RecordPattern(name.text, fields, location=name.location)

    def parse_pattern(self) -> Expression:
        if self._check(TokenKind.ID, TokenKind.LBRACE):
            return self.parse_record_constructor_pattern()
        return self.parse_single_expr()

    def parse_def(self) -> MethodDef:
        start = self._expect(TokenKind.DEF)
        patterns: List[Expression] = []
        while not self._check(TokenKind.ARROW):
            if self.current is None:
                raise self._error(TokenKind.ARROW.value)
            patterns.append(self.parse_pattern())
        self._expect(TokenKind.ARROW)
        body = self.parse_expr()
        return MethodDef(patterns, body, location=start.location)

    def parse_class(self) -> ClassDef:
        start = self._expect(TokenKind.CLASS)
        name = self._expect(TokenKind.ID)
        methods: List[MethodDef] = []
        while not self._check(TokenKind.DOT):
            if self.current is None:
                raise self._error(TokenKind.DOT.value, TokenKind.DEF.value)
            methods.append(self.parse_def())
        return ClassDef(name.text, methods, location=start.location)


def parse(source: str, source_file: str = DEFAULT_SOURCE_FILE) -> Program:
    """Lex and parse source text into a Program."""
    return Parser(tokenize(source, source_file)).parse()
