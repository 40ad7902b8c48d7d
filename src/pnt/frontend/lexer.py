"""
Lexer

Rust Pattern: rustc_lexer::tokenize

Scanning discipline: each pass walks the whole rule table once. Every rule
that matches at the current position emits a token and moves the position
forward, and the walk continues with the next rule from there. Whitespace is
only skipped between passes, so adjacent fragments such as ``1abc`` split into
``int`` and ``id`` within a single pass.
"""

import logging
import re
from typing import List, Pattern, Tuple

from .tokens import Token, TokenKind
from ..shared.errors import LexError
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_SOURCE_FILE

logger = logging.getLogger("pnt.frontend.lexer")


def _literal(text: str) -> Pattern:
    return re.compile(re.escape(text))


# Priority order: keywords before identifiers, `->` before `-`, `**` before `*`
RULES: Tuple[Tuple[Pattern, TokenKind], ...] = (
    (re.compile(r"class\b", re.ASCII), TokenKind.CLASS),
    (re.compile(r"def\b", re.ASCII), TokenKind.DEF),
    (_literal("{"), TokenKind.LBRACE),
    (_literal("}"), TokenKind.RBRACE),
    (_literal("("), TokenKind.LPAREN),
    (_literal(")"), TokenKind.RPAREN),
    (_literal("."), TokenKind.DOT),
    (_literal(","), TokenKind.COMMA),
    (_literal("->"), TokenKind.ARROW),
    (_literal("**"), TokenKind.POW),
    (_literal("*"), TokenKind.STAR),
    (_literal("&&"), TokenKind.AND),
    (_literal("||"), TokenKind.OR),
    (_literal("+"), TokenKind.PLUS),
    (_literal("-"), TokenKind.MINUS),
    (_literal("/"), TokenKind.SLASH),
    (_literal("%"), TokenKind.PERCENT),
    (re.compile(r"\d+", re.ASCII), TokenKind.INT),
    (re.compile(r"[a-zA-Z0-9?!]+\b", re.ASCII), TokenKind.ID),
    (re.compile(r":[a-zA-Z0-9?!]+\b", re.ASCII), TokenKind.KEYWORD),
    (_literal(":"), TokenKind.COLON),
    (re.compile(r'"[^"\n]*"'), TokenKind.STRING),
)

_WHITESPACE = re.compile(r"\s+")


class Lexer:
    """Turns source text into an ordered token list, tracking lines."""

    def __init__(self, source: str, source_file: str = DEFAULT_SOURCE_FILE):
        self.source = source
        self.source_file = source_file
        self.pos = 0
        self.line = 1
        self.line_start = 0

    def _location(self, offset: int, length: int = 0) -> SourceLocation:
        column = offset - self.line_start + 1
        return SourceLocation(
            file=self.source_file,
            line=self.line,
            column=column,
            offset=offset,
            end_column=column + length if length else 0,
        )

    def _skip_whitespace(self) -> None:
        match = _WHITESPACE.match(self.source, self.pos)
        if not match:
            return
        skipped = match.group()
        newlines = skipped.count("\n")
        if newlines:
            self.line += newlines
            self.line_start = match.start() + skipped.rindex("\n") + 1
        self.pos = match.end()

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while self.pos < len(self.source):
            self._skip_whitespace()

            found = False
            for pattern, kind in RULES:
                match = pattern.match(self.source, self.pos)
                if not match:
                    continue
                text = match.group()
                tokens.append(Token(kind, text, self._location(self.pos, len(text))))
                self.pos = match.end()
                found = True

            if not found and self.source[self.pos:].strip():
                raise LexError(
                    f"unrecognized input starting with {self.source[self.pos]!r}",
                    self._location(self.pos),
                    source_code=self.source,
                    label="no token rule matches here",
                )

        logger.debug(f"Lexed {len(tokens)} tokens from {self.source_file}")
        return tokens


def tokenize(source: str, source_file: str = DEFAULT_SOURCE_FILE) -> List[Token]:
    """Lex source text into tokens."""
    return Lexer(source, source_file).tokenize()
