"""
Tokens

The closed set of token kinds produced by the lexer. Fixed-spelling kinds use
their spelling as the enum value; the rest use a lowercase tag.
"""

from dataclasses import dataclass
from enum import Enum

from ..shared.source_location import SourceLocation


class TokenKind(Enum):
    """Token kinds (closed set)"""
    CLASS = "class"
    DEF = "def"
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    DOT = "."
    COMMA = ","
    ARROW = "->"
    POW = "**"
    STAR = "*"
    AND = "&&"
    OR = "||"
    PLUS = "+"
    MINUS = "-"
    SLASH = "/"
    PERCENT = "%"
    INT = "int"
    ID = "id"
    KEYWORD = "keyword"
    COLON = ":"
    STRING = "string"


# Operator symbols usable as first-class values and patterns
OPERATOR_KINDS = frozenset({
    TokenKind.AND, TokenKind.OR, TokenKind.POW, TokenKind.STAR,
    TokenKind.MINUS, TokenKind.PLUS, TokenKind.SLASH, TokenKind.PERCENT,
})

OPERATOR_SYMBOLS = tuple(kind.value for kind in TokenKind if kind in OPERATOR_KINDS)

# Tokens that always end a juxtaposition argument list
ARGUMENT_TERMINATORS = frozenset({
    TokenKind.DOT, TokenKind.COMMA, TokenKind.RPAREN, TokenKind.RBRACE,
})


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    location: SourceLocation

    @property
    def line(self) -> int:
        return self.location.line

    def __str__(self) -> str:
        return self.text
