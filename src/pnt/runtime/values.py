"""
Runtime Values, Classes and Patterns

Value and Pattern are closed variant sets. Keywords and operator tags compare
by identity (they are interned per run); every other value compares
structurally. An Instance's class lives in its own slot, separate from the
property mapping, so no property name can reach it.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from ..shared.source_location import SourceLocation
from ..utils.config import INT_CLASS_NAME, INT_VALUE_FIELD, KEYWORD_PREFIX, STRING_QUOTE_CHAR

if TYPE_CHECKING:
    from ..ir.nodes import ExpressionIR
    from .runtime import Interpreter


# ============================================================================
# Values
# ============================================================================

@dataclass(frozen=True)
class IntValue:
    """64-bit signed integer magnitude"""
    value: np.int64


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True, eq=False)
class KeywordValue:
    """Interned atom `:name`; only obtain through KeywordInterner"""
    name: str


@dataclass(frozen=True, eq=False)
class OperatorTag:
    """Interned operator symbol used as a first-class value"""
    symbol: str


@dataclass(eq=False)
class PntClass:
    """
    An open, ordered list of methods.

    Method order is the dispatch order: the first matching method wins.
    """
    name: str
    methods: List['Method'] = field(default_factory=list)
    builtin: bool = False

    def __repr__(self) -> str:
        return f"PntClass({self.name!r}, {len(self.methods)} methods)"


@dataclass
class Instance:
    cls: PntClass = field(repr=False)
    properties: Dict[str, 'Value']

    @property
    def class_name(self) -> str:
        return self.cls.name


Value = Union[IntValue, StringValue, KeywordValue, OperatorTag, Instance]


def construct(pnt_class: PntClass, properties: Dict[str, Value]) -> Instance:
    """Build a tagged instance of a class."""
    return Instance(pnt_class, dict(properties))


# ============================================================================
# Patterns
# ============================================================================

@dataclass(frozen=True)
class ExactLiteral:
    """Matches by identity (keywords, operators) or value equality (everything else)"""
    value: Value


@dataclass(frozen=True)
class AnyIdentifier:
    """Matches any argument"""


@dataclass(frozen=True)
class RecordShape:
    """Matches an Instance of `class_name` carrying every required field"""
    class_name: str
    required_fields: Tuple[str, ...]


Pattern = Union[ExactLiteral, AnyIdentifier, RecordShape]

ANY = AnyIdentifier()


NativeFn = Callable[['Interpreter', Value, Tuple[Value, ...]], Value]


@dataclass
class Method:
    """
    One candidate in a class's method list.

    `bindings` holds one local name per pattern, in order. User methods carry
    an IR body; built-ins carry a native callable instead.
    """
    patterns: Tuple[Pattern, ...]
    bindings: Tuple[str, ...]
    body: Optional['ExpressionIR'] = None
    native: Optional[NativeFn] = None
    location: Optional[SourceLocation] = None

    @property
    def arity(self) -> int:
        return len(self.patterns)


# ============================================================================
# Display
# ============================================================================

def int_magnitude(value: Value) -> Optional[int]:
    """The integer held by an Int instance, or None for any other value."""
    if isinstance(value, Instance) and value.class_name == INT_CLASS_NAME:
        inner = value.properties.get(INT_VALUE_FIELD)
        if isinstance(inner, IntValue):
            return int(inner.value)
    return None


def display(value: Optional[Value]) -> str:
    """Render a value in source-like notation."""
    if value is None:
        return "nil"
    if isinstance(value, IntValue):
        return str(int(value.value))
    if isinstance(value, StringValue):
        return f"{STRING_QUOTE_CHAR}{value.value}{STRING_QUOTE_CHAR}"
    if isinstance(value, KeywordValue):
        return f"{KEYWORD_PREFIX}{value.name}"
    if isinstance(value, OperatorTag):
        return value.symbol
    if isinstance(value, Instance):
        magnitude = int_magnitude(value)
        if magnitude is not None and len(value.properties) == 1:
            return str(magnitude)
        fields = ", ".join(f"{name}: {display(v)}" for name, v in value.properties.items())
        return f"{value.class_name}{{{fields}}}"
    return repr(value)
