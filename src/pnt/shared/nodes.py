"""
pnt AST (Abstract Syntax Tree) Definitions

Moved to shared module so the frontend, the translator and the runtime can all
import node types without circular imports.

Visitor Pattern Support:
- All AST nodes have accept() methods for polymorphic dispatch
- Locations are excluded from equality so re-parsed trees compare equal
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Dict, List, Optional, TypeVar

from .source_location import SourceLocation

if TYPE_CHECKING:
    from .ast_visitor import ASTVisitor

T = TypeVar('T')


class NodeType(Enum):
    """AST node types"""
    PROGRAM = "program"
    CLASS_DEF = "class_def"
    METHOD_DEF = "method_def"
    INT_LIT = "int_lit"
    STRING_LIT = "string_lit"
    KEYWORD_LIT = "keyword_lit"
    IDENTIFIER = "identifier"
    OPERATOR = "operator"
    RECORD_CONSTRUCT = "record_construct"
    RECORD_PATTERN = "record_pattern"
    PAREN_EXPR = "paren_expr"
    CALL = "call"


def _location() -> Optional[SourceLocation]:
    return field(default=None, compare=False, repr=False)


class ASTNode:
    """
    Base class for all AST nodes

    Subclasses are dataclasses carrying a `location` field and implement
    accept() to call the matching visit_* method.
    """
    node_type: ClassVar[NodeType]
    location: Optional[SourceLocation]

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        raise NotImplementedError(f"accept() not implemented for {self.__class__.__name__}")


class Expression(ASTNode):
    """Base class for everything that can appear in expression position"""


@dataclass
class IntLit(Expression):
    """Integer literal (evaluates to an Int instance)"""
    value: int
    location: Optional[SourceLocation] = _location()
    node_type: ClassVar[NodeType] = NodeType.INT_LIT

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_int_lit(self)


@dataclass
class StringLit(Expression):
    """String literal, quotes stripped, no escape processing"""
    value: str
    location: Optional[SourceLocation] = _location()
    node_type: ClassVar[NodeType] = NodeType.STRING_LIT

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_string_lit(self)


@dataclass
class KeywordLit(Expression):
    """Keyword literal `:name` (name stored without the colon)"""
    name: str
    location: Optional[SourceLocation] = _location()
    node_type: ClassVar[NodeType] = NodeType.KEYWORD_LIT

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_keyword_lit(self)


@dataclass
class Identifier(Expression):
    name: str
    location: Optional[SourceLocation] = _location()
    node_type: ClassVar[NodeType] = NodeType.IDENTIFIER

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_identifier(self)


@dataclass
class Operator(Expression):
    """Bare operator symbol used as a first-class value or pattern"""
    symbol: str
    location: Optional[SourceLocation] = _location()
    node_type: ClassVar[NodeType] = NodeType.OPERATOR

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_operator(self)


@dataclass
class RecordConstruct(Expression):
    """`Name{ field: expr, ... }` - fields keep source order"""
    class_name: str
    fields: Dict[str, Expression]
    location: Optional[SourceLocation] = _location()
    node_type: ClassVar[NodeType] = NodeType.RECORD_CONSTRUCT

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_record_construct(self)


@dataclass
class RecordPattern(Expression):
    """`Name{ field, ... }` - only produced in def pattern position"""
    class_name: str
    fields: List[str]
    location: Optional[SourceLocation] = _location()
    node_type: ClassVar[NodeType] = NodeType.RECORD_PATTERN

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_record_pattern(self)


@dataclass
class ParenExpr(Expression):
    inner: Expression
    location: Optional[SourceLocation] = _location()
    node_type: ClassVar[NodeType] = NodeType.PAREN_EXPR

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_paren_expr(self)


@dataclass
class Call(Expression):
    """Juxtaposition call: callee followed by positional arguments"""
    callee: Expression
    args: List[Expression]
    location: Optional[SourceLocation] = _location()
    node_type: ClassVar[NodeType] = NodeType.CALL

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_call(self)


@dataclass
class MethodDef(Expression):
    """`def <pattern>* -> <expr>`"""
    patterns: List[Expression]
    body: Expression
    location: Optional[SourceLocation] = _location()
    node_type: ClassVar[NodeType] = NodeType.METHOD_DEF

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_method_def(self)


@dataclass
class ClassDef(Expression):
    """`class <Name> <def>*` - the closing `.` belongs to the enclosing expression"""
    name: str
    methods: List[MethodDef]
    location: Optional[SourceLocation] = _location()
    node_type: ClassVar[NodeType] = NodeType.CLASS_DEF

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_class_def(self)


@dataclass
class Program(ASTNode):
    """Program root node: top-level nodes in source order"""
    statements: List[Expression]
    location: Optional[SourceLocation] = _location()
    node_type: ClassVar[NodeType] = NodeType.PROGRAM

    @property
    def classes(self) -> List[ClassDef]:
        return [node for node in self.statements if isinstance(node, ClassDef)]

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_program(self)
