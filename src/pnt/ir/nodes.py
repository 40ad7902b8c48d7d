"""
IR Nodes

Rust Pattern: rustc_hir::Node

The translator lowers AST expressions into this small instruction tree. Names
of classes are already resolved to registry entries and literals to interned
runtime values, so evaluation never consults source text.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Generic, List, Optional, TypeVar

from ..shared.source_location import SourceLocation

if TYPE_CHECKING:
    from ..runtime.values import PntClass, Value

T = TypeVar('T')


class ExpressionIR:
    """
    Base class for all IR expressions.

    Design: Regular class with __slots__ (not dataclass) to avoid inheritance
    issues with defaults
    """
    __slots__ = ('location',)

    def __init__(self, location: Optional[SourceLocation]):
        self.location = location

    def accept(self, visitor: 'IRVisitor[T]') -> 'T':
        raise NotImplementedError(f"accept() not implemented for {self.__class__.__name__}")


class ConstantIR(ExpressionIR):
    """Pre-built immutable value: string, interned keyword or operator tag, integer magnitude"""
    __slots__ = ('value',)

    def __init__(self, value: 'Value', location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.value = value

    def accept(self, visitor: 'IRVisitor[T]') -> 'T':
        return visitor.visit_constant(self)


class LocalIR(ExpressionIR):
    """Reference to a method binding (`self` or a pattern binding)"""
    __slots__ = ('name',)

    def __init__(self, name: str, location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.name = name

    def accept(self, visitor: 'IRVisitor[T]') -> 'T':
        return visitor.visit_local(self)


class ConstructIR(ExpressionIR):
    """construct(class, properties) with property expressions in source order"""
    __slots__ = ('pnt_class', 'fields')

    def __init__(self, pnt_class: 'PntClass', fields: Dict[str, ExpressionIR],
                 location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.pnt_class = pnt_class
        self.fields = fields

    def accept(self, visitor: 'IRVisitor[T]') -> 'T':
        return visitor.visit_construct(self)


class CallIR(ExpressionIR):
    """callMethod(receiver, args...)"""
    __slots__ = ('receiver', 'arguments')

    def __init__(self, receiver: ExpressionIR, arguments: List[ExpressionIR],
                 location: Optional[SourceLocation] = None):
        super().__init__(location)
        self.receiver = receiver
        self.arguments = arguments

    def accept(self, visitor: 'IRVisitor[T]') -> 'T':
        return visitor.visit_call(self)


class IRVisitor(ABC, Generic[T]):
    """Visitor over IR expressions (Rust pattern: rustc_hir::intravisit::Visitor)"""

    @abstractmethod
    def visit_constant(self, node: ConstantIR) -> T:
        ...

    @abstractmethod
    def visit_local(self, node: LocalIR) -> T:
        ...

    @abstractmethod
    def visit_construct(self, node: ConstructIR) -> T:
        ...

    @abstractmethod
    def visit_call(self, node: CallIR) -> T:
        ...
