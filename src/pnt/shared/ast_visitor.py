"""
AST Visitor Pattern

Design:
- Abstract base class with visit_* methods for each AST node type
- Type-safe (mypy can check)
- Extensible (add new visitors without changing nodes)
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:
    from .nodes import (
        Call, ClassDef, Identifier, IntLit, KeywordLit, MethodDef, Operator,
        ParenExpr, Program, RecordConstruct, RecordPattern, StringLit,
    )

T = TypeVar('T')


class ASTVisitor(ABC, Generic[T]):
    """
    Abstract visitor over pnt AST nodes.

    Usage:
        class Printer(ASTVisitor[str]):
            def visit_int_lit(self, node: IntLit) -> str:
                return str(node.value)
            ...

        text = node.accept(Printer())
    """

    @abstractmethod
    def visit_program(self, node: 'Program') -> T:
        ...

    @abstractmethod
    def visit_class_def(self, node: 'ClassDef') -> T:
        ...

    @abstractmethod
    def visit_method_def(self, node: 'MethodDef') -> T:
        ...

    @abstractmethod
    def visit_int_lit(self, node: 'IntLit') -> T:
        ...

    @abstractmethod
    def visit_string_lit(self, node: 'StringLit') -> T:
        ...

    @abstractmethod
    def visit_keyword_lit(self, node: 'KeywordLit') -> T:
        ...

    @abstractmethod
    def visit_identifier(self, node: 'Identifier') -> T:
        ...

    @abstractmethod
    def visit_operator(self, node: 'Operator') -> T:
        ...

    @abstractmethod
    def visit_record_construct(self, node: 'RecordConstruct') -> T:
        ...

    @abstractmethod
    def visit_record_pattern(self, node: 'RecordPattern') -> T:
        ...

    @abstractmethod
    def visit_paren_expr(self, node: 'ParenExpr') -> T:
        ...

    @abstractmethod
    def visit_call(self, node: 'Call') -> T:
        ...
