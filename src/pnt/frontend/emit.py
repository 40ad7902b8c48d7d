"""
Source Emission

Re-serializes an AST to canonical source text. Parsing the output yields an
equal AST: call chains stay on one line, every method definition and every
top-level statement starts a new line, so line-sensitive call grouping cannot
swallow the next definition.
"""

from typing import List

from ..shared.ast_visitor import ASTVisitor
from ..shared.nodes import (
    ASTNode, Call, ClassDef, Identifier, IntLit, KeywordLit, MethodDef,
    Operator, ParenExpr, Program, RecordConstruct, RecordPattern, StringLit,
)
from ..utils.config import KEYWORD_PREFIX, STRING_QUOTE_CHAR

_INDENT = "  "


class SourceEmitter(ASTVisitor[str]):
    """Renders nodes in the main dialect's concrete syntax."""

    def visit_program(self, node: Program) -> str:
        return "".join(self.statement(stmt) + "\n" for stmt in node.statements)

    def statement(self, node: ASTNode) -> str:
        """An expression followed by its terminating `.`."""
        return node.accept(self) + "."

    def visit_class_def(self, node: ClassDef) -> str:
        lines: List[str] = [f"class {node.name}"]
        for method in node.methods:
            lines.append(_INDENT + method.accept(self))
        return "\n".join(lines) + "\n"

    def visit_method_def(self, node: MethodDef) -> str:
        parts = ["def"] + [pattern.accept(self) for pattern in node.patterns]
        parts += ["->", self.statement(node.body)]
        return " ".join(parts)

    def visit_int_lit(self, node: IntLit) -> str:
        return str(node.value)

    def visit_string_lit(self, node: StringLit) -> str:
        return f"{STRING_QUOTE_CHAR}{node.value}{STRING_QUOTE_CHAR}"

    def visit_keyword_lit(self, node: KeywordLit) -> str:
        return f"{KEYWORD_PREFIX}{node.name}"

    def visit_identifier(self, node: Identifier) -> str:
        return node.name

    def visit_operator(self, node: Operator) -> str:
        return node.symbol

    def visit_record_construct(self, node: RecordConstruct) -> str:
        fields = ", ".join(f"{name}: {value.accept(self)}" for name, value in node.fields.items())
        return f"{node.class_name}{{{fields}}}"

    def visit_record_pattern(self, node: RecordPattern) -> str:
        return f"{node.class_name}{{{', '.join(node.fields)}}}"

    def visit_paren_expr(self, node: ParenExpr) -> str:
        return f"({node.inner.accept(self)})"

    def visit_call(self, node: Call) -> str:
        # A call chain `a b. c` re-parses left-associatively
        callee = node.callee.accept(self)
        if isinstance(node.callee, Call):
            callee += "."
        return " ".join([callee] + [arg.accept(self) for arg in node.args])


def to_source(node: ASTNode) -> str:
    """Emit an AST (a Program or a single node) as pnt source text."""
    return node.accept(SourceEmitter())
