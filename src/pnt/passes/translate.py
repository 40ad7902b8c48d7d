"""
AST to IR Translation

Rust Pattern: rustc_hir::lowering

Registers classes and methods into the context's class registry, translates
method patterns into Pattern variants, and lowers every expression into the IR
instruction tree evaluated by the runtime.

Design Pattern: Visitor pattern for AST traversal
"""

import logging
from dataclasses import dataclass, field
from typing import List, Set, Tuple

from ..ir.nodes import CallIR, ConstantIR, ConstructIR, ExpressionIR, LocalIR
from ..runtime.context import ProgramContext
from ..runtime.values import (
    ANY, ExactLiteral, IntValue, Method, Pattern, RecordShape, StringValue,
)
from ..shared.ast_visitor import ASTVisitor
from ..shared.errors import TranslationError
from ..shared.nodes import (
    Call, ClassDef, Expression, Identifier, IntLit, KeywordLit, MethodDef,
    Operator, ParenExpr, Program, RecordConstruct, RecordPattern, StringLit,
)
from ..utils.config import (
    INT_CLASS_NAME, INT_DTYPE, INT_MAX, INT_MIN, INT_VALUE_FIELD,
    KEYWORD_BINDING_PREFIX, PLACEHOLDER_BINDING_PREFIX, SELF_BINDING,
)

logger = logging.getLogger(__name__)


@dataclass
class TranslatedProgram:
    """Executable form: the populated context plus top-level expressions in program order."""
    context: ProgramContext
    expressions: List[ExpressionIR] = field(default_factory=list)


class ExpressionLowering(ASTVisitor[ExpressionIR]):
    """Lowers expression-position AST nodes to IR."""

    def __init__(self, context: ProgramContext):
        self.context = context

    def lower(self, node: Expression) -> ExpressionIR:
        return node.accept(self)

    def visit_program(self, node: Program) -> ExpressionIR:
        raise TranslationError("a program cannot appear in expression position", node.location)

    def visit_class_def(self, node: ClassDef) -> ExpressionIR:
        raise TranslationError(
            f"class `{node.name}` must be defined at the top level",
            node.location,
            label="nested class definition",
        )

    def visit_method_def(self, node: MethodDef) -> ExpressionIR:
        raise TranslationError(
            "`def` is only allowed inside a class body",
            node.location,
            label="method definition outside a class",
        )

    def visit_record_pattern(self, node: RecordPattern) -> ExpressionIR:
        raise TranslationError(
            f"record pattern `{node.class_name}{{...}}` outside a method pattern",
            node.location,
        )

    def visit_int_lit(self, node: IntLit) -> ExpressionIR:
        magnitude = ConstantIR(int_value(node), node.location)
        int_class = self.context.registry.lookup(INT_CLASS_NAME, node.location)
        return ConstructIR(int_class, {INT_VALUE_FIELD: magnitude}, node.location)

    def visit_string_lit(self, node: StringLit) -> ExpressionIR:
        return ConstantIR(StringValue(node.value), node.location)

    def visit_keyword_lit(self, node: KeywordLit) -> ExpressionIR:
        return ConstantIR(self.context.keyword(node.name), node.location)

    def visit_identifier(self, node: Identifier) -> ExpressionIR:
        return LocalIR(node.name, node.location)

    def visit_operator(self, node: Operator) -> ExpressionIR:
        return ConstantIR(self.context.operator(node.symbol), node.location)

    def visit_record_construct(self, node: RecordConstruct) -> ExpressionIR:
        pnt_class = self.context.registry.lookup(node.class_name, node.location)
        fields = {name: self.lower(value) for name, value in node.fields.items()}
        return ConstructIR(pnt_class, fields, node.location)

    def visit_paren_expr(self, node: ParenExpr) -> ExpressionIR:
        return self.lower(node.inner)

    def visit_call(self, node: Call) -> ExpressionIR:
        receiver = self.lower(node.callee)
        return CallIR(receiver, [self.lower(arg) for arg in node.args], node.location)


def int_value(node: IntLit) -> IntValue:
    if not INT_MIN <= node.value <= INT_MAX:
        raise TranslationError(
            f"integer literal {node.value} does not fit in 64 bits",
            node.location,
            label="out of range",
        )
    return IntValue(INT_DTYPE(node.value))


class Translator:
    """
    Translation pass (Rust naming: rustc_hir::lowering).

    Phases:
    1. Pre-declare every top-level class name (forward references, re-opening)
    2. Append each ClassDef's methods to its class, in source order
    3. Lower top-level expressions, in program order
    """

    def __init__(self, context: ProgramContext):
        self.context = context
        self.lowering = ExpressionLowering(context)

    def translate(self, program: Program) -> TranslatedProgram:
        classes = program.classes
        for class_def in classes:
            self.context.registry.declare(class_def.name)

        for class_def in classes:
            pnt_class = self.context.registry.lookup(class_def.name, class_def.location)
            for method_def in class_def.methods:
                pnt_class.methods.append(self.translate_method(method_def))
            logger.debug(f"Registered {len(class_def.methods)} methods on {class_def.name}")

        result = TranslatedProgram(self.context)
        for node in program.statements:
            if isinstance(node, ClassDef):
                continue
            result.expressions.append(self.lowering.lower(node))
        logger.debug(
            f"Translated {len(classes)} class blocks and {len(result.expressions)} top-level expressions"
        )
        return result

    def translate_method(self, node: MethodDef) -> Method:
        patterns = tuple(self.translate_pattern(pattern) for pattern in node.patterns)
        bindings = self.binding_names(node)
        body = self.lowering.lower(node.body)
        return Method(patterns=patterns, bindings=bindings, body=body, location=node.location)

    def translate_pattern(self, node: Expression) -> Pattern:
        """Literal patterns match exactly, identifiers match anything, record patterns match shape."""
        if isinstance(node, StringLit):
            return ExactLiteral(StringValue(node.value))
        if isinstance(node, KeywordLit):
            return ExactLiteral(self.context.keyword(node.name))
        if isinstance(node, Operator):
            return ExactLiteral(self.context.operator(node.symbol))
        if isinstance(node, IntLit):
            return ExactLiteral(self.context.make_int(int_value(node).value))
        if isinstance(node, Identifier):
            return ANY
        if isinstance(node, RecordPattern):
            self.context.registry.lookup(node.class_name, node.location)
            return RecordShape(node.class_name, tuple(node.fields))
        raise TranslationError(
            f"unsupported pattern: {node.node_type.value}",
            node.location,
            label="not a literal, identifier or record pattern",
        )

    def binding_names(self, node: MethodDef) -> Tuple[str, ...]:
        """One distinct local name per positional pattern."""
        names: List[str] = []
        taken: Set[str] = {SELF_BINDING}
        for index, pattern in enumerate(node.patterns):
            if isinstance(pattern, Identifier):
                if pattern.name in taken:
                    raise TranslationError(
                        f"identifier `{pattern.name}` is bound more than once in this method",
                        pattern.location,
                        label="duplicate binding",
                    )
                name = pattern.name
            elif isinstance(pattern, KeywordLit) and KEYWORD_BINDING_PREFIX + pattern.name not in taken:
                name = KEYWORD_BINDING_PREFIX + pattern.name
            else:
                name = f"{PLACEHOLDER_BINDING_PREFIX}{index}"
            names.append(name)
            taken.add(name)
        return tuple(names)


def translate(program: Program, context: ProgramContext) -> TranslatedProgram:
    """Translate a parsed program into its executable form within `context`."""
    return Translator(context).translate(program)
