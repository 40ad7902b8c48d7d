"""
Runtime

Tree-walking evaluation of the translated program. Calls go through
call_method, which applies the keyword shortcut and then structural dispatch
over the receiver's class method list.
"""

import logging
import sys
from typing import TYPE_CHECKING, Optional, Sequence, TextIO

from .dispatch import keyword_shortcut, select_method
from .environment import ExecutionEnvironment
from .values import Method, Value, construct, display
from ..ir.nodes import CallIR, ConstantIR, ConstructIR, ExpressionIR, IRVisitor, LocalIR
from ..shared.errors import NoMatchingMethod, PntSourceError, RecursionLimitExceeded, UnboundIdentifier
from ..shared.source_location import SourceLocation
from ..utils.config import SELF_BINDING

if TYPE_CHECKING:
    from ..compiler.driver import CompilationResult
    from ..passes.translate import TranslatedProgram
    from .context import ProgramContext

logger = logging.getLogger("pnt.runtime.runtime")


class Interpreter(IRVisitor[Value]):
    """Evaluates IR expressions against one ProgramContext."""

    def __init__(self, context: 'ProgramContext', output: Optional[TextIO] = None):
        self.context = context
        self.env = ExecutionEnvironment()
        self.output = output if output is not None else sys.stdout

    def evaluate(self, expr: ExpressionIR) -> Value:
        return expr.accept(self)

    def run(self, program: 'TranslatedProgram') -> Optional[Value]:
        """Evaluate top-level expressions in order; the last one's value is the result."""
        result: Optional[Value] = None
        for expr in program.expressions:
            result = self.evaluate(expr)
        return result

    def visit_constant(self, node: ConstantIR) -> Value:
        return node.value

    def visit_local(self, node: LocalIR) -> Value:
        if not self.env.has_value(node.name):
            raise UnboundIdentifier(node.name, node.location)
        return self.env.get_value(node.name)

    def visit_construct(self, node: ConstructIR) -> Value:
        properties = {name: self.evaluate(expr) for name, expr in node.fields.items()}
        return construct(node.pnt_class, properties)

    def visit_call(self, node: CallIR) -> Value:
        receiver = self.evaluate(node.receiver)
        args = [self.evaluate(arg) for arg in node.arguments]
        return self.call_method(receiver, args, node.location)

    def call_method(self, receiver: Value, args: Sequence[Value],
                    location: Optional[SourceLocation] = None) -> Value:
        """
        callMethod(receiver, args...).

        1. Keyword shortcut: a single keyword naming a property of the receiver
        2. First method of the receiver's class whose patterns match
        3. Otherwise NoMatchingMethod

        Exhausting the host stack inside a method body is reported as
        RecursionLimitExceeded at this call site.
        """
        shortcut = keyword_shortcut(receiver, args)
        if shortcut is not None:
            return shortcut

        pnt_class = self.context.class_of(receiver)
        method = select_method(pnt_class, args)
        if method is None:
            rendered = " ".join(display(arg) for arg in args)
            raise NoMatchingMethod(
                receiver, args,
                f"no method matches `{display(receiver)} {rendered}`",
                location,
            )
        logger.debug(f"Dispatching to {pnt_class.name} method with {method.arity} patterns")
        try:
            return self.invoke(method, receiver, args, location)
        except RecursionError:
            raise RecursionLimitExceeded(location) from None

    def invoke(self, method: Method, receiver: Value, args: Sequence[Value],
               location: Optional[SourceLocation] = None) -> Value:
        if method.native is not None:
            try:
                return method.native(self, receiver, tuple(args))
            except PntSourceError as e:
                # natives have no source position of their own
                if e.location is None:
                    e.location = location
                raise
        with self.env.scope():
            self.env.set_value(SELF_BINDING, receiver)
            for name, arg in zip(method.bindings, args):
                self.env.set_value(name, arg)
            return self.evaluate(method.body)


class ExecutionResult:
    """
    Execution result.

    Either `value` holds the last top-level expression's value (None if the
    program had none) or `error` holds the single error that aborted the run.
    """
    def __init__(
        self,
        value: Optional[Value] = None,
        error: Optional[Exception] = None
    ):
        self.value = value
        self.error = error

    @property
    def success(self) -> bool:
        """Whether execution succeeded (no error)"""
        return self.error is None

    @property
    def errors(self) -> list:
        if self.error:
            return [str(self.error)]
        return []


class PntRuntime:
    """
    Thin runtime layer: builds an Interpreter per execution and converts
    source errors into an ExecutionResult.
    """

    def __init__(self, output: Optional[TextIO] = None):
        self.output = output

    def execute(self, compilation_result: 'CompilationResult') -> ExecutionResult:
        if not compilation_result.success:
            return ExecutionResult(error=compilation_result.error or RuntimeError("Compilation failed"))

        program = compilation_result.program
        if program is None:
            return ExecutionResult(error=RuntimeError("No program in compilation result"))

        interpreter = Interpreter(program.context, output=self.output)
        try:
            value = interpreter.run(program)
        except PntSourceError as e:
            if e.source_code is None:
                e.source_code = compilation_result.source
            logger.debug(f"Execution failed: {e.message}")
            return ExecutionResult(error=e)
        return ExecutionResult(value=value)
