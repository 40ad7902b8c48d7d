"""
Prelude

Built-in classes installed into every fresh ProgramContext before user classes
are registered. Built-ins are ordinary method lists whose entries carry native
callables, so user code can re-open them and append methods.
"""

from typing import TYPE_CHECKING, Tuple

import numpy as np

from .context import ProgramContext
from .values import (
    ExactLiteral, IntValue, Method, RecordShape, Value, display,
)
from ..shared.errors import NoMatchingMethod
from ..utils.config import (
    DIALECT_LEGACY, INT_CLASS_NAME, INT_VALUE_FIELD, KEYWORD_CLASS_NAME,
    PLACEHOLDER_BINDING_PREFIX,
)

if TYPE_CHECKING:
    from .runtime import Interpreter


def _int_add(interp: 'Interpreter', receiver: Value, args: Tuple[Value, ...]) -> Value:
    other = args[1]
    left = receiver.properties.get(INT_VALUE_FIELD)
    right = other.properties.get(INT_VALUE_FIELD)
    if not isinstance(left, IntValue) or not isinstance(right, IntValue):
        raise NoMatchingMethod(
            receiver, args,
            f"`+` needs integer magnitudes, got {display(receiver)} + {display(other)}",
        )
    # i64 arithmetic wraps like the machine type
    with np.errstate(over="ignore"):
        total = left.value + right.value
    return interp.context.make_int(total)


def _keyword_len(interp: 'Interpreter', receiver: Value, args: Tuple[Value, ...]) -> Value:
    return interp.context.make_int(len(receiver.name))


def _keyword_log(interp: 'Interpreter', receiver: Value, args: Tuple[Value, ...]) -> Value:
    interp.output.write(display(receiver) + "\n")
    return receiver


def _placeholder(index: int) -> str:
    return f"{PLACEHOLDER_BINDING_PREFIX}{index}"


def install_prelude(context: ProgramContext) -> None:
    """Register the built-in classes for the context's dialect."""
    int_class = context.registry.declare(INT_CLASS_NAME, builtin=True)
    int_class.methods.append(Method(
        patterns=(ExactLiteral(context.operator("+")), RecordShape(INT_CLASS_NAME, (INT_VALUE_FIELD,))),
        bindings=(_placeholder(0), "other"),
        native=_int_add,
    ))

    if context.dialect == DIALECT_LEGACY:
        keyword_class = context.registry.declare(KEYWORD_CLASS_NAME, builtin=True)
        for name, native in (("len", _keyword_len), ("log", _keyword_log)):
            keyword_class.methods.append(Method(
                patterns=(ExactLiteral(context.keyword(name)),),
                bindings=(_placeholder(0),),
                native=native,
            ))


def new_context(dialect: str) -> ProgramContext:
    """Fresh per-run context with the prelude installed."""
    context = ProgramContext(dialect)
    install_prelude(context)
    return context
