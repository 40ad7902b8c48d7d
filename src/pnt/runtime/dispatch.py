"""
Dispatch

Structural method selection. A call never looks a method up by name: the
receiver's class method list is scanned in declaration order and the first
method whose patterns all match the arguments is chosen.
"""

from typing import Optional, Sequence

from .values import (
    AnyIdentifier, ExactLiteral, Instance, KeywordValue, Method, OperatorTag,
    Pattern, PntClass, RecordShape, Value,
)
from ..shared.errors import PntImplementationError


def match_pattern(pattern: Pattern, arg: Value) -> bool:
    """Decide whether one positional pattern accepts one argument."""
    if isinstance(pattern, AnyIdentifier):
        return True
    if isinstance(pattern, ExactLiteral):
        expected = pattern.value
        if isinstance(expected, (KeywordValue, OperatorTag)):
            return expected is arg
        return expected == arg
    if isinstance(pattern, RecordShape):
        return (
            isinstance(arg, Instance)
            and arg.class_name == pattern.class_name
            and all(name in arg.properties for name in pattern.required_fields)
        )
    raise PntImplementationError(f"unknown pattern variant {type(pattern).__name__}")


def method_matches(method: Method, args: Sequence[Value]) -> bool:
    return method.arity == len(args) and all(
        match_pattern(pattern, arg) for pattern, arg in zip(method.patterns, args)
    )


def select_method(pnt_class: Optional[PntClass], args: Sequence[Value]) -> Optional[Method]:
    """First method of the class, in declaration order, matching the arguments."""
    if pnt_class is None:
        return None
    for method in pnt_class.methods:
        if method_matches(method, args):
            return method
    return None


def keyword_shortcut(receiver: Value, args: Sequence[Value]) -> Optional[Value]:
    """
    Keyword-as-getter sugar: `obj :name` returns property `name` of an
    instance that has it, without consulting the method list.
    """
    if len(args) != 1 or not isinstance(args[0], KeywordValue):
        return None
    if not isinstance(receiver, Instance):
        return None
    return receiver.properties.get(args[0].name)
