"""
Executable form produced by the translator.
"""

from .nodes import ExpressionIR, ConstantIR, LocalIR, ConstructIR, CallIR, IRVisitor
