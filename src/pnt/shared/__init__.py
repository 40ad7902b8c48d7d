"""
Shared components: AST nodes, source locations and errors.
"""

from .source_location import SourceLocation
from .errors import (
    Error, ErrorReporter, PntError, PntSourceError, PntImplementationError,
    LexError, ParseError, TranslationError, UnknownClass, UnboundIdentifier, NoMatchingMethod,
    RecursionLimitExceeded,
)
from .nodes import (
    ASTNode, Expression, Program, NodeType,
    ClassDef, MethodDef, IntLit, StringLit, KeywordLit, Identifier, Operator,
    RecordConstruct, RecordPattern, ParenExpr, Call,
)
from .ast_visitor import ASTVisitor
