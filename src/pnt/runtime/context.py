"""
Program Context

Per-run state shared by the translator and the runtime: the keyword interner,
the operator tags and the class registry. A fresh context is built for every
compilation, so nothing leaks from one run into the next. The registry is only
written during translation; evaluation treats it as read-only.
"""

import logging
from typing import Dict, List, Optional

from .values import Instance, IntValue, KeywordValue, OperatorTag, PntClass, Value, construct
from ..frontend.tokens import OPERATOR_SYMBOLS
from ..shared.errors import PntImplementationError, UnknownClass
from ..shared.source_location import SourceLocation
from ..utils.config import (
    DIALECT_PNT, INT_CLASS_NAME, INT_DTYPE, INT_VALUE_FIELD, KEYWORD_CLASS_NAME,
)

logger = logging.getLogger(__name__)


class KeywordInterner:
    """Insert-if-absent table: one KeywordValue object per name."""

    def __init__(self):
        self._keywords: Dict[str, KeywordValue] = {}

    def intern(self, name: str) -> KeywordValue:
        keyword = self._keywords.get(name)
        if keyword is None:
            keyword = KeywordValue(name)
            self._keywords[name] = keyword
        return keyword

    def __len__(self) -> int:
        return len(self._keywords)


class ClassRegistry:
    """Classes by name, in order of first declaration."""

    def __init__(self):
        self._classes: Dict[str, PntClass] = {}

    def declare(self, name: str, builtin: bool = False) -> PntClass:
        """Return the class named `name`, creating it if needed (re-opening is allowed)."""
        pnt_class = self._classes.get(name)
        if pnt_class is None:
            pnt_class = PntClass(name, builtin=builtin)
            self._classes[name] = pnt_class
            logger.debug(f"Declared class {name}")
        return pnt_class

    def get(self, name: str) -> Optional[PntClass]:
        return self._classes.get(name)

    def lookup(self, name: str, location: Optional[SourceLocation] = None) -> PntClass:
        pnt_class = self._classes.get(name)
        if pnt_class is None:
            raise UnknownClass(name, location)
        return pnt_class

    def __contains__(self, name: str) -> bool:
        return name in self._classes

    @property
    def names(self) -> List[str]:
        return list(self._classes)


class ProgramContext:
    """
    Single owner of all per-run mutable state (Rust naming: like TyCtxt).
    """

    def __init__(self, dialect: str = DIALECT_PNT):
        self.dialect = dialect
        self.keywords = KeywordInterner()
        self.operators: Dict[str, OperatorTag] = {symbol: OperatorTag(symbol) for symbol in OPERATOR_SYMBOLS}
        self.registry = ClassRegistry()

    def keyword(self, name: str) -> KeywordValue:
        return self.keywords.intern(name)

    def operator(self, symbol: str) -> OperatorTag:
        tag = self.operators.get(symbol)
        if tag is None:
            raise PntImplementationError(f"unknown operator symbol {symbol!r}")
        return tag

    def make_int(self, magnitude) -> Instance:
        """Int instance holding `magnitude` (wrapped to i64)."""
        return construct(
            self.registry.lookup(INT_CLASS_NAME),
            {INT_VALUE_FIELD: IntValue(INT_DTYPE(magnitude))},
        )

    def class_of(self, value: Value) -> Optional[PntClass]:
        """Class whose method list serves calls on `value`."""
        if isinstance(value, Instance):
            return value.cls
        if isinstance(value, KeywordValue):
            return self.registry.get(KEYWORD_CLASS_NAME)
        return None
