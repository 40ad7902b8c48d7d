"""
Execution Environment

Scope stack for method bindings. Invoking a method pushes one scope holding
`self` and the pattern bindings; returning pops it. Method bodies are lexically
closed: lookup sees only the innermost scope and the global scope, never the
caller's bindings.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional


class ExecutionEnvironment:
    """
    - enter_scope(): push new scope (method invocation)
    - exit_scope(): pop
    - set_value(name, value): store in current (top) scope
    - get_value(name): lookup in top scope, then global scope
    """
    _scope_stack: List[Dict[str, Any]]

    def __init__(self):
        self._scope_stack = [{}]  # Global scope (top-level)

    def enter_scope(self) -> None:
        """Push a new scope (on method entry)."""
        self._scope_stack.append({})

    def exit_scope(self) -> None:
        """Pop current scope."""
        if len(self._scope_stack) <= 1:
            raise RuntimeError("Cannot exit scope: only the global scope is active")
        self._scope_stack.pop()

    @contextmanager
    def scope(self) -> Iterator[None]:
        """Context manager: enter scope on enter, exit scope on exit (always, including on exception)."""
        self.enter_scope()
        try:
            yield
        finally:
            self.exit_scope()

    def set_value(self, name: str, value: Any) -> None:
        """Store value for name in current (top) scope."""
        self._scope_stack[-1][name] = value

    def has_value(self, name: str) -> bool:
        return name in self._scope_stack[-1] or name in self._scope_stack[0]

    def get_value(self, name: str) -> Optional[Any]:
        """Lookup name in the current scope, then the global scope."""
        current = self._scope_stack[-1]
        if name in current:
            return current[name]
        return self._scope_stack[0].get(name)

    @property
    def depth(self) -> int:
        """Number of active method scopes."""
        return len(self._scope_stack) - 1
