"""
Source Location (Span)

Rust Pattern: rustc_span::Span
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Source location (Rust Span pattern).

    - File, line, column (1-based) plus the character offset into the source
    - Code snippets extracted from source text when needed (not stored here)
    - Immutable (frozen) for hashability
    """
    file: str
    line: int
    column: int
    offset: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        """Format as file:line:column (Rust pattern)"""
        return f"{self.file}:{self.line}:{self.column}"
