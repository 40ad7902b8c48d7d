"""
Error Reporting

Rust Pattern: rustc_errors::Diagnostic

Every stage of the pipeline fails with exactly one PntSourceError subclass;
nothing is retried or recovered. The driver collects the failure into an
ErrorReporter, which renders rustc-style diagnostics.
"""

import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .source_location import SourceLocation
from ..utils.config import COLOR_ENV_VAR, ERROR_POINTER_CHAR, NO_COLOR_ENV_VAR


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get(NO_COLOR_ENV_VAR):
        return False
    explicit = os.environ.get(COLOR_ENV_VAR, "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ---------------------------------------------------------------------------
# Error dataclass
# ---------------------------------------------------------------------------

@dataclass
class Error:
    """
    Compiler or runtime error.

    Rust Pattern: rustc_errors::Diagnostic
    """
    message: str
    location: Optional[SourceLocation]
    code: Optional[str] = None
    help: Optional[str] = None
    note: Optional[str] = None
    label: Optional[str] = None


# ---------------------------------------------------------------------------
# Formatting engine
# ---------------------------------------------------------------------------

def _format_diagnostic(
    error: Error,
    source_files: Dict[str, str],
    color: bool = False,
) -> str:
    """
    Render a single diagnostic in rustc style.

    Example output (plain, no color)::

        error[E0006]: no method of Point matches (:z)
         --> main.pnt:4:19
          |
        4 | Point{x: 1, y: 2} :z.
          |                   ^^ no matching method
    """
    out: List[str] = []

    code_str = f"[{error.code}]" if error.code else ""
    out.append(
        _style(f"error{code_str}", _BOLD, _RED, color=color)
        + _style(f": {error.message}", _BOLD, color=color)
    )

    if error.location is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + "<unknown location>")
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    loc = error.location
    source = source_files.get(loc.file)
    if source is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + str(loc))
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    src_lines = source.split("\n")
    gw = max(len(str(loc.line)), 1)

    out.append(_style(" " * gw + "--> ", _BOLD, _BLUE, color=color) + str(loc))
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))

    idx = loc.line - 1
    code_line = src_lines[idx] if 0 <= idx < len(src_lines) else ""
    out.append(_style(str(loc.line).rjust(gw) + " | ", _BOLD, _BLUE, color=color) + code_line)

    col_start = max(loc.column, 1) - 1
    if loc.end_column > loc.column:
        span_len = loc.end_column - loc.column
    else:
        span_len = _guess_span(code_line, col_start)
    carets = " " * col_start + ERROR_POINTER_CHAR * max(1, span_len)
    label_suffix = f" {error.label}" if error.label else ""
    out.append(
        _style(" " * (gw + 1) + "| ", _BOLD, _BLUE, color=color)
        + _style(carets + label_suffix, _BOLD, _RED, color=color)
    )

    _append_annotations(out, error, gw, color)
    return "\n".join(out)


def _guess_span(code_line: str, col_start: int) -> int:
    """Guess token length when end_column is unavailable."""
    if col_start >= len(code_line):
        return 1
    length = 0
    for ch in code_line[col_start:]:
        if ch in (" ", "\t", ".", ",", ")", "}"):
            break
        length += 1
    return max(1, length)


def _append_annotations(
    out: List[str],
    error: Error,
    gw: int,
    color: bool,
) -> None:
    if not (error.help or error.note):
        return
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))
    pad = " " * (gw + 1)
    if error.help:
        out.append(
            _style(f"{pad}= ", _BOLD, _CYAN, color=color)
            + _style("help: ", _BOLD, color=color)
            + error.help
        )
    if error.note:
        out.append(
            _style(f"{pad}= ", _BOLD, _CYAN, color=color)
            + _style("note: ", _BOLD, color=color)
            + error.note
        )


# ---------------------------------------------------------------------------
# ErrorReporter
# ---------------------------------------------------------------------------

class ErrorReporter:
    """
    Error reporter with Rust-style formatting.

    Rust Pattern: rustc_errors::Emitter
    """

    def __init__(self, source_files: Dict[str, str]):
        self.source_files = source_files
        self.errors: List[Error] = []

    def report_error(
        self,
        message: str,
        location: Optional[SourceLocation],
        code: Optional[str] = None,
        help: Optional[str] = None,
        note: Optional[str] = None,
        label: Optional[str] = None,
    ) -> None:
        self.errors.append(Error(
            message=message,
            location=location,
            code=code,
            help=help,
            note=note,
            label=label,
        ))

    def report_exception(self, exc: "PntSourceError") -> None:
        """Record a raised pipeline error."""
        self.report_error(
            exc.message,
            exc.location,
            code=exc.error_code,
            help=exc.help_text,
            note=exc.note_text,
            label=exc.label_text,
        )

    def format_error(self, error: Error, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return _format_diagnostic(error, self.source_files, color=use_color)

    def format_all_errors(self, color: Optional[bool] = None) -> str:
        parts = [self.format_error(e, color=color) for e in self.errors]
        use_color = color if color is not None else _use_color()
        count = len(self.errors)
        summary = f"aborting due to {count} previous error{'s' if count != 1 else ''}"
        parts.append(
            _style("error", _BOLD, _RED, color=use_color)
            + _style(f": {summary}", _BOLD, color=use_color)
        )
        return "\n\n".join(parts)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def print_errors(self) -> None:
        sys.stderr.write(self.format_all_errors() + "\n")


# ============================================================================
# Exception Classes
# ============================================================================

class PntError(Exception):
    """Base exception for all pnt errors"""
    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self):
        if self.location:
            return f"{self.message}\n --> {self.location}"
        return self.message


class PntSourceError(PntError):
    """
    Error in pnt source code with rich Rust-style formatting.

    Subclasses fix the error code; source_code is attached by the driver so
    the rendered diagnostic can quote the offending line.
    """
    error_code = "E0000"

    def __init__(self,
                 message: str,
                 location: Optional[SourceLocation] = None,
                 source_code: Optional[str] = None,
                 help: Optional[str] = None,
                 note: Optional[str] = None,
                 label: Optional[str] = None):
        super().__init__(message, location)
        self.source_code = source_code
        self.help_text = help
        self.note_text = note
        self.label_text = label

    def to_error(self) -> Error:
        return Error(
            message=self.message,
            location=self.location,
            code=self.error_code,
            help=self.help_text,
            note=self.note_text,
            label=self.label_text,
        )

    def render(self, color: bool = False) -> str:
        source_files: Dict[str, str] = {}
        if self.source_code is not None and self.location:
            source_files[self.location.file] = self.source_code
        return _format_diagnostic(self.to_error(), source_files, color=color)

    def __str__(self):
        return self.render(color=_use_color())


class LexError(PntSourceError):
    """No token rule matches the input at a position."""
    error_code = "E0001"


class ParseError(PntSourceError):
    """An expected token kind was not found."""
    error_code = "E0002"

    def __init__(self,
                 expected: Sequence[str],
                 found: Optional[str],
                 location: Optional[SourceLocation] = None,
                 message: Optional[str] = None):
        self.expected = tuple(expected)
        self.found = found
        if message is None:
            wanted = " or ".join(f"`{kind}`" for kind in self.expected)
            got = f"`{found}`" if found is not None else "end of input"
            message = f"expected {wanted}, found {got}"
        super().__init__(message, location, label=f"expected {' or '.join(self.expected)}")


class TranslationError(PntSourceError):
    """AST node of a shape the translator cannot handle."""
    error_code = "E0003"


class UnknownClass(PntSourceError):
    """Record construction or pattern names an undeclared class."""
    error_code = "E0004"

    def __init__(self, class_name: str, location: Optional[SourceLocation] = None):
        self.class_name = class_name
        super().__init__(
            f"cannot find class `{class_name}` in this program",
            location,
            label="not declared",
            help=f"declare it with `class {class_name} ... .`",
        )


class UnboundIdentifier(PntSourceError):
    """Identifier with no binding in the current method scope."""
    error_code = "E0005"

    def __init__(self, name: str, location: Optional[SourceLocation] = None):
        self.name = name
        super().__init__(f"cannot find value `{name}` in this scope", location, label="not bound")


class NoMatchingMethod(PntSourceError):
    """No method of the receiver's class matches the call arguments."""
    error_code = "E0006"

    def __init__(self,
                 receiver: Any,
                 args: Sequence[Any],
                 message: str,
                 location: Optional[SourceLocation] = None):
        self.receiver = receiver
        self.args = tuple(args)
        super().__init__(message, location, label="no matching method")


class RecursionLimitExceeded(PntSourceError):
    """Method calls nested deeper than the host interpreter's stack allows."""
    error_code = "E0007"

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(
            "recursion limit exceeded",
            location,
            label="called here",
            help="check that every recursive method has a case that stops calling itself",
        )


class PntImplementationError(Exception):
    """
    Error in Python implementation code (not user's pnt code).

    Never use this for errors in user's pnt code - use PntSourceError instead.
    """
    def __init__(self, message: str, error_code: str = "E9999"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self):
        return f"[{self.error_code}] {self.message}"
