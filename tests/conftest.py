"""
Pytest configuration and shared fixtures for all pnt tests.

The compiler driver is stateless between compilations (every compile builds a
fresh ProgramContext), so one instance is shared by the whole session.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from pnt.compiler.driver import CompilerDriver
from pnt.runtime.prelude import new_context
from pnt.runtime.runtime import PntRuntime
from pnt.utils.config import DIALECT_LEGACY, DIALECT_PNT


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def session_compiler():
    """
    Session-scoped compiler shared across ALL tests.

    The legacy Lark parser is built once, on first use, with Lark native caching.
    """
    return CompilerDriver()


# =============================================================================
# Function-scoped fixtures
# =============================================================================

@pytest.fixture
def compiler(session_compiler):
    return session_compiler


@pytest.fixture
def runtime():
    """Fresh runtime per test."""
    return PntRuntime()


@pytest.fixture
def context():
    """Fresh main-dialect context with the prelude installed."""
    return new_context(DIALECT_PNT)


@pytest.fixture
def legacy_context():
    return new_context(DIALECT_LEGACY)


@pytest.fixture(autouse=True)
def plain_diagnostics(monkeypatch):
    """Render diagnostics without ANSI colour so messages can be asserted on."""
    monkeypatch.setenv("NO_COLOR", "1")


def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
