"""
Pytest configuration and shared fixtures.

This module provides central pytest configuration, custom markers,
and shared fixtures for the opshell test suite.
"""

import io
import logging
from collections.abc import Generator

import pytest

from opshell.db.interface import QueryResult
from opshell.exceptions import ResourceError
from opshell.log import LogConfig, Logger, LoggerFactory
from opshell.security import reset_masker
from opshell.ui import get_console

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (may use DB, network, filesystem)"
    )
    config.addinivalue_line("markers", "property: Property-based tests (hypothesis)")
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (full system integration)"
    )


def pytest_collection_modifyitems(config, items):
    """Add the 'unit' marker to tests without other markers."""
    for item in items:
        if not any(
            mark.name in ["integration", "e2e"] for mark in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Global State
# =============================================================================


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """
    Reset Python logging global state after each test.

    Topic loggers ("/", "/db", ...) live in the global loggerDict and would
    otherwise leak between tests.
    """
    yield
    for name in list(logging.root.manager.loggerDict.keys()):
        if name.startswith("/"):
            del logging.root.manager.loggerDict[name]


@pytest.fixture(autouse=True)
def reset_secret_masker() -> Generator[None, None, None]:
    """Drop known secrets registered by the previous test."""
    reset_masker()
    yield
    reset_masker()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove opshell variables from the environment so tests start blank."""
    import os

    for name in list(os.environ):
        if name.startswith("OPSHELL_"):
            monkeypatch.delenv(name)


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def log_stream() -> io.StringIO:
    """Stream receiving the root logger's output."""
    return io.StringIO()


@pytest.fixture
def lg(log_stream: io.StringIO) -> Logger:
    """Root logger at TRACE level writing uncoloured lines to log_stream."""
    return LoggerFactory.create_root(
        LogConfig.from_params("trace", colors=False), stream=log_stream
    )


@pytest.fixture
def console():
    """Uncoloured, wide console writing to a StringIO (read with console.file.getvalue())."""
    return get_console(file=io.StringIO(), no_color=True, width=200)


class FakeHandle:
    """In-memory Handle recording statements."""

    def __init__(self, fail_close: bool = False, result: QueryResult | None = None):
        self.fail_close = fail_close
        self.result = result if result is not None else QueryResult(["one"], [(1,)], 1)
        self.statements: list[str] = []
        self.closed = False

    def execute(self, statement: str) -> QueryResult:
        if self.closed:
            raise ResourceError("handle is closed")
        self.statements.append(statement)
        return self.result

    def close(self) -> None:
        self.closed = True
        if self.fail_close:
            raise ResourceError("close failed")


class FakeProvider:
    """ConnectionProvider handing out FakeHandles and recording open calls."""

    def __init__(self) -> None:
        self.opened: list[tuple[str, str, str]] = []
        self.handles: list[FakeHandle] = []
        self.fail_open = False
        self.fail_close = False

    def open(self, url: str, username: str, password: str) -> FakeHandle:
        self.opened.append((url, username, password))
        if self.fail_open:
            raise ResourceError("connection refused")
        handle = FakeHandle(fail_close=self.fail_close)
        self.handles.append(handle)
        return handle


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Connection provider that never touches a real database."""
    return FakeProvider()


class ScriptedPrompter:
    """Prompter answering from a fixed list and recording the prompts shown."""

    def __init__(self, *answers: str | None) -> None:
        self.answers = list(answers)
        self.prompts: list[tuple[str, str | None, bool]] = []

    def __call__(self, message: str, default: str | None, mask: bool) -> str | None:
        self.prompts.append((message, default, mask))
        if not self.answers:
            return default
        return self.answers.pop(0)


@pytest.fixture
def prompter_factory():
    """Build a ScriptedPrompter: prompter_factory("answer1", "answer2")."""
    return ScriptedPrompter
