"""
Shared pytest configuration for modeshell tests.

This file provides shared fixtures and configuration for all test modules.
"""

import functools
import io

import pytest

from modeshell.backends.stream import StreamBackend
from modeshell.config.models import ShellConfig
from modeshell.shell.dispatcher import Dispatcher


@pytest.fixture
def shell_config():
    """Provide an in-memory configuration without history files or colors."""
    return ShellConfig(
        app={"name": "testshell"},
        history={"size": 50},
        prompt={"text": "$ ", "color": None},
    )


@pytest.fixture
def stream_factory():
    """Provide a backend factory reading from the given text.

    All modes created with the same factory share one input stream, like
    modes of a real shell share the terminal.
    """
    def make(text: str = "", output=None):
        return functools.partial(StreamBackend, stream=io.StringIO(text), output=output)
    return make


@pytest.fixture
def make_dispatcher(shell_config, stream_factory):
    """Provide a factory for dispatchers fed from a string."""
    def make(text: str = "", config=None, output=None):
        return Dispatcher(config or shell_config, stream_factory(text, output))
    return make


@pytest.fixture
def dispatcher(make_dispatcher):
    """Provide a dispatcher with a ``main`` mode on the stack."""
    shell = make_dispatcher()
    shell.mode_add("main", "> ")
    shell.mode_push("main")
    return shell


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
