"""
Shared test fixtures and utilities for the arbortest test suite.
"""

from unittest.mock import Mock

import pytest

from arbortest.execution import Runner


@pytest.fixture
def failing():
    """Factory for mock actions that raise when called.

    Usage:
        def test_something(failing):
            hook = failing("Before failed")
    """

    def make(message: str = "failed", error: type[Exception] = RuntimeError) -> Mock:
        return Mock(side_effect=error(message))

    return make


@pytest.fixture
def calls():
    """List that recording actions append their names to, in call order."""
    return []


@pytest.fixture
def recorder(calls):
    """Factory for actions appending a name to the shared `calls` list."""

    def make(name: str):
        return lambda: calls.append(name)

    return make


@pytest.fixture
def run():
    """Run a `TreeBuilder` with a default runner and return the report."""

    def run_builder(tree, **kwargs):
        return Runner().run(tree.build(), **kwargs)

    return run_builder
