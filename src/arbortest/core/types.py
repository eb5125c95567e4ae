"""
Core type definitions for the arbortest framework.

This module contains the enums and type aliases shared by the tree model,
the selection pass, the execution engine and the result aggregator.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

Action = Callable[[], Any]

# Child indices from the root group down to a node
NodeAddress = tuple[int, ...]

# Group names (root excluded) followed by the test name
TestPath = tuple[str, ...]


class Disposition(Enum):
    """Selection marker carried by groups and tests."""

    NORMAL = "normal"
    EXCLUDED = "excluded"
    FOCUSED = "focused"


class HookKind(Enum):
    """Lifecycle hook kinds, valued by their declaration keyword."""

    GROUP_SETUP = "before"
    GROUP_TEARDOWN = "after"
    EACH_SETUP = "beforeEach"
    EACH_TEARDOWN = "afterEach"


class OutcomeKind(Enum):
    """Terminal classification of an attempted test, group or hook."""

    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"
    SKIPPED = "skipped"
    PENDING = "pending"


class Subject(Enum):
    """What an outcome record is about."""

    TEST = "test"
    GROUP = "group"  # group setup failure shared by every descendant
    HOOK = "hook"  # teardown failure attributed to the hook alone
