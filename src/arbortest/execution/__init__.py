"""
arbortest execution components.

This package provides action invocation, the tree execution engine,
result aggregation and the runner facade.
"""

from arbortest.execution.actions import (
    ActionResult,
    AssertionFailure,
    FailureDetail,
    Passed,
    UnexpectedFault,
    invoke,
)
from arbortest.execution.engine import TreeExecutor, execute
from arbortest.execution.results import (
    Outcome,
    OutcomeListener,
    ResultAggregator,
    RunReport,
)
from arbortest.execution.runner import Runner, TestContainer, run_tree

__all__ = [
    "ActionResult",
    "AssertionFailure",
    "FailureDetail",
    "Passed",
    "UnexpectedFault",
    "invoke",
    "TreeExecutor",
    "execute",
    "Outcome",
    "OutcomeListener",
    "ResultAggregator",
    "RunReport",
    "Runner",
    "TestContainer",
    "run_tree",
]
