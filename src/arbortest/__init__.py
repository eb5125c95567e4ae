"""
arbortest - a behaviour-driven test framework with hierarchical groups and hooks

arbortest runs a tree of named groups, lifecycle hooks and tests, isolating
hook failures to the group that declared the failing hook.
"""

from importlib.metadata import version

from arbortest.config import Configuration
from arbortest.core import Disposition, Group, Hook, HookKind, OutcomeKind, TestCase
from arbortest.execution import Outcome, Runner, RunReport, run_tree
from arbortest.structure import TreeBuilder, select

__version__ = version("arbortest")

__all__ = [
    "__version__",
    "Configuration",
    "Disposition",
    "Group",
    "Hook",
    "HookKind",
    "OutcomeKind",
    "TestCase",
    "Outcome",
    "Runner",
    "RunReport",
    "run_tree",
    "TreeBuilder",
    "select",
]
