"""
Core arbortest components.

This package provides the immutable tree model and the shared type
definitions used by selection, execution and result aggregation.
"""

from arbortest.core.path_utils import ROOT_DISPLAY_NAME, format_path
from arbortest.core.tree_node import Group, Hook, TestCase, TreeNode
from arbortest.core.types import (
    Action,
    Disposition,
    HookKind,
    NodeAddress,
    OutcomeKind,
    Subject,
    TestPath,
)

__all__ = [
    "ROOT_DISPLAY_NAME",
    "format_path",
    "TreeNode",
    "Group",
    "Hook",
    "TestCase",
    "Action",
    "Disposition",
    "HookKind",
    "NodeAddress",
    "OutcomeKind",
    "Subject",
    "TestPath",
]
