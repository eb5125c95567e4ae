"""
arbortest structure components.

This package provides the explicit tree builder and the selection pass
that runs over a built tree before execution.
"""

from arbortest.structure.builder import GroupBuilder, TreeBuilder
from arbortest.structure.selection import Selection, has_focus, select

__all__ = [
    "GroupBuilder",
    "TreeBuilder",
    "Selection",
    "has_focus",
    "select",
]
