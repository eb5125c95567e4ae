"""
arbortest exception classes.

This package provides all exception types raised by arbortest for
consistent error handling and reporting.
"""

from arbortest.exceptions.core import (
    ArbortestError,
    ConfigurationError,
    RunAbortedError,
    TransformError,
    TreeStructureError,
)

__all__ = [
    "ArbortestError",
    "ConfigurationError",
    "RunAbortedError",
    "TransformError",
    "TreeStructureError",
]
