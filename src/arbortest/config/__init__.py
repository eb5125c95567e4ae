"""
arbortest run configuration.
"""

from arbortest.config.settings import (
    Configuration,
    Instantiator,
    TreeTransform,
    default_instantiator,
)

__all__ = [
    "Configuration",
    "Instantiator",
    "TreeTransform",
    "default_instantiator",
]
