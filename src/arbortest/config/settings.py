"""
Run configuration for arbortest.

Holds the tree transforms applied to the built tree before selection, and the
instantiator used to create test container objects.
"""

import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from arbortest.core.tree_node import Group
from arbortest.exceptions import ConfigurationError, TransformError

logger = logging.getLogger(__name__)

TreeTransform = Callable[[Group], Group]
Instantiator = Callable[[type], Any]


def default_instantiator(container_class: type) -> Any:
    """Create a container by calling its class with no arguments."""
    return container_class()


def _transform_name(transform: TreeTransform) -> str:
    return getattr(transform, "__qualname__", None) or repr(transform)


class Configuration(BaseModel):
    """
    Settings for one runner.

    Params:
        tree_transforms: Callables rewriting the root group, applied in registration order
        instantiator: Callable creating a test container from its class
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    tree_transforms: list[TreeTransform] = Field(default_factory=list)
    instantiator: Instantiator = default_instantiator

    def register_tree_transform(self, transform: TreeTransform) -> None:
        """
        Register a transform called with the root group before the run.

        Params:
            transform: Callable taking and returning a root `Group`

        Raises:
            ConfigurationError: If the transform is None or not callable
        """
        if transform is None or not callable(transform):
            raise ConfigurationError("tree_transforms", "transform must be a callable")
        self.tree_transforms.append(transform)

    def set_instantiator(self, instantiator: Instantiator) -> None:
        """
        Replace the strategy used to instantiate test containers.

        Params:
            instantiator: Callable taking a container class and returning an instance

        Raises:
            ConfigurationError: If the instantiator is None or not callable
        """
        if instantiator is None or not callable(instantiator):
            raise ConfigurationError("instantiator", "instantiator must be a callable")
        self.instantiator = instantiator

    def apply_transforms(self, root: Group) -> Group:
        """
        Run every registered transform over the root group, in order.

        Params:
            root: Built root group

        Returns:
            The root group returned by the last transform

        Raises:
            TransformError: If a transform does not return a `Group`
        """
        for transform in self.tree_transforms:
            name = _transform_name(transform)
            logger.debug("Applying tree transform %s", name)
            transformed = transform(root)
            if not isinstance(transformed, Group):
                raise TransformError(
                    name, f"expected a Group, got {type(transformed).__name__}"
                )
            root = transformed
        return root
