"""
Tests for run configuration.
"""

from unittest.mock import Mock

import pytest

from arbortest.config import Configuration, default_instantiator
from arbortest.core import Group
from arbortest.exceptions import ConfigurationError, TransformError


class Container:
    pass


class TestConfiguration:
    """Tests for transforms and the instantiator."""

    def test_defaults(self):
        """Test a new configuration has no transforms and the default instantiator."""
        configuration = Configuration()
        assert configuration.tree_transforms == []
        assert configuration.instantiator is default_instantiator
        assert isinstance(configuration.instantiator(Container), Container)

    def test_transforms_applied_in_order(self):
        """Test transforms are chained in registration order."""
        configuration = Configuration()
        configuration.register_tree_transform(lambda root: root.model_copy(update={"name": "first"}))
        configuration.register_tree_transform(lambda root: root.model_copy(update={"name": f"{root.name} then second"}))

        result = configuration.apply_transforms(Group())

        assert result.name == "first then second"

    def test_no_transforms_returns_root(self):
        """Test the root is returned unchanged without transforms."""
        root = Group()
        assert Configuration().apply_transforms(root) is root

    def test_none_transform_rejected(self):
        """Test registering None raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            Configuration().register_tree_transform(None)

    def test_none_instantiator_rejected(self):
        """Test setting a None instantiator raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            Configuration().set_instantiator(None)

    def test_set_instantiator(self):
        """Test a custom instantiator replaces the default."""
        instantiator = Mock()
        configuration = Configuration()
        configuration.set_instantiator(instantiator)
        assert configuration.instantiator is instantiator

    def test_transform_must_return_group(self):
        """Test a transform returning another type raises TransformError."""
        configuration = Configuration()
        configuration.register_tree_transform(lambda root: "not a group")
        with pytest.raises(TransformError, match="str"):
            configuration.apply_transforms(Group())
