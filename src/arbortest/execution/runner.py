"""
Runner facade tying configuration, selection, execution and aggregation together.
"""

import logging
from collections.abc import Iterable
from typing import Protocol

from arbortest.config import Configuration
from arbortest.core.tree_node import Group
from arbortest.exceptions import TreeStructureError
from arbortest.execution.engine import execute
from arbortest.execution.results import OutcomeListener, ResultAggregator, RunReport
from arbortest.structure.builder import TreeBuilder
from arbortest.structure.selection import select

logger = logging.getLogger(__name__)


class TestContainer(Protocol):
    """Object declaring groups, hooks and tests into a builder."""

    __test__ = False

    def define(self, tree: TreeBuilder) -> None: ...


class Runner:
    """Builds and runs test trees under one configuration.

    Params:
        configuration: Transforms and instantiator to use; defaults to an empty configuration
    """

    def __init__(self, configuration: Configuration | None = None):
        self.configuration = configuration or Configuration()

    def load(self, *containers: type) -> Group:
        """
        Instantiate container classes and collect their declarations into one tree.

        Each instance's `define` method receives the shared root builder, in the
        order the classes are given.

        Params:
            containers: Classes whose instances implement `define(tree)`

        Returns:
            The built root group

        Raises:
            TreeStructureError: If an instance has no `define` method
        """
        tree = TreeBuilder()
        for container_class in containers:
            instance = self.configuration.instantiator(container_class)
            define = getattr(instance, "define", None)
            if not callable(define):
                raise TreeStructureError(
                    tree.display_path,
                    f"{container_class.__name__} has no define(tree) method",
                )
            define(tree)
        return tree.build()

    def run(self, root: Group, listeners: Iterable[OutcomeListener] = ()) -> RunReport:
        """
        Transform, select and execute a tree.

        Params:
            root: Built root group
            listeners: Callbacks receiving each outcome as it is produced

        Returns:
            The aggregated report
        """
        root = self.configuration.apply_transforms(root)
        selection = select(root)
        aggregator = ResultAggregator()
        for listener in listeners:
            aggregator.add_listener(listener)
        report = execute(root, selection, aggregator)
        logger.info(
            "Run finished: %d passed, %d failed, %d errored, %d skipped, %d pending",
            report.passed,
            report.failed,
            report.errored,
            report.skipped,
            report.pending,
        )
        return report


def run_tree(root: Group, configuration: Configuration | None = None) -> RunReport:
    """Run a built tree with an optional configuration."""
    return Runner(configuration).run(root)
