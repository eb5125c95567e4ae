"""
Explicit builder for arbortest trees.

Declarations are made through builder objects passed to the caller rather than
through an ambient "current group". Each nested block is a context manager that
yields its own builder; leaving the block closes it for further declarations.

    tree = TreeBuilder()
    with tree.describe("a stack") as stack:
        stack.before_each(reset_stack)
        stack.it("starts empty", check_empty)
        with stack.when("pushed") as pushed:
            pushed.it("is not empty", check_not_empty)
    root = tree.build()
"""

from collections.abc import Iterator
from contextlib import AbstractContextManager as ContextManager, contextmanager
from typing import Union

from arbortest.core.path_utils import format_path
from arbortest.core.tree_node import Group, Hook, TestCase
from arbortest.core.types import Action, Disposition, HookKind
from arbortest.exceptions import TreeStructureError


class GroupBuilder:
    """Collects the hooks, tests and nested groups of one group in declaration order."""

    def __init__(
        self,
        name: str | None = None,
        disposition: Disposition = Disposition.NORMAL,
        parent_names: tuple[str, ...] = (),
    ):
        self._name = name
        self._disposition = disposition
        self._names = parent_names if name is None else (*parent_names, name)
        self._hooks: list[Hook] = []
        self._children: list[Union["GroupBuilder", TestCase]] = []
        self._closed = False

    @property
    def display_path(self) -> str:
        return format_path(self._names)

    def _check_open(self) -> None:
        if self._closed:
            raise TreeStructureError(
                self.display_path, "block is closed to further declarations"
            )

    def _check_name(self, name: str, what: str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise TreeStructureError(self.display_path, f"{what} name must not be empty")

    def _check_action(self, action: Action | None, what: str) -> None:
        if action is not None and not callable(action):
            raise TreeStructureError(
                self.display_path, f"{what} action must be callable, got {action!r}"
            )

    @contextmanager
    def describe(
        self, name: str, disposition: Disposition = Disposition.NORMAL
    ) -> Iterator["GroupBuilder"]:
        """
        Declare a nested group.

        Params:
            name: Group name, shown in test paths
            disposition: Selection marker for the whole group

        Returns:
            Context manager yielding the nested group's builder
        """
        self._check_open()
        self._check_name(name, "group")
        child = GroupBuilder(name, disposition, self._names)
        self._children.append(child)
        try:
            yield child
        finally:
            child._closed = True

    # "when" reads better for nested conditions; semantics are identical
    when = describe

    def describe_only(self, name: str) -> ContextManager["GroupBuilder"]:
        """Declare a nested group that is focused as a whole."""
        return self.describe(name, Disposition.FOCUSED)

    def describe_skip(self, name: str) -> ContextManager["GroupBuilder"]:
        """Declare a nested group that is excluded as a whole."""
        return self.describe(name, Disposition.EXCLUDED)

    def _add_hook(self, kind: HookKind, action: Action, label: str | None) -> "GroupBuilder":
        self._check_open()
        if action is None:
            raise TreeStructureError(self.display_path, f"{kind.value} hook needs an action")
        self._check_action(action, f"{kind.value} hook")
        self._hooks.append(Hook(kind=kind, action=action, label=label))
        return self

    def before(self, action: Action, label: str | None = None) -> "GroupBuilder":
        """Run once before any test of this group."""
        return self._add_hook(HookKind.GROUP_SETUP, action, label)

    def after(self, action: Action, label: str | None = None) -> "GroupBuilder":
        """Run once after every test of this group."""
        return self._add_hook(HookKind.GROUP_TEARDOWN, action, label)

    def before_each(self, action: Action, label: str | None = None) -> "GroupBuilder":
        """Run before each test of this group and of its nested groups."""
        return self._add_hook(HookKind.EACH_SETUP, action, label)

    def after_each(self, action: Action, label: str | None = None) -> "GroupBuilder":
        """Run after each test of this group and of its nested groups."""
        return self._add_hook(HookKind.EACH_TEARDOWN, action, label)

    def it(
        self,
        name: str,
        action: Action | None = None,
        disposition: Disposition = Disposition.NORMAL,
    ) -> "GroupBuilder":
        """
        Declare a test. Omitting the action declares a pending test.

        Params:
            name: Test name
            action: Zero-argument callable holding the test body
            disposition: Selection marker for this test
        """
        self._check_open()
        self._check_name(name, "test")
        self._check_action(action, "test")
        self._children.append(TestCase(name=name, action=action, disposition=disposition))
        return self

    def only(self, name: str, action: Action | None = None) -> "GroupBuilder":
        return self.it(name, action, Disposition.FOCUSED)

    def skip(self, name: str, action: Action | None = None) -> "GroupBuilder":
        return self.it(name, action, Disposition.EXCLUDED)

    def build(self) -> Group:
        """
        Produce the frozen group snapshot for this builder and its nested blocks.

        Returns:
            Immutable `Group`
        """
        children = tuple(
            child.build() if isinstance(child, GroupBuilder) else child
            for child in self._children
        )
        return Group(
            name=self._name,
            disposition=self._disposition,
            hooks=tuple(self._hooks),
            children=children,
        )


class TreeBuilder(GroupBuilder):
    """Builder for the unnamed root group of a run."""

    def __init__(self):
        super().__init__(name=None)
