"""
Immutable tree model for arbortest.

A run is described by a single root `Group`. Groups own hooks and an ordered
sequence of children, each child being either a nested `Group` or a `TestCase`.
Children share one tuple so that declaration order between tests and nested
groups is never lost.
"""

from collections.abc import Iterator
from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from arbortest.core.types import Action, Disposition, HookKind, NodeAddress, TestPath


class TreeNode(BaseModel):
    """
    Base class for all tree model nodes.

    Nodes are frozen once built; the execution engine only ever reads them.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class Hook(TreeNode):
    """Setup or teardown action owned by exactly one group."""

    kind: HookKind
    action: Action
    label: str | None = None

    def describe(self) -> str:
        """
        Get the hook identity used in failure details.

        Returns:
            The label when one was given, otherwise the hook kind keyword
        """
        if self.label:
            return f"{self.kind.value} '{self.label}'"
        return f"{self.kind.value} hook"


class TestCase(TreeNode):
    """A single named test. A test without an action is pending."""

    __test__: ClassVar[bool] = False

    node_type: Literal["test"] = "test"
    name: str
    action: Action | None = None
    disposition: Disposition = Disposition.NORMAL

    @property
    def is_pending(self) -> bool:
        return self.action is None


class Group(TreeNode):
    """
    Named container of hooks, tests and nested groups.

    The root group has no name and a NORMAL disposition.
    """

    node_type: Literal["group"] = "group"
    name: str | None = None
    disposition: Disposition = Disposition.NORMAL
    hooks: tuple[Hook, ...] = ()
    children: tuple[
        Annotated[Union["Group", TestCase], Field(discriminator="node_type")], ...
    ] = ()

    @property
    def tests(self) -> tuple[TestCase, ...]:
        return tuple(c for c in self.children if isinstance(c, TestCase))

    @property
    def groups(self) -> tuple["Group", ...]:
        return tuple(c for c in self.children if isinstance(c, Group))

    def hooks_of(self, kind: HookKind) -> tuple[tuple[int, Hook], ...]:
        """
        Hooks of one kind, in declaration order.

        Params:
            kind: Hook kind to select

        Returns:
            (index in `hooks`, hook) pairs; the index identifies the hook
            within this group even when labels repeat
        """
        return tuple(
            (index, hook) for index, hook in enumerate(self.hooks) if hook.kind == kind
        )

    def iter_tests(
        self, address: NodeAddress = (), names: tuple[str, ...] = ()
    ) -> Iterator[tuple[NodeAddress, TestPath, TestCase]]:
        """
        Walk every test below this group depth-first in declaration order.

        Params:
            address: Address of this group, prefixed to every yielded address
            names: Display names of this group's path, prefixed to every yielded path

        Returns:
            Iterator of (address, path, test) triples
        """
        for index, child in enumerate(self.children):
            child_address = (*address, index)
            if isinstance(child, TestCase):
                yield child_address, (*names, child.name), child
            else:
                child_names = names if child.name is None else (*names, child.name)
                yield from child.iter_tests(child_address, child_names)


Group.model_rebuild()
