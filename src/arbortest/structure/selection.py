"""
Selection pass for arbortest trees.

Computes, once and before execution, which tests will be attempted given the
FOCUSED and EXCLUDED markers found anywhere in the tree. Exclusion always wins
over focus.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from arbortest.core.tree_node import Group, TestCase
from arbortest.core.types import Disposition, NodeAddress


@dataclass(frozen=True)
class Selection:
    """Immutable result of the selection pass.

    Params:
        eligibility: Eligible flag for every test, keyed by test address
        active_groups: Addresses of groups holding at least one runnable test
        focus_mode: Whether any FOCUSED marker exists in the tree
    """

    eligibility: Mapping[NodeAddress, bool]
    active_groups: frozenset[NodeAddress]
    focus_mode: bool

    def is_eligible(self, address: NodeAddress) -> bool:
        return self.eligibility.get(address, False)

    def is_active(self, address: NodeAddress) -> bool:
        return address in self.active_groups


def has_focus(group: Group) -> bool:
    """Check whether a FOCUSED marker exists anywhere under (and including) a group."""
    if group.disposition == Disposition.FOCUSED:
        return True
    if any(test.disposition == Disposition.FOCUSED for test in group.tests):
        return True
    return any(has_focus(child) for child in group.groups)


def select(root: Group) -> Selection:
    """
    Compute test eligibility for a built tree.

    Without any FOCUSED marker every non-excluded test is eligible. With at
    least one, a test is eligible only when it or a group on its path from the
    root is FOCUSED. An EXCLUDED test or group removes its whole subtree.

    Params:
        root: Root group of the tree

    Returns:
        Selection holding the eligibility mapping and the active group set
    """
    focus_mode = has_focus(root)
    eligibility: dict[NodeAddress, bool] = {}
    active: set[NodeAddress] = set()

    def walk(group: Group, address: NodeAddress, excluded: bool, focused: bool) -> bool:
        excluded = excluded or group.disposition == Disposition.EXCLUDED
        focused = focused or group.disposition == Disposition.FOCUSED
        runnable = False
        for index, child in enumerate(group.children):
            child_address = (*address, index)
            if isinstance(child, TestCase):
                eligible = not (
                    excluded or child.disposition == Disposition.EXCLUDED
                ) and (
                    not focus_mode
                    or focused
                    or child.disposition == Disposition.FOCUSED
                )
                eligibility[child_address] = eligible
                runnable = runnable or (eligible and not child.is_pending)
            elif walk(child, child_address, excluded, focused):
                runnable = True
        if runnable:
            active.add(address)
        return runnable

    walk(root, (), False, False)
    return Selection(
        eligibility=MappingProxyType(eligibility),
        active_groups=frozenset(active),
        focus_mode=focus_mode,
    )
