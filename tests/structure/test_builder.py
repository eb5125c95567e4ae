"""
Tests for the explicit tree builder.
"""

import pytest

from arbortest.core import Disposition, Group, HookKind, TestCase
from arbortest.exceptions import TreeStructureError
from arbortest.structure import TreeBuilder


def _noop():
    return None


class TestTreeBuilder:
    """Tests for building trees."""

    def test_empty_root(self):
        """Test an empty builder builds an unnamed normal root."""
        root = TreeBuilder().build()
        assert isinstance(root, Group)
        assert root.name is None
        assert root.disposition == Disposition.NORMAL
        assert root.children == ()

    def test_interleaved_children_keep_order(self):
        """Test tests and groups share one ordered children sequence."""
        tree = TreeBuilder()
        tree.it("first", _noop)
        with tree.describe("group") as group:
            group.it("nested", _noop)
        tree.it("last", _noop)

        root = tree.build()

        assert [type(child) for child in root.children] == [TestCase, Group, TestCase]
        assert [test.name for test in root.tests] == ["first", "last"]
        assert [group.name for group in root.groups] == ["group"]

    def test_hooks_recorded_with_kind_and_label(self):
        """Test hook declarations carry kind, action and label."""
        tree = TreeBuilder()
        with tree.describe("group") as group:
            group.before(_noop, label="connect")
            group.after(_noop)
            group.before_each(_noop)
            group.after_each(_noop)

        built = tree.build().groups[0]

        assert [hook.kind for hook in built.hooks] == [
            HookKind.GROUP_SETUP,
            HookKind.GROUP_TEARDOWN,
            HookKind.EACH_SETUP,
            HookKind.EACH_TEARDOWN,
        ]
        assert built.hooks[0].label == "connect"
        assert built.hooks_of(HookKind.GROUP_SETUP)[0][1].describe() == "before 'connect'"

    def test_when_is_describe(self):
        """Test when declares a nested group like describe."""
        tree = TreeBuilder()
        with tree.describe("outer") as outer:
            with outer.when("condition", Disposition.FOCUSED) as inner:
                inner.it("a test", _noop)

        nested = tree.build().groups[0].groups[0]
        assert nested.name == "condition"
        assert nested.disposition == Disposition.FOCUSED

    def test_only_and_skip_dispositions(self):
        """Test only and skip set test dispositions."""
        tree = TreeBuilder()
        tree.only("focused", _noop)
        tree.skip("excluded")

        focused, excluded = tree.build().tests

        assert focused.disposition == Disposition.FOCUSED
        assert excluded.disposition == Disposition.EXCLUDED
        assert excluded.is_pending

    def test_describe_only_and_describe_skip(self):
        """Test group shortcuts set group dispositions."""
        tree = TreeBuilder()
        with tree.describe_only("focused") as focused:
            focused.it("runs", _noop)
        with tree.describe_skip("excluded") as excluded:
            excluded.it("never runs", _noop)

        first, second = tree.build().groups

        assert (first.name, first.disposition) == ("focused", Disposition.FOCUSED)
        assert (second.name, second.disposition) == ("excluded", Disposition.EXCLUDED)
        assert [test.name for test in second.tests] == ["never runs"]

    def test_group_shortcut_blocks_close(self):
        """Test a shortcut group rejects declarations after its block closes."""
        tree = TreeBuilder()
        with tree.describe_skip("group") as group:
            pass

        with pytest.raises(TreeStructureError, match="closed"):
            group.it("late", _noop)

    def test_declaring_into_closed_block_rejected(self):
        """Test a nested builder rejects declarations after its block closes."""
        tree = TreeBuilder()
        with tree.describe("group") as group:
            pass

        with pytest.raises(TreeStructureError, match="closed"):
            group.it("late", _noop)

    def test_empty_name_rejected(self):
        """Test empty group and test names are rejected."""
        tree = TreeBuilder()
        with pytest.raises(TreeStructureError):
            tree.it("  ", _noop)
        with pytest.raises(TreeStructureError):
            with tree.describe(""):
                pass

    def test_non_callable_action_rejected(self):
        """Test non-callable actions are rejected."""
        tree = TreeBuilder()
        with pytest.raises(TreeStructureError, match="callable"):
            tree.it("a test", "not callable")
        with pytest.raises(TreeStructureError):
            tree.before(None)

    def test_display_path(self):
        """Test nested builders know their display path."""
        tree = TreeBuilder()
        assert tree.display_path == "<root>"
        with tree.describe("outer") as outer:
            with outer.when("inner") as inner:
                assert inner.display_path == "outer > inner"
