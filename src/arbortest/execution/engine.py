"""
Execution engine for arbortest trees.

Walks a built tree depth-first in declaration order, keeping an explicit stack
of entered groups. Group-scoped hooks run once per entered group; per-test
hooks run around every eligible test, outer-to-inner before it and
inner-to-outer after it. Hook and test faults become outcome records and are
confined to the group that declared the failing hook:

- a failing `before` hook errors the group once, skips everything below it
  and still runs the group's `after` hooks;
- a failing `beforeEach` hook errors the current test, never enters the scopes
  inside the failing one, still runs `afterEach` hooks from the failing scope
  outwards, and stops the rest of the declaring group's body;
- a failing `afterEach` hook stops the rest of the declaring group's body;
- a failing `after` hook is recorded against the hook; sibling groups still run.

Stopped bodies record their remaining tests as skipped. Groups outside the
stopped group are visited normally.
"""

import logging
from dataclasses import dataclass

from arbortest.core.path_utils import format_path
from arbortest.core.tree_node import Group, Hook, TestCase
from arbortest.core.types import HookKind, NodeAddress, OutcomeKind, Subject, TestPath
from arbortest.exceptions import RunAbortedError
from arbortest.execution.actions import AssertionFailure, FailureDetail, invoke
from arbortest.execution.results import Outcome, ResultAggregator, RunReport
from arbortest.structure.selection import Selection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Scope:
    group: Group
    address: NodeAddress
    names: tuple[str, ...]


@dataclass(frozen=True)
class _Abort:
    """Signal that the body of the group at `depth` in the scope stack must stop."""

    depth: int
    cause: FailureDetail


@dataclass(frozen=True)
class _HookFailure:
    index: int  # position in the declaring group's hooks
    hook: Hook
    detail: FailureDetail


def _earliest(first: _Abort | None, second: _Abort | None) -> _Abort | None:
    if first is None:
        return second
    if second is None or first.depth <= second.depth:
        return first
    return second


def _child_names(names: tuple[str, ...], child: Group | TestCase) -> tuple[str, ...]:
    return names if child.name is None else (*names, child.name)


class TreeExecutor:
    """Runs one tree snapshot against a precomputed selection.

    Params:
        root: Root group of the tree
        selection: Result of the selection pass over the same tree
        aggregator: Receives every outcome record as it is produced
    """

    def __init__(
        self,
        root: Group,
        selection: Selection,
        aggregator: ResultAggregator | None = None,
    ):
        self.root = root
        self.selection = selection
        self.aggregator = aggregator or ResultAggregator()
        self._scopes: list[_Scope] = []

    def run(self) -> RunReport:
        """
        Execute the whole tree.

        Returns:
            The aggregated report

        Raises:
            RunAbortedError: If recording an outcome failed
        """
        self._scopes = []
        self._visit_group(self.root, (), ())
        return self.aggregator.report()

    def _record(self, outcome: Outcome) -> None:
        try:
            self.aggregator.record(outcome)
        except Exception as e:
            logger.error("Result aggregation failed at %s: %s", outcome.display_path, e)
            raise RunAbortedError(
                f"could not record outcome for '{outcome.display_path}': {e}"
            ) from e

    def _record_hook_failure(self, depth: int, failure: _HookFailure) -> None:
        scope = self._scopes[depth]
        self._record(
            Outcome(
                (*scope.names, failure.hook.describe()),
                OutcomeKind.ERRORED,
                Subject.HOOK,
                failure.detail,
                scope.address,
                failure.index,
            )
        )

    def _run_hooks(
        self, depth: int, kind: HookKind, stop_on_failure: bool
    ) -> list[_HookFailure]:
        """
        Run the hooks of one kind declared by the group at `depth`.

        Params:
            depth: Scope stack index of the declaring group
            kind: Hook kind to run
            stop_on_failure: Setup hooks stop at the first failure, teardown hooks all run

        Returns:
            Failing hooks with their failure details, in run order
        """
        scope = self._scopes[depth]
        failures = []
        for index, hook in scope.group.hooks_of(kind):
            origin = f"{format_path(scope.names)}: {hook.describe()}"
            result = invoke(hook.action, origin)
            if result.ok:
                continue
            logger.warning("Hook %s failed: %s", origin, result.detail.message)
            failures.append(_HookFailure(index, hook, result.detail))
            if stop_on_failure:
                break
        return failures

    def _visit_group(
        self, group: Group, address: NodeAddress, names: tuple[str, ...]
    ) -> _Abort | None:
        if not self.selection.is_active(address):
            for test_address, path, test in group.iter_tests(address, names):
                self._record_not_run(test, test_address, path, None)
            return None

        depth = len(self._scopes)
        self._scopes.append(_Scope(group, address, names))
        try:
            logger.debug("Entering group %s", format_path(names))
            abort = None
            setup_failures = self._run_hooks(depth, HookKind.GROUP_SETUP, stop_on_failure=True)
            if setup_failures:
                failure = setup_failures[0]
                self._record(
                    Outcome(
                        names,
                        OutcomeKind.ERRORED,
                        Subject.GROUP,
                        failure.detail,
                        address,
                        failure.index,
                    )
                )
                self._skip_children(group, address, names, 0, failure.detail)
            else:
                abort = self._visit_body(group, address, names, depth)

            # Recorded only; the group is finished and its siblings still run
            for failure in self._run_hooks(
                depth, HookKind.GROUP_TEARDOWN, stop_on_failure=False
            ):
                self._record_hook_failure(depth, failure)

            if abort is not None and abort.depth >= depth:
                return None
            return abort
        finally:
            self._scopes.pop()

    def _visit_body(
        self, group: Group, address: NodeAddress, names: tuple[str, ...], depth: int
    ) -> _Abort | None:
        for index, child in enumerate(group.children):
            child_address = (*address, index)
            if isinstance(child, TestCase):
                abort = self._visit_test(child, child_address, (*names, child.name))
            else:
                abort = self._visit_group(child, child_address, _child_names(names, child))
            if abort is not None and abort.depth <= depth:
                logger.debug("Stopping body of %s after hook failure", format_path(names))
                self._skip_children(group, address, names, index + 1, abort.cause)
                return abort
        return None

    def _visit_test(self, test: TestCase, address: NodeAddress, path: TestPath) -> _Abort | None:
        if not self.selection.is_eligible(address) or test.is_pending:
            self._record_not_run(test, address, path, None)
            return None

        abort = None
        entered = 0
        for depth in range(len(self._scopes)):
            entered = depth + 1
            failures = self._run_hooks(depth, HookKind.EACH_SETUP, stop_on_failure=True)
            if failures:
                abort = _Abort(depth, failures[0].detail)
                break

        if abort is not None:
            self._record(Outcome(path, OutcomeKind.ERRORED, Subject.TEST, abort.cause, address))
        else:
            self._record(self._run_test_action(test, address, path))

        for depth in reversed(range(entered)):
            failures = self._run_hooks(depth, HookKind.EACH_TEARDOWN, stop_on_failure=False)
            for failure in failures:
                self._record_hook_failure(depth, failure)
            if failures:
                abort = _earliest(abort, _Abort(depth, failures[0].detail))
        return abort

    def _run_test_action(self, test: TestCase, address: NodeAddress, path: TestPath) -> Outcome:
        origin = format_path(path)
        result = invoke(test.action, origin)
        if result.ok:
            logger.debug("Test %s passed", origin)
            return Outcome(path, OutcomeKind.PASSED, Subject.TEST, None, address)
        if isinstance(result, AssertionFailure):
            logger.warning("Test %s failed: %s", origin, result.detail.message)
            return Outcome(path, OutcomeKind.FAILED, Subject.TEST, result.detail, address)
        logger.warning("Test %s errored: %s", origin, result.detail.message)
        return Outcome(path, OutcomeKind.ERRORED, Subject.TEST, result.detail, address)

    def _record_not_run(
        self,
        test: TestCase,
        address: NodeAddress,
        path: TestPath,
        cause: FailureDetail | None,
    ) -> None:
        kind = OutcomeKind.PENDING if test.is_pending else OutcomeKind.SKIPPED
        self._record(Outcome(path, kind, Subject.TEST, cause, address))

    def _skip_children(
        self,
        group: Group,
        address: NodeAddress,
        names: tuple[str, ...],
        start: int,
        cause: FailureDetail | None,
    ) -> None:
        """Record every test from the `start`-th child of `group` downwards as not run."""
        for index, child in enumerate(group.children[start:], start):
            child_address = (*address, index)
            if isinstance(child, TestCase):
                self._record_not_run(child, child_address, (*names, child.name), cause)
            else:
                for test_address, path, test in child.iter_tests(
                    child_address, _child_names(names, child)
                ):
                    self._record_not_run(test, test_address, path, cause)


def execute(
    root: Group, selection: Selection, aggregator: ResultAggregator | None = None
) -> RunReport:
    """
    Run a tree with a precomputed selection.

    Params:
        root: Root group of the tree
        selection: Selection pass result for `root`
        aggregator: Optional aggregator, e.g. one with listeners attached

    Returns:
        The aggregated report
    """
    return TreeExecutor(root, selection, aggregator).run()
