"""
Result aggregation for arbortest runs.

The aggregator receives outcome records in the order the execution walk
produces them, keeps the running tally, and hands the final `RunReport` back
to the caller once the walk is over.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from arbortest.core.path_utils import format_path
from arbortest.core.types import NodeAddress, OutcomeKind, Subject, TestPath
from arbortest.execution.actions import FailureDetail


@dataclass(frozen=True)
class Outcome:
    """One outcome record.

    Params:
        path: Group names followed by the test name or hook identity
        kind: Outcome classification
        subject: Whether the record is about a test, a whole group or a hook
        detail: Failure detail for FAILED/ERRORED records, and the causing
            failure for records skipped because of it
        address: Child-index address of the test or group, when there is one
        hook_index: Position of the failing hook in its group's hooks, for
            GROUP and HOOK records
    """

    __test__ = False

    path: TestPath
    kind: OutcomeKind
    subject: Subject = Subject.TEST
    detail: FailureDetail | None = None
    address: NodeAddress | None = None
    hook_index: int | None = None

    @property
    def display_path(self) -> str:
        return format_path(self.path)

    @property
    def is_failure(self) -> bool:
        return self.kind in (OutcomeKind.FAILED, OutcomeKind.ERRORED)


OutcomeListener = Callable[[Outcome], None]


@dataclass
class RunReport:
    """Final aggregate of a run.

    `counts` tallies every counted record: one per test, plus one per group
    whose `before` hook failed and one per failing teardown hook. A group with
    a failing `before` hook and two tests therefore counts 1 errored and 2
    skipped. `test_counts` tallies test records only, one per declared test,
    so its values always add up to the number of tests in the tree.

    Params:
        counts: Number of counted records per outcome kind
        outcomes: Every record, in the order the walk produced them
    """

    counts: dict[OutcomeKind, int]
    outcomes: list[Outcome] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return self.counts[OutcomeKind.PASSED]

    @property
    def failed(self) -> int:
        return self.counts[OutcomeKind.FAILED]

    @property
    def errored(self) -> int:
        return self.counts[OutcomeKind.ERRORED]

    @property
    def skipped(self) -> int:
        return self.counts[OutcomeKind.SKIPPED]

    @property
    def pending(self) -> int:
        return self.counts[OutcomeKind.PENDING]

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def test_outcomes(self) -> list[Outcome]:
        return [o for o in self.outcomes if o.subject == Subject.TEST]

    @property
    def test_counts(self) -> dict[OutcomeKind, int]:
        counts = {kind: 0 for kind in OutcomeKind}
        for outcome in self.test_outcomes:
            counts[outcome.kind] += 1
        return counts

    @property
    def test_total(self) -> int:
        return len(self.test_outcomes)

    @property
    def failures(self) -> list[tuple[TestPath, OutcomeKind, FailureDetail]]:
        """Failed and errored records with their details, in walk order."""
        return [
            (o.path, o.kind, o.detail)
            for o in self.outcomes
            if o.is_failure and o.detail is not None
        ]

    @property
    def successful(self) -> bool:
        return self.failed == 0 and self.errored == 0


class ResultAggregator:
    """Collects outcome records and streams them to listeners.

    Group and hook records are identified by the address of their group and
    the index of the failing hook. A record repeating an earlier one, e.g. the
    same shard merged twice, stays in the ordered list but is counted once;
    test records always count individually.
    """

    def __init__(self):
        self._outcomes: list[Outcome] = []
        self._counts: dict[OutcomeKind, int] = {kind: 0 for kind in OutcomeKind}
        self._shared_keys: set[object] = set()
        self._listeners: list[OutcomeListener] = []

    def add_listener(self, listener: OutcomeListener) -> None:
        """
        Register a callback receiving every outcome as it is recorded.

        Params:
            listener: Callable taking one `Outcome`
        """
        self._listeners.append(listener)

    def record(self, outcome: Outcome) -> None:
        """
        Append an outcome record and update the tally.

        Params:
            outcome: Record produced by the execution walk
        """
        self._outcomes.append(outcome)
        if outcome.subject == Subject.TEST:
            self._counts[outcome.kind] += 1
        else:
            key = (
                (outcome.address, outcome.subject, outcome.hook_index)
                if outcome.address is not None
                else outcome
            )
            if key not in self._shared_keys:
                self._shared_keys.add(key)
                self._counts[outcome.kind] += 1
        for listener in self._listeners:
            listener(outcome)

    def merge(self, other: "ResultAggregator") -> None:
        """
        Fold the records of another aggregator into this one, in its order.

        Listeners of this aggregator see the merged records.

        Params:
            other: Aggregator shard to fold in
        """
        for outcome in other.outcomes:
            self.record(outcome)

    @property
    def outcomes(self) -> list[Outcome]:
        return list(self._outcomes)

    def report(self) -> RunReport:
        """Snapshot the current tally and records as a `RunReport`."""
        return RunReport(counts=dict(self._counts), outcomes=list(self._outcomes))
