"""Tests for trace statistics: count_step_kinds and count_operations."""

from algotrace.step_types import Step, StepKind
from algotrace.trace_stats import count_operations, count_step_kinds


class TestCountStepKinds:
    def test_empty_list_returns_empty_dict(self):
        assert count_step_kinds([]) == {}

    def test_repeated_kinds_are_summed(self):
        steps = [
            Step(kind=StepKind.COMPARE, indices=(0, 1)),
            Step(kind=StepKind.SWAP, indices=(0, 1)),
            Step(kind=StepKind.COMPARE, indices=(1, 2)),
        ]
        assert count_step_kinds(steps) == {"COMPARE": 2, "SWAP": 1}


class TestCountOperations:
    def test_writes_include_bucket_moves(self):
        steps = [
            Step(kind=StepKind.COMPARE),
            Step(kind=StepKind.PLACE, indices=(0,), value={"value": 1, "origin": 2}),
            Step(kind=StepKind.BUCKET_COLLECT, indices=(1,), value={"bucket": 0, "value": 2}),
            Step(kind=StepKind.MARK_SORTED, indices=(0, 1)),
        ]
        assert count_operations(steps) == {"comparisons": 1, "writes": 2, "total": 4}

    def test_empty(self):
        assert count_operations([]) == {"comparisons": 0, "writes": 0, "total": 0}
