"""Pure functions for computing statistics over step lists."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from algotrace.step_types import Step, StepKind


def count_step_kinds(steps: Iterable[Step]) -> dict[str, int]:
    """Return a frequency map of step kind names in the given step list.

    Args:
        steps: Steps of a trace (or any prefix of one).

    Returns:
        A dict mapping step kind strings to their occurrence counts.
        Empty dict for an empty input.
    """
    return dict(Counter(step.kind.value for step in steps))


def count_operations(steps: Iterable[Step]) -> dict[str, int]:
    """Summarise the operations a viewer typically cares about.

    Returns a dict with ``comparisons``, ``writes`` (swaps, shifts, inserts,
    placements and bucket moves) and ``total`` counts.
    """
    writes = {
        StepKind.SWAP,
        StepKind.SHIFT,
        StepKind.INSERT,
        StepKind.PLACE,
        StepKind.BUCKET_COLLECT,
    }
    comparisons = total = write_count = 0
    for step in steps:
        total += 1
        if step.kind is StepKind.COMPARE:
            comparisons += 1
        elif step.kind in writes:
            write_count += 1
    return {"comparisons": comparisons, "writes": write_count, "total": total}
