"""Trace data types for step-by-step replay."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .step_types import Step


@dataclass(frozen=True)
class Trace:
    """Complete, immutable recording of one algorithm run.

    Holds the parsed input the run started from, every Step in execution
    order, and the algorithm's declared final result.
    """

    algorithm_id: str
    input: Any  # input_types model
    steps: tuple[Step, ...] = field(default_factory=tuple)
    result: Any = None

    def __len__(self) -> int:
        return len(self.steps)

    def prefix(self, k: int) -> tuple[Step, ...]:
        """Return the first *k* steps (clamped to the trace length)."""
        return self.steps[: max(0, min(k, len(self.steps)))]
