"""Render-state reducer — derive what a viewer sees from an input and a step prefix."""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable

from .algorithms import BaseAlgorithm, get_algorithm
from .render_types import RenderState
from .step_types import Step
from .trace_types import Trace

logger = logging.getLogger(__name__)


def render(algorithm: BaseAlgorithm, data: Any, steps: Iterable[Step]) -> RenderState:
    """Fold *steps* over the algorithm's initial state for *data*.

    Pure: neither *data* nor the steps are modified, and the same arguments
    always give an equal RenderState.
    """
    parsed = algorithm.parse_input(data)
    state = algorithm.initial_state(parsed)
    for step in steps:
        algorithm.interpret(step, state)
    return state


def render_trace(trace: Trace, k: int | None = None) -> RenderState:
    """Return the RenderState after the first *k* steps of *trace* (all when None)."""
    algorithm = get_algorithm(trace.algorithm_id)
    steps = trace.steps if k is None else trace.prefix(k)
    return render(algorithm, trace.input, steps)


class ReplayCache:
    """Checkpointed replay over one trace.

    Every ``interval`` steps a deep-copied RenderState is kept so that
    ``state_at(k)`` folds at most ``interval - 1`` steps past the nearest
    checkpoint. Checkpoints are filled lazily as indices are visited.
    An interval of 0 disables checkpointing and every call replays from the
    initial state.
    """

    def __init__(self, algorithm: BaseAlgorithm, trace: Trace, interval: int = 0):
        self._algorithm = algorithm
        self._trace = trace
        self._interval = max(0, interval)
        self._checkpoints: dict[int, RenderState] = {
            0: algorithm.initial_state(algorithm.parse_input(trace.input))
        }

    @property
    def checkpoint_count(self) -> int:
        return len(self._checkpoints)

    def state_at(self, k: int) -> RenderState:
        k = max(0, min(k, len(self._trace)))
        if self._interval == 0:
            return render(self._algorithm, self._trace.input, self._trace.prefix(k))

        base = max(idx for idx in self._checkpoints if idx <= k)
        state = copy.deepcopy(self._checkpoints[base])
        for index in range(base, k):
            self._algorithm.interpret(self._trace.steps[index], state)
            reached = index + 1
            if reached % self._interval == 0 and reached not in self._checkpoints:
                self._checkpoints[reached] = copy.deepcopy(state)
        logger.debug("Replayed %d step(s) from checkpoint %d", k - base, base)
        return state
