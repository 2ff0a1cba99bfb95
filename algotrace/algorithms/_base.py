"""BaseAlgorithm — algorithm-agnostic trace recording and step interpretation."""

from __future__ import annotations

import copy
import logging
import operator
from abc import ABC, abstractmethod
from typing import Any, Callable

from pydantic import BaseModel

from ..input_types import ArrayInput
from ..render_types import RenderState
from ..step_types import Step, StepKind
from ..trace_types import Trace

logger = logging.getLogger(__name__)

COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
    "!=": operator.ne,
    "in": lambda item, container: item in container,
}


class BaseAlgorithm(ABC):
    """Base class for traced algorithms.

    A subclass implements ``_run`` (the textbook algorithm, calling
    ``_emit`` for every operation a viewer can see, in execution order) and
    registers handlers for its own step kinds in ``_INTERPRET_DISPATCH``.
    ``interpret`` is the per-step transformation the reducer folds with, so
    the generator and the reducer of one algorithm live side by side.
    """

    # ── overridable constants ────────────────────────────────────

    ALGORITHM_ID: str = ""
    DISPLAY_NAME: str = ""
    FAMILY: str = ""
    INPUT_TYPE: type[BaseModel] = ArrayInput
    SHORTHAND_FIELD: str = "values"

    # ── init ─────────────────────────────────────────────────────

    def __init__(self):
        self._steps: list[Step] = []
        self._INTERPRET_DISPATCH: dict[StepKind, Callable[[Step, RenderState], None]] = {
            StepKind.COMPARE: self._apply_compare,
            StepKind.MARK_ACTIVE: self._apply_mark_active,
            StepKind.MARK_SORTED: self._apply_mark_sorted,
            StepKind.PIVOT: self._apply_pivot,
            StepKind.SWAP: self._apply_swap,
            StepKind.SHIFT: self._apply_shift,
            StepKind.INSERT: self._apply_place,
            StepKind.PLACE: self._apply_place,
            StepKind.SET_VARIABLE: self._apply_set_variable,
            StepKind.EMIT: self._apply_emit,
            StepKind.RESULT: self._apply_result,
        }

    # ── recording ────────────────────────────────────────────────

    def _emit(
        self,
        kind: StepKind,
        *,
        indices=(),
        value: Any = None,
        description: str = "",
    ) -> Step:
        step = Step(
            kind=kind,
            indices=tuple(indices),
            value=value,
            description=description,
        )
        self._steps.append(step)
        return step

    def _compare(
        self,
        indices,
        left: Any,
        right: Any,
        op: str,
        description: str = "",
        **extra: Any,
    ) -> bool:
        """Evaluate ``left <op> right`` and record the comparison."""
        outcome = COMPARATORS[op](left, right)
        payload = {"op": op, "left": left, "right": right, "outcome": outcome}
        payload.update(extra)
        self._emit(
            StepKind.COMPARE,
            indices=indices,
            value=payload,
            description=description or f"Compare {left!r} {op} {right!r}: {outcome}",
        )
        return outcome

    def _swap(self, arr: list, i: int, j: int, description: str = "") -> bool:
        """Swap two positions of *arr*, recording it unless it is an identity."""
        if i == j or arr[i] == arr[j]:
            return False
        arr[i], arr[j] = arr[j], arr[i]
        self._emit(
            StepKind.SWAP,
            indices=(i, j),
            value={"left": arr[i], "right": arr[j]},
            description=description or f"Swap positions {i} and {j}",
        )
        return True

    # ── entry point ──────────────────────────────────────────────

    def parse_input(self, raw: Any) -> BaseModel:
        """Coerce *raw* into ``INPUT_TYPE``.

        Accepts an instance of the model, a dict of its fields, or the bare
        shorthand value (a list of numbers, a string, a list of pairs).
        """
        if isinstance(raw, self.INPUT_TYPE):
            return raw
        if isinstance(raw, dict):
            return self.INPUT_TYPE(**raw)
        if isinstance(raw, str):
            return self.INPUT_TYPE(**{self.SHORTHAND_FIELD: raw})
        if isinstance(raw, (list, tuple)):
            return self.INPUT_TYPE(**{self.SHORTHAND_FIELD: list(raw)})
        raise ValueError(
            f"Cannot build {self.INPUT_TYPE.__name__} for {self.ALGORITHM_ID} "
            f"from {type(raw).__name__}"
        )

    def generate(self, data: Any) -> Trace:
        """Run the algorithm on validated *data* and return its Trace."""
        parsed = self.parse_input(data)
        self._steps = []
        result = self._run(parsed)
        trace = Trace(
            algorithm_id=self.ALGORITHM_ID,
            input=parsed,
            steps=tuple(self._steps),
            result=result,
        )
        self._steps = []
        logger.info("%s produced %d steps", self.ALGORITHM_ID, len(trace))
        return trace

    @abstractmethod
    def _run(self, data: Any) -> Any: ...

    # ── replay ───────────────────────────────────────────────────

    def initial_state(self, data: Any) -> RenderState:
        return RenderState(data=list(data.values))

    def interpret(self, step: Step, state: RenderState) -> None:
        """Apply one step to *state* in place."""
        handler = self._INTERPRET_DISPATCH.get(step.kind)
        if handler is None:
            raise ValueError(
                f"{self.ALGORITHM_ID} cannot interpret step kind {step.kind.value}"
            )
        state.description = step.description
        state.step_kind = step.kind.value
        handler(step, state)

    # ── shared step handlers ─────────────────────────────────────

    def _apply_compare(self, step: Step, state: RenderState) -> None:
        state.highlight(comparing=step.indices)

    def _apply_mark_active(self, step: Step, state: RenderState) -> None:
        state.highlight(active=step.indices)

    def _apply_mark_sorted(self, step: Step, state: RenderState) -> None:
        state.highlight()
        state.mark_done(step.indices)

    def _apply_pivot(self, step: Step, state: RenderState) -> None:
        state.aux["pivot"] = step.indices[0]
        state.highlight(active=step.indices)

    def _apply_swap(self, step: Step, state: RenderState) -> None:
        i, j = step.indices
        state.data[i], state.data[j] = state.data[j], state.data[i]
        state.highlight(active=step.indices)

    def _apply_shift(self, step: Step, state: RenderState) -> None:
        src, dst = step.indices
        state.data[dst] = state.data[src]
        state.highlight(active=(dst,))

    def _apply_place(self, step: Step, state: RenderState) -> None:
        (idx,) = step.indices
        state.data[idx] = copy.deepcopy(step.value["value"])
        state.highlight(active=step.indices)

    def _apply_set_variable(self, step: Step, state: RenderState) -> None:
        state.aux.setdefault("variables", {}).update(copy.deepcopy(step.value))
        state.highlight(active=step.indices)

    def _apply_emit(self, step: Step, state: RenderState) -> None:
        if state.result is None:
            state.result = []
        state.result.append(copy.deepcopy(step.value))
        state.highlight(active=step.indices)

    def _apply_result(self, step: Step, state: RenderState) -> None:
        state.result = copy.deepcopy(step.value)
        state.highlight()
